"""
Field extraction for order-confirmation emails.

The retailer sends a fixed plain-text template, so fields are located by
scanning whitespace-separated tokens for labeled markers and reading the
tokens that follow them. The markers live in an ``OrderTemplate`` so another
sender's template can be configured without touching the scanner.
"""
import math
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from loguru import logger

from config.settings import settings
from order_miner.exceptions import AmountParseError, MissingFieldError
from order_miner.models.order import Order

from .dates import PHRASE_TOKENS, normalize_date


@dataclass(frozen=True)
class OrderTemplate:
    """Marker phrases identifying the order fields in one sender's emails."""

    name: str = "wholefoods"
    search_query: str = "{from:order-update@amazon.com} 'your delivery is complete' 'Grand total'"
    delivery_marker: str = "delivery time:"
    total_marker: str = "Grand total:"
    order_id_marker: str = "Details Order"
    # Scanning stops this many tokens before the end of the body.
    tail_margin: int = 20

    def __post_init__(self):
        # Every lookahead must stay inside the body: the longest marker plus the date phrase.
        longest = max(
            len(marker.split())
            for marker in (self.delivery_marker, self.total_marker, self.order_id_marker)
        )
        if self.tail_margin < longest + PHRASE_TOKENS:
            raise ValueError(
                f"tail_margin for template {self.name!r} must be at least {longest + PHRASE_TOKENS}, "
                f"got {self.tail_margin}"
            )

    @classmethod
    def from_settings(cls, name: str) -> "OrderTemplate":
        """Build a template from the ``order_templates`` settings table."""
        config: Dict[str, Any] = settings.order_templates.get(name)
        if config is None:
            raise KeyError(f"No order template configured for {name!r}")

        fields = {
            key: config[key]
            for key in ("search_query", "delivery_marker", "total_marker", "order_id_marker", "tail_margin")
            if key in config
        }
        return cls(name=name, **fields)


@dataclass
class ExtractedFields:
    """Raw scan result. A field is ``None`` when its marker never appeared."""

    order_id: Optional[str] = None
    date: Optional[str] = None
    total: Optional[float] = None

    @property
    def missing(self) -> List[str]:
        return [name for name in ("order_id", "date", "total") if getattr(self, name) is None]

    @property
    def is_empty(self) -> bool:
        return len(self.missing) == 3

    @property
    def is_complete(self) -> bool:
        return not self.missing


def parse_total(token: str) -> float:
    """Parse a ``$23.45`` style amount; it must be a positive finite number."""
    raw = token.strip("$")
    try:
        total = float(raw)
    except ValueError:
        raise AmountParseError(f"Grand total is not a number: {token!r}") from None

    if not math.isfinite(total) or total <= 0:
        raise AmountParseError(f"Grand total must be positive: {token!r}")
    return total


class FieldExtractor:
    """Scans email bodies for the markers of an ``OrderTemplate``."""

    def __init__(self, template: Optional[OrderTemplate] = None):
        self.template = template or OrderTemplate()
        self._delivery = self.template.delivery_marker.split()
        self._total = self.template.total_marker.split()
        self._order_id = self.template.order_id_marker.split()

    @staticmethod
    def _matches(tokens: List[str], index: int, marker: List[str]) -> bool:
        return tokens[index:index + len(marker)] == marker

    def scan(self, body: str) -> ExtractedFields:
        """
        Scan the body once, left to right, capturing each marker at most once.

        Raises ``DateParseError`` or ``AmountParseError`` when a marker is
        found but the value following it is malformed.
        """
        tokens = body.split()
        fields = ExtractedFields()

        for i in range(len(tokens) - self.template.tail_margin):
            if fields.date is None and self._matches(tokens, i, self._delivery):
                start = i + len(self._delivery)
                fields.date = normalize_date(tokens[start:start + PHRASE_TOKENS])
            elif fields.total is None and self._matches(tokens, i, self._total):
                fields.total = parse_total(tokens[i + len(self._total)])
            elif fields.order_id is None and self._matches(tokens, i, self._order_id):
                fields.order_id = tokens[i + len(self._order_id)]

        return fields

    def extract(self, body: str) -> Optional[Order]:
        """
        Extract an ``Order`` from an email body.

        Returns ``None`` when none of the markers appear. Raises
        ``MissingFieldError`` when only some of them do.
        """
        fields = self.scan(body)
        if fields.is_empty:
            logger.debug(f"No {self.template.name} order markers found")
            return None
        if not fields.is_complete:
            raise MissingFieldError(fields.missing)

        return Order(id=fields.order_id, date=fields.date, total=fields.total)
