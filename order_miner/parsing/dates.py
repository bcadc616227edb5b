"""
Date normalization for delivery-time phrases and sync cursors.

Delivery phrases look like ``Monday January 5, 2021`` and are turned into
``2021-01-05``. Sync cursors are stored as ``2021-Jan-05``.
"""
from datetime import date
from typing import Sequence, Union

from order_miner.exceptions import DateParseError

from .months import month_abbreviation, month_number

PHRASE_TOKENS = 4


def _parse_day(token: str) -> int:
    raw = token.strip(",")
    try:
        day = int(raw)
    except ValueError:
        raise DateParseError(f"Day is not a number: {token!r}") from None
    if not 1 <= day <= 31:
        raise DateParseError(f"Day out of range: {token!r}")
    return day


def _parse_year(token: str) -> str:
    if len(token) != 4 or not token.isdigit():
        raise DateParseError(f"Year is not four digits: {token!r}")
    return token


def normalize_date(phrase: Union[str, Sequence[str]]) -> str:
    """
    Convert a ``weekday month day[,] year`` phrase into ``YYYY-MM-DD``.

    Only the first three characters of the month word are significant and the
    weekday is ignored. Single-digit days are zero-padded.
    """
    tokens = phrase.split() if isinstance(phrase, str) else list(phrase)
    if len(tokens) < PHRASE_TOKENS:
        raise DateParseError(
            f"Expected {PHRASE_TOKENS} date tokens, got {len(tokens)}: {' '.join(tokens)!r}"
        )

    _, month_word, day_token, year_token = tokens[:PHRASE_TOKENS]
    month = month_number(month_word)
    day = _parse_day(day_token)
    year = _parse_year(year_token)
    try:
        date(int(year), int(month), day)
    except ValueError as e:
        raise DateParseError(f"Invalid delivery date {' '.join(tokens[:PHRASE_TOKENS])!r}: {e}") from e
    return f"{year}-{month}-{day:02d}"


def parse_cursor(value: str) -> date:
    """Parse a ``YYYY-Mon-DD`` sync cursor into a date."""
    parts = value.strip().split("-")
    if len(parts) != 3:
        raise DateParseError(f"Cursor must look like 2021-Jan-01: {value!r}")

    year, month_word, day = parts
    if len(month_word) != 3:
        raise DateParseError(f"Cursor month must be a three-letter abbreviation: {value!r}")
    year_number = int(_parse_year(year))
    month = int(month_number(month_word))
    try:
        return date(year_number, month, int(day))
    except ValueError as e:
        raise DateParseError(f"Invalid cursor date {value!r}: {e}") from e


def format_cursor(value: date) -> str:
    """Format a date as a ``YYYY-Mon-DD`` sync cursor."""
    return f"{value.year:04d}-{month_abbreviation(value.month)}-{value.day:02d}"
