"""
Error types raised by the Order Miner.
"""
from typing import Iterable


class OrderMinerError(Exception):
    """Base class for all Order Miner errors."""


class ParseError(OrderMinerError, ValueError):
    """Raised when an email body or date string cannot be parsed."""


class DateParseError(ParseError):
    """Raised when a date phrase or cursor is malformed."""


class UnknownMonthError(DateParseError):
    """Raised when a month abbreviation is not one of the twelve known ones."""

    def __init__(self, abbreviation: str):
        self.abbreviation = abbreviation
        super().__init__(f"Unknown month abbreviation: {abbreviation!r}")


class AmountParseError(ParseError):
    """Raised when a grand total is not a positive number."""


class MissingFieldError(ParseError):
    """Raised when only some of the order fields were found in a message."""

    def __init__(self, missing: Iterable[str]):
        self.missing = list(missing)
        super().__init__(f"Order fields not found: {', '.join(self.missing)}")


class MailboxError(OrderMinerError):
    """Raised when the mailbox cannot be reached or queried."""
