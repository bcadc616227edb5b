"""
Month abbreviation table shared by date normalization and cursor handling.
"""
from typing import Dict

from order_miner.exceptions import UnknownMonthError

MONTHS: Dict[str, str] = {
    "Jan": "01",
    "Feb": "02",
    "Mar": "03",
    "Apr": "04",
    "May": "05",
    "Jun": "06",
    "Jul": "07",
    "Aug": "08",
    "Sep": "09",
    "Oct": "10",
    "Nov": "11",
    "Dec": "12",
}

_ABBREVIATIONS = {int(number): name for name, number in MONTHS.items()}


def month_number(word: str) -> str:
    """Return the two-digit month for a word starting with a month abbreviation."""
    abbreviation = word[:3]
    try:
        return MONTHS[abbreviation]
    except KeyError:
        raise UnknownMonthError(abbreviation) from None


def month_abbreviation(number: int) -> str:
    """Return the three-letter abbreviation for a month number (1-12)."""
    try:
        return _ABBREVIATIONS[number]
    except KeyError:
        raise UnknownMonthError(str(number)) from None
