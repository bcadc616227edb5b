"""
Parsing package: month table, date normalization and field extraction.
"""
from .dates import format_cursor, normalize_date, parse_cursor
from .extractor import ExtractedFields, FieldExtractor, OrderTemplate, parse_total
from .months import MONTHS, month_abbreviation, month_number

__all__ = [
    "MONTHS",
    "month_number",
    "month_abbreviation",
    "normalize_date",
    "parse_cursor",
    "format_cursor",
    "ExtractedFields",
    "FieldExtractor",
    "OrderTemplate",
    "parse_total",
]
