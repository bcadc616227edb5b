"""
Query construction for stored orders and mailbox searches.
"""
from .builder import (
    build_aggregate_query,
    build_range_query,
    build_sync_query,
    describe_conditions,
)
from .functions import day_span

__all__ = [
    "build_range_query",
    "build_aggregate_query",
    "build_sync_query",
    "describe_conditions",
    "day_span",
]
