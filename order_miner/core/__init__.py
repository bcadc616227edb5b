"""
Core services: mailbox sync, sync cursor and purchase statistics.
"""
from .cursor import CursorStore
from .order_sync import ErrorPolicy, MessageFailure, OrderSync, SyncResult
from .stats import PurchasePattern, summarize_purchases

__all__ = [
    "CursorStore",
    "ErrorPolicy",
    "MessageFailure",
    "OrderSync",
    "SyncResult",
    "PurchasePattern",
    "summarize_purchases",
]
