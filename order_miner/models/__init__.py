"""
Models package: database tables, order records and query conditions.
"""
from .tables import Base, OrderRecord, SyncLog
from .order import Order, dump_snapshot, load_snapshot
from .conditions import Conditions, default_conditions, stats_conditions

__all__ = [
    "Base",
    "OrderRecord",
    "SyncLog",
    "Order",
    "dump_snapshot",
    "load_snapshot",
    "Conditions",
    "default_conditions",
    "stats_conditions",
]
