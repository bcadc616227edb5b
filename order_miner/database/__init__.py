"""
Database package for the Order Miner.
"""
from .connection import DatabaseManager, db_manager
from .repository import OrderRepository

__all__ = ["DatabaseManager", "db_manager", "OrderRepository"]
