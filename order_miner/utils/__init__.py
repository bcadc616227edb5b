"""
Utilities for the Order Miner.
"""
from .logging import setup_logging

__all__ = ["setup_logging"]
