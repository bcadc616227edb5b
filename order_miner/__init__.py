"""
Order Miner: extracts order confirmations from a mailbox into a relational store.
"""
__version__ = "1.0.0"
