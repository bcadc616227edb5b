"""
Mailbox connectors for the Order Miner.
"""
from .gmail_connector import GmailConnector, Mailbox

__all__ = ["GmailConnector", "Mailbox"]
