"""
Database tables for the Order Miner.
Stores extracted orders and a log of per-message sync outcomes.
"""
from datetime import datetime

from sqlalchemy import Column, Date, DateTime, Float, Integer, String, Text
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class OrderRecord(Base):
    """
    One extracted order. Column order matters: a plain select over this table
    yields ``(storage_key, order_id, order_date, grand_total)`` rows.
    """
    __tablename__ = "wholefoods"

    id = Column(Integer, primary_key=True, autoincrement=True)
    order_id = Column(String(64), nullable=False, index=True)  # not unique, re-scans may duplicate
    order_date = Column(Date, nullable=False, index=True)
    grand_total = Column(Float, nullable=False)

    def __repr__(self):
        return f"<OrderRecord(id={self.id}, order_id='{self.order_id}', order_date={self.order_date})>"


class SyncLog(Base):
    """
    Outcome of processing one message during a sync.
    Keeps a record of messages that were skipped or failed to parse.
    """
    __tablename__ = "sync_logs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    message_id = Column(String(255), nullable=True, index=True)
    template = Column(String(50), nullable=True)
    status = Column(String(50), nullable=False)  # 'success', 'skipped', 'error'
    message = Column(Text, nullable=True)
    error_details = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f"<SyncLog(id={self.id}, message_id='{self.message_id}', status='{self.status}')>"
