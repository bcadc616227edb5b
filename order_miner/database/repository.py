"""
Order persistence: inserts extracted orders and runs the order queries.
"""
from typing import Iterable, List, Optional, Sequence, Tuple

from loguru import logger
from sqlalchemy import Executable, Row

from order_miner.models import Conditions, Order, OrderRecord, SyncLog

from .connection import DatabaseManager, db_manager as default_db_manager


class OrderRepository:
    """Reads and writes orders through a ``DatabaseManager``."""

    def __init__(self, db_manager: Optional[DatabaseManager] = None):
        self.db_manager = db_manager or default_db_manager

    def add_orders(self, orders: Iterable[Order]) -> int:
        """Insert orders; returns the number of rows added."""
        count = 0
        with self.db_manager.get_session() as session:
            for order in orders:
                session.add(
                    OrderRecord(
                        order_id=order.id,
                        order_date=order.order_date(),
                        grand_total=order.total,
                    )
                )
                count += 1
        logger.info(f"Inserted {count} orders")
        return count

    def execute(self, statement: Executable) -> List[Row]:
        """Run a select statement and return all rows."""
        with self.db_manager.get_session() as session:
            return list(session.execute(statement).all())

    def fetch_orders(self, conditions: Conditions) -> List[Order]:
        """Orders matching the range query for ``conditions``."""
        logger.debug(f"Retrieving orders: {conditions.summary()}")
        return [Order.from_row(row) for row in self.execute(conditions.range_query())]

    def fetch_summary(self, conditions: Conditions) -> Tuple[Optional[int], Optional[float]]:
        """``(day_gap, average_total)`` over the orders matching ``conditions``."""
        row = self.execute(conditions.aggregate_query())[0]
        gap, spending = row
        return gap, spending

    def log_message(
        self,
        status: str,
        message_id: Optional[str] = None,
        template: Optional[str] = None,
        message: Optional[str] = None,
        error_details: Optional[str] = None,
    ) -> None:
        """Record the outcome of processing one mailbox message."""
        try:
            with self.db_manager.get_session() as session:
                session.add(
                    SyncLog(
                        message_id=message_id,
                        template=template,
                        status=status,
                        message=message,
                        error_details=error_details,
                    )
                )
        except Exception as e:
            logger.error(f"Failed to log sync activity: {e}")

    def sync_log(self, status: Optional[str] = None) -> Sequence[SyncLog]:
        with self.db_manager.get_session() as session:
            query = session.query(SyncLog)
            if status:
                query = query.filter_by(status=status)
            entries = query.order_by(SyncLog.id).all()
            session.expunge_all()
            return entries
