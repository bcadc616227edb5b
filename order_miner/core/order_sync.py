"""
Order sync service for the Order Miner.
Searches the mailbox for confirmations newer than the cursor, extracts the
orders, stores them and writes a JSON snapshot of the batch.
"""
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from pathlib import Path
from typing import Callable, List, Optional, Union

from loguru import logger

from config.settings import settings
from order_miner.connectors import GmailConnector, Mailbox
from order_miner.database import OrderRepository
from order_miner.exceptions import MailboxError, ParseError
from order_miner.models import Order, dump_snapshot
from order_miner.parsing import FieldExtractor, OrderTemplate, format_cursor
from order_miner.queries import build_sync_query

# Per-message failures the SKIP policy records; OSError covers socket timeouts and resets.
MESSAGE_ERRORS = (ParseError, MailboxError, OSError)


class ErrorPolicy(str, Enum):
    """What to do when a single message cannot be fetched or parsed."""

    SKIP = "skip"
    ABORT = "abort"


@dataclass
class MessageFailure:
    message_id: str
    reason: str


@dataclass
class SyncResult:
    """Orders extracted by one sync, the messages that failed, and the new cursor."""

    orders: List[Order] = field(default_factory=list)
    failures: List[MessageFailure] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    cursor: str = ""


class OrderSync:
    """
    Runs an incremental sync from the mailbox into the database.
    The cursor is passed in and the advanced cursor is returned; nothing is
    kept between runs except what the caller persists.
    """

    def __init__(
        self,
        mailbox_factory: Callable[[], Mailbox] = GmailConnector,
        repository: Optional[OrderRepository] = None,
        template: Optional[OrderTemplate] = None,
        snapshot_file: Optional[Union[str, Path]] = None,
        max_results: Optional[int] = None,
        today: Callable[[], date] = date.today,
    ):
        self.mailbox_factory = mailbox_factory
        self.repository = repository or OrderRepository()
        self.template = template or OrderTemplate.from_settings(settings.sync.template)
        self.extractor = FieldExtractor(self.template)
        self.snapshot_file = Path(snapshot_file or settings.sync.snapshot_file)
        self.max_results = max_results or settings.gmail.max_results
        self.today = today

    def sync(self, cursor: str, policy: ErrorPolicy = ErrorPolicy.SKIP) -> SyncResult:
        """
        Extract and store orders received after ``cursor``.

        Raises ``MailboxError`` if the mailbox cannot be searched; the caller
        should keep its old cursor in that case. With ``ErrorPolicy.ABORT``
        the first per-message error is raised as well.
        """
        start_time = datetime.utcnow()
        query = build_sync_query(self.template.search_query, cursor)
        result = SyncResult(cursor=cursor)

        logger.info(f"Starting order sync - Template: {self.template.name}, since: {cursor}")

        with self.mailbox_factory() as mailbox:
            message_ids = mailbox.search_messages(query, self.max_results)
            if not message_ids:
                logger.info("No messages found matching query")

            for message_id in message_ids:
                try:
                    body = mailbox.fetch_body(message_id)
                    order = self.extractor.extract(body)
                except MESSAGE_ERRORS as e:
                    if policy is ErrorPolicy.ABORT:
                        logger.error(f"Aborting sync on message {message_id}: {e}")
                        raise
                    logger.warning(f"Skipping message {message_id}: {e}")
                    result.failures.append(MessageFailure(message_id, str(e)))
                    self.repository.log_message(
                        status="error",
                        message_id=message_id,
                        template=self.template.name,
                        message="Failed to extract order",
                        error_details=f"{type(e).__name__}: {e}",
                    )
                    continue

                if order is None:
                    logger.info(f"Message {message_id} has no order fields")
                    result.skipped.append(message_id)
                    self.repository.log_message(
                        status="skipped",
                        message_id=message_id,
                        template=self.template.name,
                        message="No order markers found",
                    )
                    continue

                logger.debug(f"Extracted order: {order.summary()}")
                result.orders.append(order)
                self.repository.log_message(
                    status="success",
                    message_id=message_id,
                    template=self.template.name,
                    message=f"Order extracted: {order.id}",
                )

        if result.orders:
            self.repository.add_orders(result.orders)
        dump_snapshot(result.orders, self.snapshot_file)
        result.cursor = format_cursor(self.today())

        processing_time = (datetime.utcnow() - start_time).total_seconds()
        logger.info(
            f"Order sync completed - "
            f"Extracted: {len(result.orders)}, Skipped: {len(result.skipped)}, "
            f"Errors: {len(result.failures)}, Time: {processing_time:.2f}s"
        )
        return result
