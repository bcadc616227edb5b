# tests/test_order_sync.py
import pytest
from datetime import date

from order_miner.core import CursorStore, ErrorPolicy, OrderSync
from order_miner.exceptions import AmountParseError, DateParseError, MailboxError
from order_miner.models import default_conditions, load_snapshot
from order_miner.parsing import OrderTemplate


class FakeMailbox:
    """In-memory mailbox keyed by message id."""

    def __init__(self, messages, fail_search=False):
        self.messages = messages
        self.fail_search = fail_search
        self.queries = []
        self.open = False

    def __enter__(self):
        self.open = True
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.open = False

    def search_messages(self, query, max_results):
        self.queries.append((query, max_results))
        if self.fail_search:
            raise MailboxError("search failed")
        return list(self.messages)[:max_results]

    def fetch_body(self, message_id):
        body = self.messages[message_id]
        if isinstance(body, Exception):
            raise body
        return body


@pytest.fixture
def messages(make_body):
    return {
        "m1": make_body(),
        "m2": make_body(order_id="112-7000002-7654321", total="$0.00"),
        "m3": "Your weekly newsletter. " * 10,
        "m4": MailboxError("message vanished"),
        "m5": make_body(order_id="112-7000003-1111111", delivery="Friday February 12, 2021 at 9:00am"),
    }


@pytest.fixture
def make_sync(repository, tmp_path):
    def factory(mailbox):
        return OrderSync(
            mailbox_factory=lambda: mailbox,
            repository=repository,
            template=OrderTemplate(search_query="from:orders@example.com"),
            snapshot_file=tmp_path / "orders.json",
            max_results=10,
            today=lambda: date(2021, 3, 7),
        )
    return factory


def test_sync_skips_bad_messages_and_stores_the_rest(make_sync, messages, repository, tmp_path):
    mailbox = FakeMailbox(messages)

    result = make_sync(mailbox).sync("2021-Jan-01")

    assert mailbox.queries == [("from:orders@example.com after:2021/01/01", 10)]
    assert [order.id for order in result.orders] == ["112-7000001-1234567", "112-7000003-1111111"]
    assert [failure.message_id for failure in result.failures] == ["m2", "m4"]
    assert result.skipped == ["m3"]
    assert result.cursor == "2021-Mar-07"

    stored = repository.fetch_orders(default_conditions())
    assert {order.id for order in stored} == {"112-7000001-1234567", "112-7000003-1111111"}
    assert load_snapshot(tmp_path / "orders.json") == result.orders


def test_sync_logs_each_message(make_sync, messages, repository):
    make_sync(FakeMailbox(messages)).sync("2021-Jan-01")

    statuses = {entry.message_id: entry.status for entry in repository.sync_log()}
    assert statuses == {"m1": "success", "m2": "error", "m3": "skipped", "m4": "error", "m5": "success"}
    assert "AmountParseError" in repository.sync_log(status="error")[0].error_details


def test_sync_abort_policy_raises_first_error(make_sync, messages, repository):
    with pytest.raises(AmountParseError):
        make_sync(FakeMailbox(messages)).sync("2021-Jan-01", policy=ErrorPolicy.ABORT)

    assert repository.fetch_orders(default_conditions()) == []


def test_sync_search_failure_propagates(make_sync, messages):
    mailbox = FakeMailbox(messages, fail_search=True)

    with pytest.raises(MailboxError):
        make_sync(mailbox).sync("2021-Jan-01")

    assert mailbox.open is False


def test_sync_with_no_messages_still_advances_cursor(make_sync, tmp_path):
    result = make_sync(FakeMailbox({})).sync("2021-Feb-01")

    assert result.orders == []
    assert result.cursor == "2021-Mar-07"
    assert load_snapshot(tmp_path / "orders.json") == []


def test_sync_rejects_malformed_cursor(make_sync, messages):
    with pytest.raises(DateParseError):
        make_sync(FakeMailbox(messages)).sync("2021-01-01")


def test_cursor_store_defaults_and_persists(tmp_path):
    store = CursorStore(tmp_path / "state" / "last_update.txt", default="2021-Jan-01")

    assert store.load() == "2021-Jan-01"

    store.save("2021-Mar-07")
    assert store.load() == "2021-Mar-07"


def test_cursor_store_rejects_invalid_cursor(tmp_path):
    store = CursorStore(tmp_path / "last_update.txt", default="2021-Jan-01")

    with pytest.raises(DateParseError):
        store.save("March 7th")
    assert not store.path.exists()


def test_sync_skips_impossible_delivery_date_and_keeps_good_orders(make_sync, make_body, repository, tmp_path):
    mailbox = FakeMailbox(
        {
            "good": make_body(),
            "bad": make_body(order_id="112-7000009-0000000", delivery="Tuesday February 30, 2021 at noon"),
        }
    )

    result = make_sync(mailbox).sync("2021-Jan-01")

    assert [failure.message_id for failure in result.failures] == ["bad"]
    assert "DateParseError" in repository.sync_log(status="error")[0].error_details
    assert [order.id for order in repository.fetch_orders(default_conditions())] == ["112-7000001-1234567"]
    assert load_snapshot(tmp_path / "orders.json") == result.orders


def test_sync_skips_socket_timeouts(make_sync, make_body, repository):
    mailbox = FakeMailbox({"good": make_body(), "slow": TimeoutError("socket timed out")})

    result = make_sync(mailbox).sync("2021-Jan-01")

    assert [failure.message_id for failure in result.failures] == ["slow"]
    assert "socket timed out" in result.failures[0].reason
    assert len(repository.fetch_orders(default_conditions())) == 1
