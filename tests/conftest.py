# tests/conftest.py
"""
Shared fixtures: a throwaway SQLite database and sample confirmation emails.
"""
import pytest

from order_miner.database import DatabaseManager, OrderRepository

FOOTER = (
    "View or manage your order in Your Orders. "
    "We hope to see you again soon. "
    "Thank you for shopping with Whole Foods Market on Amazon. "
    "This email was sent from a notification-only address that cannot accept incoming email."
)


def confirmation_body(
    order_id="112-7000001-1234567",
    delivery="Tuesday January 5, 2021 at 3:04pm (PST)",
    total="$23.45",
):
    return (
        "Hello Jane,\n"
        "Your delivery is complete.\n"
        f"Order delivered, delivery time: {delivery}\n"
        "Order Summary\n"
        "Item Subtotal: $21.50\n"
        "Tip: $1.95\n"
        f"Grand total: {total}\n"
        f"Details Order {order_id}\n"
        f"{FOOTER}\n"
    )


@pytest.fixture
def sample_body():
    return confirmation_body()


@pytest.fixture(scope="function")
def db(tmp_path):
    """Fresh SQLite database per test."""
    manager = DatabaseManager(url=f"sqlite:///{tmp_path / 'orders.db'}")
    manager.create_tables()
    yield manager
    manager.engine.dispose()


@pytest.fixture
def repository(db):
    return OrderRepository(db)


@pytest.fixture
def make_body():
    return confirmation_body
