# tests/test_models.py
import json
import pytest
from datetime import date
from pydantic import ValidationError

from order_miner.models import (
    Conditions,
    Order,
    default_conditions,
    dump_snapshot,
    load_snapshot,
    stats_conditions,
)


def test_order_from_row_discards_storage_key():
    order = Order.from_row((7, "112-1", date(2021, 1, 5), 23.45))

    assert order == Order(id="112-1", date="2021-01-05", total=23.45)
    assert order.order_date() == date(2021, 1, 5)
    assert order.summary() == "112-1 2021-01-05 23.45"


def test_order_is_immutable():
    order = Order(id="112-1", date="2021-01-05", total=23.45)

    with pytest.raises(ValidationError):
        order.total = 1.0


@pytest.mark.parametrize(
    "fields",
    [
        {"id": "a", "date": "2021-01-05", "total": 0},
        {"id": "a", "date": "2021-01-05", "total": -3.5},
        {"id": "a", "date": "Jan 5 2021", "total": 3.5},
        {"id": "a", "date": "2021-02-30", "total": 3.5},
    ],
)
def test_order_rejects_invalid_fields(fields):
    with pytest.raises(ValidationError):
        Order(**fields)


def test_snapshot_round_trip(tmp_path):
    orders = [
        Order(id="112-1", date="2021-01-05", total=23.45),
        Order(id="112-2", date="2021-02-11", total=7.0),
    ]
    path = dump_snapshot(orders, tmp_path / "data" / "orders.json")

    raw = json.loads(path.read_text())
    assert raw[0] == {"id": "112-1", "date": "2021-01-05", "total": 23.45}
    assert load_snapshot(path) == orders


def test_condition_defaults():
    conditions = default_conditions()

    assert (conditions.start, conditions.end) == ("2021-01-01", "2021-05-01")
    assert conditions.amount_range() == (0.0, 100000.0)
    assert conditions.row_limit_count() == 100
    assert stats_conditions().row_limit_count() == 7


@pytest.mark.parametrize(
    "field, value",
    [
        ("start", "01/02/2021"),
        ("end", "2021-13-01"),
        ("lower_bound", "abc"),
        ("upper_bound", "NaN"),
        ("row_limit", "0"),
        ("row_limit", "ten"),
        ("start", "2021-01-01' OR '1'='1"),
    ],
)
def test_conditions_validate_on_assignment(field, value):
    conditions = Conditions()

    with pytest.raises(ValidationError):
        setattr(conditions, field, value)


def test_conditions_update_is_all_or_nothing():
    conditions = Conditions()

    with pytest.raises(ValidationError):
        conditions.update(start="2021-02-01", end="not a date")

    assert conditions.start == "2021-01-01"

    conditions.update(start=" 2021-02-01 ", end="2021-03-01")
    assert (conditions.start_date(), conditions.end_date()) == (date(2021, 2, 1), date(2021, 3, 1))
