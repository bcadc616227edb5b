"""
Builds the queries used to view and summarize orders, and the mailbox search
used for incremental sync.

Order queries are SQLAlchemy Core statements: condition values are sent as
bound parameters and never spliced into SQL text.
"""
from sqlalchemy import Select, and_, func, select

from order_miner.models.tables import OrderRecord
from order_miner.parsing.dates import parse_cursor

from .functions import day_span

orders_table = OrderRecord.__table__


def build_range_query(conditions) -> Select:
    """Select every column of the orders strictly inside the date and amount bounds."""
    lower, upper = conditions.amount_range()
    return (
        select(orders_table)
        .where(
            and_(
                orders_table.c.order_date > conditions.start_date(),
                orders_table.c.order_date < conditions.end_date(),
                orders_table.c.grand_total > lower,
                orders_table.c.grand_total < upper,
            )
        )
        .limit(conditions.row_limit_count())
    )


def build_aggregate_query(conditions) -> Select:
    """Day span and average total over the rows matched by ``build_range_query``."""
    t1 = build_range_query(conditions).subquery("t1")
    return select(
        day_span(func.max(t1.c.order_date), func.min(t1.c.order_date)).label("gap"),
        func.avg(t1.c.grand_total).label("spending"),
    )


def build_sync_query(base: str, last_update: str) -> str:
    """Append an ``after:YYYY/MM/DD`` clause for the ``YYYY-Mon-DD`` cursor."""
    since = parse_cursor(last_update)
    return f"{base} after:{since:%Y/%m/%d}"


def describe_conditions(conditions) -> str:
    return (
        f"Date: {conditions.start} ~ {conditions.end} / "
        f"Total amount: {conditions.lower_bound} ~ {conditions.upper_bound} / "
        f"Number of rows: {conditions.row_limit}"
    )
