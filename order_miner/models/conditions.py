"""
Filter conditions for viewing and summarizing stored orders.
"""
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Conditions(BaseModel):
    """
    Date range, amount range and row cap used to select orders.

    Every field always holds a string. Values are validated on assignment so
    bad input is rejected where it is entered rather than when the query runs.
    """

    model_config = ConfigDict(validate_assignment=True)

    start: str = Field(default="2021-01-01", description="Exclusive lower date bound")
    end: str = Field(default="2021-05-01", description="Exclusive upper date bound")
    lower_bound: str = Field(default="0.0", description="Exclusive lower amount bound")
    upper_bound: str = Field(default="100000", description="Exclusive upper amount bound")
    row_limit: str = Field(default="100", description="Maximum number of rows")

    @field_validator("start", "end")
    @classmethod
    def _check_date(cls, value: str) -> str:
        value = value.strip()
        try:
            date.fromisoformat(value)
        except ValueError:
            raise ValueError(f"'{value}' is not a date in yyyy-mm-dd format") from None
        return value

    @field_validator("lower_bound", "upper_bound")
    @classmethod
    def _check_amount(cls, value: str) -> str:
        value = value.strip()
        try:
            amount = Decimal(value)
        except InvalidOperation:
            raise ValueError(f"'{value}' is not an amount") from None
        if not amount.is_finite():
            raise ValueError(f"'{value}' is not a finite amount")
        return value

    @field_validator("row_limit")
    @classmethod
    def _check_row_limit(cls, value: str) -> str:
        value = value.strip()
        if not value.isdigit() or int(value) <= 0:
            raise ValueError(f"'{value}' is not a positive number of rows")
        return value

    def update(self, **fields: Any) -> "Conditions":
        """
        Validate a group of fields together, then apply them.
        Nothing is changed if any of the values is invalid.
        """
        candidate = Conditions(**{**self.model_dump(), **fields})
        for name in fields:
            setattr(self, name, getattr(candidate, name))
        return self

    def start_date(self) -> date:
        return date.fromisoformat(self.start)

    def end_date(self) -> date:
        return date.fromisoformat(self.end)

    def amount_range(self) -> Tuple[float, float]:
        return float(self.lower_bound), float(self.upper_bound)

    def row_limit_count(self) -> int:
        return int(self.row_limit)

    def summary(self) -> str:
        from order_miner.queries.builder import describe_conditions

        return describe_conditions(self)

    def range_query(self):
        from order_miner.queries.builder import build_range_query

        return build_range_query(self)

    def aggregate_query(self):
        from order_miner.queries.builder import build_aggregate_query

        return build_aggregate_query(self)


def default_conditions() -> Conditions:
    """Wide date range, wide amount range, 100 rows."""
    return Conditions()


def stats_conditions() -> Conditions:
    """Conditions used by the purchase pattern summary."""
    return Conditions(row_limit="7")
