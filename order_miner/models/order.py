"""
The order record extracted from confirmation emails, and its JSON snapshot format.
"""
import datetime
from pathlib import Path
from typing import Any, Iterable, List, Sequence, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator


class Order(BaseModel):
    """An immutable purchase record: order id, delivery date and grand total."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Retailer order identifier")
    date: str = Field(pattern=r"^\d{4}-\d{2}-\d{2}$", description="Delivery date, YYYY-MM-DD")
    total: float = Field(gt=0, allow_inf_nan=False, description="Grand total")

    @field_validator("date", mode="before")
    @classmethod
    def _coerce_date(cls, value: Any) -> Any:
        # Rows read back from the database carry date objects.
        if isinstance(value, datetime.date):
            return value.isoformat()
        return value

    @field_validator("date")
    @classmethod
    def _check_calendar_date(cls, value: str) -> str:
        try:
            datetime.date.fromisoformat(value)
        except ValueError:
            raise ValueError(f"'{value}' is not a calendar date") from None
        return value

    @classmethod
    def from_row(cls, row: Sequence[Any]) -> "Order":
        """Build an order from a ``(storage_key, id, date, total)`` row."""
        _, order_id, order_date, total = row
        return cls(id=order_id, date=order_date, total=total)

    def order_date(self) -> datetime.date:
        return datetime.date.fromisoformat(self.date)

    def summary(self) -> str:
        return f"{self.id} {self.date} {self.total}"


ORDER_LIST = TypeAdapter(List[Order])


def dump_snapshot(orders: Iterable[Order], path: Union[str, Path]) -> Path:
    """Write orders as a JSON array of ``{id, date, total}`` objects."""
    snapshot = Path(path)
    snapshot.parent.mkdir(parents=True, exist_ok=True)
    snapshot.write_bytes(ORDER_LIST.dump_json(list(orders), indent=2))
    return snapshot


def load_snapshot(path: Union[str, Path]) -> List[Order]:
    """Read orders back from a snapshot written by ``dump_snapshot``."""
    return ORDER_LIST.validate_json(Path(path).read_bytes())
