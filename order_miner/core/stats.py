"""
Purchase statistics computed from the aggregate order query.
"""
from dataclasses import dataclass
from typing import Optional

from order_miner.database import OrderRepository
from order_miner.models import Conditions


@dataclass
class PurchasePattern:
    day_gap: int
    average_total: float
    cadence_days: int


def summarize_purchases(
    repository: OrderRepository, conditions: Conditions
) -> Optional[PurchasePattern]:
    """
    Purchase cadence (day span divided by the row cap) and average spend.
    Returns ``None`` when no orders match.
    """
    gap, spending = repository.fetch_summary(conditions)
    if gap is None or spending is None:
        return None

    gap = int(gap)
    return PurchasePattern(
        day_gap=gap,
        average_total=float(spending),
        cadence_days=gap // conditions.row_limit_count(),
    )
