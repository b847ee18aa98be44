"""
Domain: Sale events.

A sale is recorded once at checkout and never modified or deleted afterwards.
Reporting reads the full history of sale records on every request.

Contract excerpts relevant here:
- total_amount is trusted as stored; it is expected to equal the sum of
  quantity * unit_price over the items but this is not enforced here.
- sold_at is a local wall-clock timestamp (timezone-naive).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Tuple

from .time import require_wall_clock_timestamp


@dataclass(frozen=True, slots=True)
class SaleItem:
    """One line of a sale: a product, how many units, and the unit price charged."""

    product_id: str
    quantity: int
    unit_price: float
    product_name: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.product_id:
            raise ValueError("product_id is required")
        if isinstance(self.quantity, bool) or not isinstance(self.quantity, int):
            raise ValueError("quantity must be an integer")
        if self.quantity <= 0:
            raise ValueError("quantity must be > 0")
        if self.unit_price < 0:
            raise ValueError("unit_price must be >= 0")

    @property
    def line_total(self) -> float:
        return self.quantity * self.unit_price


@dataclass(frozen=True, slots=True)
class SaleRecord:
    """
    Immutable record of a completed sale.

    Captures:
    - Which products were sold and at what price (items)
    - How much was charged in total (total_amount)
    - When it was sold (sold_at, local wall-clock)
    - Whose shop it belongs to (user_id)
    """

    sale_id: str
    total_amount: float
    sold_at: datetime
    items: Tuple[SaleItem, ...] = field(default_factory=tuple)
    user_id: Optional[str] = None

    def __post_init__(self) -> None:
        require_wall_clock_timestamp("sold_at", self.sold_at)
        if self.total_amount < 0:
            raise ValueError("total_amount must be >= 0")
        if not isinstance(self.items, tuple):
            object.__setattr__(self, "items", tuple(self.items))

    @property
    def items_total(self) -> float:
        """Sum of quantity * unit_price over the items."""

        return sum((item.line_total for item in self.items), 0.0)

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self.items)


def calculate_total(items) -> float:
    """Cart total: sum of quantity * unit_price."""

    return sum((item.line_total for item in items), 0.0)


__all__ = ["SaleItem", "SaleRecord", "calculate_total"]
