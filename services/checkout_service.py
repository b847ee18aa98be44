"""
Checkout service for recording sales.

Handles:
- Verifying every sold product belongs to the shop owner
- Filling in product names for receipts
- Defaulting the total to the item sum when the client omits it
- Building a request straight from a Cart
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import datetime, tzinfo
from typing import List, Optional

from domain.cart import Cart
from domain.sale import SaleItem, SaleRecord, calculate_total
from repositories.product_repository import get_product
from repositories.sale_repository import record_sale

logger = logging.getLogger(__name__)


class ProductNotFoundError(Exception):
    """Raised when a sale references a product the user does not own."""

    def __init__(self, product_id: str):
        super().__init__(f"Product not found: {product_id}")
        self.product_id = product_id


@dataclass(frozen=True, slots=True)
class CheckoutRequest:
    user_id: str
    items: List[SaleItem]
    total_amount: Optional[float] = None

    @classmethod
    def from_cart(cls, user_id: str, cart: Cart, total_amount: Optional[float] = None) -> "CheckoutRequest":
        """Checkout request for the lines currently in `cart`."""
        return cls(user_id=user_id, items=cart.to_sale_items(), total_amount=total_amount)


def execute_checkout(
    request: CheckoutRequest,
    sold_at: datetime,
    tz: Optional[tzinfo] = None,
) -> SaleRecord:
    """
    Record a sale.

    Args:
        request: Items sold and (optionally) the amount charged
        sold_at: Local wall-clock time of the sale
        tz: Zone `sold_at` is expressed in

    Returns:
        The recorded SaleRecord

    Raises:
        ValueError: If there are no items
        ProductNotFoundError: If any item references an unknown product
    """

    if not request.items:
        raise ValueError("Cannot record a sale without items")

    items: List[SaleItem] = []
    for item in request.items:
        product = get_product(request.user_id, item.product_id)
        if product is None:
            raise ProductNotFoundError(item.product_id)
        items.append(item if item.product_name else replace(item, product_name=product.name))

    computed = calculate_total(items)
    total = computed if request.total_amount is None else request.total_amount

    if abs(total - computed) > 0.005:
        logger.warning(
            "Sale total does not match item sum",
            extra={"user_id": request.user_id, "total_amount": total, "items_total": computed},
        )

    return record_sale(
        user_id=request.user_id,
        items=items,
        total_amount=total,
        sold_at=sold_at,
        tz=tz,
    )


__all__ = ["ProductNotFoundError", "CheckoutRequest", "execute_checkout"]
