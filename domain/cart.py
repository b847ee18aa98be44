"""
Domain: Shopping cart for sale entry.

The cart is an immutable value object: every change returns a new Cart and
the previous instance is left untouched.

Rules:
- Adding a product already in the cart increments its quantity.
- Removing one unit of a product with quantity 1 drops the line.
- Setting a quantity <= 0 drops the line.
- Line order is the order products were first added.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

from .product import Product
from .sale import SaleItem, calculate_total


@dataclass(frozen=True, slots=True)
class CartLine:
    product: Product
    quantity: int

    @property
    def line_total(self) -> float:
        return self.product.price * self.quantity


@dataclass(frozen=True, slots=True)
class Cart:
    lines: Tuple[CartLine, ...] = ()

    @staticmethod
    def empty() -> "Cart":
        return Cart(lines=())

    def _index_of(self, product_id: str) -> int:
        for index, line in enumerate(self.lines):
            if line.product.product_id == product_id:
                return index
        return -1

    def quantity_of(self, product_id: str) -> int:
        index = self._index_of(product_id)
        return self.lines[index].quantity if index >= 0 else 0

    def add(self, product: Product) -> "Cart":
        index = self._index_of(product.product_id)
        lines = list(self.lines)
        if index >= 0:
            lines[index] = CartLine(product=lines[index].product, quantity=lines[index].quantity + 1)
        else:
            lines.append(CartLine(product=product, quantity=1))
        return Cart(lines=tuple(lines))

    def remove_one(self, product_id: str) -> "Cart":
        index = self._index_of(product_id)
        if index < 0:
            return self
        return self.set_quantity(product_id, self.lines[index].quantity - 1)

    def set_quantity(self, product_id: str, quantity: int) -> "Cart":
        index = self._index_of(product_id)
        if index < 0:
            return self

        lines: List[CartLine] = list(self.lines)
        if quantity <= 0:
            del lines[index]
        else:
            lines[index] = CartLine(product=lines[index].product, quantity=quantity)
        return Cart(lines=tuple(lines))

    @property
    def is_empty(self) -> bool:
        return not self.lines

    @property
    def item_count(self) -> int:
        """Total number of units across all lines."""
        return sum(line.quantity for line in self.lines)

    def to_sale_items(self) -> List[SaleItem]:
        return [
            SaleItem(
                product_id=line.product.product_id,
                quantity=line.quantity,
                unit_price=line.product.price,
                product_name=line.product.name,
            )
            for line in self.lines
        ]

    @property
    def total(self) -> float:
        return calculate_total(self.to_sale_items())


__all__ = ["Cart", "CartLine"]
