"""
Domain: Products in a shop's inventory.

This module contains only pure domain entities and list helpers: no I/O,
no database, no frameworks.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional


class ProductSortField(str, Enum):
    NAME = "name"
    PRICE = "price"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True, slots=True)
class Product:
    """A sellable product owned by a single shop user."""

    product_id: str
    name: str
    price: float
    category: str
    image_url: Optional[str] = None
    user_id: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValueError("name is required")
        if self.price < 0:
            raise ValueError("price must be >= 0")


def filter_and_sort_products(
    products: Iterable[Product],
    search: Optional[str] = None,
    category: Optional[str] = None,
    sort_by: ProductSortField = ProductSortField.NAME,
    order: SortOrder = SortOrder.ASC,
) -> List[Product]:
    """
    Apply the inventory screen's list controls.

    - category: exact match on Product.category
    - search: case-insensitive substring of name OR category
    - sort_by/order: by name (case-insensitive) or price
    """

    filtered = list(products)

    if category:
        filtered = [p for p in filtered if p.category == category]

    if search:
        needle = search.lower()
        filtered = [
            p for p in filtered
            if needle in p.name.lower() or needle in p.category.lower()
        ]

    if sort_by == ProductSortField.PRICE:
        key = lambda p: p.price  # noqa: E731
    else:
        key = lambda p: p.name.lower()  # noqa: E731

    filtered.sort(key=key, reverse=order == SortOrder.DESC)
    return filtered


def unique_categories(products: Iterable[Product]) -> List[str]:
    """Distinct categories in first-seen order."""

    seen: List[str] = []
    for product in products:
        if product.category not in seen:
            seen.append(product.category)
    return seen


__all__ = [
    "Product",
    "ProductSortField",
    "SortOrder",
    "filter_and_sort_products",
    "unique_categories",
]
