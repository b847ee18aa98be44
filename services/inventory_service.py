"""
Inventory service for a shop's product catalogue.

Combines product persistence with the list controls of the inventory screen
and the partial-update rule of the product editor.
"""

from __future__ import annotations

from dataclasses import replace
from typing import List, Optional

from domain.product import (
    Product,
    ProductSortField,
    SortOrder,
    filter_and_sort_products,
    unique_categories,
)
from repositories.product_repository import get_product, list_products, update_product


def browse_products(
    user_id: str,
    search: Optional[str] = None,
    category: Optional[str] = None,
    sort_by: ProductSortField = ProductSortField.NAME,
    order: SortOrder = SortOrder.ASC,
) -> List[Product]:
    """List a user's products filtered and sorted like the inventory screen."""

    return filter_and_sort_products(
        list_products(user_id),
        search=search,
        category=category,
        sort_by=sort_by,
        order=order,
    )


def list_categories(user_id: str) -> List[str]:
    return unique_categories(list_products(user_id))


def apply_product_changes(
    product: Product,
    name: Optional[str] = None,
    price: Optional[float] = None,
    category: Optional[str] = None,
    image_url: Optional[str] = None,
) -> Product:
    """
    Merge edits into a product.

    Empty values (None, "", 0) keep the current value, so a price cannot be
    set to zero through an update.
    """

    return replace(
        product,
        name=name or product.name,
        price=price or product.price,
        category=category or product.category,
        image_url=image_url or product.image_url,
    )


def edit_product(
    user_id: str,
    product_id: str,
    name: Optional[str] = None,
    price: Optional[float] = None,
    category: Optional[str] = None,
    image_url: Optional[str] = None,
) -> Optional[Product]:
    """
    Update a product.

    Returns:
        The updated Product, or None if the user has no such product
    """

    product = get_product(user_id, product_id)
    if product is None:
        return None

    updated = apply_product_changes(product, name=name, price=price, category=category, image_url=image_url)
    update_product(user_id, updated)
    return updated


__all__ = ["browse_products", "list_categories", "apply_product_changes", "edit_product"]
