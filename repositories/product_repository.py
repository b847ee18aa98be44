"""
Product repository (persistence).

CRUD operations for a shop owner's products. Every query is scoped to the
owning user; a product belonging to someone else is reported as not found.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, List, Mapping, Optional
from uuid import uuid4

from domain.product import Product
from repositories.client import get_supabase

_PRODUCTS_TABLE: str = "products"


def _row_to_product(row: Mapping[str, Any]) -> Product:
    """Convert a Supabase row into a Product."""

    return Product(
        product_id=str(row["product_id"]),
        name=str(row["name"]),
        price=float(row["price"]),
        category=str(row.get("category") or ""),
        image_url=row.get("image_url"),
        user_id=str(row["user_id"]) if row.get("user_id") else None,
    )


def list_products(user_id: str) -> List[Product]:
    """
    Retrieve all products for a shop owner.

    Returns:
        List[Product] (possibly empty)
    """

    response = get_supabase().table(_PRODUCTS_TABLE).select("*").eq("user_id", user_id).execute()
    error = getattr(response, "error", None)
    if error:
        raise RuntimeError(f"Failed to list products: {error}")

    rows = getattr(response, "data", None) or []
    return [_row_to_product(row) for row in rows]


def get_product(user_id: str, product_id: str) -> Optional[Product]:
    """
    Retrieve a single product owned by `user_id`.

    Returns:
        Product or None if not found
    """

    response = (
        get_supabase()
        .table(_PRODUCTS_TABLE)
        .select("*")
        .eq("product_id", product_id)
        .eq("user_id", user_id)
        .limit(1)
        .execute()
    )
    error = getattr(response, "error", None)
    if error:
        raise RuntimeError(f"Failed to get product: {error}")

    rows = getattr(response, "data", None) or []
    if not rows:
        return None
    return _row_to_product(rows[0])


def create_product(
    user_id: str,
    name: str,
    price: float,
    category: str,
    image_url: Optional[str] = None,
) -> Product:
    """Insert a new product and return it."""

    product = Product(
        product_id=str(uuid4()),
        name=name,
        price=float(price),
        category=category,
        image_url=image_url,
        user_id=user_id,
    )

    payload: dict[str, Any] = {
        "product_id": product.product_id,
        "user_id": user_id,
        "name": product.name,
        "price": product.price,
        "category": product.category,
        "image_url": product.image_url,
        "created_at_utc": datetime.now(timezone.utc).isoformat(),
    }

    response = get_supabase().table(_PRODUCTS_TABLE).insert(payload).execute()
    error = getattr(response, "error", None)
    if error:
        raise RuntimeError(f"Failed to create product: {error}")

    return product


def update_product(user_id: str, product: Product) -> None:
    """Overwrite the stored fields of an existing product."""

    payload: dict[str, Any] = {
        "name": product.name,
        "price": product.price,
        "category": product.category,
        "image_url": product.image_url,
    }

    response = (
        get_supabase()
        .table(_PRODUCTS_TABLE)
        .update(payload)
        .eq("product_id", product.product_id)
        .eq("user_id", user_id)
        .execute()
    )
    error = getattr(response, "error", None)
    if error:
        raise RuntimeError(f"Failed to update product: {error}")


def delete_product(user_id: str, product_id: str) -> bool:
    """
    Delete a product.

    Returns:
        True if a row was deleted, False if no such product exists for the user
    """

    response = (
        get_supabase()
        .table(_PRODUCTS_TABLE)
        .delete()
        .eq("product_id", product_id)
        .eq("user_id", user_id)
        .execute()
    )
    error = getattr(response, "error", None)
    if error:
        raise RuntimeError(f"Failed to delete product: {error}")

    rows = getattr(response, "data", None) or []
    return bool(rows)


__all__ = [
    "list_products",
    "get_product",
    "create_product",
    "update_product",
    "delete_product",
]
