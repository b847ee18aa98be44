"""
Sale repository (persistence).

This module provides *only* persistence operations for the SaleRecord domain
entity. It does not enforce business rules (e.g., product ownership); it only
inserts and fetches sale records.

Timestamps are stored as UTC ISO-8601 strings and converted to local
wall-clock datetimes on the way out.
"""

from __future__ import annotations

from datetime import datetime, timezone, tzinfo
from typing import Any, Iterable, List, Mapping, Optional
from uuid import uuid4

from domain.sale import SaleItem, SaleRecord
from domain.time import parse_timestamp, wall_clock_to_utc
from repositories.client import get_supabase

# Supabase table name for sale records.
# Keep this aligned with your database schema.
_SALES_TABLE: str = "sales"


def _item_to_payload(item: SaleItem) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "product_id": item.product_id,
        "quantity": item.quantity,
        "unit_price": item.unit_price,
    }
    if item.product_name is not None:
        payload["product_name"] = item.product_name
    return payload


def _row_to_item(row: Mapping[str, Any]) -> SaleItem:
    return SaleItem(
        product_id=str(row["product_id"]),
        quantity=int(row["quantity"]),
        unit_price=float(row["unit_price"]),
        product_name=row.get("product_name"),
    )


def _row_to_sale(row: Mapping[str, Any], tz: Optional[tzinfo] = None) -> SaleRecord:
    """Convert a Supabase row into a SaleRecord."""

    return SaleRecord(
        sale_id=str(row["sale_id"]),
        total_amount=float(row["total_amount"]),
        sold_at=parse_timestamp(row["sold_at_utc"], tz),
        items=tuple(_row_to_item(item) for item in (row.get("items") or [])),
        user_id=str(row["user_id"]) if row.get("user_id") else None,
    )


def record_sale(
    user_id: str,
    items: Iterable[SaleItem],
    total_amount: float,
    sold_at: datetime,
    tz: Optional[tzinfo] = None,
) -> SaleRecord:
    """
    Insert a new sale into Supabase.

    Args:
        user_id: Shop owner the sale belongs to
        items: Line items sold
        total_amount: Amount charged (stored as given)
        sold_at: Local wall-clock time of the sale
        tz: Zone `sold_at` is expressed in (system local zone when None)

    Returns:
        SaleRecord domain model with the recorded sale
    """

    sale_id = str(uuid4())
    item_tuple = tuple(items)
    sale = SaleRecord(
        sale_id=sale_id,
        total_amount=float(total_amount),
        sold_at=sold_at,
        items=item_tuple,
        user_id=user_id,
    )

    payload: dict[str, Any] = {
        "sale_id": sale_id,
        "user_id": user_id,
        "items": [_item_to_payload(item) for item in item_tuple],
        "total_amount": sale.total_amount,
        "sold_at_utc": wall_clock_to_utc(sold_at, tz).isoformat(),
        "created_at_utc": datetime.now(timezone.utc).isoformat(),
    }

    response = get_supabase().table(_SALES_TABLE).insert(payload).execute()
    error = getattr(response, "error", None)
    if error:
        raise RuntimeError(f"Failed to record sale: {error}")

    return sale


def list_sales_by_user(user_id: str, tz: Optional[tzinfo] = None) -> List[SaleRecord]:
    """
    Retrieve every sale record for a shop owner, newest first.

    No pagination or windowing: reports are computed over the whole history.

    Returns:
        List[SaleRecord] (possibly empty)
    """

    response = (
        get_supabase()
        .table(_SALES_TABLE)
        .select("*")
        .eq("user_id", user_id)
        .order("sold_at_utc", desc=True)
        .execute()
    )
    error = getattr(response, "error", None)
    if error:
        raise RuntimeError(f"Failed to list sales: {error}")

    rows = getattr(response, "data", None) or []
    return [_row_to_sale(row, tz) for row in rows]


def get_sale_by_id(sale_id: str, user_id: str, tz: Optional[tzinfo] = None) -> Optional[SaleRecord]:
    """
    Retrieve a single sale record owned by `user_id`.

    Returns:
        SaleRecord or None if not found
    """

    response = (
        get_supabase()
        .table(_SALES_TABLE)
        .select("*")
        .eq("sale_id", sale_id)
        .eq("user_id", user_id)
        .limit(1)
        .execute()
    )
    error = getattr(response, "error", None)
    if error:
        raise RuntimeError(f"Failed to get sale: {error}")

    rows = getattr(response, "data", None) or []

    if not rows:
        return None

    return _row_to_sale(rows[0], tz)


__all__ = [
    "record_sale",
    "list_sales_by_user",
    "get_sale_by_id",
]
