"""
Sale record sources.

A sale source returns the complete, unordered sale history for one shop owner.
Reporting consumes it through `fetch_sales()` only.

Implementations:
- SupabaseSaleSource: reads the `sales` table through the sale repository
- HttpSaleSource: reads `GET {api_url}/sales` from the REST API with a bearer token

Any failure (transport error, non-2xx response, malformed payload, database
error) is raised as SaleFetchError. There is no retry or backoff.
"""

from __future__ import annotations

import logging
from datetime import tzinfo
from typing import Any, List, Mapping, Optional, Protocol

import requests
from postgrest.exceptions import APIError

from domain.sale import SaleItem, SaleRecord
from domain.time import parse_timestamp
from repositories.sale_repository import list_sales_by_user

logger = logging.getLogger(__name__)


class SaleFetchError(Exception):
    """Raised when the sale history could not be fetched."""
    pass


class SaleRecordSource(Protocol):
    def fetch_sales(self) -> List[SaleRecord]:
        ...


class SupabaseSaleSource:
    """Sale history for one user, read straight from Supabase."""

    def __init__(self, user_id: str, tz: Optional[tzinfo] = None):
        self.user_id = user_id
        self.tz = tz

    def fetch_sales(self) -> List[SaleRecord]:
        try:
            return list_sales_by_user(self.user_id, tz=self.tz)
        except (RuntimeError, APIError, KeyError, TypeError, ValueError) as e:
            logger.warning(
                "Sale fetch from database failed",
                extra={"user_id": self.user_id, "error": str(e)},
            )
            raise SaleFetchError(f"Failed to fetch sales: {e}") from e


def _first(row: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in row and row[key] is not None:
            return row[key]
    raise KeyError(keys[0])


def _parse_item(row: Mapping[str, Any]) -> SaleItem:
    product = _first(row, "product_id", "productId")
    product_name = row.get("product_name")
    # Populated references arrive as {"_id": ..., "name": ..., "price": ...}.
    if isinstance(product, Mapping):
        product_name = product_name or product.get("name")
        product = _first(product, "_id", "id", "product_id")

    return SaleItem(
        product_id=str(product),
        quantity=int(row["quantity"]),
        unit_price=float(_first(row, "unit_price", "price")),
        product_name=product_name,
    )


def parse_sale_payload(row: Mapping[str, Any], tz: Optional[tzinfo] = None) -> SaleRecord:
    """
    Convert one JSON sale object into a SaleRecord.

    Accepts this API's field names (sale_id, total_amount, sold_at, items with
    product_id/unit_price) as well as the document-store names (_id,
    totalAmount, date, items with productId/price).
    """

    return SaleRecord(
        sale_id=str(_first(row, "sale_id", "_id", "id")),
        total_amount=float(_first(row, "total_amount", "totalAmount")),
        sold_at=parse_timestamp(_first(row, "sold_at", "date"), tz),
        items=tuple(_parse_item(item) for item in (row.get("items") or [])),
        user_id=row.get("user_id") or row.get("userId"),
    )


class HttpSaleSource:
    """
    Sale history read from the REST API.

    The base URL and access token are passed in explicitly; nothing is read
    from the environment here.
    """

    def __init__(
        self,
        api_url: str,
        access_token: str,
        timeout: float = 10.0,
        tz: Optional[tzinfo] = None,
        session: Optional[requests.Session] = None,
    ):
        self.api_url = api_url.rstrip("/")
        self.access_token = access_token
        self.timeout = timeout
        self.tz = tz
        self.session = session or requests.Session()

    def fetch_sales(self) -> List[SaleRecord]:
        url = f"{self.api_url}/sales"
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.access_token}",
        }

        try:
            response = self.session.get(url, headers=headers, timeout=self.timeout)
            response.raise_for_status()
            payload = response.json()
        except (requests.RequestException, ValueError) as e:
            logger.warning("Sale fetch over HTTP failed", extra={"url": url, "error": str(e)})
            raise SaleFetchError(f"Failed to fetch sales: {e}") from e

        if not isinstance(payload, list):
            raise SaleFetchError("Failed to fetch sales: expected a JSON array")

        try:
            return [parse_sale_payload(row, self.tz) for row in payload]
        except (KeyError, TypeError, ValueError) as e:
            raise SaleFetchError(f"Failed to fetch sales: malformed sale record ({e})") from e


__all__ = [
    "SaleFetchError",
    "SaleRecordSource",
    "SupabaseSaleSource",
    "HttpSaleSource",
    "parse_sale_payload",
]
