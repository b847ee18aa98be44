"""
Sales API Endpoints.

Checkout, sale history, and receipts.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response

from api.dependencies import get_current_user_id, get_settings
from api.models import SaleCreateRequest, SaleItemResponse, SaleResponse
from config import Settings
from domain.sale import SaleItem, SaleRecord
from repositories.sale_repository import get_sale_by_id, list_sales_by_user
from services.checkout_service import CheckoutRequest, ProductNotFoundError, execute_checkout
from services.receipt_service import receipt_filename, render_receipt_pdf
from services.report_renderer import pdf_currency_prefix
from services.report_service import resolve_now

logger = logging.getLogger(__name__)

router = APIRouter()


def _to_response(sale: SaleRecord) -> SaleResponse:
    return SaleResponse(
        id=sale.sale_id,
        items=[
            SaleItemResponse(
                product_id=item.product_id,
                product_name=item.product_name,
                quantity=item.quantity,
                unit_price=item.unit_price,
            )
            for item in sale.items
        ],
        total_amount=sale.total_amount,
        total_items=sale.item_count,
        sold_at=sale.sold_at,
    )


@router.post(
    "/sales",
    response_model=SaleResponse,
    status_code=201,
    summary="Create Sale",
    description="Check out a cart: verifies every product exists for the user, then records the sale."
)
def create_sale(
    request: SaleCreateRequest,
    user_id: str = Depends(get_current_user_id),
    settings: Settings = Depends(get_settings),
):
    """
    **Example request:**
    ```json
    {
      "items": [{"product_id": "5b0f1c9e-...", "quantity": 2, "unit_price": 15.5}],
      "total_amount": 31.0
    }
    ```
    """
    try:
        checkout = CheckoutRequest(
            user_id=user_id,
            items=[
                SaleItem(product_id=item.product_id, quantity=item.quantity, unit_price=item.unit_price)
                for item in request.items
            ],
            total_amount=request.total_amount,
        )
        sale = execute_checkout(checkout, sold_at=resolve_now(tz=settings.tz), tz=settings.tz)
        return _to_response(sale)
    except ProductNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("Sale creation failed")
        raise HTTPException(status_code=500, detail=f"Error creating sale: {str(e)}")


@router.get("/sales", response_model=List[SaleResponse], summary="List Sales")
def get_sales(
    user_id: str = Depends(get_current_user_id),
    settings: Settings = Depends(get_settings),
):
    """All sales for the logged-in user, newest first."""
    try:
        return [_to_response(sale) for sale in list_sales_by_user(user_id, tz=settings.tz)]
    except Exception as e:
        logger.exception("Sale listing failed")
        raise HTTPException(status_code=500, detail=f"Error fetching sales: {str(e)}")


@router.get(
    "/sales/{sale_id}/receipt",
    summary="Download Receipt",
    description="PDF receipt for a single sale.",
    response_class=Response
)
def download_receipt(
    sale_id: str,
    user_id: str = Depends(get_current_user_id),
    settings: Settings = Depends(get_settings),
):
    try:
        sale = get_sale_by_id(sale_id, user_id, tz=settings.tz)
        if sale is None:
            raise HTTPException(status_code=404, detail=f"Sale not found: {sale_id}")

        content = render_receipt_pdf(
            sale,
            brand=settings.brand,
            currency_prefix=pdf_currency_prefix(settings.currency_symbol, settings.currency_code),
        )
        return Response(
            content=content,
            media_type="application/pdf",
            headers={"Content-Disposition": f"attachment; filename={receipt_filename(sale.sold_at)}"}
        )
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Receipt generation failed")
        raise HTTPException(status_code=500, detail=f"Failed to generate receipt: {str(e)}")
