"""
Product API Endpoints.

Inventory management for the authenticated shop owner.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from api.dependencies import get_current_user_id
from api.models import (
    MessageResponse,
    ProductCreateRequest,
    ProductResponse,
    ProductUpdateRequest,
)
from domain.product import Product, ProductSortField, SortOrder
from repositories.product_repository import create_product, delete_product
from services.inventory_service import browse_products, edit_product, list_categories

logger = logging.getLogger(__name__)

router = APIRouter()


def _to_response(product: Product) -> ProductResponse:
    return ProductResponse(
        id=product.product_id,
        name=product.name,
        price=product.price,
        category=product.category,
        image_url=product.image_url,
    )


@router.get(
    "/products",
    response_model=List[ProductResponse],
    summary="List Products",
    description="List products with optional search, category filter, and sorting."
)
def get_products(
    search: Optional[str] = Query(None, description="Case-insensitive match on name or category"),
    category: Optional[str] = Query(None, description="Exact category"),
    sort_by: ProductSortField = Query(ProductSortField.NAME, description="'name' or 'price'"),
    order: SortOrder = Query(SortOrder.ASC, description="'asc' or 'desc'"),
    user_id: str = Depends(get_current_user_id),
):
    """
    **Example usage:**
    - All products: `GET /api/v1/products`
    - Drinks, cheapest first: `GET /api/v1/products?category=Drinks&sort_by=price`
    """
    try:
        products = browse_products(user_id, search=search, category=category, sort_by=sort_by, order=order)
        return [_to_response(p) for p in products]
    except Exception as e:
        logger.exception("Product listing failed")
        raise HTTPException(status_code=500, detail=f"Error fetching products: {str(e)}")


@router.get("/products/categories", response_model=List[str], summary="List Categories")
def get_categories(user_id: str = Depends(get_current_user_id)):
    try:
        return list_categories(user_id)
    except Exception as e:
        logger.exception("Category listing failed")
        raise HTTPException(status_code=500, detail=f"Error fetching categories: {str(e)}")


@router.post("/products", response_model=ProductResponse, status_code=201, summary="Create Product")
def add_product(request: ProductCreateRequest, user_id: str = Depends(get_current_user_id)):
    try:
        product = create_product(
            user_id,
            name=request.name,
            price=request.price,
            category=request.category,
            image_url=request.image_url,
        )
        return _to_response(product)
    except Exception as e:
        logger.exception("Product creation failed")
        raise HTTPException(status_code=500, detail=f"Error creating product: {str(e)}")


@router.put("/products/{product_id}", response_model=ProductResponse, summary="Update Product")
def change_product(
    product_id: str,
    request: ProductUpdateRequest,
    user_id: str = Depends(get_current_user_id),
):
    try:
        product = edit_product(
            user_id,
            product_id,
            name=request.name,
            price=request.price,
            category=request.category,
            image_url=request.image_url,
        )
    except Exception as e:
        logger.exception("Product update failed")
        raise HTTPException(status_code=500, detail=f"Error updating product: {str(e)}")

    if product is None:
        raise HTTPException(status_code=404, detail="Product not found")
    return _to_response(product)


@router.delete("/products/{product_id}", response_model=MessageResponse, summary="Delete Product")
def remove_product(product_id: str, user_id: str = Depends(get_current_user_id)):
    try:
        deleted = delete_product(user_id, product_id)
    except Exception as e:
        logger.exception("Product deletion failed")
        raise HTTPException(status_code=500, detail=f"Error deleting product: {str(e)}")

    if not deleted:
        raise HTTPException(status_code=404, detail="Product not found")
    return MessageResponse(message="Product deleted successfully")
