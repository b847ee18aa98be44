"""
API Request and Response Models.

Pydantic models for validating API requests and serializing responses.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


# ============================================================================
# Auth / Profile Models
# ============================================================================

class RegisterRequest(BaseModel):
    """Request to create a shop owner account."""
    email: str = Field(..., min_length=3)
    password: str = Field(..., min_length=6)
    full_name: str = Field(..., min_length=1)
    username: str = Field(..., min_length=1)
    business_name: str = Field(..., min_length=1)
    business_type: Optional[str] = None
    contact_number: Optional[str] = None

    class Config:
        json_schema_extra = {
            "example": {
                "email": "maria@example.com",
                "password": "s3cret-pass",
                "full_name": "Maria Santos",
                "username": "maria",
                "business_name": "Santos Sari-Sari Store",
                "business_type": "Retail",
                "contact_number": "09171234567"
            }
        }


class LoginRequest(BaseModel):
    """Email/password login."""
    email: str
    password: str


class AuthUserResponse(BaseModel):
    id: str
    username: str
    business_name: str


class AuthResponse(BaseModel):
    """Access token plus the logged-in user."""
    token: str
    user: AuthUserResponse


class ProfileResponse(BaseModel):
    full_name: str
    first_name: str
    username: str
    business_name: str
    business_type: Optional[str] = None
    contact_number: Optional[str] = None


class ProfileUpdateRequest(BaseModel):
    full_name: Optional[str] = None
    business_name: Optional[str] = None
    business_type: Optional[str] = None
    contact_number: Optional[str] = None


# ============================================================================
# Product Models
# ============================================================================

class ProductCreateRequest(BaseModel):
    """Request to add a product to the inventory."""
    name: str = Field(..., min_length=1)
    price: float = Field(..., ge=0)
    category: str = Field(..., min_length=1)
    image_url: Optional[str] = None

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Instant Noodles",
                "price": 15.5,
                "category": "Food",
                "image_url": None
            }
        }


class ProductUpdateRequest(BaseModel):
    """Partial update; omitted or empty fields keep their current value."""
    name: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    category: Optional[str] = None
    image_url: Optional[str] = None


class ProductResponse(BaseModel):
    id: str
    name: str
    price: float
    category: str
    image_url: Optional[str] = None


class MessageResponse(BaseModel):
    message: str


# ============================================================================
# Sale Models
# ============================================================================

class SaleItemRequest(BaseModel):
    product_id: str = Field(..., min_length=1)
    quantity: int = Field(..., gt=0)
    unit_price: float = Field(..., ge=0)


class SaleCreateRequest(BaseModel):
    """Checkout request. total_amount defaults to the item sum when omitted."""
    items: List[SaleItemRequest] = Field(..., min_length=1)
    total_amount: Optional[float] = Field(None, ge=0)

    class Config:
        json_schema_extra = {
            "example": {
                "items": [
                    {"product_id": "5b0f1c9e-1f7a-4c1e-9a61-0c1d2e3f4a5b", "quantity": 2, "unit_price": 15.5}
                ],
                "total_amount": 31.0
            }
        }


class SaleItemResponse(BaseModel):
    product_id: str
    product_name: Optional[str] = None
    quantity: int
    unit_price: float


class SaleResponse(BaseModel):
    id: str
    items: List[SaleItemResponse]
    total_amount: float
    total_items: int
    sold_at: datetime


# ============================================================================
# Report Models
# ============================================================================

class ReportEntryResponse(BaseModel):
    label: str
    amount: float


class ChartSeriesResponse(BaseModel):
    title: str
    labels: List[str]
    values: List[float]


class ReportSummaryResponse(BaseModel):
    """Aggregate plus chart-ready series."""
    generated_at: datetime
    sale_count: int
    daily_total: float
    weekly_total: float
    monthly_total: float
    daily_trend: List[ReportEntryResponse]
    weekly_distribution: List[ReportEntryResponse]
    monthly_breakdown: List[ReportEntryResponse]
    charts: List[ChartSeriesResponse]

    class Config:
        json_schema_extra = {
            "example": {
                "generated_at": "2024-03-15T10:00:00",
                "sale_count": 3,
                "daily_total": 100.0,
                "weekly_total": 150.0,
                "monthly_total": 150.0,
                "daily_trend": [{"label": "Sat", "amount": 0.0}],
                "weekly_distribution": [{"label": "Sun", "amount": 0.0}],
                "monthly_breakdown": [{"label": "Oct", "amount": 0.0}],
                "charts": [{"title": "Daily Sales Trend", "labels": ["Sat"], "values": [0.1]}]
            }
        }


class DashboardResponse(BaseModel):
    total_sales: float
    order_count: int
