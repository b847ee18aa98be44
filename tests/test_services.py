"""
Tests for checkout, inventory, account and receipt services.

Covers:
- Checkout rejects empty carts and products the user does not own.
- Checkout fills product names and defaults the total to the item sum.
- Product edits keep the current value for empty fields.
- Registration creates a profile; login falls back when no profile exists.
- Receipts are rendered as PDF documents.
"""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from domain.cart import Cart
from domain.product import ProductSortField, SortOrder
from domain.sale import SaleItem, SaleRecord
from repositories.auth_repository import AuthenticationError, AuthUser
from repositories.product_repository import create_product, get_product
from services import account_service
from services.account_service import RegistrationRequest, login, register
from services.checkout_service import CheckoutRequest, ProductNotFoundError, execute_checkout
from services.inventory_service import apply_product_changes, browse_products, edit_product, list_categories
from services.receipt_service import receipt_filename, render_receipt_pdf

SOLD_AT = datetime(2024, 3, 15, 9, 0)


def test_checkout_records_sale_with_product_names(fake_supabase) -> None:
    soap = create_product("u-1", "Soap", 30.0, "Household")
    rice = create_product("u-1", "Rice", 50.0, "Grocery")

    sale = execute_checkout(
        CheckoutRequest(
            user_id="u-1",
            items=[
                SaleItem(product_id=soap.product_id, quantity=2, unit_price=30.0),
                SaleItem(product_id=rice.product_id, quantity=1, unit_price=50.0),
            ],
        ),
        sold_at=SOLD_AT,
        tz=timezone.utc,
    )

    assert sale.total_amount == 110.0
    assert [item.product_name for item in sale.items] == ["Soap", "Rice"]
    assert fake_supabase.rows("sales")[0]["total_amount"] == 110.0


def test_checkout_keeps_client_total(fake_supabase) -> None:
    soap = create_product("u-1", "Soap", 30.0, "Household")

    sale = execute_checkout(
        CheckoutRequest(
            user_id="u-1",
            items=[SaleItem(product_id=soap.product_id, quantity=1, unit_price=30.0)],
            total_amount=25.0,
        ),
        sold_at=SOLD_AT,
        tz=timezone.utc,
    )

    assert sale.total_amount == 25.0


def test_checkout_from_cart(fake_supabase) -> None:
    soap = create_product("u-1", "Soap", 30.0, "Household")
    rice = create_product("u-1", "Rice", 50.0, "Grocery")
    cart = Cart.empty().add(soap).add(rice).add(soap)

    sale = execute_checkout(CheckoutRequest.from_cart("u-1", cart), sold_at=SOLD_AT, tz=timezone.utc)

    assert sale.total_amount == cart.total == 110.0
    assert [(item.product_name, item.quantity) for item in sale.items] == [("Soap", 2), ("Rice", 1)]
    assert fake_supabase.rows("sales")[0]["user_id"] == "u-1"


def test_checkout_from_empty_cart_is_rejected(fake_supabase) -> None:
    with pytest.raises(ValueError):
        execute_checkout(CheckoutRequest.from_cart("u-1", Cart.empty()), sold_at=SOLD_AT)


def test_checkout_rejects_empty_sale(fake_supabase) -> None:
    with pytest.raises(ValueError):
        execute_checkout(CheckoutRequest(user_id="u-1", items=[]), sold_at=SOLD_AT)


def test_checkout_rejects_foreign_product(fake_supabase) -> None:
    other = create_product("u-2", "Soap", 30.0, "Household")

    with pytest.raises(ProductNotFoundError) as exc_info:
        execute_checkout(
            CheckoutRequest(
                user_id="u-1",
                items=[SaleItem(product_id=other.product_id, quantity=1, unit_price=30.0)],
            ),
            sold_at=SOLD_AT,
        )

    assert exc_info.value.product_id == other.product_id
    assert fake_supabase.rows("sales") == []


def test_browse_products_and_categories(fake_supabase) -> None:
    create_product("u-1", "Soap", 30.0, "Household")
    create_product("u-1", "Rice", 50.0, "Grocery")
    create_product("u-1", "Bleach", 80.0, "Household")

    cheapest_first = browse_products("u-1", sort_by=ProductSortField.PRICE, order=SortOrder.ASC)
    household = browse_products("u-1", category="Household")

    assert [p.name for p in cheapest_first] == ["Soap", "Rice", "Bleach"]
    assert [p.name for p in household] == ["Bleach", "Soap"]
    assert list_categories("u-1") == ["Household", "Grocery"]


def test_apply_product_changes_keeps_empty_fields() -> None:
    from domain.product import Product

    product = Product(product_id="p-1", name="Soap", price=30.0, category="Household", image_url="a.png")

    updated = apply_product_changes(product, name="", price=0, category=None, image_url="b.png")

    assert updated.name == "Soap"
    assert updated.price == 30.0
    assert updated.category == "Household"
    assert updated.image_url == "b.png"


def test_edit_product(fake_supabase) -> None:
    soap = create_product("u-1", "Soap", 30.0, "Household")

    updated = edit_product("u-1", soap.product_id, price=32.5)

    assert updated.price == 32.5
    assert get_product("u-1", soap.product_id).price == 32.5
    assert edit_product("u-2", soap.product_id, price=1.0) is None


def _registration() -> RegistrationRequest:
    return RegistrationRequest(
        email="ana@example.com",
        password="secret123",
        full_name="Ana Cruz",
        username="ana",
        business_name="Ana's Store",
        business_type="Retail",
    )


def test_register_creates_profile(fake_supabase, monkeypatch) -> None:
    monkeypatch.setattr(
        account_service, "sign_up",
        lambda email, password: AuthUser(user_id="u-1", email=email, access_token="token-1"),
    )

    session = register(_registration())

    assert session.access_token == "token-1"
    assert session.username == "ana"
    assert fake_supabase.rows("profiles")[0]["business_type"] == "Retail"


def test_register_without_session_raises(fake_supabase, monkeypatch) -> None:
    monkeypatch.setattr(
        account_service, "sign_up",
        lambda email, password: AuthUser(user_id="u-1", email=email, access_token=None),
    )

    with pytest.raises(AuthenticationError):
        register(_registration())

    # the profile is still created so the user can log in after confirming
    assert len(fake_supabase.rows("profiles")) == 1


def test_login_falls_back_without_profile(fake_supabase, monkeypatch) -> None:
    monkeypatch.setattr(
        account_service, "sign_in",
        lambda email, password: AuthUser(user_id="u-9", email=email, access_token="token-9"),
    )

    session = login("nobody@example.com", "secret123")

    assert session.user_id == "u-9"
    assert session.username == "nobody@example.com"
    assert session.business_name == ""


def test_receipt_pdf() -> None:
    sale = SaleRecord(
        sale_id="s-1",
        total_amount=110.0,
        sold_at=SOLD_AT,
        items=(
            SaleItem(product_id="p-1", quantity=2, unit_price=30.0, product_name="Extra Large Laundry Soap Bar"),
            SaleItem(product_id="p-2", quantity=1, unit_price=50.0),
        ),
    )

    content = render_receipt_pdf(sale, brand="Vetra")

    assert content.startswith(b"%PDF")
    assert receipt_filename(SOLD_AT) == "receipt_20240315090000.pdf"
