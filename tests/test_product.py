"""
Tests for `domain/product.py` and `domain/cart.py`.

Covers:
- Product validation (name required, price >= 0).
- Inventory list controls: category filter, search over name or category, sorting.
- Cart operations return new carts and keep line order.
"""

from __future__ import annotations

import pytest

from domain.cart import Cart
from domain.product import (
    Product,
    ProductSortField,
    SortOrder,
    filter_and_sort_products,
    unique_categories,
)

COFFEE = Product(product_id="p-1", name="Iced Coffee", price=85.0, category="Drinks")
tea = Product(product_id="p-2", name="milk tea", price=95.0, category="Drinks")
BREAD = Product(product_id="p-3", name="Pandesal", price=5.0, category="Bakery")
PRODUCTS = [COFFEE, tea, BREAD]


def test_product_requires_name() -> None:
    with pytest.raises(ValueError):
        Product(product_id="p-1", name="  ", price=1.0, category="Misc")


def test_product_price_must_not_be_negative() -> None:
    with pytest.raises(ValueError):
        Product(product_id="p-1", name="Soap", price=-1.0, category="Misc")


def test_default_sort_is_name_ascending_case_insensitive() -> None:
    result = filter_and_sort_products(PRODUCTS)
    assert [p.name for p in result] == ["Iced Coffee", "milk tea", "Pandesal"]


def test_sort_by_price_descending() -> None:
    result = filter_and_sort_products(PRODUCTS, sort_by=ProductSortField.PRICE, order=SortOrder.DESC)
    assert [p.product_id for p in result] == ["p-2", "p-1", "p-3"]


def test_category_filter_is_exact() -> None:
    assert filter_and_sort_products(PRODUCTS, category="Bakery") == [BREAD]
    assert filter_and_sort_products(PRODUCTS, category="bakery") == []


def test_search_matches_name_or_category() -> None:
    assert [p.product_id for p in filter_and_sort_products(PRODUCTS, search="COFFEE")] == ["p-1"]
    assert [p.product_id for p in filter_and_sort_products(PRODUCTS, search="bak")] == ["p-3"]
    assert len(filter_and_sort_products(PRODUCTS, search="drink")) == 2


def test_search_and_category_combine() -> None:
    assert filter_and_sort_products(PRODUCTS, search="tea", category="Bakery") == []


def test_unique_categories_keep_first_seen_order() -> None:
    assert unique_categories(PRODUCTS) == ["Drinks", "Bakery"]
    assert unique_categories([]) == []


def test_cart_add_increments_existing_line() -> None:
    cart = Cart.empty().add(COFFEE).add(BREAD).add(COFFEE)

    assert [line.product.product_id for line in cart.lines] == ["p-1", "p-3"]
    assert cart.quantity_of("p-1") == 2
    assert cart.item_count == 3
    assert cart.total == pytest.approx(175.0)


def test_cart_is_immutable_between_changes() -> None:
    empty = Cart.empty()
    cart = empty.add(COFFEE)

    assert empty.is_empty
    assert not cart.is_empty


def test_cart_remove_one_drops_line_at_zero() -> None:
    cart = Cart.empty().add(COFFEE).add(COFFEE)

    cart = cart.remove_one("p-1")
    assert cart.quantity_of("p-1") == 1

    cart = cart.remove_one("p-1")
    assert cart.is_empty


def test_cart_set_quantity() -> None:
    cart = Cart.empty().add(COFFEE).add(BREAD)

    assert cart.set_quantity("p-3", 10).quantity_of("p-3") == 10
    assert cart.set_quantity("p-3", 0).quantity_of("p-3") == 0
    assert cart.set_quantity("missing", 3) is cart


def test_cart_to_sale_items_carries_price_and_name() -> None:
    items = Cart.empty().add(tea).add(tea).to_sale_items()

    assert len(items) == 1
    assert items[0].quantity == 2
    assert items[0].unit_price == 95.0
    assert items[0].product_name == "milk tea"
