from __future__ import annotations

from decimal import Decimal

import pytest

from record_suite.core.exceptions import NotFoundError, ValidationError


@pytest.fixture
def products(container):
    return container.product_service


def test_create_and_get_product(products):
    created = products.create_product(name="Keyboard", price="49.90", stock=10, description="Mechanical")

    fetched = products.get_product(created.id)
    assert fetched.name == "Keyboard"
    assert fetched.price == Decimal("49.90")
    assert fetched.stock == 10


@pytest.mark.parametrize(
    "kwargs",
    [
        {"name": "", "price": 1, "stock": 1},
        {"name": "Mouse", "price": 0, "stock": 1},
        {"name": "Mouse", "price": -5, "stock": 1},
        {"name": "Mouse", "price": "abc", "stock": 1},
        {"name": "Mouse", "price": 5, "stock": -1},
        {"name": "Mouse", "price": 5, "stock": 2.7},
        {"name": "Mouse", "price": "0.001", "stock": 1},
        {"name": "Mouse", "price": 19.999, "stock": 1},
        {"name": 5, "price": 5, "stock": 1},
        {"name": "Mouse", "price": 5, "stock": 1, "description": 7},
    ],
)
def test_create_product_validation(products, kwargs):
    with pytest.raises(ValidationError):
        products.create_product(**kwargs)


def test_update_product(products):
    created = products.create_product(name="Mouse", price=10, stock=3)

    updated = products.update_product(created.id, name="Mouse Pro", price=15, stock=0)

    assert updated.id == created.id
    assert products.get_product(created.id).name == "Mouse Pro"


def test_update_missing_product_is_not_found(products):
    with pytest.raises(NotFoundError):
        products.update_product(99, name="X", price=1, stock=1)


def test_delete_product(products):
    created = products.create_product(name="Mouse", price=10, stock=3)
    products.delete_product(created.id)

    with pytest.raises(NotFoundError):
        products.get_product(created.id)
    with pytest.raises(NotFoundError):
        products.delete_product(created.id)


def test_search_products_by_name(products):
    products.create_product(name="USB Cable", price=3, stock=100)
    products.create_product(name="HDMI cable", price=7, stock=20)
    products.create_product(name="Monitor", price=150, stock=2)

    assert sorted(p.name for p in products.search_products("CABLE")) == ["HDMI cable", "USB Cable"]
    assert len(products.search_products(None)) == 3


def test_whole_number_float_stock_is_accepted(products):
    created = products.create_product(name="Mouse", price=19.99, stock=3.0)

    assert created.stock == 3
    assert created.price == Decimal("19.99")
