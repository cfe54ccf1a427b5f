"""Pytest fixtures: a fresh seeded Store per test, no shared module state."""

from decimal import Decimal

import pytest

from promo_cart.cart import Cart
from promo_cart.data import seed
from promo_cart.store import Store


@pytest.fixture
def store() -> Store:
    return seed(Store())


@pytest.fixture
def cart(store: Store) -> Cart:
    return Cart(store)


@pytest.fixture
def bare_store() -> Store:
    """Small hand-built catalog for edge cases the reference data does not cover."""
    store = Store()

    store.add_item("A", "Widget", price=Decimal("10.00"), stock_qty=5)
    store.add_item("B", "Gadget", price=Decimal("4.00"), stock_qty=5)
    store.add_item("C", "Gizmo", price=Decimal("0.10"), stock_qty=5)
    store.add_item("Z", "Sold out", price=Decimal("1.00"), stock_qty=0)

    return store
