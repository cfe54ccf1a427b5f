from __future__ import annotations

from decimal import Decimal
from typing import Iterable, List

from promo_cart.models import ApplicationMode, CatalogItem, Promotion
from promo_cart.store import Store

# Reference data used by tests and the runner. Append new records rather than
# editing these: test expectations depend on them.
ITEMS: List[CatalogItem] = [
    CatalogItem(sku="120P90", name="Google Home", price=Decimal("49.99"), stock_qty=10),
    CatalogItem(sku="43N23P", name="MacBook Pro", price=Decimal("5399.99"), stock_qty=5),
    CatalogItem(sku="A304SD", name="Alexa Speaker", price=Decimal("109.50"), stock_qty=10),
    CatalogItem(sku="234234", name="Raspberry Pi B", price=Decimal("30.00"), stock_qty=2),
]

PROMOTIONS: List[Promotion] = [
    # Free Raspberry Pi with every MacBook Pro
    Promotion(
        trigger_sku="43N23P",
        required_qty=1,
        target_sku="234234",
        discount_percent=Decimal("100"),
        application_mode=ApplicationMode.QUALIFIED_GROUPS,
    ),
    # 3 Google Homes for the price of 2
    Promotion(
        trigger_sku="120P90",
        required_qty=3,
        target_sku="120P90",
        discount_percent=Decimal("100"),
        application_mode=ApplicationMode.QUALIFIED_GROUPS,
    ),
    # 10% off every Alexa once there are 3 or more
    Promotion(
        trigger_sku="A304SD",
        required_qty=3,
        target_sku="A304SD",
        discount_percent=Decimal("10"),
        application_mode=ApplicationMode.ALL,
    ),
]


def seed(
    store: Store,
    items: Iterable[CatalogItem] = ITEMS,
    promotions: Iterable[Promotion] = PROMOTIONS,
) -> Store:
    for item in items:
        store.catalog.add(item)
    for promotion in promotions:
        store.promotions.add(promotion)
    return store
