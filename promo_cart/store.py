from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import replace
from decimal import Decimal
from threading import Lock
from typing import Dict, Iterator, List, Optional

from promo_cart.errors import DuplicateSkuError, LockContentionError, NotFoundError, OutOfStockError
from promo_cart.models import ApplicationMode, CatalogItem, Promotion, Table

logger = logging.getLogger(__name__)


class ResourceGuard:
    """
    Exclusive guard for one table.

    The lock is taken without blocking: a second caller gets
    LockContentionError instead of waiting its turn. Everything between
    the existence check and the write runs while the lock is held.
    """

    def __init__(self, table: Table) -> None:
        self.table = table
        self._lock = Lock()

    @property
    def locked(self) -> bool:
        return self._lock.locked()

    @contextmanager
    def hold(self) -> Iterator[None]:
        if not self._lock.acquire(blocking=False):
            raise LockContentionError(self.table)
        try:
            yield
        finally:
            self._lock.release()


class CatalogStore:
    def __init__(self) -> None:
        self._items: Dict[str, CatalogItem] = {}
        self.guard = ResourceGuard(Table.INVENTORY)

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, sku: object) -> bool:
        return sku in self._items

    def find_by_sku(self, sku: str) -> Optional[CatalogItem]:
        return self._items.get(sku)

    def items(self) -> List[CatalogItem]:
        return list(self._items.values())

    def add(self, item: CatalogItem) -> None:
        with self.guard.hold():
            if item.sku in self._items:
                raise DuplicateSkuError(item.sku)
            self._items[item.sku] = item
        logger.debug("catalog: added %s (stock=%s)", item.sku, item.stock_qty)

    def update(self, item: CatalogItem) -> None:
        with self.guard.hold():
            if item.sku not in self._items:
                raise NotFoundError(item.sku)
            self._items[item.sku] = item
        logger.debug("catalog: updated %s (stock=%s)", item.sku, item.stock_qty)

    def adjust_stock(self, sku: str, delta: int) -> CatalogItem:
        """Read-modify-write of one record's stock under a single hold of the guard. Stock never drops below zero."""
        with self.guard.hold():
            item = self._items.get(sku)
            if not item:
                raise NotFoundError(sku)
            if item.stock_qty + delta < 0:
                raise OutOfStockError(sku)
            updated = replace(item, stock_qty=item.stock_qty + delta)
            self._items[sku] = updated
        logger.debug("catalog: %s stock %+d (stock=%s)", sku, delta, updated.stock_qty)
        return updated


class PromotionStore:
    def __init__(self) -> None:
        self._promotions: List[Promotion] = []
        self.guard = ResourceGuard(Table.PROMOTION)

    def __len__(self) -> int:
        return len(self._promotions)

    def promotions(self) -> List[Promotion]:
        return list(self._promotions)

    def find_by_trigger_sku(self, sku: str) -> Optional[Promotion]:
        # First registration wins; later ones for the same trigger are unreachable.
        for promotion in self._promotions:
            if promotion.trigger_sku == sku:
                return promotion
        return None

    def add(self, promotion: Promotion) -> None:
        with self.guard.hold():
            if self.find_by_trigger_sku(promotion.trigger_sku):
                logger.warning("promotions: %s already has a promotion, new one is unreachable", promotion.trigger_sku)
            self._promotions.append(promotion)


class Store:
    """
    In-memory catalog and promotion tables plus an audit log.

    A Store is constructed and handed to each Cart explicitly, so every
    test or run gets its own isolated tables.
    """

    def __init__(self) -> None:
        self.catalog = CatalogStore()
        self.promotions = PromotionStore()

        self.logs: List[str] = []

    def log(self, message: str, level: int = logging.INFO) -> None:
        self.logs.append(message)
        logger.log(level, message)

    # Seed helpers
    def add_item(self, sku: str, name: str, price: Decimal, stock_qty: int) -> CatalogItem:
        item = CatalogItem(sku=sku, name=name, price=price, stock_qty=stock_qty)
        self.catalog.add(item)
        return item

    def add_promotion(
        self,
        trigger_sku: str,
        required_qty: int,
        target_sku: str,
        discount_percent: Decimal,
        application_mode: ApplicationMode = ApplicationMode.QUALIFIED_GROUPS,
    ) -> Promotion:
        promotion = Promotion(
            trigger_sku=trigger_sku,
            required_qty=required_qty,
            target_sku=target_sku,
            discount_percent=discount_percent,
            application_mode=application_mode,
        )
        self.promotions.add(promotion)
        return promotion
