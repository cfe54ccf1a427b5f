from __future__ import annotations

from promo_cart.models import Table


class CartError(Exception):
    pass


class ItemNotFoundError(CartError):
    def __init__(self, sku: str):
        super().__init__(f"Item {sku} not found")
        self.sku = sku


class OutOfStockError(CartError):
    def __init__(self, sku: str):
        super().__init__(f"Item {sku} is out of stock")
        self.sku = sku


class ItemNotInCartError(CartError):
    def __init__(self, sku: str):
        super().__init__(f"Item {sku} is not in the cart")
        self.sku = sku


class DuplicateSkuError(CartError):
    def __init__(self, sku: str):
        super().__init__(f"[{Table.INVENTORY.value}] item with SKU {sku} already exists")
        self.sku = sku


class NotFoundError(CartError):
    def __init__(self, sku: str):
        super().__init__(f"[{Table.INVENTORY.value}] item with SKU {sku} does not exist")
        self.sku = sku


class LockContentionError(CartError):
    def __init__(self, table: Table):
        super().__init__(f"[{table.value}] could not acquire lock on resource")
        self.table = table


class InvalidPromotionConfigError(CartError):
    def __init__(self, trigger_sku: str, target_sku: str):
        super().__init__(f"Promotion on {trigger_sku} targets unknown SKU {target_sku}")
        self.trigger_sku = trigger_sku
        self.target_sku = target_sku
