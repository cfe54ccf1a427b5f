from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum


class Table(Enum):
    INVENTORY = "INVENTORY"
    PROMOTION = "PROMOTION"


class ApplicationMode(Enum):
    """
    How many units of the target a triggering line unlocks.

    ALL              -- every unit of the trigger line counts once the threshold is met.
    QUALIFIED_GROUPS -- one unit per complete group of `required_qty` trigger units.
    """

    ALL = "ALL"
    QUALIFIED_GROUPS = "QUALIFIED_GROUPS"


@dataclass(frozen=True, slots=True)
class CatalogItem:
    sku: str
    name: str
    price: Decimal
    stock_qty: int

    def __post_init__(self) -> None:
        if self.price < 0:
            raise ValueError(f"Item {self.sku}: price must be >= 0, got {self.price}")
        if self.stock_qty < 0:
            raise ValueError(f"Item {self.sku}: stock_qty must be >= 0, got {self.stock_qty}")


@dataclass(frozen=True, slots=True)
class Promotion:
    trigger_sku: str
    required_qty: int
    target_sku: str
    discount_percent: Decimal
    application_mode: ApplicationMode = ApplicationMode.QUALIFIED_GROUPS

    def __post_init__(self) -> None:
        if self.required_qty <= 0:
            raise ValueError(f"Promotion on {self.trigger_sku}: required_qty must be > 0")
        if not 0 <= self.discount_percent <= 100:
            raise ValueError(
                f"Promotion on {self.trigger_sku}: discount_percent must be in [0, 100], got {self.discount_percent}"
            )


@dataclass(slots=True)
class CartLine:
    """
    One cart entry per distinct SKU.

    `price` is a snapshot of the catalog price taken on the first add;
    later catalog changes do not reach the line.
    """

    sku: str
    name: str
    price: Decimal
    quantity: int = 1
    accumulated_discount: Decimal = Decimal("0")

    def gross(self) -> Decimal:
        return self.price * self.quantity

    def net(self) -> Decimal:
        return self.gross() - self.accumulated_discount
