from __future__ import annotations

import logging
from decimal import Decimal
from typing import Dict, Optional

from promo_cart.errors import (
    InvalidPromotionConfigError,
    ItemNotFoundError,
    ItemNotInCartError,
    OutOfStockError,
)
from promo_cart.models import CartLine, Promotion
from promo_cart.pricing import calculate_total
from promo_cart.promotions import discount_for, discounted_units, is_eligible
from promo_cart.store import Store

logger = logging.getLogger(__name__)


class Cart:
    """
    A single customer's cart over a shared Store.

    add_item/remove_item move one unit between the catalog and the cart per
    call. checkout() runs the promotion engine over every line and returns
    the rounded total.

    Known limitations kept as-is:
    - clear_cart() does not give stock back to the catalog.
    - checkout() adds to each line's accumulated discount, so a second call
      on the same cart compounds the discount (a warning is logged).
    - a discounted line can still trigger its own promotion (no chaining rules),
      and there are no per-customer or per-transaction limits.
    """

    def __init__(self, store: Store):
        self.store = store
        self._lines: Dict[str, CartLine] = {}
        self.checkout_count = 0

    def __len__(self) -> int:
        return len(self._lines)

    @property
    def lines(self) -> Dict[str, CartLine]:
        return dict(self._lines)

    def get_line(self, sku: str) -> Optional[CartLine]:
        return self._lines.get(sku)

    def item_count(self) -> int:
        return sum(line.quantity for line in self._lines.values())

    def subtotal(self) -> Decimal:
        return sum((line.gross() for line in self._lines.values()), Decimal("0"))

    def add_item(self, sku: str) -> CartLine:
        item = self.store.catalog.find_by_sku(sku)
        if not item:
            raise ItemNotFoundError(sku)
        if item.stock_qty == 0:
            raise OutOfStockError(sku)

        # Catalog first: if the update fails the cart is untouched.
        remaining = self.store.catalog.adjust_stock(sku, -1)

        line = self._lines.get(sku)
        if line:
            line.quantity += 1
        else:
            line = CartLine(sku=item.sku, name=item.name, price=item.price)
            self._lines[sku] = line
        self.store.log(f"[cart] added {sku} (qty={line.quantity}, stock={remaining.stock_qty})")
        return line

    def remove_item(self, sku: str) -> None:
        if not self.store.catalog.find_by_sku(sku):
            raise ItemNotFoundError(sku)
        line = self._lines.get(sku)
        if not line:
            raise ItemNotInCartError(sku)

        remaining = self.store.catalog.adjust_stock(sku, 1)

        if line.quantity == 1:
            del self._lines[sku]
            qty = 0
        else:
            line.quantity -= 1
            qty = line.quantity
        self.store.log(f"[cart] removed {sku} (qty={qty}, stock={remaining.stock_qty})")

    def clear_cart(self) -> None:
        self.store.log(f"[cart] cleared {len(self._lines)} line(s); stock is not restored")
        self._lines = {}

    def _apply_promotion(self, trigger: CartLine, promotion: Promotion) -> None:
        if promotion.target_sku not in self.store.catalog:
            raise InvalidPromotionConfigError(promotion.trigger_sku, promotion.target_sku)

        target = self._lines.get(promotion.target_sku)
        if not target:
            self.store.log(
                f"[cart] promotion on {trigger.sku}: target {promotion.target_sku} not in cart, skipped",
                level=logging.WARNING,
            )
            return

        units = discounted_units(trigger, target, promotion)
        discount = discount_for(target, promotion, units)
        target.accumulated_discount += discount
        self.store.log(
            f"[cart] promotion {promotion.trigger_sku}->{promotion.target_sku} "
            f"{promotion.application_mode.value}: {units} unit(s), discount={discount} "
            f"(accumulated={target.accumulated_discount})"
        )

    def checkout(self) -> Decimal:
        self.checkout_count += 1
        if self.checkout_count > 1:
            self.store.log(
                f"[cart] checkout #{self.checkout_count} on the same cart: discounts accumulate on top of earlier passes",
                level=logging.WARNING,
            )

        for sku, line in self._lines.items():
            promotion = self.store.promotions.find_by_trigger_sku(sku)
            if not promotion:
                continue
            if not is_eligible(line, promotion):
                logger.debug("%s: qty=%s below required %s", sku, line.quantity, promotion.required_qty)
                continue

            try:
                self._apply_promotion(line, promotion)
            except Exception as e:
                logger.debug("promotion on %s failed", sku, exc_info=True)
                self.store.log(f"[cart] promotion on {sku} FAILED: {e}", level=logging.ERROR)

        total = calculate_total(self._lines.values())
        self.store.log(f"[cart] checkout total={total}")
        return total
