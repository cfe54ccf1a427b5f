from __future__ import annotations

import argparse
import logging
from typing import List, Optional

from promo_cart.cart import Cart
from promo_cart.data import seed
from promo_cart.errors import CartError
from promo_cart.store import Store


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Fill a cart from the reference catalog, check out and print the total.")
    p.add_argument("--add", action="append", default=[], metavar="SKU", help="Add one unit of SKU (repeatable)")
    p.add_argument("--remove", action="append", default=[], metavar="SKU", help="Remove one unit of SKU after all adds (repeatable)")
    p.add_argument("--checkout-twice", action="store_true", help="Check out a second time without clearing the cart")
    p.add_argument("--verbose", action="store_true", help="Debug-level logs")
    return p


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format="%(message)s")

    store = seed(Store())
    cart = Cart(store)

    try:
        for sku in args.add:
            cart.add_item(sku)
        for sku in args.remove:
            cart.remove_item(sku)
    except CartError as e:
        print(f"error: {e}")
        return 1

    total = cart.checkout()
    if args.checkout_twice:
        total = cart.checkout()

    print("\n=== RESULT ===")
    print("total:", total)
    for line in cart.lines.values():
        print(f"  {line.sku} {line.name} x{line.quantity} @ {line.price} - {line.accumulated_discount}")
    print("stock:", {item.sku: item.stock_qty for item in store.catalog.items()})
    for promo in store.promotions.promotions():
        print(
            f"  promo {promo.trigger_sku} x{promo.required_qty} -> {promo.target_sku} "
            f"{promo.discount_percent}% {promo.application_mode.value}"
        )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
