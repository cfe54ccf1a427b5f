from __future__ import annotations

from decimal import ROUND_HALF_DOWN, ROUND_HALF_UP, Decimal
from typing import Iterable, TypeVar

from promo_cart.models import CartLine

Number = TypeVar("Number", Decimal, float, int)

CURRENCY_PLACES = 2


def _quantize(value: Decimal, places: int) -> Decimal:
    # Halves go towards +infinity on both sides of zero: 1.005 -> 1.01, -1.005 -> -1.00.
    rounding = ROUND_HALF_UP if value >= 0 else ROUND_HALF_DOWN
    return value.quantize(Decimal(1).scaleb(-places), rounding=rounding)


def round_half_up(value: Number, places: int) -> Number:
    """
    Round half up at `places` decimals, keeping the input's type.

    Floats go through their shortest repr so that 2.675 rounds to 2.68.
    """
    if isinstance(value, Decimal):
        return _quantize(value, places)
    return type(value)(_quantize(Decimal(str(value)), places))


def calculate_total(lines: Iterable[CartLine], places: int = CURRENCY_PLACES) -> Decimal:
    total = sum((line.net() for line in lines), Decimal("0"))
    return round_half_up(total, places)
