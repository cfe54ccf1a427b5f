from decimal import Decimal

import pytest

from promo_cart.models import ApplicationMode, CartLine, Promotion
from promo_cart.promotions import RATIO_RESOLVERS, discount_for, discounted_units, is_eligible, resolve_ratio


def _line(sku: str, qty: int, price: str = "10.00") -> CartLine:
    return CartLine(sku=sku, name=sku, price=Decimal(price), quantity=qty)


def _promo(mode: ApplicationMode, required_qty: int = 3, target: str = "A", percent: str = "100") -> Promotion:
    return Promotion(
        trigger_sku="A",
        required_qty=required_qty,
        target_sku=target,
        discount_percent=Decimal(percent),
        application_mode=mode,
    )


def test_every_mode_has_a_resolver():
    assert set(RATIO_RESOLVERS) == set(ApplicationMode)


def test_eligibility_needs_trigger_sku_and_quantity():
    promo = _promo(ApplicationMode.QUALIFIED_GROUPS)

    assert is_eligible(_line("A", 3), promo)
    assert not is_eligible(_line("A", 2), promo)
    assert not is_eligible(_line("B", 5), promo)


@pytest.mark.parametrize("qty,expected", [(3, 1), (4, 1), (5, 1), (6, 2), (7, 2)])
def test_qualified_groups_counts_complete_groups(qty, expected):
    assert resolve_ratio(_line("A", qty), _promo(ApplicationMode.QUALIFIED_GROUPS)) == expected


def test_all_mode_counts_every_trigger_unit():
    assert resolve_ratio(_line("A", 4), _promo(ApplicationMode.ALL)) == 4


def test_units_clamped_to_target_quantity():
    promo = _promo(ApplicationMode.QUALIFIED_GROUPS, required_qty=1, target="B")

    assert discounted_units(_line("A", 2), _line("B", 1), promo) == 1
    assert discounted_units(_line("A", 1), _line("B", 2), promo) == 1


def test_discount_is_percent_of_target_price_per_unit():
    promo = _promo(ApplicationMode.ALL, percent="10")

    assert discount_for(_line("A", 3, price="109.50"), promo, 3) == Decimal("32.85")
