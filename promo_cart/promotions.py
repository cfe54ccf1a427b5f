from __future__ import annotations

from decimal import Decimal
from typing import Callable, Dict

from promo_cart.models import ApplicationMode, CartLine, Promotion

RatioResolver = Callable[[CartLine, Promotion], int]


def is_eligible(line: CartLine, promotion: Promotion) -> bool:
    return line.sku == promotion.trigger_sku and line.quantity >= promotion.required_qty


def _qualified_groups(trigger: CartLine, promotion: Promotion) -> int:
    return trigger.quantity // promotion.required_qty


def _all_units(trigger: CartLine, promotion: Promotion) -> int:
    return trigger.quantity


# One entry per ApplicationMode; adding a mode means adding a resolver here.
RATIO_RESOLVERS: Dict[ApplicationMode, RatioResolver] = {
    ApplicationMode.QUALIFIED_GROUPS: _qualified_groups,
    ApplicationMode.ALL: _all_units,
}


def resolve_ratio(trigger: CartLine, promotion: Promotion) -> int:
    """Number of target units the trigger line unlocks, before clamping."""
    return RATIO_RESOLVERS[promotion.application_mode](trigger, promotion)


def discounted_units(trigger: CartLine, target: CartLine, promotion: Promotion) -> int:
    return min(resolve_ratio(trigger, promotion), target.quantity)


def discount_for(target: CartLine, promotion: Promotion, units: int) -> Decimal:
    return Decimal(promotion.discount_percent) / Decimal(100) * target.price * units
