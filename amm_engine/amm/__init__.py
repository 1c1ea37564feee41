"""Pricing policies, one per pool variant."""

from amm_engine.amm.base import PricingPolicy
from amm_engine.amm.bonus import BonusPricing
from amm_engine.amm.constant_product import ConstantProduct, constant_product
from amm_engine.config import DEFAULT_ENGINE_CONFIG, EngineConfig
from amm_engine.models.pool import PoolVariant


def pricing_for(variant: PoolVariant, config: EngineConfig | None = None) -> PricingPolicy:
    """Build the pricing policy for a variant from the policy table.

    Variants without a swap bonus price with plain constant product.
    """
    config = config or DEFAULT_ENGINE_CONFIG
    divisor = config.policy(variant).swap_bonus_divisor
    if divisor is None:
        return constant_product
    return BonusPricing(bonus_divisor=divisor, name=variant.name.lower())


__all__ = [
    "PricingPolicy",
    "ConstantProduct",
    "constant_product",
    "BonusPricing",
    "pricing_for",
]
