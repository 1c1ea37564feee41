"""Bonus pricing (Stable and Concentrated variants).

Both variants price with the constant product formula and then add a
fixed fraction of the net input:

    amount_out = min(standard_out + floor(net_in / divisor), reserve_out - 1)

Stable uses divisor 20 (5%) to approximate lower slippage for correlated
pairs; Concentrated uses divisor 10 (10%). Neither is a true stable-swap
curve or range-bound liquidity. The cap keeps at least one unit of the
output reserve in the pool.
"""

from amm_engine.amm.base import PricingPolicy
from amm_engine.amm.constant_product import ConstantProduct
from amm_engine.safe_int import S


class BonusPricing(PricingPolicy):
    """Constant product output plus floor(net_in / bonus_divisor), capped."""

    def __init__(self, bonus_divisor: int, name: str = "bonus") -> None:
        if bonus_divisor <= 0:
            raise ValueError(f"bonus_divisor must be positive, got {bonus_divisor}")
        self.bonus_divisor = bonus_divisor
        self.name = name
        self._base = ConstantProduct()

    def _amount_out(self, reserve_in: int, reserve_out: int, net_in: int) -> int:
        standard_out = self._base.get_amount_out(reserve_in, reserve_out, net_in)
        bonus = S(net_in) // S(self.bonus_divisor)
        cap = S(reserve_out) - S(1)
        return (S(standard_out) + bonus).min(cap).to_u64()

    def __repr__(self) -> str:
        return f"BonusPricing(bonus_divisor={self.bonus_divisor}, name={self.name!r})"
