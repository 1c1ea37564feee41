"""Constant product pricing (Standard variant).

Formula: amount_out = floor(reserve_out * net_in / (reserve_in + net_in))

Since net_in / (reserve_in + net_in) < 1, the output is always strictly
below reserve_out: no finite input drains the pool.
"""

from amm_engine.amm.base import PricingPolicy
from amm_engine.safe_int import S, mul_div


class ConstantProduct(PricingPolicy):
    """Standard x * y = k pricing on the net (post-fee) input."""

    name = "standard"

    def _amount_out(self, reserve_in: int, reserve_out: int, net_in: int) -> int:
        denominator = (S(reserve_in) + S(net_in)).to_u128()
        return mul_div(reserve_out, net_in, denominator)


# Singleton instance
constant_product = ConstantProduct()
