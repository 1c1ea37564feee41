"""Quote helpers for presenting pool state and preparing requests.

These mirror what a client shows before submitting an action: the current
pool ratio, the price impact of a swap, slippage-adjusted minimums, and the
counter-amount that keeps a deposit balanced. Display values use Decimal
to avoid float precision loss; anything fed back into the engine stays int.
"""

from __future__ import annotations

from decimal import ROUND_DOWN, Decimal

from amm_engine.errors import InsufficientLiquidity, InvalidAmount
from amm_engine.models.pool import Direction, Snapshot
from amm_engine.safe_int import mul_div

HUNDRED = Decimal(100)


def spot_price(snapshot: Snapshot, direction: Direction = Direction.A_TO_B) -> Decimal:
    """Units of output token per unit of input token at the current reserves.

    Raises:
        InsufficientLiquidity: If either reserve is zero
    """
    reserve_in, reserve_out = snapshot.oriented(direction)
    if reserve_in == 0 or reserve_out == 0:
        raise InsufficientLiquidity("Spot price undefined for an empty reserve")
    return Decimal(reserve_out) / Decimal(reserve_in)


def price_impact(reserve_in: int, net_amount_in: int) -> Decimal:
    """Price impact of a swap in percent.

        impact = net_in / (reserve_in + net_in) * 100

    Raises:
        InsufficientLiquidity: If reserve_in is zero
    """
    if reserve_in <= 0:
        raise InsufficientLiquidity("Price impact undefined for an empty reserve")
    if net_amount_in <= 0:
        return Decimal(0)
    return Decimal(net_amount_in) / Decimal(reserve_in + net_amount_in) * HUNDRED


def minimum_with_slippage(expected: int, slippage_percent: Decimal | str | int) -> int:
    """Smallest acceptable amount given a slippage tolerance.

    Rounds down so the minimum never exceeds what the tolerance allows.

    Args:
        expected: Quoted amount
        slippage_percent: Tolerance in percent, e.g. Decimal("0.5")

    Raises:
        InvalidAmount: If the tolerance is outside [0, 100]
    """
    tolerance = Decimal(str(slippage_percent))
    if tolerance < 0 or tolerance > HUNDRED:
        raise InvalidAmount(f"Slippage tolerance must be within [0, 100]: {tolerance}")
    if expected <= 0:
        return 0
    minimum = Decimal(expected) * (HUNDRED - tolerance) / HUNDRED
    return int(minimum.to_integral_value(rounding=ROUND_DOWN))


def paired_amount(snapshot: Snapshot, amount: int, direction: Direction = Direction.A_TO_B) -> int:
    """Counter-amount that matches the pool ratio for a one-sided amount.

    With Direction.A_TO_B, `amount` is of token A and the result is the
    token B amount to deposit alongside it (floor of amount * Rb / Ra).

    Raises:
        InsufficientLiquidity: If the pool has no reserves to take a ratio from
    """
    reserve_in, reserve_out = snapshot.oriented(direction)
    if reserve_in == 0 or reserve_out == 0:
        raise InsufficientLiquidity("Pool ratio undefined for an empty reserve")
    if amount <= 0:
        return 0
    return mul_div(amount, reserve_out, reserve_in)


def share_of_pool(shares: int, snapshot: Snapshot) -> Decimal:
    """Fraction of the pool (in percent) that `shares` represent."""
    if snapshot.lp_supply == 0:
        return Decimal(0)
    return Decimal(shares) / Decimal(snapshot.lp_supply) * HUNDRED
