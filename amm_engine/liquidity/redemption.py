"""Share redemption for withdrawals.

Redemption is strictly proportional and the same for every variant:

    amount_a = floor(Ra * shares / S)
    amount_b = floor(Rb * shares / S)

Floor rounding always favours the pool.
"""

from __future__ import annotations

from amm_engine.errors import (
    InsufficientLiquidity,
    InsufficientLpBalance,
    InvalidAmount,
    SlippageExceeded,
)
from amm_engine.models.pool import Snapshot
from amm_engine.safe_int import S


def amounts_for_shares(shares: int, snapshot: Snapshot) -> tuple[int, int]:
    """Proportional slice of both reserves for a share quantity.

    Amounts are u128 wide and may exceed their reserve when shares exceeds
    the supply; redeem_shares rejects that before narrowing.

    Raises:
        DivisionByZero: If no shares are outstanding
    """
    supply = S(snapshot.lp_supply)
    amount_a = (S((S(snapshot.reserve_a) * S(shares)).to_u128()) // supply).to_u128()
    amount_b = (S((S(snapshot.reserve_b) * S(shares)).to_u128()) // supply).to_u128()
    return amount_a, amount_b


def redeem_shares(
    shares: int,
    held_shares: int,
    snapshot: Snapshot,
    minimum_a: int = 0,
    minimum_b: int = 0,
) -> tuple[int, int]:
    """Calculate and validate a withdrawal.

    Guards run in this order, all before any movement is requested:
    1. caller holds at least `shares`          -> InsufficientLpBalance
    2. each output meets its minimum           -> SlippageExceeded
    3. each output is covered by its reserve   -> InsufficientLiquidity

    Args:
        shares: Shares to redeem
        held_shares: Shares the caller currently holds
        snapshot: Reserves and share supply before the withdrawal
        minimum_a: Minimum acceptable amount of token A
        minimum_b: Minimum acceptable amount of token B

    Returns:
        Tuple of (amount_a, amount_b)
    """
    if shares <= 0:
        raise InvalidAmount(f"Shares to redeem must be positive: {shares}")
    if held_shares < shares:
        raise InsufficientLpBalance(f"Holds {held_shares} shares, requested {shares}")
    if snapshot.lp_supply == 0:
        raise InsufficientLiquidity("Pool has no outstanding shares")

    amount_a, amount_b = amounts_for_shares(shares, snapshot)

    if amount_a < minimum_a:
        raise SlippageExceeded(f"Token A out {amount_a} below minimum {minimum_a}")
    if amount_b < minimum_b:
        raise SlippageExceeded(f"Token B out {amount_b} below minimum {minimum_b}")

    if amount_a > snapshot.reserve_a:
        raise InsufficientLiquidity(f"Token A out {amount_a} exceeds reserve {snapshot.reserve_a}")
    if amount_b > snapshot.reserve_b:
        raise InsufficientLiquidity(f"Token B out {amount_b} exceeds reserve {snapshot.reserve_b}")

    return S(amount_a).to_u64(), S(amount_b).to_u64()
