"""Share issuance for deposits.

All ratios are computed against the snapshot taken before the deposit's
transfers. Using post-transfer reserves would give a different (wrong)
share count.

Bootstrap (lp_supply == 0): a fixed quantity of shares, independent of the
deposited amounts. The first depositor therefore sets the initial share
price; later depositors are issued shares against that ratio.

Otherwise, per variant:
- min_ratio:      min(floor(a * S / Ra), floor(b * S / Rb))
- average_ratio:  floor((a + b) * S / ((Ra + Rb) * 2))
then scaled by deposit_bonus_percent / 100 (110 for Concentrated). Ratios and
bonus stay at u128 width; only the final share count is narrowed to u64.
"""

from __future__ import annotations

from amm_engine.config import DEFAULT_ENGINE_CONFIG, DepositFormula, EngineConfig
from amm_engine.errors import InvalidAmount
from amm_engine.models.pool import PoolVariant, Snapshot
from amm_engine.safe_int import S

PERCENT = 100


def _ratio(amount: int, supply: int, reserve: int) -> int:
    """floor(amount * supply / reserve), kept at widened precision."""
    return (S((S(amount) * S(supply)).to_u128()) // S(reserve)).to_u128()


def min_ratio_shares(amount_a: int, amount_b: int, snapshot: Snapshot) -> int:
    """Shares implied by the less valuable side of the deposit.

    An unbalanced deposit is credited only for its smaller proportional
    contribution, so depositing lopsided amounts cannot shift value.
    The result is u128 wide; the caller narrows it to u64.

    Raises:
        DivisionByZero: If a reserve is zero
    """
    ratio_a = _ratio(amount_a, snapshot.lp_supply, snapshot.reserve_a)
    ratio_b = _ratio(amount_b, snapshot.lp_supply, snapshot.reserve_b)
    return S(ratio_a).min(ratio_b).to_u128()


def average_ratio_shares(amount_a: int, amount_b: int, snapshot: Snapshot) -> int:
    """Shares from the averaged ratio across both sides.

    More generous than min_ratio_shares and does not penalize imbalance.
    The result is u128 wide; the caller narrows it to u64.

    Raises:
        DivisionByZero: If both reserves are zero
    """
    deposited = (S(amount_a) + S(amount_b)).to_u128()
    reserves = ((S(snapshot.reserve_a) + S(snapshot.reserve_b)) * S(2)).to_u128()
    return _ratio(deposited, snapshot.lp_supply, reserves)


def shares_for_deposit(
    variant: PoolVariant,
    amount_a: int,
    amount_b: int,
    snapshot: Snapshot,
    config: EngineConfig | None = None,
) -> int:
    """Calculate shares to issue for a deposit.

    Args:
        variant: Pool variant
        amount_a: Deposited amount of token A
        amount_b: Deposited amount of token B
        snapshot: Reserves and share supply before the deposit
        config: Engine configuration (bootstrap quantity, variant table)

    Returns:
        Number of shares to issue (always > 0)

    Raises:
        InvalidAmount: If either amount is zero or the result is zero shares
        DivisionByZero: If a reserve is zero while shares are outstanding
        ArithmeticOverflow: If the result does not fit u64
    """
    config = config or DEFAULT_ENGINE_CONFIG
    if amount_a <= 0 or amount_b <= 0:
        raise InvalidAmount(f"Deposit amounts must be positive: ({amount_a}, {amount_b})")

    if snapshot.is_bootstrap:
        return config.bootstrap_shares

    policy = config.policy(variant)
    if policy.deposit_formula is DepositFormula.AVERAGE_RATIO:
        shares = average_ratio_shares(amount_a, amount_b, snapshot)
    else:
        shares = min_ratio_shares(amount_a, amount_b, snapshot)

    if policy.deposit_bonus_percent != PERCENT:
        shares = _ratio(shares, policy.deposit_bonus_percent, PERCENT)
    shares = S(shares).to_u64()

    if shares == 0:
        raise InvalidAmount(
            f"Deposit ({amount_a}, {amount_b}) is too small to issue any shares"
        )
    return shares
