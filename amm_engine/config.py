"""Engine configuration: the per-variant policy table."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType

from amm_engine.constants import (
    BOOTSTRAP_SHARES,
    CONCENTRATED_DEPOSIT_BONUS_PERCENT,
    CONCENTRATED_FEE_RATE,
    CONCENTRATED_SWAP_BONUS_DIVISOR,
    DEFAULT_BUMP,
    FEE_DENOMINATOR,
    STABLE_FEE_RATE,
    STABLE_SWAP_BONUS_DIVISOR,
    STANDARD_FEE_RATE,
)
from amm_engine.errors import InvalidTokenMint
from amm_engine.models.pool import PoolConfig, PoolVariant
from amm_engine.models.types import normalize_token_id


class DepositFormula(str, Enum):
    """Share-issuance formula a variant uses."""

    MIN_RATIO = "min_ratio"
    AVERAGE_RATIO = "average_ratio"


@dataclass(frozen=True)
class VariantPolicy:
    """Fixed parameters of one pool variant.

    Attributes:
        fee_rate: Swap fee in parts-per-hundred-thousand
        swap_bonus_divisor: Output bonus is floor(net_in / divisor); None for no bonus
        deposit_formula: DepositFormula.MIN_RATIO or DepositFormula.AVERAGE_RATIO
        deposit_bonus_percent: Multiplier (in percent) applied to issued shares
    """

    fee_rate: int
    swap_bonus_divisor: int | None = None
    deposit_formula: DepositFormula = DepositFormula.MIN_RATIO
    deposit_bonus_percent: int = 100


def _default_policies() -> Mapping[PoolVariant, VariantPolicy]:
    return MappingProxyType(
        {
            PoolVariant.STANDARD: VariantPolicy(fee_rate=STANDARD_FEE_RATE),
            PoolVariant.STABLE: VariantPolicy(
                fee_rate=STABLE_FEE_RATE,
                swap_bonus_divisor=STABLE_SWAP_BONUS_DIVISOR,
                deposit_formula=DepositFormula.AVERAGE_RATIO,
            ),
            PoolVariant.CONCENTRATED: VariantPolicy(
                fee_rate=CONCENTRATED_FEE_RATE,
                swap_bonus_divisor=CONCENTRATED_SWAP_BONUS_DIVISOR,
                deposit_bonus_percent=CONCENTRATED_DEPOSIT_BONUS_PERCENT,
            ),
        }
    )


@dataclass(frozen=True)
class EngineConfig:
    """Centralized configuration for pool creation and pricing.

    The whole variant table lives here so the fee rates and bonus rules
    can be audited in one place and swapped out in tests.

    Attributes:
        bootstrap_shares: Shares issued on the first deposit into a pool
        fee_denominator: Denominator of fee_rate (parts-per-hundred-thousand)
        policies: VariantPolicy per PoolVariant
    """

    bootstrap_shares: int = BOOTSTRAP_SHARES
    fee_denominator: int = FEE_DENOMINATOR
    policies: Mapping[PoolVariant, VariantPolicy] = field(default_factory=_default_policies)

    def new_pool(
        self,
        token_a: str,
        token_b: str,
        lp_mint: str,
        variant: int | PoolVariant,
        bump: int = DEFAULT_BUMP,
    ) -> PoolConfig:
        """Build the configuration of a new pool from this policy table.

        The fee rate is taken from the variant policy; callers cannot
        supply one.

        Raises:
            InvalidPoolType: If variant is not a known code
            InvalidTokenMint: If token_a == token_b or the share mint reuses a pool token
        """
        variant = PoolVariant.from_code(variant)
        token_a = normalize_token_id(token_a)
        token_b = normalize_token_id(token_b)
        lp_mint = normalize_token_id(lp_mint)

        if token_a == token_b:
            raise InvalidTokenMint(f"Pool tokens must differ: {token_a}")
        if lp_mint in (token_a, token_b):
            raise InvalidTokenMint(f"Share mint {lp_mint} cannot be a pool token")
        if not 0 <= bump <= 255:
            raise ValueError(f"bump must fit in a byte, got {bump}")

        return PoolConfig(
            token_a=token_a,
            token_b=token_b,
            lp_mint=lp_mint,
            fee_rate=self.policy(variant).fee_rate,
            variant=variant,
            bump=bump,
        )

    def policy(self, variant: PoolVariant) -> VariantPolicy:
        """Get the policy for a variant.

        Raises:
            KeyError: If the table has no entry for the variant
        """
        return self.policies[variant]


# Default configuration instance
DEFAULT_ENGINE_CONFIG = EngineConfig()
