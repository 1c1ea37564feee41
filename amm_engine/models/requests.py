"""Request value objects for pool operations.

These are ephemeral: they describe one requested action and are never
persisted. Amounts are validated as u64 on construction; whether an amount
is acceptable for the operation (e.g. non-zero) is decided by the engine.
"""

from decimal import Decimal

from pydantic import BaseModel, Field

from amm_engine.constants import DEFAULT_BUMP
from amm_engine.models.pool import Direction
from amm_engine.models.types import TokenId, Uint64


class CreatePoolRequest(BaseModel):
    """Create a pool for an ordered token pair."""

    token_a: TokenId = Field(alias="tokenA")
    token_b: TokenId = Field(alias="tokenB")
    lp_mint: TokenId = Field(alias="lpMint")
    # Raw code so that unknown variants reach the engine and get InvalidPoolType
    pool_type: int = Field(alias="poolType")
    bump: int = Field(default=DEFAULT_BUMP, ge=0, le=255)

    model_config = {"populate_by_name": True}


class SwapRequest(BaseModel):
    """Swap `amount_in` of one pool token for the other."""

    amount_in: Uint64 = Field(alias="amountIn")
    minimum_amount_out: Uint64 = Field(default=0, alias="minimumAmountOut")
    a_to_b: bool = Field(default=True, alias="aToB")
    # Only used by quotes to suggest a minimum; never enforced
    slippage_percent: Decimal | None = Field(
        default=None, alias="slippagePercent", ge=0, le=100
    )

    model_config = {"populate_by_name": True}

    @property
    def direction(self) -> Direction:
        return Direction.from_flag(self.a_to_b)


class DepositRequest(BaseModel):
    """Deposit both pool tokens in exchange for shares."""

    amount_a: Uint64 = Field(alias="amountA")
    amount_b: Uint64 = Field(alias="amountB")

    model_config = {"populate_by_name": True}


class WithdrawRequest(BaseModel):
    """Redeem shares for a proportional slice of both reserves."""

    shares: Uint64
    minimum_a: Uint64 = Field(default=0, alias="minimumA")
    minimum_b: Uint64 = Field(default=0, alias="minimumB")
    # Shares held by the caller; defaults to `shares` for pure quotes
    held_shares: Uint64 | None = Field(default=None, alias="heldShares")

    model_config = {"populate_by_name": True}
