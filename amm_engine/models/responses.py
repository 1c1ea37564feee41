"""Pydantic response models for the HTTP quote service.

Decimal display values (prices, percentages) are serialized as strings.
"""

from decimal import Decimal

from pydantic import BaseModel, Field

from amm_engine.models.pool import Direction


class PoolResponse(BaseModel):
    """Pool configuration and current state."""

    token_a: str = Field(alias="tokenA")
    token_b: str = Field(alias="tokenB")
    lp_mint: str = Field(alias="lpMint")
    pool_type: int = Field(alias="poolType")
    variant: str = Field(description="Variant name: Standard, Stable or Concentrated")
    fee_rate: int = Field(alias="feeRate", description="Parts per 100,000")
    authority: str
    reserve_a: int = Field(alias="reserveA")
    reserve_b: int = Field(alias="reserveB")
    lp_supply: int = Field(alias="lpSupply")
    spot_price: Decimal | None = Field(
        default=None,
        alias="spotPrice",
        description="Token B per token A; null while a reserve is empty",
    )

    model_config = {"populate_by_name": True}


class PoolListResponse(BaseModel):
    pools: list[PoolResponse]


class SwapQuoteResponse(BaseModel):
    """Quoted swap against the current reserves."""

    direction: Direction
    amount_in: int = Field(alias="amountIn")
    fee_amount: int = Field(alias="feeAmount")
    net_amount_in: int = Field(alias="netAmountIn")
    amount_out: int = Field(alias="amountOut")
    price_impact: Decimal = Field(alias="priceImpact", description="Percent")
    minimum_amount_out: int | None = Field(
        default=None,
        alias="minimumAmountOut",
        description="amountOut reduced by the requested slippage tolerance",
    )

    model_config = {"populate_by_name": True}


class DepositQuoteResponse(BaseModel):
    """Quoted deposit against the current reserves."""

    amount_a: int = Field(alias="amountA")
    amount_b: int = Field(alias="amountB")
    shares: int
    bootstrap: bool
    share_of_pool: Decimal = Field(alias="shareOfPool", description="Percent after deposit")

    model_config = {"populate_by_name": True}


class WithdrawQuoteResponse(BaseModel):
    """Quoted withdrawal against the current reserves."""

    shares: int
    amount_a: int = Field(alias="amountA")
    amount_b: int = Field(alias="amountB")
    share_of_pool: Decimal = Field(alias="shareOfPool", description="Percent before withdrawal")

    model_config = {"populate_by_name": True}


class ErrorResponse(BaseModel):
    error: str
    detail: str
