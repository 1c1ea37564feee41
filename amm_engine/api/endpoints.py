"""API endpoints for the AMM quote service."""

import structlog
from fastapi import APIRouter, Depends

from amm_engine.engine import PoolEngine, PoolState, get_default_engine
from amm_engine.models.pool import Snapshot
from amm_engine.models.requests import (
    CreatePoolRequest,
    DepositRequest,
    SwapRequest,
    WithdrawRequest,
)
from amm_engine.models.responses import (
    DepositQuoteResponse,
    PoolListResponse,
    PoolResponse,
    SwapQuoteResponse,
    WithdrawQuoteResponse,
)
from amm_engine.quotes import minimum_with_slippage, price_impact, share_of_pool

logger = structlog.get_logger()

router = APIRouter()


def get_engine() -> PoolEngine:
    """Dependency provider for the engine instance.

    Override this in tests to inject an isolated engine:
        app.dependency_overrides[get_engine] = lambda: engine

    Returns:
        The engine that owns the pools served by the API.
    """
    return get_default_engine()


def _pool_response(state: PoolState) -> PoolResponse:
    pool, snapshot = state.pool, state.snapshot
    return PoolResponse(
        token_a=pool.token_a,
        token_b=pool.token_b,
        lp_mint=pool.lp_mint,
        pool_type=int(pool.variant),
        variant=pool.variant.label,
        fee_rate=pool.fee_rate,
        authority=pool.authority,
        reserve_a=snapshot.reserve_a,
        reserve_b=snapshot.reserve_b,
        lp_supply=snapshot.lp_supply,
        spot_price=state.spot_price,
    )


@router.post("/pools", status_code=201)
def create_pool(
    request: CreatePoolRequest,
    engine: PoolEngine = Depends(get_engine),
) -> PoolResponse:
    """Create a pool for an ordered token pair.

    Error Handling:
        - Unknown poolType: 400 InvalidPoolType
        - Identical tokens: 400 InvalidTokenMint
        - Pair already registered: 409 PoolAlreadyExists
    """
    engine.create_pool(
        request.token_a,
        request.token_b,
        request.lp_mint,
        request.pool_type,
        request.bump,
    )
    return _pool_response(engine.pool_state(request.token_a, request.token_b))


@router.get("/pools")
def list_pools(engine: PoolEngine = Depends(get_engine)) -> PoolListResponse:
    """List all registered pools with their current state."""
    states = [engine.pool_state(pool.token_a, pool.token_b) for pool in engine.registry.pools]
    return PoolListResponse(pools=[_pool_response(state) for state in states])


@router.get("/pools/{token_a}/{token_b}")
def get_pool(
    token_a: str,
    token_b: str,
    engine: PoolEngine = Depends(get_engine),
) -> PoolResponse:
    """Get a pool's configuration, reserves, share supply and spot price."""
    return _pool_response(engine.pool_state(token_a, token_b))


@router.post("/pools/{token_a}/{token_b}/quote/swap")
def quote_swap(
    token_a: str,
    token_b: str,
    request: SwapRequest,
    engine: PoolEngine = Depends(get_engine),
) -> SwapQuoteResponse:
    """Quote a swap without applying it.

    minimumAmountOut is enforced exactly as a real swap would enforce it.
    slippagePercent only produces a suggested minimumAmountOut in the response.
    """
    quote, snapshot = engine.quote_swap(
        token_a,
        token_b,
        request.amount_in,
        request.minimum_amount_out,
        request.a_to_b,
    )
    reserve_in, _ = snapshot.oriented(quote.direction)

    suggested_minimum = None
    if request.slippage_percent is not None:
        suggested_minimum = minimum_with_slippage(quote.amount_out, request.slippage_percent)

    logger.debug(
        "swap_quoted",
        pool=f"{token_a}/{token_b}",
        amount_in=quote.amount_in,
        amount_out=quote.amount_out,
    )
    return SwapQuoteResponse(
        direction=quote.direction,
        amount_in=quote.amount_in,
        fee_amount=quote.fee_amount,
        net_amount_in=quote.net_amount_in,
        amount_out=quote.amount_out,
        price_impact=price_impact(reserve_in, quote.net_amount_in),
        minimum_amount_out=suggested_minimum,
    )


@router.post("/pools/{token_a}/{token_b}/quote/deposit")
def quote_deposit(
    token_a: str,
    token_b: str,
    request: DepositRequest,
    engine: PoolEngine = Depends(get_engine),
) -> DepositQuoteResponse:
    """Quote the shares a deposit would receive without applying it."""
    quote, snapshot = engine.quote_deposit(token_a, token_b, request.amount_a, request.amount_b)
    after = Snapshot(
        reserve_a=snapshot.reserve_a + quote.amount_a,
        reserve_b=snapshot.reserve_b + quote.amount_b,
        lp_supply=snapshot.lp_supply + quote.shares,
    )
    return DepositQuoteResponse(
        amount_a=quote.amount_a,
        amount_b=quote.amount_b,
        shares=quote.shares,
        bootstrap=quote.bootstrap,
        share_of_pool=share_of_pool(quote.shares, after),
    )


@router.post("/pools/{token_a}/{token_b}/quote/withdraw")
def quote_withdraw(
    token_a: str,
    token_b: str,
    request: WithdrawRequest,
    engine: PoolEngine = Depends(get_engine),
) -> WithdrawQuoteResponse:
    """Quote the amounts a share redemption would pay without applying it."""
    quote, snapshot = engine.quote_withdraw(
        token_a,
        token_b,
        request.shares,
        request.minimum_a,
        request.minimum_b,
        request.held_shares,
    )
    return WithdrawQuoteResponse(
        shares=quote.shares,
        amount_a=quote.amount_a,
        amount_b=quote.amount_b,
        share_of_pool=share_of_pool(quote.shares, snapshot),
    )
