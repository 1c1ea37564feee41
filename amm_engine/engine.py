"""Pool operations: create, deposit, withdraw, swap.

Two layers:

- Pure functions (create_pool, quote_deposit, quote_withdraw, quote_swap)
  compute the result of an action from a PoolConfig and a Snapshot. They
  read nothing else and move nothing.

- PoolEngine wires those functions to a PoolRegistry and a BalanceLedger.
  For each action it holds the pool lock, takes one Snapshot, computes,
  and hands the ledger the full batch of movements to apply atomically.
  Any error before the apply leaves the ledger untouched.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from decimal import Decimal

import structlog

from amm_engine.amm import pricing_for
from amm_engine.config import DEFAULT_ENGINE_CONFIG, EngineConfig
from amm_engine.constants import DEFAULT_BUMP
from amm_engine.errors import (
    AMMError,
    InsufficientLiquidity,
    InvalidAmount,
    InvalidTokenMint,
    InvalidVaultAuthority,
    SlippageExceeded,
)
from amm_engine.fees import DEFAULT_FEE_CALCULATOR, FeeCalculator
from amm_engine.ledger import BalanceLedger, BurnShares, InMemoryLedger, MintShares, Transfer
from amm_engine.liquidity import redeem_shares, shares_for_deposit
from amm_engine.models.pool import Direction, PoolConfig, PoolVariant, Snapshot
from amm_engine.models.results import DepositQuote, SwapQuote, WithdrawQuote
from amm_engine.pools import PoolRegistry
from amm_engine.quotes import spot_price
from amm_engine.safe_int import S, SafeIntError

logger = structlog.get_logger()


# =============================================================================
# Pure operations
# =============================================================================


def create_pool(
    token_a: str,
    token_b: str,
    lp_mint: str,
    variant: int | PoolVariant,
    bump: int = DEFAULT_BUMP,
    config: EngineConfig | None = None,
) -> PoolConfig:
    """Build a pool configuration; fee rate is assigned from the variant.

    Raises:
        InvalidPoolType: If variant is not 0 (Standard), 1 (Stable) or 2 (Concentrated)
    """
    config = config or DEFAULT_ENGINE_CONFIG
    return config.new_pool(token_a, token_b, lp_mint, variant, bump)


def quote_deposit(
    pool: PoolConfig,
    snapshot: Snapshot,
    amount_a: int,
    amount_b: int,
    config: EngineConfig | None = None,
) -> DepositQuote:
    """Compute the shares issued for a deposit.

    Raises:
        InvalidAmount: If an amount is zero or no shares would be issued
    """
    _check_u64("amount_a", amount_a)
    _check_u64("amount_b", amount_b)
    shares = shares_for_deposit(pool.variant, amount_a, amount_b, snapshot, config)
    return DepositQuote(
        amount_a=amount_a,
        amount_b=amount_b,
        shares=shares,
        bootstrap=snapshot.is_bootstrap,
    )


def quote_withdraw(
    pool: PoolConfig,
    snapshot: Snapshot,
    shares: int,
    minimum_a: int = 0,
    minimum_b: int = 0,
    held_shares: int | None = None,
) -> WithdrawQuote:
    """Compute the proportional withdrawal for redeemed shares.

    Args:
        held_shares: Shares the caller holds; None assumes it holds `shares`

    Raises:
        InvalidAmount: If shares is zero
        InsufficientLpBalance: If held_shares < shares
        SlippageExceeded: If an output is below its minimum
        InsufficientLiquidity: If an output exceeds its reserve
    """
    _check_u64("shares", shares)
    if held_shares is None:
        held_shares = shares
    amount_a, amount_b = redeem_shares(shares, held_shares, snapshot, minimum_a, minimum_b)
    return WithdrawQuote(shares=shares, amount_a=amount_a, amount_b=amount_b)


def quote_swap(
    pool: PoolConfig,
    snapshot: Snapshot,
    amount_in: int,
    minimum_amount_out: int,
    direction: Direction,
    config: EngineConfig | None = None,
    fee_calculator: FeeCalculator | None = None,
) -> SwapQuote:
    """Compute the output and fee of a swap.

    The fee is taken from amount_in at the pool's fixed rate, and the net
    input is priced by the pool variant's policy against the snapshot
    reserves.

    Raises:
        InvalidAmount: If amount_in is zero
        InsufficientLiquidity: If either reserve is empty, or output exceeds reserve
        SlippageExceeded: If output is below minimum_amount_out
    """
    _check_u64("amount_in", amount_in)
    if amount_in == 0:
        raise InvalidAmount("Swap amount must be positive")

    reserve_in, reserve_out = snapshot.oriented(direction)
    if reserve_in == 0 or reserve_out == 0:
        raise InsufficientLiquidity(
            f"Empty reserve: reserve_in={reserve_in}, reserve_out={reserve_out}"
        )

    calculator = fee_calculator or DEFAULT_FEE_CALCULATOR
    fee = calculator.calculate_fee(amount_in, pool.fee_rate)

    policy = pricing_for(pool.variant, config)
    amount_out = policy.get_amount_out(reserve_in, reserve_out, fee.net)

    if amount_out < minimum_amount_out:
        raise SlippageExceeded(f"Output {amount_out} below minimum {minimum_amount_out}")
    if amount_out > reserve_out:
        raise InsufficientLiquidity(f"Output {amount_out} exceeds reserve {reserve_out}")

    return SwapQuote(
        direction=direction,
        amount_in=amount_in,
        fee_amount=fee.fee,
        net_amount_in=fee.net,
        amount_out=amount_out,
    )


def _check_u64(name: str, value: int) -> None:
    if value < 0:
        raise InvalidAmount(f"{name} cannot be negative: {value}")
    S(value).to_u64()


# =============================================================================
# Engine
# =============================================================================


@dataclass(frozen=True)
class PoolState:
    """Read-only view of a pool and its current snapshot."""

    pool: PoolConfig
    snapshot: Snapshot

    @property
    def spot_price(self) -> Decimal | None:
        """Token B per token A, or None while a reserve is empty."""
        if self.snapshot.reserve_a == 0 or self.snapshot.reserve_b == 0:
            return None
        return spot_price(self.snapshot)


class PoolEngine:
    """Runs pool operations against a registry and a balance ledger.

    Each mutating operation is one critical section per pool:
    lock -> snapshot -> compute -> ledger.apply -> unlock.

    Args:
        registry: Pool registry. A new one is created if not provided.
        ledger: Balance ledger. An InMemoryLedger is created if not provided.
        config: Engine configuration. Defaults to the registry's.
        fee_calculator: Fee model. Uses DEFAULT_FEE_CALCULATOR if not provided.
    """

    def __init__(
        self,
        registry: PoolRegistry | None = None,
        ledger: BalanceLedger | None = None,
        config: EngineConfig | None = None,
        fee_calculator: FeeCalculator | None = None,
    ) -> None:
        self.config = config or (registry.config if registry else DEFAULT_ENGINE_CONFIG)
        self.registry = registry or PoolRegistry(self.config)
        self.ledger = ledger if ledger is not None else InMemoryLedger()
        self.fee_calculator = fee_calculator or DEFAULT_FEE_CALCULATOR

    # --- Pool lifecycle ---

    def create_pool(
        self,
        token_a: str,
        token_b: str,
        lp_mint: str,
        variant: int | PoolVariant,
        bump: int = DEFAULT_BUMP,
    ) -> PoolConfig:
        """Register a pool and open its vaults.

        Raises:
            InvalidPoolType: If variant is not a known code
            PoolAlreadyExists: If the ordered pair already has a pool
        """
        try:
            pool = self.registry.create_pool(token_a, token_b, lp_mint, variant, bump)
        except AMMError as err:
            logger.warning(
                "pool_creation_rejected",
                token_a=token_a,
                token_b=token_b,
                variant=variant,
                error=err.code,
            )
            raise
        self.ledger.create_vaults(pool)
        return pool

    def snapshot(self, pool: PoolConfig) -> Snapshot:
        """Read reserves and share supply, checking the vaults belong to the pool.

        Call with the pool lock held when the snapshot feeds a mutation.

        Raises:
            InvalidTokenMint: If a vault holds the wrong token
            InvalidVaultAuthority: If a vault is not owned by the pool authority
        """
        reserves = []
        for mint in (pool.token_a, pool.token_b):
            vault = self.ledger.vault(pool, mint)
            if vault.mint != mint:
                raise InvalidTokenMint(f"Vault for {mint} holds {vault.mint}")
            if vault.owner != pool.authority:
                raise InvalidVaultAuthority(f"Vault for {mint} is owned by {vault.owner}")
            reserves.append(vault.amount)
        return Snapshot(
            reserve_a=reserves[0],
            reserve_b=reserves[1],
            lp_supply=self.ledger.share_supply(pool.lp_mint),
        )

    def pool_state(self, token_a: str, token_b: str) -> PoolState:
        """Current pool configuration and snapshot.

        Raises:
            PoolNotFound: If the ordered pair has no pool
        """
        pool = self.registry.get_pool(token_a, token_b)
        with self.registry.lock(pool):
            return PoolState(pool=pool, snapshot=self.snapshot(pool))

    # --- Read-only quotes ---

    def quote_swap(
        self,
        token_a: str,
        token_b: str,
        amount_in: int,
        minimum_amount_out: int = 0,
        a_to_b: bool = True,
    ) -> tuple[SwapQuote, Snapshot]:
        """Quote a swap against the current snapshot without applying it."""
        state = self.pool_state(token_a, token_b)
        quote = quote_swap(
            state.pool,
            state.snapshot,
            amount_in,
            minimum_amount_out,
            Direction.from_flag(a_to_b),
            self.config,
            self.fee_calculator,
        )
        return quote, state.snapshot

    def quote_deposit(
        self, token_a: str, token_b: str, amount_a: int, amount_b: int
    ) -> tuple[DepositQuote, Snapshot]:
        """Quote a deposit against the current snapshot without applying it."""
        state = self.pool_state(token_a, token_b)
        quote = quote_deposit(state.pool, state.snapshot, amount_a, amount_b, self.config)
        return quote, state.snapshot

    def quote_withdraw(
        self,
        token_a: str,
        token_b: str,
        shares: int,
        minimum_a: int = 0,
        minimum_b: int = 0,
        held_shares: int | None = None,
    ) -> tuple[WithdrawQuote, Snapshot]:
        """Quote a withdrawal against the current snapshot without applying it."""
        state = self.pool_state(token_a, token_b)
        quote = quote_withdraw(
            state.pool, state.snapshot, shares, minimum_a, minimum_b, held_shares
        )
        return quote, state.snapshot

    # --- Mutating operations ---

    def quote_and_apply_deposit(
        self,
        token_a: str,
        token_b: str,
        user: str,
        amount_a: int,
        amount_b: int,
    ) -> DepositQuote:
        """Deposit both tokens from `user` and issue shares to them.

        Raises:
            InvalidAmount: If an amount is zero or no shares would be issued
            InsufficientFunds: If the user cannot cover the deposit
        """
        pool = self.registry.get_pool(token_a, token_b)
        with self.registry.lock(pool), self._rejections("deposit", pool, user):
            snapshot = self.snapshot(pool)
            quote = quote_deposit(pool, snapshot, amount_a, amount_b, self.config)
            self.ledger.apply(
                [
                    Transfer(pool.token_a, user, pool.authority, quote.amount_a),
                    Transfer(pool.token_b, user, pool.authority, quote.amount_b),
                    MintShares(pool.lp_mint, user, quote.shares),
                ]
            )

        logger.info(
            "deposit_applied",
            pool=_pool_label(pool),
            user=user,
            amount_a=quote.amount_a,
            amount_b=quote.amount_b,
            shares=quote.shares,
            bootstrap=quote.bootstrap,
        )
        return quote

    def quote_and_apply_withdraw(
        self,
        token_a: str,
        token_b: str,
        user: str,
        shares: int,
        minimum_a: int = 0,
        minimum_b: int = 0,
    ) -> WithdrawQuote:
        """Burn `user`'s shares and pay out the proportional reserves.

        Raises:
            InvalidAmount: If shares is zero
            InsufficientLpBalance: If the user holds fewer shares
            SlippageExceeded: If an output is below its minimum
            InsufficientLiquidity: If an output exceeds its reserve
        """
        pool = self.registry.get_pool(token_a, token_b)
        with self.registry.lock(pool), self._rejections("withdraw", pool, user):
            snapshot = self.snapshot(pool)
            held = self.ledger.balance_of(user, pool.lp_mint)
            quote = quote_withdraw(pool, snapshot, shares, minimum_a, minimum_b, held)
            self.ledger.apply(
                [
                    BurnShares(pool.lp_mint, user, quote.shares),
                    Transfer(pool.token_a, pool.authority, user, quote.amount_a),
                    Transfer(pool.token_b, pool.authority, user, quote.amount_b),
                ]
            )

        logger.info(
            "withdraw_applied",
            pool=_pool_label(pool),
            user=user,
            shares=quote.shares,
            amount_a=quote.amount_a,
            amount_b=quote.amount_b,
        )
        return quote

    def quote_and_apply_swap(
        self,
        token_a: str,
        token_b: str,
        user: str,
        amount_in: int,
        minimum_amount_out: int = 0,
        a_to_b: bool = True,
    ) -> SwapQuote:
        """Swap `amount_in` from `user` and pay out the priced output.

        Raises:
            InvalidAmount: If amount_in is zero
            InsufficientLiquidity: If a reserve is empty
            SlippageExceeded: If output is below minimum_amount_out
            InsufficientFunds: If the user cannot cover amount_in
        """
        pool = self.registry.get_pool(token_a, token_b)
        direction = Direction.from_flag(a_to_b)
        token_in, token_out = pool.token_in_out(direction)

        with self.registry.lock(pool), self._rejections("swap", pool, user):
            snapshot = self.snapshot(pool)
            quote = quote_swap(
                pool,
                snapshot,
                amount_in,
                minimum_amount_out,
                direction,
                self.config,
                self.fee_calculator,
            )
            self.ledger.apply(
                [
                    Transfer(token_in, user, pool.authority, quote.amount_in),
                    Transfer(token_out, pool.authority, user, quote.amount_out),
                ]
            )

        logger.info(
            "swap_applied",
            pool=_pool_label(pool),
            variant=pool.variant.label,
            user=user,
            direction=direction.value,
            amount_in=quote.amount_in,
            amount_out=quote.amount_out,
            fee=quote.fee_amount,
        )
        return quote

    @contextmanager
    def _rejections(self, operation: str, pool: PoolConfig, user: str) -> Iterator[None]:
        """Log a rejected operation and re-raise."""
        try:
            yield
        except (AMMError, SafeIntError) as err:
            logger.warning(
                f"{operation}_rejected",
                pool=_pool_label(pool),
                user=user,
                error=err.code,
                detail=str(err),
            )
            raise


def _pool_label(pool: PoolConfig) -> str:
    return f"{pool.token_a}/{pool.token_b}"


def _create_default_engine() -> PoolEngine:
    """Create the process-wide engine backed by an in-memory ledger."""
    logger.info("engine_initialized", ledger="in_memory")
    return PoolEngine()


_default_engine: PoolEngine | None = None


def get_default_engine() -> PoolEngine:
    """Get the process-wide engine, creating it on first use."""
    global _default_engine
    if _default_engine is None:
        _default_engine = _create_default_engine()
    return _default_engine
