"""Pool registry.

Holds one PoolConfig per ordered (token_a, token_b) pair and one lock per
pool. Every mutating operation on a pool runs inside that pool's lock so
that snapshot reads and ledger movements of different operations never
interleave. Operations on different pools do not contend.
"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager

import structlog

from amm_engine.config import DEFAULT_ENGINE_CONFIG, EngineConfig
from amm_engine.constants import DEFAULT_BUMP
from amm_engine.errors import InvalidTokenMint, PoolAlreadyExists, PoolNotFound
from amm_engine.models.pool import PoolConfig, PoolVariant
from amm_engine.models.types import normalize_token_id

logger = structlog.get_logger()


class PoolRegistry:
    """Registry of pools keyed by ordered token pair.

    The pair is ordered: (A, B) and (B, A) are different pools.
    """

    def __init__(self, config: EngineConfig | None = None) -> None:
        """Initialize an empty registry.

        Args:
            config: Engine configuration supplying the variant table.
                    Uses DEFAULT_ENGINE_CONFIG if not provided.
        """
        self.config = config or DEFAULT_ENGINE_CONFIG
        self._pools: dict[tuple[str, str], PoolConfig] = {}
        self._locks: dict[tuple[str, str], threading.Lock] = {}
        self._authorities: set[str] = set()
        self._reserve_tokens: set[str] = set()
        self._share_mints: set[str] = set()
        # Guards the containers above, not the pools themselves
        self._registry_lock = threading.Lock()

    def create_pool(
        self,
        token_a: str,
        token_b: str,
        lp_mint: str,
        variant: int | PoolVariant,
        bump: int = DEFAULT_BUMP,
    ) -> PoolConfig:
        """Create and register a pool. Each ordered pair can be created once.

        The fee rate comes from the variant policy table; it cannot be
        supplied by the caller and never changes afterwards.

        Every pool owns its vault authority and its share mint exclusively:
        a share mint is never another pool's share mint or reserve token, and
        a reserve token is never another pool's share mint.

        Raises:
            InvalidPoolType: If variant is not a known code
            InvalidTokenMint: If token_a == token_b, or a mint is already in use
                in a conflicting role
            PoolAlreadyExists: If the ordered pair or its authority is already registered
        """
        pool = self.config.new_pool(token_a, token_b, lp_mint, variant, bump)

        with self._registry_lock:
            if pool.key in self._pools:
                raise PoolAlreadyExists(f"Pool already exists for {pool.token_a}/{pool.token_b}")
            if pool.authority in self._authorities:
                raise PoolAlreadyExists(f"Pool authority {pool.authority} is already in use")
            if pool.lp_mint in self._share_mints or pool.lp_mint in self._reserve_tokens:
                raise InvalidTokenMint(f"Share mint {pool.lp_mint} is already in use")
            for token in (pool.token_a, pool.token_b):
                if token in self._share_mints:
                    raise InvalidTokenMint(f"{token} is another pool's share mint")

            self._pools[pool.key] = pool
            self._locks[pool.key] = threading.Lock()
            self._authorities.add(pool.authority)
            self._reserve_tokens.update((pool.token_a, pool.token_b))
            self._share_mints.add(pool.lp_mint)

        logger.info(
            "pool_created",
            variant=pool.variant.label,
            token_a=pool.token_a,
            token_b=pool.token_b,
            lp_mint=pool.lp_mint,
            fee_rate=pool.fee_rate,
        )
        return pool

    def get_pool(self, token_a: str, token_b: str) -> PoolConfig:
        """Get the pool for an ordered token pair.

        Raises:
            PoolNotFound: If no pool is registered for (token_a, token_b)
        """
        key = (normalize_token_id(token_a), normalize_token_id(token_b))
        pool = self._pools.get(key)
        if pool is None:
            raise PoolNotFound(f"No pool for {key[0]}/{key[1]}")
        return pool

    @contextmanager
    def lock(self, pool: PoolConfig) -> Iterator[PoolConfig]:
        """Hold the pool's exclusive lock for one snapshot-compute-apply cycle."""
        pool_lock = self._locks.get(pool.key)
        if pool_lock is None:
            raise PoolNotFound(f"No pool for {pool.token_a}/{pool.token_b}")
        with pool_lock:
            yield pool

    @property
    def pools(self) -> list[PoolConfig]:
        """All registered pools in creation order."""
        return list(self._pools.values())

