"""Balance ledger interface and in-memory implementation.

The engine never moves value itself. It reads vault balances and share
supply through a BalanceLedger, computes what must move, and hands the
ledger a batch of movements to apply atomically.

Accounts are identified by (owner, mint). A pool's vaults are the accounts
owned by the pool authority for each of its two tokens.
"""

from __future__ import annotations

import threading
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol, TypeAlias, runtime_checkable

import structlog

from amm_engine.errors import InsufficientFunds, InvalidAmount, InvalidTokenMint
from amm_engine.models.pool import PoolConfig
from amm_engine.safe_int import U64_MAX

logger = structlog.get_logger()


@dataclass(frozen=True)
class Vault:
    """Read-only view of a pool vault account."""

    mint: str
    owner: str
    amount: int


@dataclass(frozen=True)
class Transfer:
    """Move `amount` of `mint` between two owners' accounts."""

    mint: str
    source: str
    destination: str
    amount: int


@dataclass(frozen=True)
class MintShares:
    """Issue `amount` of share token `mint` to `owner`."""

    mint: str
    owner: str
    amount: int


@dataclass(frozen=True)
class BurnShares:
    """Destroy `amount` of share token `mint` held by `owner`."""

    mint: str
    owner: str
    amount: int


Movement: TypeAlias = Transfer | MintShares | BurnShares


@runtime_checkable
class BalanceLedger(Protocol):
    """Protocol for the custodial balance ledger.

    Implementations must make apply() all-or-nothing: either every movement
    in the batch lands or none does.
    """

    def create_vaults(self, pool: PoolConfig) -> None:
        """Open the pool's vaults and share mint."""
        ...

    def vault(self, pool: PoolConfig, mint: str) -> Vault:
        """Get the vault holding `mint` for a pool."""
        ...

    def share_supply(self, mint: str) -> int:
        """Get total outstanding supply of a share token."""
        ...

    def balance_of(self, owner: str, mint: str) -> int:
        """Get an owner's balance of a token (0 if no account)."""
        ...

    def apply(self, movements: Sequence[Movement]) -> None:
        """Apply a batch of movements atomically.

        Raises:
            InsufficientFunds: If any source account cannot cover its movement
        """
        ...


class InMemoryLedger:
    """Dictionary-backed BalanceLedger.

    Suitable for tests, simulations and the quote service. apply() stages
    the whole batch on a copy of the touched balances and only commits if
    every step stays non-negative and within u64.
    """

    def __init__(self) -> None:
        self._balances: dict[tuple[str, str], int] = {}
        self._supply: dict[str, int] = {}
        # (pool key, pool token) -> (account owner, account mint)
        self._vaults: dict[tuple[tuple[str, str], str], tuple[str, str]] = {}
        self._lock = threading.Lock()

    # --- Setup ---

    def create_vaults(self, pool: PoolConfig) -> None:
        """Open the pool's two vaults, owned by the pool authority."""
        for mint in (pool.token_a, pool.token_b):
            self.register_vault(pool, mint, owner=pool.authority, account_mint=mint)
        self._supply.setdefault(pool.lp_mint, 0)

    def register_vault(
        self,
        pool: PoolConfig,
        mint: str,
        *,
        owner: str,
        account_mint: str,
    ) -> None:
        """Point a pool's vault for `mint` at the (owner, account_mint) account.

        create_vaults() is the normal path; this exists so that callers can
        mirror an externally managed ledger layout.
        """
        with self._lock:
            self._vaults[(pool.key, mint)] = (owner, account_mint)
            self._balances.setdefault((owner, account_mint), 0)

    def fund(self, owner: str, mint: str, amount: int) -> None:
        """Credit an account from outside the system (faucet / airdrop)."""
        if amount < 0:
            raise InvalidAmount(f"Funding amount cannot be negative: {amount}")
        with self._lock:
            key = (owner, mint)
            new_balance = self._balances.get(key, 0) + amount
            if new_balance > U64_MAX:
                raise InvalidAmount(f"Balance of {owner}/{mint} would exceed u64")
            self._balances[key] = new_balance

    # --- BalanceLedger ---

    def vault(self, pool: PoolConfig, mint: str) -> Vault:
        """Get the vault holding `mint` for a pool.

        Raises:
            InvalidTokenMint: If the pool has no vault registered for `mint`
        """
        with self._lock:
            account = self._vaults.get((pool.key, mint))
            if account is None:
                raise InvalidTokenMint(f"Pool {pool.key} has no vault for {mint}")
            owner, account_mint = account
            return Vault(mint=account_mint, owner=owner, amount=self._balances.get(account, 0))

    def share_supply(self, mint: str) -> int:
        with self._lock:
            return self._supply.get(mint, 0)

    def balance_of(self, owner: str, mint: str) -> int:
        with self._lock:
            return self._balances.get((owner, mint), 0)

    def apply(self, movements: Sequence[Movement]) -> None:
        """Apply a batch of movements atomically.

        Raises:
            InsufficientFunds: If any debit would leave an account negative
            InvalidAmount: If a movement amount is negative or a credit overflows u64
        """
        with self._lock:
            balances: dict[tuple[str, str], int] = {}
            supply: dict[str, int] = {}

            def current(key: tuple[str, str]) -> int:
                if key not in balances:
                    balances[key] = self._balances.get(key, 0)
                return balances[key]

            def debit(key: tuple[str, str], amount: int) -> None:
                available = current(key)
                if available < amount:
                    raise InsufficientFunds(
                        f"{key[0]} holds {available} of {key[1]}, needs {amount}"
                    )
                balances[key] = available - amount

            def credit(key: tuple[str, str], amount: int) -> None:
                new_balance = current(key) + amount
                if new_balance > U64_MAX:
                    raise InvalidAmount(f"Balance of {key[0]}/{key[1]} would exceed u64")
                balances[key] = new_balance

            for movement in movements:
                if movement.amount < 0:
                    raise InvalidAmount(f"Movement amount cannot be negative: {movement}")
                if isinstance(movement, Transfer):
                    debit((movement.source, movement.mint), movement.amount)
                    credit((movement.destination, movement.mint), movement.amount)
                elif isinstance(movement, MintShares):
                    credit((movement.owner, movement.mint), movement.amount)
                    supply[movement.mint] = (
                        supply.get(movement.mint, self._supply.get(movement.mint, 0))
                        + movement.amount
                    )
                elif isinstance(movement, BurnShares):
                    debit((movement.owner, movement.mint), movement.amount)
                    supply[movement.mint] = (
                        supply.get(movement.mint, self._supply.get(movement.mint, 0))
                        - movement.amount
                    )
                else:
                    raise TypeError(f"Unknown movement type: {type(movement)}")

            self._balances.update(balances)
            self._supply.update(supply)

        logger.debug("ledger_movements_applied", count=len(movements))
