"""Pool configuration and snapshot value objects."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from enum import Enum, IntEnum

from amm_engine.constants import POOL_AUTHORITY_SEED
from amm_engine.errors import InvalidPoolType


class PoolVariant(IntEnum):
    """Pool variant. Fixes fee rate and pricing/issuance bonus policy.

    There are exactly three variants. Integer codes from outside the engine
    go through from_code(), which is the only place an unknown code can
    appear, and it is rejected there.
    """

    STANDARD = 0
    STABLE = 1
    CONCENTRATED = 2

    @classmethod
    def from_code(cls, code: int | PoolVariant) -> PoolVariant:
        """Convert an external variant code.

        Raises:
            InvalidPoolType: If code is not 0, 1 or 2
        """
        if isinstance(code, cls):
            return code
        if isinstance(code, bool) or not isinstance(code, int):
            raise InvalidPoolType(f"Pool type must be an integer code, got {code!r}")
        try:
            return cls(code)
        except ValueError as err:
            raise InvalidPoolType(f"Unknown pool type: {code}") from err

    @property
    def label(self) -> str:
        return self.name.capitalize()


class Direction(str, Enum):
    """Swap direction relative to the pool's ordered token pair."""

    A_TO_B = "a_to_b"
    B_TO_A = "b_to_a"

    @classmethod
    def from_flag(cls, a_to_b: bool) -> Direction:
        return cls.A_TO_B if a_to_b else cls.B_TO_A


def derive_pool_authority(token_a: str, token_b: str, bump: int) -> str:
    """Derive the pool signing identity from its ordered token pair.

    Deterministic: the same pair and bump always give the same identity.
    Each token id is length-prefixed so that no two ordered pairs hash the
    same input, e.g. ("a", "aa") and ("aa", "a").
    """
    hasher = hashlib.sha256()
    hasher.update(POOL_AUTHORITY_SEED)
    for token in (token_a, token_b):
        encoded = token.encode()
        hasher.update(len(encoded).to_bytes(8, "big"))
        hasher.update(encoded)
    hasher.update(bytes([bump]))
    return "auth_" + hasher.hexdigest()[:40]


@dataclass(frozen=True)
class PoolConfig:
    """Configuration of one pool, created once per ordered token pair.

    fee_rate and variant are fixed at creation; the dataclass is frozen so
    nothing can mutate them afterwards.
    """

    token_a: str
    token_b: str
    lp_mint: str
    # Parts-per-hundred-thousand (300 = 0.3%)
    fee_rate: int
    variant: PoolVariant
    # Address-derivation bump, opaque to the math
    bump: int

    @property
    def key(self) -> tuple[str, str]:
        """Registry key: the ordered (token_a, token_b) pair."""
        return (self.token_a, self.token_b)

    @property
    def authority(self) -> str:
        """Identity that owns the pool vaults and the share mint."""
        return derive_pool_authority(self.token_a, self.token_b, self.bump)

    def token_in_out(self, direction: Direction) -> tuple[str, str]:
        """Get tokens ordered as (token_in, token_out)."""
        if direction is Direction.A_TO_B:
            return self.token_a, self.token_b
        return self.token_b, self.token_a


@dataclass(frozen=True)
class Snapshot:
    """Reserve balances and share supply read before an operation's transfers.

    Captured once per operation and threaded through every computation.
    It has no refresh or reload operation.
    """

    reserve_a: int
    reserve_b: int
    lp_supply: int

    def __post_init__(self) -> None:
        for name in ("reserve_a", "reserve_b", "lp_supply"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ValueError(f"Snapshot.{name} must be a non-negative int, got {value!r}")

    @property
    def is_bootstrap(self) -> bool:
        """True when no liquidity provider exists yet."""
        return self.lp_supply == 0

    def oriented(self, direction: Direction) -> tuple[int, int]:
        """Get reserves ordered as (reserve_in, reserve_out)."""
        if direction is Direction.A_TO_B:
            return self.reserve_a, self.reserve_b
        return self.reserve_b, self.reserve_a
