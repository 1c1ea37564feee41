"""Data model: pool configuration, snapshots, requests and results."""

from amm_engine.models.pool import Direction, PoolConfig, PoolVariant, Snapshot
from amm_engine.models.requests import (
    CreatePoolRequest,
    DepositRequest,
    SwapRequest,
    WithdrawRequest,
)
from amm_engine.models.results import DepositQuote, SwapQuote, WithdrawQuote
from amm_engine.models.types import TokenId, Uint64

__all__ = [
    # Types
    "TokenId",
    "Uint64",
    # Pool
    "PoolVariant",
    "PoolConfig",
    "Snapshot",
    "Direction",
    # Requests
    "CreatePoolRequest",
    "SwapRequest",
    "DepositRequest",
    "WithdrawRequest",
    # Results
    "SwapQuote",
    "DepositQuote",
    "WithdrawQuote",
]
