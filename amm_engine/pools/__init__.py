"""Pool management package.

Provides PoolRegistry for creating and locking pools.
"""

from .registry import PoolRegistry

__all__ = ["PoolRegistry"]
