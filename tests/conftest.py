"""Pytest configuration and fixtures."""

import pytest

from amm_engine.engine import PoolEngine
from amm_engine.models.pool import PoolConfig, PoolVariant, Snapshot
from tests.helpers import ALICE, BOB, NTD, USD, YEN, make_engine, make_pool, make_snapshot


@pytest.fixture
def standard_pool() -> PoolConfig:
    """Standard USD/YEN pool config."""
    return make_pool(variant=PoolVariant.STANDARD)


@pytest.fixture
def stable_pool() -> PoolConfig:
    """Stable pool config on the same pair."""
    return make_pool(variant=PoolVariant.STABLE)


@pytest.fixture
def concentrated_pool() -> PoolConfig:
    """Concentrated pool config on the same pair."""
    return make_pool(variant=PoolVariant.CONCENTRATED)


@pytest.fixture
def reference_snapshot() -> Snapshot:
    """Reserves (1,000,000, 2,000,000) with 1,000,000 shares outstanding."""
    return make_snapshot()


@pytest.fixture
def empty_snapshot() -> Snapshot:
    """A freshly created pool: no reserves, no shares."""
    return make_snapshot(0, 0, 0)


@pytest.fixture
def engine() -> PoolEngine:
    """Engine over a fresh ledger; Alice and Bob hold every demo token."""
    return make_engine(ALICE, BOB, tokens=(NTD, USD, YEN))
