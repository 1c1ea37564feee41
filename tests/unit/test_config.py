"""Tests for the engine configuration and variant table."""

import dataclasses

import pytest

from amm_engine.config import DEFAULT_ENGINE_CONFIG, DepositFormula, EngineConfig
from amm_engine.errors import InvalidPoolType
from amm_engine.models.pool import PoolVariant
from tests.helpers import LP_USD_YEN, USD, YEN


class TestDefaultTable:
    """Tests for the fixed variant table."""

    def test_fee_rates(self):
        rates = {variant: DEFAULT_ENGINE_CONFIG.policy(variant).fee_rate for variant in PoolVariant}
        assert rates == {
            PoolVariant.STANDARD: 300,
            PoolVariant.STABLE: 50,
            PoolVariant.CONCENTRATED: 500,
        }

    def test_swap_bonus(self):
        assert DEFAULT_ENGINE_CONFIG.policy(PoolVariant.STANDARD).swap_bonus_divisor is None
        assert DEFAULT_ENGINE_CONFIG.policy(PoolVariant.STABLE).swap_bonus_divisor == 20
        assert DEFAULT_ENGINE_CONFIG.policy(PoolVariant.CONCENTRATED).swap_bonus_divisor == 10

    def test_deposit_rules(self):
        stable = DEFAULT_ENGINE_CONFIG.policy(PoolVariant.STABLE)
        concentrated = DEFAULT_ENGINE_CONFIG.policy(PoolVariant.CONCENTRATED)
        assert stable.deposit_formula is DepositFormula.AVERAGE_RATIO
        assert concentrated.deposit_formula is DepositFormula.MIN_RATIO
        assert concentrated.deposit_bonus_percent == 110

    def test_scalars(self):
        assert DEFAULT_ENGINE_CONFIG.bootstrap_shares == 1_000_000
        assert DEFAULT_ENGINE_CONFIG.fee_denominator == 100_000

    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            DEFAULT_ENGINE_CONFIG.policies[PoolVariant.STANDARD] = None  # type: ignore[index]

    def test_config_is_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            DEFAULT_ENGINE_CONFIG.bootstrap_shares = 1  # type: ignore[misc]


class TestNewPool:
    """Tests for EngineConfig.new_pool."""

    def test_builds_pool(self):
        pool = EngineConfig().new_pool(USD, YEN, LP_USD_YEN, 2, bump=7)
        assert pool.variant is PoolVariant.CONCENTRATED
        assert pool.fee_rate == 500
        assert pool.bump == 7

    def test_unknown_variant(self):
        with pytest.raises(InvalidPoolType):
            EngineConfig().new_pool(USD, YEN, LP_USD_YEN, 9)

    def test_bump_out_of_range(self):
        with pytest.raises(ValueError):
            EngineConfig().new_pool(USD, YEN, LP_USD_YEN, 0, bump=256)
