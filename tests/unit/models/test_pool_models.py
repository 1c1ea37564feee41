"""Tests for pool configuration and snapshot models."""

import dataclasses

import pytest

from amm_engine.errors import InvalidPoolType
from amm_engine.models.pool import (
    Direction,
    PoolVariant,
    Snapshot,
    derive_pool_authority,
)
from tests.helpers import USD, YEN, make_pool


class TestPoolVariant:
    """Tests for the tagged variant enum."""

    @pytest.mark.parametrize(
        ("code", "variant"),
        [(0, PoolVariant.STANDARD), (1, PoolVariant.STABLE), (2, PoolVariant.CONCENTRATED)],
    )
    def test_from_code(self, code, variant):
        assert PoolVariant.from_code(code) is variant

    def test_from_variant(self):
        assert PoolVariant.from_code(PoolVariant.STABLE) is PoolVariant.STABLE

    @pytest.mark.parametrize("code", [3, -1, 100])
    def test_unknown_code(self, code):
        with pytest.raises(InvalidPoolType):
            PoolVariant.from_code(code)

    @pytest.mark.parametrize("code", [True, "1", 1.0, None])
    def test_non_integer_code(self, code):
        with pytest.raises(InvalidPoolType):
            PoolVariant.from_code(code)

    def test_label(self):
        assert PoolVariant.CONCENTRATED.label == "Concentrated"


class TestDirection:
    def test_from_flag(self):
        assert Direction.from_flag(True) is Direction.A_TO_B
        assert Direction.from_flag(False) is Direction.B_TO_A


class TestPoolConfig:
    """Tests for PoolConfig."""

    def test_key(self):
        assert make_pool().key == (USD, YEN)

    def test_frozen(self):
        """Fee rate and variant cannot change after creation."""
        pool = make_pool()
        with pytest.raises(dataclasses.FrozenInstanceError):
            pool.fee_rate = 0  # type: ignore[misc]

    def test_token_in_out(self):
        pool = make_pool()
        assert pool.token_in_out(Direction.A_TO_B) == (USD, YEN)
        assert pool.token_in_out(Direction.B_TO_A) == (YEN, USD)

    def test_authority_deterministic(self):
        assert make_pool().authority == make_pool().authority
        assert make_pool().authority == derive_pool_authority(USD, YEN, 255)

    def test_authority_depends_on_order(self):
        assert derive_pool_authority(USD, YEN, 255) != derive_pool_authority(YEN, USD, 255)

    def test_authority_depends_on_bump(self):
        assert derive_pool_authority(USD, YEN, 255) != derive_pool_authority(USD, YEN, 254)

    @pytest.mark.parametrize(("first", "second"), [(("a", "aa"), ("aa", "a")), (("ab", "c"), ("a", "bc"))])
    def test_authority_unambiguous_across_id_boundaries(self, first, second):
        """Pairs whose ids concatenate to the same text still get distinct authorities."""
        assert derive_pool_authority(*first, 255) != derive_pool_authority(*second, 255)


class TestSnapshot:
    """Tests for Snapshot."""

    def test_oriented(self):
        snapshot = Snapshot(reserve_a=1, reserve_b=2, lp_supply=3)
        assert snapshot.oriented(Direction.A_TO_B) == (1, 2)
        assert snapshot.oriented(Direction.B_TO_A) == (2, 1)

    def test_is_bootstrap(self):
        assert Snapshot(0, 0, 0).is_bootstrap
        assert not Snapshot(1, 1, 1).is_bootstrap

    def test_frozen(self):
        snapshot = Snapshot(1, 2, 3)
        with pytest.raises(dataclasses.FrozenInstanceError):
            snapshot.reserve_a = 10  # type: ignore[misc]

    @pytest.mark.parametrize("bad", [-1, 1.5, "1", True])
    def test_rejects_invalid_values(self, bad):
        with pytest.raises(ValueError):
            Snapshot(reserve_a=bad, reserve_b=1, lp_supply=1)
