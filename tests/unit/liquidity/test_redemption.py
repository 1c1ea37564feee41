"""Tests for proportional share redemption."""

import pytest

from amm_engine.errors import (
    InsufficientLiquidity,
    InsufficientLpBalance,
    InvalidAmount,
    SlippageExceeded,
)
from amm_engine.liquidity import amounts_for_shares, redeem_shares
from tests.helpers import make_snapshot


class TestAmountsForShares:
    """Tests for floor(R * shares / S)."""

    def test_quarter(self, reference_snapshot):
        assert amounts_for_shares(250_000, reference_snapshot) == (250_000, 500_000)

    def test_full_supply(self, reference_snapshot):
        assert amounts_for_shares(1_000_000, reference_snapshot) == (1_000_000, 2_000_000)

    def test_floors_in_pool_favour(self):
        # 10 * 1 / 3 = 3.33
        assert amounts_for_shares(1, make_snapshot(10, 10, 3)) == (3, 3)


class TestRedeemShares:
    """Tests for the guarded withdrawal computation."""

    def test_basic(self, reference_snapshot):
        assert redeem_shares(250_000, 250_000, reference_snapshot) == (250_000, 500_000)

    def test_minimums_met(self, reference_snapshot):
        assert redeem_shares(
            250_000, 1_000_000, reference_snapshot, minimum_a=250_000, minimum_b=500_000
        ) == (250_000, 500_000)

    def test_zero_shares(self, reference_snapshot):
        with pytest.raises(InvalidAmount):
            redeem_shares(0, 1_000, reference_snapshot)

    def test_insufficient_balance(self, reference_snapshot):
        with pytest.raises(InsufficientLpBalance):
            redeem_shares(1_001, 1_000, reference_snapshot)

    def test_slippage_a(self, reference_snapshot):
        with pytest.raises(SlippageExceeded):
            redeem_shares(250_000, 250_000, reference_snapshot, minimum_a=250_001)

    def test_slippage_b(self, reference_snapshot):
        with pytest.raises(SlippageExceeded):
            redeem_shares(250_000, 250_000, reference_snapshot, minimum_b=500_001)

    def test_no_outstanding_shares(self, empty_snapshot):
        with pytest.raises(InsufficientLiquidity):
            redeem_shares(10, 10, empty_snapshot)

    def test_more_than_supply(self):
        """Redeeming more than the supply would exceed the reserves."""
        with pytest.raises(InsufficientLiquidity):
            redeem_shares(200, 200, make_snapshot(1_000, 1_000, 100))

    def test_more_than_supply_at_scale(self):
        """Outputs too wide for u64 still report the reserve shortfall."""
        with pytest.raises(InsufficientLiquidity):
            redeem_shares(2**60, 2**60, make_snapshot(2**40, 2**40, 1))


class TestGuardOrder:
    """InsufficientLpBalance, then SlippageExceeded, then InsufficientLiquidity."""

    def test_balance_before_slippage(self, reference_snapshot):
        with pytest.raises(InsufficientLpBalance):
            redeem_shares(1_000, 100, reference_snapshot, minimum_a=10**12)

    def test_slippage_before_liquidity(self):
        """Outputs above the reserves and below the minimums report slippage."""
        with pytest.raises(SlippageExceeded):
            redeem_shares(200, 200, make_snapshot(1_000, 1_000, 100), minimum_a=5_000)
