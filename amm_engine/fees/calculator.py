"""Fee model for swaps.

Uses SafeInt for arithmetic operations to prevent:
- Widened-product overflow (gross * fee_rate is checked against u128)
- Underflow of net = gross - fee (cannot happen for rates below the
  denominator, still checked)
"""

from __future__ import annotations

from typing import Protocol

from amm_engine.config import DEFAULT_ENGINE_CONFIG, EngineConfig
from amm_engine.errors import InvalidAmount
from amm_engine.fees.result import FeeResult
from amm_engine.safe_int import S, mul_div


class FeeCalculator(Protocol):
    """Protocol for fee calculation.

    Implementations split a gross input into fee and net amounts.
    """

    def calculate_fee(self, gross: int, fee_rate: int) -> FeeResult:
        """Calculate the fee taken from a gross input amount.

        Args:
            gross: Amount paid in by the trader
            fee_rate: Fee rate in parts-per-hundred-thousand

        Returns:
            FeeResult with fee and net amounts
        """
        ...


class DefaultFeeCalculator:
    """Default fee model.

        fee = floor(gross * fee_rate / fee_denominator)
        net = gross - fee

    Attributes:
        config: Engine configuration (supplies fee_denominator)
    """

    def __init__(self, config: EngineConfig | None = None):
        self.config = config or DEFAULT_ENGINE_CONFIG

    def calculate_fee(self, gross: int, fee_rate: int) -> FeeResult:
        """Calculate the fee taken from a gross input amount.

        Raises:
            InvalidAmount: If gross is negative or fee_rate is outside
                [0, fee_denominator)
            ArithmeticOverflow: If gross exceeds u64
        """
        denominator = self.config.fee_denominator
        if gross < 0:
            raise InvalidAmount(f"Gross amount cannot be negative: {gross}")
        if not 0 <= fee_rate < denominator:
            raise InvalidAmount(f"Fee rate {fee_rate} outside [0, {denominator})")

        S(gross).to_u64()
        if fee_rate == 0:
            return FeeResult.zero_fee(gross)

        fee = mul_div(gross, fee_rate, denominator)
        net = (S(gross) - S(fee)).to_u64()
        return FeeResult(gross=gross, fee=fee, net=net)


DEFAULT_FEE_CALCULATOR = DefaultFeeCalculator()


def calculate_fee(gross: int, fee_rate: int) -> FeeResult:
    """Split gross into (fee, net) with the default configuration."""
    return DEFAULT_FEE_CALCULATOR.calculate_fee(gross, fee_rate)
