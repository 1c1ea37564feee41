"""Fee model for the AMM engine.

Usage:
    from amm_engine.fees import calculate_fee

    result = calculate_fee(gross=10_000, fee_rate=300)
    assert (result.fee, result.net) == (30, 9_970)
"""

from amm_engine.fees.calculator import (
    DEFAULT_FEE_CALCULATOR,
    DefaultFeeCalculator,
    FeeCalculator,
    calculate_fee,
)
from amm_engine.fees.result import FeeResult

__all__ = [
    "FeeCalculator",
    "DefaultFeeCalculator",
    "DEFAULT_FEE_CALCULATOR",
    "calculate_fee",
    "FeeResult",
]
