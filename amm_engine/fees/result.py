"""Fee calculation result type."""

from dataclasses import dataclass


@dataclass(frozen=True)
class FeeResult:
    """Split of a gross input amount into fee and net amounts.

    The fee is reported outward for bookkeeping; the engine never retains it
    separately (it stays in the input reserve).

    Attributes:
        gross: Amount the trader pays in
        fee: floor(gross * fee_rate / denominator)
        net: gross - fee, the amount priced against the reserves
    """

    gross: int
    fee: int
    net: int

    @classmethod
    def zero_fee(cls, gross: int) -> "FeeResult":
        """Create a result with no fee extracted."""
        return cls(gross=gross, fee=0, net=gross)
