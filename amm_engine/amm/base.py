"""Base class for pricing policies."""

from abc import ABC, abstractmethod

from amm_engine.errors import InsufficientLiquidity, InvalidAmount


class PricingPolicy(ABC):
    """Abstract base class for per-variant pricing.

    A policy turns a net input amount and a reserve pair into an output
    amount. Fees are taken before the policy is called; slippage and
    solvency post-conditions are checked by the caller.
    """

    name: str = "abstract"

    def get_amount_out(self, reserve_in: int, reserve_out: int, net_in: int) -> int:
        """Calculate output amount for a given net input.

        Args:
            reserve_in: Reserve of input token, read before the swap's transfers
            reserve_out: Reserve of output token, read before the swap's transfers
            net_in: Input amount after fee extraction

        Returns:
            Output token amount, strictly less than reserve_out

        Raises:
            InsufficientLiquidity: If either reserve is zero
            InvalidAmount: If net_in is not positive
        """
        if reserve_in <= 0 or reserve_out <= 0:
            raise InsufficientLiquidity(
                f"Empty reserve: reserve_in={reserve_in}, reserve_out={reserve_out}"
            )
        if net_in <= 0:
            raise InvalidAmount(f"Net input must be positive: {net_in}")
        return self._amount_out(reserve_in, reserve_out, net_in)

    @abstractmethod
    def _amount_out(self, reserve_in: int, reserve_out: int, net_in: int) -> int:
        """Variant formula; preconditions already checked."""
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
