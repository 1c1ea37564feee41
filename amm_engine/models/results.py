"""Result types returned by engine operations."""

from dataclasses import dataclass

from amm_engine.models.pool import Direction


@dataclass(frozen=True)
class SwapQuote:
    """Outcome of a swap computation."""

    direction: Direction
    amount_in: int
    fee_amount: int
    net_amount_in: int
    amount_out: int


@dataclass(frozen=True)
class DepositQuote:
    """Outcome of a deposit computation.

    Attributes:
        bootstrap: True if this was the first deposit (fixed issuance)
    """

    amount_a: int
    amount_b: int
    shares: int
    bootstrap: bool = False


@dataclass(frozen=True)
class WithdrawQuote:
    """Outcome of a withdrawal computation."""

    shares: int
    amount_a: int
    amount_b: int
