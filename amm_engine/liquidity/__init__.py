"""Liquidity accounting: share issuance and redemption."""

from amm_engine.liquidity.issuance import (
    average_ratio_shares,
    min_ratio_shares,
    shares_for_deposit,
)
from amm_engine.liquidity.redemption import amounts_for_shares, redeem_shares

__all__ = [
    "shares_for_deposit",
    "min_ratio_shares",
    "average_ratio_shares",
    "redeem_shares",
    "amounts_for_shares",
]
