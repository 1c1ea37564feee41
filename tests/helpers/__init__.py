"""Test helpers module for shared test utilities.

This module consolidates common test utilities to reduce duplication:
- constants: Token ids, share mints, users
- factories: Pool, snapshot and engine factory functions
"""

from tests.helpers.constants import (
    ALICE,
    BOB,
    LP_NTD_USD,
    LP_NTD_YEN,
    LP_USD_YEN,
    NTD,
    USD,
    USER_FUNDING,
    YEN,
)
from tests.helpers.factories import make_engine, make_pool, make_snapshot, seed_pool

__all__ = [
    # Constants
    "NTD",
    "USD",
    "YEN",
    "LP_NTD_USD",
    "LP_USD_YEN",
    "LP_NTD_YEN",
    "ALICE",
    "BOB",
    "USER_FUNDING",
    # Factories
    "make_pool",
    "make_snapshot",
    "make_engine",
    "seed_pool",
]
