"""Shared type definitions for AMM engine models."""

import re
from typing import Annotated, Any

from pydantic import BeforeValidator, Field

from amm_engine.safe_int import U64_MAX

_TOKEN_ID_RE = re.compile(r"^[A-Za-z0-9_\-]{1,64}$")


def validate_u64(value: Any) -> int:
    """Validate that a value is a valid u64 amount.

    Accepts ints and decimal strings (clients holding 64-bit amounts often
    cannot represent them as JSON numbers).

    Returns:
        The amount as int

    Raises:
        ValueError: If value is not a non-negative integer within u64 range
    """
    if isinstance(value, bool):
        raise ValueError("U64 must be an integer, got bool")

    if isinstance(value, str):
        try:
            value = int(value)
        except ValueError as err:
            raise ValueError(f"U64 must be a decimal integer string: '{value}'") from err

    if not isinstance(value, int):
        raise ValueError(f"U64 must be string or int, got {type(value).__name__}")

    if value < 0:
        raise ValueError(f"U64 cannot be negative: {value}")
    if value > U64_MAX:
        raise ValueError(f"U64 overflow: {value} > 2^64-1")

    return value


# 64-bit unsigned amount (native balance width)
Uint64 = Annotated[
    int,
    BeforeValidator(validate_u64),
    Field(description="64-bit unsigned integer amount"),
]

# Token / mint identity (opaque to the math core)
TokenId = Annotated[str, Field(pattern=_TOKEN_ID_RE.pattern)]


def normalize_token_id(token: str) -> str:
    """Normalize a token identity by stripping surrounding whitespace.

    Identities are case sensitive (base58 keys are), so no case folding.
    """
    return token.strip()
