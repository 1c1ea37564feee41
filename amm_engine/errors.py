"""AMM engine error classes.

Each error carries a stable ``code`` used by the HTTP layer and in logs.
Every error is terminal for the operation that raised it.
"""


class AMMError(Exception):
    """Base error for AMM operations."""

    code = "amm_error"


class InvalidAmount(AMMError):
    """Amount is zero, out of range, or yields zero shares."""

    code = "invalid_amount"


class InvalidPoolType(AMMError):
    """Variant code is not one of Standard, Stable, Concentrated."""

    code = "invalid_pool_type"


class InsufficientLiquidity(AMMError):
    """A reserve is empty or cannot cover the computed output."""

    code = "insufficient_liquidity"


class InsufficientLpBalance(AMMError):
    """Caller holds fewer shares than requested for redemption."""

    code = "insufficient_lp_balance"


class SlippageExceeded(AMMError):
    """Computed output is below the caller-supplied minimum."""

    code = "slippage_exceeded"


class InvalidTokenMint(AMMError):
    """Account or vault token does not match the pool configuration."""

    code = "invalid_token_mint"


class InvalidVaultAuthority(AMMError):
    """Vault is not owned by the pool authority."""

    code = "invalid_vault_authority"


class PoolNotFound(AMMError):
    """No pool is registered for the ordered token pair."""

    code = "pool_not_found"


class PoolAlreadyExists(AMMError):
    """A pool is already registered for the ordered token pair."""

    code = "pool_already_exists"


class InsufficientFunds(AMMError):
    """Ledger account cannot cover a requested movement."""

    code = "insufficient_funds"
