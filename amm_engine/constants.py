"""Protocol constants for the AMM engine.

Centralizes the fixed parameters of every pool variant. Operations read
these through EngineConfig (amm_engine.config) rather than inline literals.
"""

# Fee rates are expressed in parts-per-hundred-thousand (300 = 0.300%)
FEE_DENOMINATOR = 100_000

# Fee rate per variant, fixed at pool creation
STANDARD_FEE_RATE = 300  # 0.3%
STABLE_FEE_RATE = 50  # 0.05%
CONCENTRATED_FEE_RATE = 500  # 0.5%

# Swap output bonus: floor(net_in / divisor), capped below the output reserve
STABLE_SWAP_BONUS_DIVISOR = 20  # 5%
CONCENTRATED_SWAP_BONUS_DIVISOR = 10  # 10%

# Share issuance multiplier in percent, applied to the Standard ratio
CONCENTRATED_DEPOSIT_BONUS_PERCENT = 110

# Shares issued to the first liquidity provider, regardless of amounts
BOOTSTRAP_SHARES = 1_000_000

# Seed prefix for the pool signing identity
POOL_AUTHORITY_SEED = b"pool_authority"

# Opaque address-derivation bump used when the caller does not supply one
DEFAULT_BUMP = 255
