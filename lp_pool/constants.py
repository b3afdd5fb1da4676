"""Pool constants.

Centralizes the fixed-point scale and the reference pool parameters.
"""

# Fixed-point scale shared by price and fee rates (1_000_000 = 1.0)
SCALE = 1_000_000

# Amounts, rates and LP supply are unsigned 64-bit quantities
U64_MAX = 2**64 - 1

# Reference parameters used by the demo and as configuration defaults
# 1.5 underlying tokens per staked token
DEFAULT_PRICE = 1_500_000
# 0.1% fee once the reserve is well above target
DEFAULT_FEE_MIN = 1_000
# 9% fee while the reserve is below target
DEFAULT_FEE_MAX = 90_000
DEFAULT_LIQUIDITY_TARGET = 90_000_000
