"""Staked-token liquidity pool with a dynamic unstake fee."""

from lp_pool.config import DEFAULT_POOL_CONFIG, PoolConfig
from lp_pool.errors import (
    ArithmeticOverflow,
    ConfigurationError,
    FeeUnderflow,
    InsufficientLiquidity,
    InvalidAmount,
    PoolError,
    PoolStateError,
)
from lp_pool.pool import LiquidityPool, PoolState, SwapResult

__version__ = "0.1.0"
__all__ = [
    "DEFAULT_POOL_CONFIG",
    "ArithmeticOverflow",
    "ConfigurationError",
    "FeeUnderflow",
    "InsufficientLiquidity",
    "InvalidAmount",
    "LiquidityPool",
    "PoolConfig",
    "PoolError",
    "PoolState",
    "PoolStateError",
    "SwapResult",
    "__version__",
]
