"""Factory functions for creating test pools.

Usage:
    from tests.helpers import make_pool, make_funded_pool

    pool = make_funded_pool(100_000_000, price=2_000_000)
"""

from lp_pool.pool import LiquidityPool
from tests.helpers.constants import FEE_MAX, FEE_MIN, LIQUIDITY_TARGET, PRICE


def make_pool(
    price: int = PRICE,
    fee_min: int = FEE_MIN,
    fee_max: int = FEE_MAX,
    liquidity_target: int = LIQUIDITY_TARGET,
    clamp_fee_at_min: bool = True,
) -> LiquidityPool:
    """Create an empty pool with the reference parameters by default."""
    return LiquidityPool(
        price=price,
        fee_min=fee_min,
        fee_max=fee_max,
        liquidity_target=liquidity_target,
        clamp_fee_at_min=clamp_fee_at_min,
    )


def make_funded_pool(deposit: int, **params: int | bool) -> LiquidityPool:
    """Create a pool and make a first deposit of `deposit` tokens."""
    pool = make_pool(**params)  # type: ignore[arg-type]
    pool.add_liquidity(deposit)
    return pool
