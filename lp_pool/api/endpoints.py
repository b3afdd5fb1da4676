"""API endpoints for the liquidity pool."""

import threading

import structlog
from fastapi import APIRouter, Depends

from lp_pool.config import PoolConfig
from lp_pool.models import (
    AddLiquidityRequest,
    AddLiquidityResponse,
    FeeResponse,
    PoolStateResponse,
    RemoveLiquidityRequest,
    RemoveLiquidityResponse,
    SwapRequest,
    SwapResponse,
)
from lp_pool.pool import LiquidityPool

logger = structlog.get_logger()

router = APIRouter(prefix="/pool")


class PoolHandle:
    """A pool together with the lock that serializes access to it.

    Each mutating operation reads and writes several interdependent fields,
    so every request (reads included) holds the lock for its whole duration.
    """

    def __init__(self, pool: LiquidityPool) -> None:
        self.pool = pool
        self.lock = threading.Lock()


def _create_default_handle() -> PoolHandle:
    """Create the served pool from LP_POOL_* environment variables."""
    config = PoolConfig.from_env()
    logger.info(
        "pool_created",
        price=config.price,
        fee_min=config.fee_min,
        fee_max=config.fee_max,
        liquidity_target=config.liquidity_target,
        clamp_fee_at_min=config.clamp_fee_at_min,
    )
    return PoolHandle(LiquidityPool.from_config(config))


_default_handle: PoolHandle | None = None
_default_handle_lock = threading.Lock()


def get_pool_handle() -> PoolHandle:
    """Dependency provider for the served pool.

    The pool is created on first use, so a bad LP_POOL_* variable surfaces
    as a ConfigurationError response instead of an import failure.

    Override this in tests to inject a fresh pool:
        app.dependency_overrides[get_pool_handle] = lambda: PoolHandle(pool)
    """
    global _default_handle
    with _default_handle_lock:
        if _default_handle is None:
            _default_handle = _create_default_handle()
        return _default_handle


@router.get("")
def get_state(handle: PoolHandle = Depends(get_pool_handle)) -> PoolStateResponse:
    """Current reserves, LP supply, fee and parameters."""
    with handle.lock:
        pool = handle.pool
        return PoolStateResponse.from_state(
            pool.snapshot(),
            price=pool.price,
            fee_min=pool.fee_min,
            fee_max=pool.fee_max,
            liquidity_target=pool.liquidity_target,
        )


@router.get("/fee")
def get_fee(handle: PoolHandle = Depends(get_pool_handle)) -> FeeResponse:
    with handle.lock:
        return FeeResponse(fee=handle.pool.calculate_fee())


@router.post("/liquidity/add")
def add_liquidity(
    request: AddLiquidityRequest,
    handle: PoolHandle = Depends(get_pool_handle),
) -> AddLiquidityResponse:
    """Deposit underlying tokens and mint LP tokens."""
    with handle.lock:
        minted = handle.pool.add_liquidity(int(request.amount))

    logger.info("add_liquidity_served", amount=request.amount, lp_tokens=minted)
    return AddLiquidityResponse(lp_tokens=minted)


@router.post("/liquidity/remove")
def remove_liquidity(
    request: RemoveLiquidityRequest,
    handle: PoolHandle = Depends(get_pool_handle),
) -> RemoveLiquidityResponse:
    """Burn LP tokens for a proportional share of both reserves."""
    with handle.lock:
        token_amount, staked_token_amount = handle.pool.remove_liquidity(int(request.lp_tokens))

    logger.info(
        "remove_liquidity_served",
        lp_tokens=request.lp_tokens,
        token_amount=token_amount,
        staked_token_amount=staked_token_amount,
    )
    return RemoveLiquidityResponse(
        token_amount=token_amount,
        staked_token_amount=staked_token_amount,
    )


@router.post("/swap/quote")
def quote_swap(
    request: SwapRequest,
    handle: PoolHandle = Depends(get_pool_handle),
) -> SwapResponse:
    """Price a swap at the current fee without executing it."""
    with handle.lock:
        result = handle.pool.quote_swap(int(request.staked_token_amount))
    return SwapResponse.from_result(result)


@router.post("/swap")
def swap(
    request: SwapRequest,
    handle: PoolHandle = Depends(get_pool_handle),
) -> SwapResponse:
    """Sell staked tokens to the pool for underlying tokens."""
    with handle.lock:
        result = handle.pool.execute_swap(int(request.staked_token_amount))

    logger.info(
        "swap_served",
        staked_token_amount=result.staked_token_amount,
        fee=result.fee,
        received=result.received,
    )
    return SwapResponse.from_result(result)
