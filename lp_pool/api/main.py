"""FastAPI application serving a single liquidity pool.

The pool lives in process memory; restarting the server starts from an
empty pool.
"""

import os

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from lp_pool.api.endpoints import router
from lp_pool.errors import (
    ArithmeticOverflow,
    ConfigurationError,
    FeeUnderflow,
    InsufficientLiquidity,
    InvalidAmount,
    PoolError,
    PoolStateError,
)

logger = structlog.get_logger()

# Configuration from environment variables with sensible defaults
HOST = os.environ.get("LP_POOL_HOST", "0.0.0.0")
PORT = int(os.environ.get("LP_POOL_PORT", "8000"))
DEBUG = os.environ.get("LP_POOL_DEBUG", "false").lower() in ("true", "1", "yes")

# HTTP status per error kind; unlisted PoolErrors map to 400
ERROR_STATUS: dict[type[PoolError], int] = {
    InsufficientLiquidity: 409,
    PoolStateError: 409,
    FeeUnderflow: 409,
    ArithmeticOverflow: 422,
    InvalidAmount: 422,
    ConfigurationError: 500,
}

app = FastAPI(
    title="LP Pool",
    description="Staked-token liquidity pool with a dynamic unstake fee",
    version="0.1.0",
)


@app.exception_handler(PoolError)
async def pool_error_handler(request: Request, exc: PoolError) -> JSONResponse:
    """Report a rejected pool operation. The pool state is unchanged."""
    status_code = ERROR_STATUS.get(type(exc), 400)
    logger.warning(
        "pool_operation_rejected",
        path=request.url.path,
        error=exc.kind,
        detail=str(exc),
        status_code=status_code,
    )
    return JSONResponse(status_code=status_code, content={"detail": str(exc), "error": exc.kind})


app.include_router(router)


@app.get("/health")
async def health() -> dict[str, object]:
    """Health check endpoint."""
    return {"status": "ok"}


def run() -> None:
    """Run the pool API server.

    Configuration via environment variables:
    - LP_POOL_HOST: Host to bind to (default: 0.0.0.0)
    - LP_POOL_PORT: Port to bind to (default: 8000)
    - LP_POOL_DEBUG: Enable debug/reload mode (default: false)
    - LP_POOL_PRICE, LP_POOL_FEE_MIN, LP_POOL_FEE_MAX,
      LP_POOL_LIQUIDITY_TARGET, LP_POOL_CLAMP_FEE: pool parameters
    """
    uvicorn.run(
        "lp_pool.api.main:app",
        host=HOST,
        port=PORT,
        reload=DEBUG,
    )


if __name__ == "__main__":
    run()
