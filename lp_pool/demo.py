#!/usr/bin/env python3
"""Walk a pool through a short deposit / swap / withdraw sequence.

Usage:
    python -m lp_pool.demo
    python -m lp_pool.demo --price 2000000 --verbose
"""

from __future__ import annotations

import argparse
import logging

import structlog

from lp_pool.config import PoolConfig
from lp_pool.constants import (
    DEFAULT_FEE_MAX,
    DEFAULT_FEE_MIN,
    DEFAULT_LIQUIDITY_TARGET,
    DEFAULT_PRICE,
)
from lp_pool.errors import PoolError
from lp_pool.pool import LiquidityPool

logger = structlog.get_logger()


def run_demo(pool: LiquidityPool) -> list[str]:
    """Run the reference sequence against pool, returning one line per step."""
    lines = [repr(pool)]

    minted = pool.add_liquidity(100_000_000)
    lines.append(f"{minted} LpToken")

    received = pool.swap(6_000_000)
    lines.append(f"{received} Token")

    minted = pool.add_liquidity(10_000_000)
    lines.append(f"{minted} LpToken")

    received = pool.swap(30_000_000)
    lines.append(f"{received} Token")

    tokens_out, staked_tokens_out = pool.remove_liquidity(109_999_100)
    lines.append(f"{tokens_out} Token {staked_tokens_out} StakedToken")

    return lines


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Run the liquidity pool demo sequence")
    parser.add_argument(
        "--price",
        type=int,
        default=DEFAULT_PRICE,
        help=f"Staked token price, scaled by 1e6 (default: {DEFAULT_PRICE})",
    )
    parser.add_argument(
        "--fee-min",
        type=int,
        default=DEFAULT_FEE_MIN,
        help=f"Minimum fee rate, scaled by 1e6 (default: {DEFAULT_FEE_MIN})",
    )
    parser.add_argument(
        "--fee-max",
        type=int,
        default=DEFAULT_FEE_MAX,
        help=f"Maximum fee rate, scaled by 1e6 (default: {DEFAULT_FEE_MAX})",
    )
    parser.add_argument(
        "--liquidity-target",
        type=int,
        default=DEFAULT_LIQUIDITY_TARGET,
        help=f"Token reserve target (default: {DEFAULT_LIQUIDITY_TARGET})",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )

    args = parser.parse_args(argv)

    log_level = logging.DEBUG if args.verbose else logging.WARNING
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
    )

    try:
        config = PoolConfig(
            price=args.price,
            fee_min=args.fee_min,
            fee_max=args.fee_max,
            liquidity_target=args.liquidity_target,
        )
        lines = run_demo(LiquidityPool.from_config(config))
    except PoolError as e:
        logger.error("demo_failed", error=e.kind, detail=str(e))
        print(f"Error: {e}")
        return 1

    for line in lines:
        print(line)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
