"""Pydantic models for the pool HTTP API.

Amounts travel as decimal strings so that full u64 values survive JSON
clients that parse numbers as doubles. Integers are accepted on input.
"""

from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, Field

from lp_pool.constants import U64_MAX
from lp_pool.pool import PoolState, SwapResult


def validate_u64(value: Any) -> str:
    """Validate that a value is a valid u64 decimal string.

    Args:
        value: Value to validate (string or int)

    Returns:
        Valid u64 as decimal string

    Raises:
        ValueError: If value is not a non-negative integer within u64 range
    """
    if isinstance(value, bool):
        raise ValueError("U64 must be string or int, got bool")

    if isinstance(value, int):
        int_value = value
    elif isinstance(value, str):
        try:
            int_value = int(value)
        except ValueError as err:
            raise ValueError(f"U64 must be a decimal integer string: '{value}'") from err
    else:
        raise ValueError(f"U64 must be string or int, got {type(value).__name__}")

    if int_value < 0:
        raise ValueError(f"U64 cannot be negative: {value}")
    if int_value > U64_MAX:
        raise ValueError(f"U64 overflow: {value} > 2^64-1")

    return str(int_value)


# 64-bit unsigned integer as decimal string (validated)
Uint64 = Annotated[
    str,
    BeforeValidator(validate_u64),
    Field(description="64-bit unsigned integer as decimal string"),
]


class AddLiquidityRequest(BaseModel):
    """Deposit of underlying tokens."""

    amount: Uint64 = Field(description="Underlying tokens to deposit")


class AddLiquidityResponse(BaseModel):
    lp_tokens: Uint64 = Field(alias="lpTokens", description="LP tokens minted")

    model_config = {"populate_by_name": True}


class RemoveLiquidityRequest(BaseModel):
    """Burn of LP tokens."""

    lp_tokens: Uint64 = Field(alias="lpTokens", description="LP tokens to burn")

    model_config = {"populate_by_name": True}


class RemoveLiquidityResponse(BaseModel):
    token_amount: Uint64 = Field(alias="tokenAmount")
    staked_token_amount: Uint64 = Field(alias="stakedTokenAmount")

    model_config = {"populate_by_name": True}


class SwapRequest(BaseModel):
    """Sale of staked tokens to the pool."""

    staked_token_amount: Uint64 = Field(alias="stakedTokenAmount")

    model_config = {"populate_by_name": True}


class SwapResponse(BaseModel):
    """Swap breakdown, for both quotes and executed swaps."""

    staked_token_amount: Uint64 = Field(alias="stakedTokenAmount")
    gross_amount: Uint64 = Field(alias="grossAmount", description="Tokens before fee")
    fee: Uint64 = Field(description="Fee rate scaled by 1_000_000")
    fee_amount: Uint64 = Field(alias="feeAmount")
    received: Uint64 = Field(description="Tokens paid out")

    model_config = {"populate_by_name": True}

    @classmethod
    def from_result(cls, result: SwapResult) -> "SwapResponse":
        return cls(
            staked_token_amount=result.staked_token_amount,
            gross_amount=result.gross_amount,
            fee=result.fee,
            fee_amount=result.fee_amount,
            received=result.received,
        )


class FeeResponse(BaseModel):
    fee: Uint64 = Field(description="Current fee rate scaled by 1_000_000")


class PoolStateResponse(BaseModel):
    """Reserves, LP supply and parameters of the pool."""

    token_reserve: Uint64 = Field(alias="tokenReserve")
    staked_token_reserve: Uint64 = Field(alias="stakedTokenReserve")
    total_lp_tokens: Uint64 = Field(alias="totalLpTokens")
    fee: Uint64
    price: Uint64
    fee_min: Uint64 = Field(alias="feeMin")
    fee_max: Uint64 = Field(alias="feeMax")
    liquidity_target: Uint64 = Field(alias="liquidityTarget")

    model_config = {"populate_by_name": True}

    @classmethod
    def from_state(
        cls, state: PoolState, price: int, fee_min: int, fee_max: int, liquidity_target: int
    ) -> "PoolStateResponse":
        return cls(
            token_reserve=state.token_reserve,
            staked_token_reserve=state.staked_token_reserve,
            total_lp_tokens=state.total_lp_tokens,
            fee=state.fee,
            price=price,
            fee_min=fee_min,
            fee_max=fee_max,
            liquidity_target=liquidity_target,
        )


class ErrorResponse(BaseModel):
    detail: str
    error: str = Field(description="Error kind, e.g. insufficient_liquidity")
