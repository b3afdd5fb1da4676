"""Staked-token liquidity pool.

The pool holds the underlying token (deposited by liquidity providers) and
the staked-token derivative (accumulated from swaps). Swaps convert staked
tokens into underlying tokens at the configured price minus a dynamic fee;
the fee stays in the token reserve and accrues to LP holders.

Rounding always favors the pool:
- Minting LP tokens rounds down
- Withdrawals round the charge against the reserves up
- Swap output and fee amounts round down
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from lp_pool.config import PoolConfig
from lp_pool.constants import SCALE
from lp_pool.errors import (
    ArithmeticOverflow,
    InsufficientLiquidity,
    InvalidAmount,
    PoolStateError,
)
from lp_pool.fees import calculate_fee
from lp_pool.safe_int import S, SafeInt, U64Overflow

logger = structlog.get_logger()


@dataclass(frozen=True)
class SwapResult:
    """Breakdown of a swap of staked tokens into underlying tokens."""

    staked_token_amount: int
    # Underlying tokens at the oracle price, before the fee
    gross_amount: int
    # Fee rate applied (scaled by SCALE)
    fee: int
    fee_amount: int
    received: int


@dataclass(frozen=True)
class PoolState:
    """Point-in-time view of a pool's mutable state."""

    token_reserve: int
    staked_token_reserve: int
    total_lp_tokens: int
    fee: int


def _require_amount(name: str, value: int) -> SafeInt:
    if not isinstance(value, int) or isinstance(value, bool):
        raise InvalidAmount(f"{name} must be an integer, got {type(value).__name__}")
    amount = S(value)
    if not amount.is_u64():
        raise InvalidAmount(f"{name} out of u64 range: {value}")
    return amount


def _to_u64(value: SafeInt, what: str) -> int:
    try:
        return value.to_u64()
    except U64Overflow as err:
        raise ArithmeticOverflow(f"{what} overflows u64: {value}") from err


class LiquidityPool:
    """Two-asset pool exchanging staked tokens for underlying tokens.

    Not thread-safe: callers sharing a pool must serialize access.

    Attributes:
        token_reserve: Underlying tokens held by the pool
        staked_token_reserve: Staked tokens held by the pool
        total_lp_tokens: LP shares outstanding
        config: Immutable pool parameters
    """

    def __init__(
        self,
        price: int,
        fee_min: int,
        fee_max: int,
        liquidity_target: int,
        *,
        clamp_fee_at_min: bool = True,
    ) -> None:
        """Create an empty pool.

        Raises:
            ConfigurationError: If the parameters are invalid
        """
        self.config = PoolConfig(
            price=price,
            fee_min=fee_min,
            fee_max=fee_max,
            liquidity_target=liquidity_target,
            clamp_fee_at_min=clamp_fee_at_min,
        )
        self.token_reserve = 0
        self.staked_token_reserve = 0
        self.total_lp_tokens = 0

    @classmethod
    def from_config(cls, config: PoolConfig) -> LiquidityPool:
        return cls(
            price=config.price,
            fee_min=config.fee_min,
            fee_max=config.fee_max,
            liquidity_target=config.liquidity_target,
            clamp_fee_at_min=config.clamp_fee_at_min,
        )

    @property
    def price(self) -> int:
        return self.config.price

    @property
    def fee_min(self) -> int:
        return self.config.fee_min

    @property
    def fee_max(self) -> int:
        return self.config.fee_max

    @property
    def liquidity_target(self) -> int:
        return self.config.liquidity_target

    def __repr__(self) -> str:
        return (
            f"LiquidityPool(token_reserve={self.token_reserve}, "
            f"staked_token_reserve={self.staked_token_reserve}, "
            f"total_lp_tokens={self.total_lp_tokens}, price={self.price}, "
            f"fee_min={self.fee_min}, fee_max={self.fee_max}, "
            f"liquidity_target={self.liquidity_target})"
        )

    def add_liquidity(self, amount: int) -> int:
        """Deposit underlying tokens and mint LP tokens.

        The first deposit mints 1:1. Later deposits mint in proportion to the
        current token reserve, rounding down.

        Args:
            amount: Underlying tokens to deposit

        Returns:
            LP tokens minted

        Raises:
            InvalidAmount: If amount is not a u64 integer
            PoolStateError: If LP shares exist but the token reserve is empty
            ArithmeticOverflow: If the reserve or LP supply would exceed u64
        """
        deposit = _require_amount("amount", amount)

        if self.total_lp_tokens == 0:
            minted = deposit
        else:
            if self.token_reserve == 0:
                logger.warning(
                    "add_liquidity_rejected",
                    reason="empty_token_reserve",
                    total_lp_tokens=self.total_lp_tokens,
                )
                raise PoolStateError(
                    f"Cannot price deposit: {self.total_lp_tokens} LP tokens outstanding "
                    "against an empty token reserve"
                )
            minted = deposit * self.total_lp_tokens // self.token_reserve

        new_token_reserve = _to_u64(deposit + self.token_reserve, "token_reserve")
        new_total_lp_tokens = _to_u64(minted + self.total_lp_tokens, "total_lp_tokens")

        self.token_reserve = new_token_reserve
        self.total_lp_tokens = new_total_lp_tokens

        logger.debug(
            "liquidity_added",
            amount=deposit.value,
            lp_tokens_minted=minted.value,
            token_reserve=self.token_reserve,
            total_lp_tokens=self.total_lp_tokens,
        )
        return minted.value

    def remove_liquidity(self, lp_tokens: int) -> tuple[int, int]:
        """Burn LP tokens and withdraw a proportional share of both reserves.

        Each withdrawn amount is ceil(lp_tokens * reserve / total_lp_tokens).

        Args:
            lp_tokens: LP tokens to burn

        Returns:
            Tuple of (token_amount, staked_token_amount) withdrawn

        Raises:
            InvalidAmount: If lp_tokens is not a u64 integer
            InsufficientLiquidity: If lp_tokens exceeds the LP supply or a
                withdrawal exceeds its reserve
        """
        burn = _require_amount("lp_tokens", lp_tokens)

        if self.total_lp_tokens == 0 or burn > self.total_lp_tokens:
            logger.warning(
                "remove_liquidity_rejected",
                lp_tokens=burn.value,
                total_lp_tokens=self.total_lp_tokens,
            )
            raise InsufficientLiquidity(
                f"Cannot burn {burn} LP tokens: only {self.total_lp_tokens} outstanding"
            )

        token_amount = (burn * self.token_reserve).ceiling_div(self.total_lp_tokens)
        staked_token_amount = (burn * self.staked_token_reserve).ceiling_div(self.total_lp_tokens)

        new_token_reserve = S(self.token_reserve).checked_sub(token_amount)
        new_staked_token_reserve = S(self.staked_token_reserve).checked_sub(staked_token_amount)
        if new_token_reserve is None or new_staked_token_reserve is None:
            logger.warning(
                "remove_liquidity_rejected",
                lp_tokens=burn.value,
                token_amount=token_amount.value,
                staked_token_amount=staked_token_amount.value,
                token_reserve=self.token_reserve,
                staked_token_reserve=self.staked_token_reserve,
            )
            raise InsufficientLiquidity(
                f"Withdrawal of {token_amount} tokens / {staked_token_amount} staked tokens "
                f"exceeds reserves {self.token_reserve} / {self.staked_token_reserve}"
            )

        self.token_reserve = new_token_reserve.value
        self.staked_token_reserve = new_staked_token_reserve.value
        self.total_lp_tokens = (S(self.total_lp_tokens) - burn).value

        logger.debug(
            "liquidity_removed",
            lp_tokens=burn.value,
            token_amount=token_amount.value,
            staked_token_amount=staked_token_amount.value,
            token_reserve=self.token_reserve,
            staked_token_reserve=self.staked_token_reserve,
            total_lp_tokens=self.total_lp_tokens,
        )
        return token_amount.value, staked_token_amount.value

    def quote_swap(self, staked_token_amount: int) -> SwapResult:
        """Price a swap without touching the pool.

        The fee rate is taken from the current reserve, i.e. before the
        swap's own effect on it.

        Args:
            staked_token_amount: Staked tokens to sell to the pool

        Returns:
            SwapResult with gross amount, fee and net amount received

        Raises:
            InvalidAmount: If staked_token_amount is not a u64 integer
            ArithmeticOverflow: If the gross amount exceeds u64
            FeeUnderflow: If the unclamped fee curve drops below zero
        """
        staked = _require_amount("staked_token_amount", staked_token_amount)
        fee = self.calculate_fee()

        gross = S(_to_u64(staked * self.price // SCALE, "gross token amount"))
        fee_amount = gross * fee // SCALE
        received = gross - fee_amount

        return SwapResult(
            staked_token_amount=staked.value,
            gross_amount=gross.value,
            fee=fee,
            fee_amount=fee_amount.value,
            received=received.value,
        )

    def swap(self, staked_token_amount: int) -> int:
        """Sell staked tokens to the pool for underlying tokens.

        Args:
            staked_token_amount: Staked tokens to sell

        Returns:
            Underlying tokens paid out (after fee)

        Raises:
            InvalidAmount: If staked_token_amount is not a u64 integer
            InsufficientLiquidity: If the payout exceeds the token reserve
            FeeUnderflow: If the unclamped fee curve drops below zero
            ArithmeticOverflow: If the staked reserve would exceed u64
        """
        return self.execute_swap(staked_token_amount).received

    def execute_swap(self, staked_token_amount: int) -> SwapResult:
        """Like swap(), but returns the full SwapResult breakdown."""
        result = self.quote_swap(staked_token_amount)

        new_token_reserve = S(self.token_reserve).checked_sub(result.received)
        if new_token_reserve is None:
            logger.warning(
                "swap_rejected",
                staked_token_amount=result.staked_token_amount,
                received=result.received,
                token_reserve=self.token_reserve,
            )
            raise InsufficientLiquidity(
                f"Swap pays out {result.received} tokens but reserve holds {self.token_reserve}"
            )
        new_staked_token_reserve = _to_u64(
            S(self.staked_token_reserve) + result.staked_token_amount, "staked_token_reserve"
        )

        self.token_reserve = new_token_reserve.value
        self.staked_token_reserve = new_staked_token_reserve

        logger.debug(
            "swap_executed",
            staked_token_amount=result.staked_token_amount,
            gross_amount=result.gross_amount,
            fee=result.fee,
            fee_amount=result.fee_amount,
            received=result.received,
            token_reserve=self.token_reserve,
            staked_token_reserve=self.staked_token_reserve,
        )
        return result

    def calculate_fee(self) -> int:
        """Current fee rate (scaled by SCALE) given the token reserve.

        Raises:
            FeeUnderflow: If the unclamped fee curve drops below zero
        """
        return calculate_fee(self.token_reserve, self.config)

    def snapshot(self) -> PoolState:
        """Raises FeeUnderflow like calculate_fee()."""
        return PoolState(
            token_reserve=self.token_reserve,
            staked_token_reserve=self.staked_token_reserve,
            total_lp_tokens=self.total_lp_tokens,
            fee=self.calculate_fee(),
        )
