"""Pool error classes.

Every error is raised before the pool mutates any field, so a failed
operation leaves the reserves and LP supply exactly as they were.
"""


class PoolError(Exception):
    """Base error for pool operations."""

    #: Short machine-readable kind, used in API error bodies
    kind = "pool_error"


class ConfigurationError(PoolError):
    """Invalid pool parameters (zero liquidity target, fee_min > fee_max, ...)."""

    kind = "configuration_error"


class InvalidAmount(PoolError):
    """Operation input is not a non-negative integer."""

    kind = "invalid_amount"


class InsufficientLiquidity(PoolError):
    """Operation would take a reserve or the LP supply below zero."""

    kind = "insufficient_liquidity"


class ArithmeticOverflow(PoolError):
    """Result does not fit in an unsigned 64-bit amount."""

    kind = "arithmetic_overflow"


class PoolStateError(PoolError):
    """Pool state makes the operation undefined.

    Raised when LP shares are outstanding but the token reserve has been
    drained to zero by swaps, so new shares cannot be priced.
    """

    kind = "pool_state_error"


class FeeUnderflow(PoolError):
    """Unclamped fee curve dropped below zero.

    Only possible with clamp_fee_at_min=False, once the reserve exceeds the
    target by more than target * fee_max / (fee_max - fee_min).
    """

    kind = "fee_underflow"
