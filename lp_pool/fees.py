"""Dynamic unstake fee curve.

The fee is a function of the underlying token reserve only:

    reserve < target:   fee = fee_max
    reserve >= target:  fee = fee_max - (fee_max - fee_min) * (reserve - target) // target

Below target the pool charges its maximum rate to discourage further
draining. Above target the rate falls linearly, reaching fee_min once the
reserve is twice the target.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from lp_pool.errors import FeeUnderflow
from lp_pool.safe_int import S, Underflow

if TYPE_CHECKING:
    from lp_pool.config import PoolConfig


def calculate_fee(token_reserve: int, config: PoolConfig) -> int:
    """Fee rate (scaled by SCALE) for a pool holding token_reserve.

    Args:
        token_reserve: Underlying token reserve before the swap
        config: Pool parameters

    Returns:
        Fee rate between fee_min and fee_max when clamping is enabled

    Raises:
        FeeUnderflow: If clamping is disabled and the linear formula drops
            below zero
    """
    if token_reserve < config.liquidity_target:
        return config.fee_max

    excess = S(token_reserve) - config.liquidity_target
    discount = (S(config.fee_max) - config.fee_min) * excess // config.liquidity_target

    if config.clamp_fee_at_min:
        fee = S(config.fee_max).checked_sub(discount)
        if fee is None:
            return config.fee_min
        return fee.max(config.fee_min).value

    try:
        return (S(config.fee_max) - discount).value
    except Underflow as err:
        raise FeeUnderflow(
            f"Fee curve below zero at reserve {token_reserve}: "
            f"discount {discount} exceeds fee_max {config.fee_max}"
        ) from err
