"""Pool configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass

from lp_pool.constants import (
    DEFAULT_FEE_MAX,
    DEFAULT_FEE_MIN,
    DEFAULT_LIQUIDITY_TARGET,
    DEFAULT_PRICE,
    SCALE,
    U64_MAX,
)
from lp_pool.errors import ConfigurationError

_TRUE_VALUES = ("true", "1", "yes")
_FALSE_VALUES = ("false", "0", "no")


@dataclass(frozen=True)
class PoolConfig:
    """Immutable parameters of a liquidity pool.

    Price and fee rates are fixed-point integers scaled by SCALE
    (1_000_000 = 1.0). Values are validated on construction.

    Attributes:
        price: Underlying tokens paid per staked token
        fee_min: Fee rate charged once the reserve is far above target
        fee_max: Fee rate charged while the reserve is below target
        liquidity_target: Token reserve level at which the fee starts to fall
        clamp_fee_at_min: If True, the fee curve never drops below fee_min.
            If False, the raw linear formula is used and a reserve far above
            target makes calculate_fee() raise FeeUnderflow.
    """

    price: int = DEFAULT_PRICE
    fee_min: int = DEFAULT_FEE_MIN
    fee_max: int = DEFAULT_FEE_MAX
    liquidity_target: int = DEFAULT_LIQUIDITY_TARGET

    # Behavior flags
    clamp_fee_at_min: bool = True

    def __post_init__(self) -> None:
        for name in ("price", "fee_min", "fee_max", "liquidity_target"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool):
                raise ConfigurationError(f"{name} must be an integer, got {type(value).__name__}")
            if value < 0 or value > U64_MAX:
                raise ConfigurationError(f"{name} out of u64 range: {value}")

        if self.liquidity_target == 0:
            raise ConfigurationError("liquidity_target must be positive")
        if self.fee_min > self.fee_max:
            raise ConfigurationError(f"fee_min ({self.fee_min}) exceeds fee_max ({self.fee_max})")
        if self.fee_max > SCALE:
            raise ConfigurationError(f"fee_max ({self.fee_max}) exceeds 100% ({SCALE})")

    @classmethod
    def from_env(cls, prefix: str = "LP_POOL_") -> PoolConfig:
        """Build a config from environment variables.

        Reads {prefix}PRICE, {prefix}FEE_MIN, {prefix}FEE_MAX,
        {prefix}LIQUIDITY_TARGET and {prefix}CLAMP_FEE. Unset variables keep
        their defaults.

        Raises:
            ConfigurationError: If a numeric variable is not a decimal integer,
                CLAMP_FEE is not a recognised boolean, or the
                resulting parameters are invalid
        """
        overrides: dict[str, int | bool] = {}
        for field_name in ("price", "fee_min", "fee_max", "liquidity_target"):
            raw = os.environ.get(prefix + field_name.upper())
            if raw is None:
                continue
            try:
                overrides[field_name] = int(raw)
            except ValueError as err:
                raise ConfigurationError(
                    f"{prefix}{field_name.upper()} must be a decimal integer: '{raw}'"
                ) from err

        clamp = os.environ.get(prefix + "CLAMP_FEE")
        if clamp is not None:
            if clamp.lower() in _TRUE_VALUES:
                overrides["clamp_fee_at_min"] = True
            elif clamp.lower() in _FALSE_VALUES:
                overrides["clamp_fee_at_min"] = False
            else:
                raise ConfigurationError(
                    f"{prefix}CLAMP_FEE must be one of "
                    f"{', '.join(_TRUE_VALUES + _FALSE_VALUES)}: '{clamp}'"
                )

        return cls(**overrides)  # type: ignore[arg-type]


# Default configuration instance
DEFAULT_POOL_CONFIG = PoolConfig()
