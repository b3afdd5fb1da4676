"""Tests for pool configuration validation and environment loading."""

import dataclasses

import pytest

from lp_pool.config import DEFAULT_POOL_CONFIG, PoolConfig
from lp_pool.constants import SCALE, U64_MAX
from lp_pool.errors import ConfigurationError, PoolError


class TestPoolConfigDefaults:
    def test_reference_values(self):
        assert DEFAULT_POOL_CONFIG.price == 1_500_000
        assert DEFAULT_POOL_CONFIG.fee_min == 1_000
        assert DEFAULT_POOL_CONFIG.fee_max == 90_000
        assert DEFAULT_POOL_CONFIG.liquidity_target == 90_000_000
        assert DEFAULT_POOL_CONFIG.clamp_fee_at_min is True

    def test_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            DEFAULT_POOL_CONFIG.price = 1  # type: ignore[misc]


class TestPoolConfigValidation:
    """Invalid parameters raise ConfigurationError at construction."""

    def test_zero_liquidity_target(self):
        with pytest.raises(ConfigurationError, match="liquidity_target"):
            PoolConfig(liquidity_target=0)

    def test_fee_min_above_fee_max(self):
        with pytest.raises(ConfigurationError, match="fee_min"):
            PoolConfig(fee_min=100_000, fee_max=90_000)

    def test_fee_max_above_scale(self):
        with pytest.raises(ConfigurationError):
            PoolConfig(fee_max=SCALE + 1)

    def test_fee_max_at_scale_allowed(self):
        assert PoolConfig(fee_max=SCALE).fee_max == SCALE

    @pytest.mark.parametrize("field", ["price", "fee_min", "liquidity_target"])
    def test_negative(self, field):
        with pytest.raises(ConfigurationError):
            PoolConfig(**{field: -1})

    def test_above_u64(self):
        with pytest.raises(ConfigurationError):
            PoolConfig(liquidity_target=U64_MAX + 1)

    @pytest.mark.parametrize("value", [1.5, "100", True])
    def test_non_integer(self, value):
        with pytest.raises(ConfigurationError):
            PoolConfig(price=value)  # type: ignore[arg-type]

    def test_is_pool_error(self):
        assert issubclass(ConfigurationError, PoolError)


class TestPoolConfigFromEnv:
    def test_defaults_when_unset(self, monkeypatch):
        for name in ("PRICE", "FEE_MIN", "FEE_MAX", "LIQUIDITY_TARGET", "CLAMP_FEE"):
            monkeypatch.delenv(f"LP_POOL_{name}", raising=False)
        assert PoolConfig.from_env() == DEFAULT_POOL_CONFIG

    def test_overrides(self, monkeypatch):
        monkeypatch.setenv("LP_POOL_PRICE", "2000000")
        monkeypatch.setenv("LP_POOL_FEE_MIN", "500")
        monkeypatch.setenv("LP_POOL_FEE_MAX", "50000")
        monkeypatch.setenv("LP_POOL_LIQUIDITY_TARGET", "1000")
        monkeypatch.setenv("LP_POOL_CLAMP_FEE", "false")

        config = PoolConfig.from_env()

        assert config == PoolConfig(
            price=2_000_000,
            fee_min=500,
            fee_max=50_000,
            liquidity_target=1_000,
            clamp_fee_at_min=False,
        )

    def test_custom_prefix(self, monkeypatch):
        monkeypatch.setenv("TEST_POOL_PRICE", "42")
        assert PoolConfig.from_env(prefix="TEST_POOL_").price == 42

    def test_non_numeric_raises(self, monkeypatch):
        monkeypatch.setenv("LP_POOL_PRICE", "1.5")
        with pytest.raises(ConfigurationError, match="LP_POOL_PRICE"):
            PoolConfig.from_env()

    def test_invalid_combination_raises(self, monkeypatch):
        monkeypatch.setenv("LP_POOL_LIQUIDITY_TARGET", "0")
        with pytest.raises(ConfigurationError):
            PoolConfig.from_env()

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("true", True), ("YES", True), ("1", True), ("no", False), ("False", False), ("0", False)],
    )
    def test_clamp_fee_values(self, monkeypatch, raw, expected):
        """CLAMP_FEE accepts the usual boolean spellings, case-insensitively."""
        monkeypatch.setenv("LP_POOL_CLAMP_FEE", raw)
        assert PoolConfig.from_env().clamp_fee_at_min is expected

    @pytest.mark.parametrize("raw", ["ture", "", "off", "2"])
    def test_clamp_fee_unrecognised_raises(self, monkeypatch, raw):
        """A typo must not silently disable clamping."""
        monkeypatch.setenv("LP_POOL_CLAMP_FEE", raw)
        with pytest.raises(ConfigurationError, match="CLAMP_FEE"):
            PoolConfig.from_env()
