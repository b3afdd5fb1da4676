"""Pytest configuration and fixtures."""

from collections.abc import Iterator

import pytest
import structlog
from fastapi.testclient import TestClient

from lp_pool.api.endpoints import PoolHandle, get_pool_handle
from lp_pool.api.main import app
from lp_pool.pool import LiquidityPool
from tests.helpers.constants import REFERENCE_DEPOSIT
from tests.helpers.factories import make_funded_pool, make_pool


@pytest.fixture
def pool() -> LiquidityPool:
    """An empty pool with the reference parameters."""
    return make_pool()


@pytest.fixture
def funded_pool() -> LiquidityPool:
    """A reference pool holding a single 100M token deposit."""
    return make_funded_pool(REFERENCE_DEPOSIT)


@pytest.fixture
def served_pool() -> LiquidityPool:
    """Pool injected into the API for a single test."""
    return make_pool()


@pytest.fixture
def client(served_pool: LiquidityPool) -> Iterator[TestClient]:
    """Create a test client serving `served_pool`."""
    handle = PoolHandle(served_pool)
    app.dependency_overrides[get_pool_handle] = lambda: handle
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture(autouse=True)
def reset_structlog() -> Iterator[None]:
    """Undo structlog configuration done by CLI entry points."""
    yield
    structlog.reset_defaults()
