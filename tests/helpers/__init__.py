"""Test helpers module for shared test utilities.

- constants: Reference pool parameters and amounts
- factories: Pool factory functions
"""

from tests.helpers.constants import (
    FEE_MAX,
    FEE_MIN,
    LIQUIDITY_TARGET,
    PRICE,
)
from tests.helpers.factories import make_funded_pool, make_pool

__all__ = [
    # Constants
    "PRICE",
    "FEE_MIN",
    "FEE_MAX",
    "LIQUIDITY_TARGET",
    # Factories
    "make_pool",
    "make_funded_pool",
]
