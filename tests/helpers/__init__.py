"""Test helpers module for shared test utilities.

- constants: Token addresses, pool ids and accounts
- factories: Hop, route and token factory functions
- fakes: In-memory collaborators (solver, balance reader, adapter, submitter)
"""

from tests.helpers.constants import (
    ADAPTER,
    BAL,
    DAI,
    ETH,
    POOL_A,
    POOL_B,
    TOKEN_DECIMALS,
    TRADER,
    USDC,
    WBTC,
    WBTC_WETH_POOL_ADDRESS,
    WBTC_WETH_POOL_ID,
    WETH,
)
from tests.helpers.factories import make_hop, make_route, make_token
from tests.helpers.fakes import FakeAdapterQuery, FakeBalanceReader, FakeSolver, FakeSubmitter

__all__ = [
    # Constants
    "ETH",
    "WETH",
    "USDC",
    "DAI",
    "WBTC",
    "BAL",
    "POOL_A",
    "POOL_B",
    "WBTC_WETH_POOL_ID",
    "WBTC_WETH_POOL_ADDRESS",
    "TRADER",
    "ADAPTER",
    "TOKEN_DECIMALS",
    # Factories
    "make_hop",
    "make_route",
    "make_token",
    # Fakes
    "FakeBalanceReader",
    "FakeAdapterQuery",
    "FakeSolver",
    "FakeSubmitter",
]
