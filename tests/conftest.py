"""Pytest configuration and fixtures."""

import pytest

from batchswap.balances import BalanceAuditor
from batchswap.models.route import FundManagement, Route
from batchswap.models.tokens import TokenDescriptor
from tests.helpers import (
    ETH,
    TRADER,
    USDC,
    FakeBalanceReader,
    make_route,
    make_token,
)


@pytest.fixture
def eth() -> TokenDescriptor:
    """Native ETH descriptor."""
    return make_token(ETH)


@pytest.fixture
def usdc() -> TokenDescriptor:
    """USDC descriptor (6 decimals)."""
    return make_token(USDC)


@pytest.fixture
def eth_usdc_route() -> Route:
    """Single-hop ETH -> USDC route: 1 ETH for an estimated 2000 USDC."""
    return make_route(token_in=ETH, token_out=USDC, swap_amount=10**18, return_amount=2_000_000_000)


@pytest.fixture
def funds() -> FundManagement:
    """Trader sends and receives from its own external balance."""
    return FundManagement(sender=TRADER, recipient=TRADER)


@pytest.fixture
def reader() -> FakeBalanceReader:
    """10 ETH and 500 USDC."""
    return FakeBalanceReader(native=10 * 10**18, tokens={USDC: 500_000_000})


@pytest.fixture
def auditor(reader: FakeBalanceReader) -> BalanceAuditor:
    """Auditor for the trader account over the fake reader."""
    return BalanceAuditor(reader, TRADER)
