"""Network registry.

Each network is described once and passed explicitly to whatever needs it;
there is no process-wide "current network".
"""

from __future__ import annotations

from dataclasses import dataclass, field

from batchswap.constants import (
    AAVE,
    BAL,
    BALANCER_V2_VAULT,
    COMP,
    DAI,
    NATIVE_ASSET,
    USDC,
    WBTC,
    WETH,
)
from batchswap.errors import UnsupportedNetwork
from batchswap.models.tokens import TokenDescriptor


@dataclass(frozen=True)
class NetworkDescriptor:
    """Chain-specific addresses and token metadata.

    Attributes:
        chain_id: EIP-155 chain id
        name: Network name (e.g. "mainnet")
        subgraph_url: Balancer V2 subgraph used by the SOR for pool discovery
        vault: Balancer V2 Vault address
        tokens: Supported tokens keyed by symbol
    """

    chain_id: int
    name: str
    subgraph_url: str
    vault: str = BALANCER_V2_VAULT
    tokens: dict[str, TokenDescriptor] = field(default_factory=dict)

    def token(self, symbol: str) -> TokenDescriptor:
        """Look up a token by symbol (case-insensitive).

        Raises:
            KeyError: If the symbol is not supported on this network
        """
        try:
            return self.tokens[symbol.upper()]
        except KeyError:
            raise KeyError(
                f"Unsupported token '{symbol}' on {self.name}. "
                f"Supported tokens: {', '.join(sorted(self.tokens))}"
            ) from None

    def token_by_address(self, address: str) -> TokenDescriptor | None:
        address_lower = address.lower()
        for descriptor in self.tokens.values():
            if descriptor.address.lower() == address_lower:
                return descriptor
        return None


def _tokens(*descriptors: TokenDescriptor) -> dict[str, TokenDescriptor]:
    return {d.symbol: d for d in descriptors}


MAINNET = NetworkDescriptor(
    chain_id=1,
    name="mainnet",
    subgraph_url="https://api.thegraph.com/subgraphs/name/balancer-labs/balancer-v2",
    tokens=_tokens(
        TokenDescriptor(symbol="AAVE", address=AAVE, decimals=18),
        TokenDescriptor(symbol="BAL", address=BAL, decimals=18),
        TokenDescriptor(symbol="COMP", address=COMP, decimals=18),
        TokenDescriptor(symbol="DAI", address=DAI, decimals=18),
        TokenDescriptor(symbol="ETH", address=NATIVE_ASSET, decimals=18),
        TokenDescriptor(symbol="USDC", address=USDC, decimals=6),
        TokenDescriptor(symbol="WBTC", address=WBTC, decimals=8),
        TokenDescriptor(symbol="WETH", address=WETH, decimals=18),
    ),
)

NETWORKS: dict[int, NetworkDescriptor] = {MAINNET.chain_id: MAINNET}


def get_network_descriptor(chain_id: int) -> NetworkDescriptor:
    """Return the descriptor for a chain id.

    Raises:
        UnsupportedNetwork: If no descriptor is registered for the chain id
    """
    descriptor = NETWORKS.get(chain_id)
    if descriptor is None:
        raise UnsupportedNetwork(f"Network with chainId '{chain_id}' not supported")
    return descriptor


__all__ = ["NetworkDescriptor", "MAINNET", "NETWORKS", "get_network_descriptor"]
