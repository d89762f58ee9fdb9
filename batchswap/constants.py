"""Protocol constants for Balancer V2 batch swaps.

Centralizes well-known addresses and swap parameters.
"""

from decimal import Decimal

from batchswap.models.types import UINT256_MAX, ZERO_ADDRESS, is_valid_address

# Balancer V2 Vault (same address on every supported chain)
BALANCER_V2_VAULT = "0xba12222222228d8ba445958a75a0704d566bf2c8"

# Native ETH is addressed as the zero address by the vault and the SOR
NATIVE_ASSET = ZERO_ADDRESS

# Limits for the output side are the estimate times this factor (1% slippage,
# negative because the vault reads negative limits as "minimum to receive")
SLIPPAGE_FACTOR = Decimal("-0.99")

# Default deadline: never expires
MAX_DEADLINE = UINT256_MAX

# SOR defaults: gas price used to weigh extra hops, and max pools per route
DEFAULT_GAS_PRICE = 40_000_000_000
DEFAULT_MAX_POOLS = 4


def _validate_token_address(name: str, address: str) -> str:
    """Validate and return a token address.

    Raises:
        ValueError: If the address is invalid
    """
    if not is_valid_address(address):
        raise ValueError(f"Invalid {name} address: {address} (must be 0x + 40 hex chars)")
    return address


# Well-known token addresses on mainnet (lowercase for consistency)
AAVE = _validate_token_address("AAVE", "0x7fc66500c84a76ad7e9c93437bfc5ac33e2ddae9")
BAL = _validate_token_address("BAL", "0xba100000625a3754423978a60c9317c58a424e3d")
COMP = _validate_token_address("COMP", "0xc00e94cb662c3520282e6f5717214004a7f26888")
DAI = _validate_token_address("DAI", "0x6b175474e89094c44da98b954eedeac495271d0f")
USDC = _validate_token_address("USDC", "0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48")
WBTC = _validate_token_address("WBTC", "0x2260fac5e5542a773aa44fbcfedf7c193bc2c599")
WETH = _validate_token_address("WETH", "0xc02aaa39b223fe8d0a0e5c4f27ead9083c756cc2")
