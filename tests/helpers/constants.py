"""Shared token and pool constants for tests.

All addresses are lowercase for consistency with normalize_address().

Usage:
    from tests.helpers import ETH, USDC
"""

# =============================================================================
# Mainnet tokens
# =============================================================================

ETH = "0x0000000000000000000000000000000000000000"  # Native ETH sentinel (18 decimals)
WETH = "0xc02aaa39b223fe8d0a0e5c4f27ead9083c756cc2"  # Wrapped Ether (18 decimals)
USDC = "0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48"  # USD Coin (6 decimals)
DAI = "0x6b175474e89094c44da98b954eedeac495271d0f"  # Dai Stablecoin (18 decimals)
WBTC = "0x2260fac5e5542a773aa44fbcfedf7c193bc2c599"  # Wrapped Bitcoin (8 decimals)
BAL = "0xba100000625a3754423978a60c9317c58a424e3d"  # Balancer (18 decimals)

# =============================================================================
# Balancer pools
# =============================================================================

# WBTC/WETH weighted pool (two-token specialization, nonce 20)
WBTC_WETH_POOL_ID = "0x5c6ee304399dbdb9c8ef030ab642b10820db8f56000200000000000000000014"
WBTC_WETH_POOL_ADDRESS = "0x5c6ee304399dbdb9c8ef030ab642b10820db8f56"

# Synthetic pool ids for route fixtures
POOL_A = "0x" + "a1" * 32
POOL_B = "0x" + "b2" * 32

# =============================================================================
# Accounts
# =============================================================================

TRADER = "0xf66852bc122fd40bfecc63cd48217e88bda12109"
ADAPTER = "0x" + "ad" * 20

TOKEN_DECIMALS = {
    ETH: 18,
    WETH: 18,
    USDC: 6,
    DAI: 18,
    WBTC: 8,
    BAL: 18,
}


__all__ = [
    "ETH",
    "WETH",
    "USDC",
    "DAI",
    "WBTC",
    "BAL",
    "WBTC_WETH_POOL_ID",
    "WBTC_WETH_POOL_ADDRESS",
    "POOL_A",
    "POOL_B",
    "TRADER",
    "ADAPTER",
    "TOKEN_DECIMALS",
]
