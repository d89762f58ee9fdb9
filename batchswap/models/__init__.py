"""Data models for batch swap routes, balances and tokens."""

from batchswap.models.balances import BalanceSnapshot, Balances, compute_delta
from batchswap.models.route import FundManagement, Hop, PoolRequest, Route, SwapType
from batchswap.models.tokens import TokenDescriptor
from batchswap.models.types import Address, Bytes, Bytes32, Uint256

__all__ = [
    # Types
    "Address",
    "Bytes",
    "Bytes32",
    "Uint256",
    # Route models
    "SwapType",
    "Hop",
    "Route",
    "FundManagement",
    "PoolRequest",
    # Tokens
    "TokenDescriptor",
    # Balances
    "BalanceSnapshot",
    "Balances",
    "compute_delta",
]
