"""Swap configuration."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from batchswap.constants import DEFAULT_GAS_PRICE, DEFAULT_MAX_POOLS, MAX_DEADLINE

_TRUE_VALUES = ("true", "1", "yes")


@dataclass(frozen=True)
class SwapConfig:
    """Centralized configuration for building and auditing swaps.

    Passed explicitly to the solver client and the swap attempt; nothing
    reads it from global state.

    Attributes:
        gas_price: Gas price (wei) the SOR uses to weigh extra hops (default: 40 gwei)
        max_pools: Maximum number of pools the SOR may route through (default: 4)
        query_on_chain: If True, the SOR refreshes pool balances on-chain
        deadline: Vault deadline for the swap (default: never expires)
        solver_url: Base URL of the SOR service
        rpc_url: HTTP RPC URL used by the web3 collaborators
        solver_timeout: HTTP timeout in seconds for SOR requests
    """

    gas_price: int = DEFAULT_GAS_PRICE
    max_pools: int = DEFAULT_MAX_POOLS
    query_on_chain: bool = True
    deadline: int = MAX_DEADLINE
    solver_url: str = "http://localhost:8080"
    rpc_url: str = "http://localhost:8545"
    solver_timeout: float = 30.0

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> SwapConfig:
        """Build a config from BATCHSWAP_* environment variables.

        Unset variables keep their defaults.

        Raises:
            ValueError: If a numeric variable cannot be parsed
        """
        env = os.environ if environ is None else environ
        defaults = cls()
        return cls(
            gas_price=int(env.get("BATCHSWAP_GAS_PRICE", defaults.gas_price)),
            max_pools=int(env.get("BATCHSWAP_MAX_POOLS", defaults.max_pools)),
            query_on_chain=env.get(
                "BATCHSWAP_QUERY_ON_CHAIN", str(defaults.query_on_chain)
            ).lower()
            in _TRUE_VALUES,
            deadline=int(env.get("BATCHSWAP_DEADLINE", defaults.deadline)),
            solver_url=env.get("BATCHSWAP_SOLVER_URL", defaults.solver_url),
            rpc_url=env.get("BATCHSWAP_RPC_URL", defaults.rpc_url),
            solver_timeout=float(env.get("BATCHSWAP_SOLVER_TIMEOUT", defaults.solver_timeout)),
        )


# Default configuration instance
DEFAULT_SWAP_CONFIG = SwapConfig()
