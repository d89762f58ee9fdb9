"""Balancer V2 batch swap preparation and auditing."""

from batchswap.attempt import SwapAttempt, SwapState
from batchswap.balances import BalanceAuditor
from batchswap.encoding import encode_swap_args
from batchswap.limits import calculate_limits

__version__ = "0.1.0"
__all__ = [
    "SwapAttempt",
    "SwapState",
    "BalanceAuditor",
    "calculate_limits",
    "encode_swap_args",
    "__version__",
]
