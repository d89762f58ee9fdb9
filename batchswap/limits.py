"""Slippage limits for a solved route.

The vault reads one signed limit per entry of tokenAddresses:
- positive: maximum amount the caller is willing to send
- negative: minimum amount the caller must receive
- zero: intermediate tokens of a multi-hop route

Limits are derived from the solver's estimate with a fixed 1% margin on the
receiving side.
"""

from __future__ import annotations

import decimal
from dataclasses import dataclass
from decimal import ROUND_DOWN, Decimal
from enum import Enum

import structlog

from batchswap.constants import SLIPPAGE_FACTOR
from batchswap.errors import InvalidRoute
from batchswap.models.balances import DECIMAL_HIGH_PREC_CONTEXT
from batchswap.models.route import Route, SwapType

logger = structlog.get_logger()


class BoundGap(Enum):
    """Side of the swap whose token was not found in tokenAddresses."""

    TOKEN_IN = "token_in"
    TOKEN_OUT = "token_out"


@dataclass(frozen=True)
class LimitsResult:
    """Result of a limit calculation.

    A result with gaps is still returned (nothing is raised), but it does not
    protect the missing side and callers must treat it as a policy gap.

    Attributes:
        limits: Signed integer strings aligned with route.token_addresses
        gaps: Sides that matched no position in tokenAddresses

    Examples:
        result = calculate_limits(SwapType.EXACT_IN, route)
        if not result.is_complete:
            ...  # refuse to submit, or warn the operator
    """

    limits: tuple[str, ...]
    gaps: tuple[BoundGap, ...] = ()

    @property
    def is_complete(self) -> bool:
        """True if both the input and output token received a bound."""
        return not self.gaps

    def __len__(self) -> int:
        return len(self.limits)

    def as_list(self) -> list[str]:
        return list(self.limits)


def format_integer(value: Decimal) -> str:
    """Plain integer string for a Decimal, without exponent notation."""
    return str(int(value))


def min_receive_bound(amount: Decimal) -> str:
    """``amount * -0.99`` truncated toward zero, as an integer string."""
    with decimal.localcontext(DECIMAL_HIGH_PREC_CONTEXT):
        bound = (amount * SLIPPAGE_FACTOR).to_integral_value(rounding=ROUND_DOWN)
    return format_integer(bound)


def find_bound_gaps(route: Route) -> tuple[BoundGap, ...]:
    """Sides of the route whose token is missing from tokenAddresses."""
    gaps = []
    if route.index_of(route.token_in) is None:
        gaps.append(BoundGap.TOKEN_IN)
    if route.index_of(route.token_out) is None:
        gaps.append(BoundGap.TOKEN_OUT)
    return tuple(gaps)


def calculate_limits(swap_type: SwapType, route: Route) -> LimitsResult:
    """Compute the per-token limits array for a batch swap.

    ExactIn: tokenIn gets swapAmount, tokenOut gets -99% of returnAmount.
    ExactOut: tokenIn gets returnAmount, tokenOut gets -99% of swapAmount.

    Args:
        swap_type: Direction the route was solved for
        route: Solved route

    Returns:
        LimitsResult with one entry per token address

    Raises:
        InvalidRoute: If tokenIn and tokenOut are the same token
    """
    if route.is_self_swap:
        raise InvalidRoute(f"tokenIn and tokenOut are the same token: {route.token_in}")

    if swap_type is SwapType.EXACT_IN:
        max_send = format_integer(route.swap_amount)
        min_receive = min_receive_bound(route.return_amount)
    else:
        max_send = format_integer(route.return_amount)
        min_receive = min_receive_bound(route.swap_amount)

    limits = ["0"] * len(route.token_addresses)

    in_index = route.index_of(route.token_in)
    if in_index is not None:
        limits[in_index] = max_send

    out_index = route.index_of(route.token_out)
    if out_index is not None:
        limits[out_index] = min_receive

    gaps = find_bound_gaps(route)
    for gap in gaps:
        logger.warning(
            "limits_bound_gap",
            side=gap.value,
            token=route.token_in if gap is BoundGap.TOKEN_IN else route.token_out,
            token_addresses=list(route.token_addresses),
        )

    logger.debug("limits_calculated", swap_type=swap_type.label, limits=limits)
    return LimitsResult(limits=tuple(limits), gaps=gaps)


__all__ = [
    "BoundGap",
    "LimitsResult",
    "calculate_limits",
    "find_bound_gaps",
    "min_receive_bound",
]
