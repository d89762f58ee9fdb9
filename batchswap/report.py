"""Structured summary of a swap attempt."""

from __future__ import annotations

import json
from decimal import Decimal

import structlog
from pydantic import BaseModel

from batchswap.balances import scale_amount
from batchswap.models.balances import BalanceSnapshot, Balances
from batchswap.models.route import FundManagement, Route, SwapType
from batchswap.models.tokens import TokenDescriptor

logger = structlog.get_logger()

SEPARATOR = "=" * 48


class ReportLeg(BaseModel):
    """One side of the swap: token, traded amount and balances."""

    symbol: str
    address: str
    amount: Decimal
    balance_before: Decimal | None = None
    balance_after: Decimal | None = None
    delta: Decimal | None = None

    model_config = {"frozen": True}


class SwapReport(BaseModel):
    """Everything needed to review a swap, field by field.

    Amounts are in whole-token units (scaled by decimals); ``limits`` stay in
    base units exactly as sent to the vault.

    ``cost`` is labelled with ``cost_symbol``, the token the solver priced it
    in: tokenOut for ExactIn, tokenIn for ExactOut. It is therefore not always
    in input-token units.
    """

    swap_type: str
    token_addresses: list[str]
    limits: list[str]
    funds: FundManagement | None = None
    token_in: ReportLeg
    token_out: ReportLeg
    cost: Decimal
    cost_symbol: str

    model_config = {"frozen": True}

    def render(self) -> str:
        """Console block in the layout of the SOR example scripts."""
        lines = ["", SEPARATOR]
        if self.funds is not None:
            funds = self.funds.model_dump(by_alias=True)
            lines.append(f"Funds: {json.dumps(funds, indent=2)}")
        lines.append(f"Swap addresses: {json.dumps(self.token_addresses, indent=2)}")
        lines.append(f"Limits: {json.dumps(self.limits, indent=2)}")
        lines.append(f"Swap type: {self.swap_type}")
        lines.append(f"Token In: {self.token_in.symbol}, Amt: {self.token_in.amount}")
        lines.append(f"Token Out: {self.token_out.symbol}, Amt: {self.token_out.amount}")
        lines.append(f"Cost to swap in {self.cost_symbol}: {self.cost} {self.cost_symbol}")
        lines.append("Balances before swap:")
        lines.append(f"  {self.token_in.symbol}: {self.token_in.balance_before}")
        lines.append(f"  {self.token_out.symbol}: {self.token_out.balance_before}")
        lines.append("Balances after swap:")
        lines.append(f"  {self.token_in.symbol}: {self.token_in.balance_after}")
        lines.append(f"  {self.token_out.symbol}: {self.token_out.balance_after}")
        lines.append(SEPARATOR)
        lines.append("")
        return "\n".join(lines)


def _leg(token: TokenDescriptor, amount: Decimal, snapshot: BalanceSnapshot) -> ReportLeg:
    return ReportLeg(
        symbol=token.symbol,
        address=token.address,
        amount=amount,
        balance_before=snapshot.before,
        balance_after=snapshot.after,
        delta=snapshot.delta,
    )


def build_report(
    swap_type: SwapType,
    route: Route,
    limits: list[str] | tuple[str, ...],
    token_in: TokenDescriptor,
    token_out: TokenDescriptor,
    swap_amount: Decimal,
    cost: Decimal,
    balances: Balances,
    funds: FundManagement | None = None,
    cost_token: TokenDescriptor | None = None,
) -> SwapReport:
    """Assemble the report for one swap attempt. Pure; emits nothing.

    Args:
        swap_type: Direction of the swap
        route: Solved route (returnAmount in base units)
        limits: Limits sent to the vault
        token_in: Input token
        token_out: Output token
        swap_amount: Amount the caller asked for, in whole-token units
        cost: Solver's execution cost estimate
        balances: Captured before/after balances
        funds: Fund management settings, if any
        cost_token: Token the cost is denominated in (default: token_in)

    Returns:
        SwapReport
    """
    if swap_type is SwapType.EXACT_IN:
        amount_in = swap_amount
        amount_out = scale_amount(route.return_amount, -token_out.decimals)
    else:
        amount_in = scale_amount(route.return_amount, -token_in.decimals)
        amount_out = swap_amount

    return SwapReport(
        swap_type=swap_type.label,
        token_addresses=list(route.token_addresses),
        limits=list(limits),
        funds=funds,
        token_in=_leg(token_in, amount_in, balances.token_in),
        token_out=_leg(token_out, amount_out, balances.token_out),
        cost=cost,
        cost_symbol=(cost_token or token_in).symbol,
    )


def log_report(report: SwapReport) -> None:
    """Emit a report through the structured logger."""
    logger.info("swap_report", **report.model_dump(mode="json"))


__all__ = ["ReportLeg", "SwapReport", "build_report", "log_report"]
