"""One swap attempt, from solving the route to the final report.

State machine:
    PLANNED -> LIMITS_COMPUTED -> PAYLOAD_ENCODED -> SUBMITTED -> AUDITED -> REPORTED
Any step may move the attempt to FAILED; the error is then re-raised
unchanged. Nothing is retried.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Protocol

import structlog

from batchswap.adapter import AdapterQuery, derive_asset_transfer_args
from batchswap.balances import BalanceAuditor
from batchswap.config import DEFAULT_SWAP_CONFIG, SwapConfig
from batchswap.encoding import TAKE_ORDER_SELECTOR, encode_swap_args
from batchswap.errors import InvalidRoute, SolverFailure
from batchswap.limits import LimitsResult, calculate_limits
from batchswap.models.balances import Balances
from batchswap.models.route import FundManagement, Route, SwapType
from batchswap.models.tokens import TokenDescriptor
from batchswap.report import SwapReport, build_report, log_report
from batchswap.sor import RouteSolver, SolveResult

logger = structlog.get_logger()


class SwapState(str, Enum):
    """Lifecycle of a swap attempt."""

    PLANNED = "planned"
    LIMITS_COMPUTED = "limits_computed"
    PAYLOAD_ENCODED = "payload_encoded"
    SUBMITTED = "submitted"
    AUDITED = "audited"
    REPORTED = "reported"
    FAILED = "failed"


@dataclass(frozen=True)
class SwapSubmission:
    """Everything the vault submitter needs to send the swap.

    Attributes:
        payload: Encoded takeOrder arguments
        route: Solved route
        limits: Limits aligned with route.token_addresses
        funds: Fund management settings
        deadline: Vault deadline
        value: Wei to attach (the maximum input when swapping from native ETH, else 0)
    """

    payload: bytes
    route: Route
    limits: tuple[str, ...]
    funds: FundManagement
    deadline: int
    value: int = 0


class VaultSubmitter(Protocol):
    """Protocol for whatever sends the swap to the vault and waits for it."""

    async def submit(self, submission: SwapSubmission) -> str:
        """Submit and wait for confirmation.

        Returns:
            Transaction hash of the confirmed swap
        """
        ...


def expected_output_amount(swap_type: SwapType, route: Route) -> Decimal:
    """Amount of tokenOut the route is expected to deliver, in base units."""
    return route.return_amount if swap_type is SwapType.EXACT_IN else route.swap_amount


class SwapAttempt:
    """Drives a single swap through solve, limits, encode, submit, audit and report.

    External calls are awaited one at a time in this order: solver, balances
    before, submission, balances after. The attempt holds no state shared with
    other attempts.

    Args:
        solver: Route solver
        submitter: Vault submitter
        auditor: Balance auditor for the trading account
        token_in: Token to sell
        token_out: Token to buy
        swap_type: ExactIn or ExactOut
        amount: Requested amount in whole-token units
        funds: Fund management settings passed through to the submitter
        config: Swap configuration (deadline, query_on_chain)
        adapter_query: If set, the asset-transfer payload is derived after encoding
        require_complete_limits: If True, a route whose tokenIn or tokenOut is
            missing from tokenAddresses fails the attempt instead of only
            being reported as a gap
    """

    def __init__(
        self,
        solver: RouteSolver,
        submitter: VaultSubmitter,
        auditor: BalanceAuditor,
        token_in: TokenDescriptor,
        token_out: TokenDescriptor,
        swap_type: SwapType,
        amount: Decimal,
        funds: FundManagement,
        config: SwapConfig = DEFAULT_SWAP_CONFIG,
        adapter_query: AdapterQuery | None = None,
        require_complete_limits: bool = False,
    ) -> None:
        self.solver = solver
        self.submitter = submitter
        self.auditor = auditor
        self.token_in = token_in
        self.token_out = token_out
        self.swap_type = swap_type
        self.amount = amount
        self.funds = funds
        self.config = config
        self.adapter_query = adapter_query
        self.require_complete_limits = require_complete_limits

        self.state = SwapState.PLANNED
        self.history: list[SwapState] = [SwapState.PLANNED]
        self.failure_reason: str | None = None

        self.solution: SolveResult | None = None
        self.limits: LimitsResult | None = None
        self.payload: bytes | None = None
        self.asset_transfer_args: bytes | None = None
        self.balances = Balances()
        self.tx_hash: str | None = None
        self.report: SwapReport | None = None

    def _advance(self, state: SwapState) -> None:
        self.state = state
        self.history.append(state)
        logger.debug(
            "swap_state",
            state=state.value,
            token_in=self.token_in.symbol,
            token_out=self.token_out.symbol,
        )

    def _fail(self, error: Exception) -> None:
        self.failure_reason = f"{type(error).__name__}: {error}"
        logger.error(
            "swap_failed",
            from_state=self.state.value,
            reason=self.failure_reason,
            token_in=self.token_in.symbol,
            token_out=self.token_out.symbol,
        )
        self.state = SwapState.FAILED
        self.history.append(SwapState.FAILED)

    @property
    def is_failed(self) -> bool:
        return self.state is SwapState.FAILED

    async def run(self) -> SwapReport:
        """Run the attempt to completion.

        Returns:
            The swap report

        Raises:
            SolverFailure, InvalidRoute, EncodingFailure, QueryFailure, or
            whatever the submitter raises. The attempt is left in FAILED.
        """
        if self.state is not SwapState.PLANNED:
            raise RuntimeError(f"Swap attempt already ran (state={self.state.value})")

        try:
            return await self._run()
        except Exception as e:
            self._fail(e)
            raise

    async def _run(self) -> SwapReport:
        solution = await self.solver.solve(
            self.token_in,
            self.token_out,
            self.swap_type,
            self.amount,
            query_on_chain=self.config.query_on_chain,
        )
        self.solution = solution
        route = solution.route
        if not route.is_viable:
            raise SolverFailure(
                f"No viable route from {self.token_in.symbol} to {self.token_out.symbol}: "
                f"returnAmount={route.return_amount}"
            )

        limits = calculate_limits(self.swap_type, route)
        if self.require_complete_limits and not limits.is_complete:
            raise InvalidRoute(
                "Route leaves "
                + ", ".join(gap.value for gap in limits.gaps)
                + " without a limit"
            )
        self.limits = limits
        self._advance(SwapState.LIMITS_COMPUTED)

        self.payload = encode_swap_args(
            self.swap_type,
            route.swaps,
            route.token_addresses,
            expected_output_amount(self.swap_type, route),
            limits.limits,
            self.config.deadline,
        )
        if self.adapter_query is not None:
            self.asset_transfer_args = await derive_asset_transfer_args(
                self.adapter_query, TAKE_ORDER_SELECTOR, self.payload
            )
        self._advance(SwapState.PAYLOAD_ENCODED)

        self.balances = await self.auditor.snapshot_before(self.token_in, self.token_out)

        self.tx_hash = await self.submitter.submit(
            SwapSubmission(
                payload=self.payload,
                route=route,
                limits=limits.limits,
                funds=self.funds,
                deadline=self.config.deadline,
                value=self._native_value(route, limits),
            )
        )
        logger.info("swap_submitted", tx_hash=self.tx_hash)
        self._advance(SwapState.SUBMITTED)

        self.balances = await self.auditor.snapshot_after(
            self.balances, self.token_in, self.token_out
        )
        self._advance(SwapState.AUDITED)

        self.report = build_report(
            self.swap_type,
            route,
            limits.limits,
            self.token_in,
            self.token_out,
            self.amount,
            solution.cost,
            self.balances,
            funds=self.funds,
            cost_token=solution.cost_token,
        )
        log_report(self.report)
        self._advance(SwapState.REPORTED)
        return self.report

    def _native_value(self, route: Route, limits: LimitsResult) -> int:
        # ETH in swaps must send ETH value
        if not self.token_in.is_native:
            return 0
        index = route.index_of(route.token_in)
        if index is None:
            return 0
        return int(limits.limits[index])


__all__ = [
    "SwapState",
    "SwapSubmission",
    "VaultSubmitter",
    "SwapAttempt",
    "expected_output_amount",
]
