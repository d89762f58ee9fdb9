"""Smart order router (SOR) seam.

Route discovery happens outside this package. Anything that implements
RouteSolver can feed the limit calculator and encoder, which keeps those
testable with synthetic routes.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Protocol

import httpx
import structlog
from pydantic import ValidationError

from batchswap.balances import scale_amount
from batchswap.config import DEFAULT_SWAP_CONFIG, SwapConfig
from batchswap.errors import SolverFailure
from batchswap.models.route import Route, SwapType
from batchswap.models.tokens import TokenDescriptor
from batchswap.networks import NetworkDescriptor

logger = structlog.get_logger()


@dataclass(frozen=True)
class SolveResult:
    """A viable route plus the solver's execution cost estimate.

    Attributes:
        route: Solved route (amounts in base units)
        cost: Estimated cost of executing the swap, denominated in cost_token
        cost_token: Token the cost is priced in (tokenOut for ExactIn,
            tokenIn for ExactOut)
    """

    route: Route
    cost: Decimal
    cost_token: TokenDescriptor


class RouteSolver(Protocol):
    """Protocol for route solvers."""

    async def solve(
        self,
        token_in: TokenDescriptor,
        token_out: TokenDescriptor,
        swap_type: SwapType,
        amount: Decimal,
        *,
        query_on_chain: bool = True,
    ) -> SolveResult:
        """Find a route for swapping ``amount`` (whole-token units).

        For ExactIn the amount is of token_in; for ExactOut it is of token_out.

        Raises:
            SolverFailure: If the query fails or no route returns a positive amount
        """
        ...


def cost_token_for(
    swap_type: SwapType, token_in: TokenDescriptor, token_out: TokenDescriptor
) -> TokenDescriptor:
    """The SOR prices gas in the token on the "solved for" side."""
    return token_in if swap_type is SwapType.EXACT_OUT else token_out


def amount_token_for(
    swap_type: SwapType, token_in: TokenDescriptor, token_out: TokenDescriptor
) -> TokenDescriptor:
    """The token the requested amount is denominated in."""
    return token_in if swap_type is SwapType.EXACT_IN else token_out


class HttpRouteSolver:
    """RouteSolver backed by an SOR HTTP service.

    Issues two sequential requests: POST /cost for the gas cost estimate,
    then POST /swaps for the route itself.
    """

    def __init__(
        self,
        network: NetworkDescriptor,
        config: SwapConfig = DEFAULT_SWAP_CONFIG,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the solver client.

        Args:
            network: Network the routes are solved on
            config: Swap configuration (solver URL, gas price, max pools, timeout)
            client: Optional shared HTTP client. If None, one is opened per solve().
        """
        self.network = network
        self.config = config
        self.base_url = config.solver_url.rstrip("/")
        self._client = client

    async def solve(
        self,
        token_in: TokenDescriptor,
        token_out: TokenDescriptor,
        swap_type: SwapType,
        amount: Decimal,
        *,
        query_on_chain: bool = True,
    ) -> SolveResult:
        if self._client is not None:
            return await self._solve(
                self._client, token_in, token_out, swap_type, amount, query_on_chain
            )
        async with httpx.AsyncClient(timeout=self.config.solver_timeout) as client:
            return await self._solve(
                client, token_in, token_out, swap_type, amount, query_on_chain
            )

    async def _post(self, client: httpx.AsyncClient, path: str, payload: dict[str, Any]) -> Any:
        url = f"{self.base_url}{path}"
        try:
            response = await client.post(url, json=payload)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPError as e:
            logger.warning("sor_request_failed", url=url, error=str(e))
            raise SolverFailure(f"SOR request to {path} failed: {e}") from e
        except ValueError as e:
            raise SolverFailure(f"SOR response from {path} is not JSON: {e}") from e

    async def _solve(
        self,
        client: httpx.AsyncClient,
        token_in: TokenDescriptor,
        token_out: TokenDescriptor,
        swap_type: SwapType,
        amount: Decimal,
        query_on_chain: bool,
    ) -> SolveResult:
        cost_token = cost_token_for(swap_type, token_in, token_out)
        amount_token = amount_token_for(swap_type, token_in, token_out)
        amount_base = scale_amount(amount, amount_token.decimals)

        cost_data = await self._post(
            client,
            "/cost",
            {
                "chainId": self.network.chain_id,
                "token": cost_token.address,
                "decimals": cost_token.decimals,
                "gasPrice": str(self.config.gas_price),
            },
        )
        try:
            cost = Decimal(str(cost_data["cost"]))
        except (KeyError, TypeError, ArithmeticError) as e:
            raise SolverFailure(f"SOR cost response is malformed: {cost_data!r}") from e

        swap_data = await self._post(
            client,
            "/swaps",
            {
                "chainId": self.network.chain_id,
                "subgraphUrl": self.network.subgraph_url,
                "tokenIn": token_in.address,
                "tokenOut": token_out.address,
                "swapType": int(swap_type),
                "swapAmount": str(int(amount_base)),
                "queryOnChain": query_on_chain,
                "gasPrice": str(self.config.gas_price),
                "maxPools": self.config.max_pools,
            },
        )
        if not isinstance(swap_data, dict):
            raise SolverFailure(f"SOR swaps response is not an object: {swap_data!r}")

        try:
            route = Route.model_validate({**swap_data, "swapType": int(swap_type)})
        except ValidationError as e:
            raise SolverFailure(f"SOR returned an invalid route: {e}") from e

        if not route.is_viable:
            logger.info(
                "sor_no_viable_route",
                token_in=token_in.symbol,
                token_out=token_out.symbol,
                amount=str(amount),
            )
            raise SolverFailure(
                f"No viable route from {token_in.symbol} to {token_out.symbol}: "
                f"returnAmount={route.return_amount}"
            )

        logger.info(
            "sor_route_found",
            swap_type=swap_type.label,
            token_in=token_in.symbol,
            token_out=token_out.symbol,
            hops=len(route.swaps),
            return_amount=str(route.return_amount),
            cost=str(cost),
        )
        return SolveResult(route=route, cost=cost, cost_token=cost_token)


__all__ = [
    "SolveResult",
    "RouteSolver",
    "HttpRouteSolver",
    "cost_token_for",
    "amount_token_for",
]
