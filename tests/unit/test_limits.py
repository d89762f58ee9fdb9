"""Tests for slippage limit calculation."""

from decimal import Decimal

import pytest

from batchswap.errors import InvalidRoute
from batchswap.limits import BoundGap, calculate_limits, find_bound_gaps, min_receive_bound
from batchswap.models.route import SwapType
from tests.helpers import BAL, DAI, ETH, POOL_B, USDC, WETH, make_hop, make_route


class TestExactIn:
    """ExactIn: max send on tokenIn, -99% of the estimate on tokenOut."""

    def test_eth_to_usdc(self, eth_usdc_route):
        """1 ETH for an estimated 2000 USDC."""
        result = calculate_limits(SwapType.EXACT_IN, eth_usdc_route)

        assert result.as_list() == ["1000000000000000000", "-1980000000"]
        assert result.is_complete

    def test_fraction_truncated_toward_zero(self):
        """-0.99 * 2000000001 = -1980000000.99 drops the fraction, no rounding up."""
        route = make_route(return_amount=2_000_000_001)

        result = calculate_limits(SwapType.EXACT_IN, route)

        assert result.limits[1] == "-1980000000"

    def test_small_amount_truncation(self):
        """-0.99 * 101 = -99.99 becomes -99."""
        route = make_route(return_amount=101)

        assert calculate_limits(SwapType.EXACT_IN, route).limits[1] == "-99"

    def test_large_amount_is_exact(self):
        """No precision loss on amounts well beyond float range."""
        route = make_route(return_amount="123456789012345678901234567890")

        result = calculate_limits(SwapType.EXACT_IN, route)

        assert result.limits[1] == "-122222221122222222112222222211"

    def test_case_insensitive_match(self):
        """Mixed-case token addresses still match tokenIn/tokenOut."""
        upper_usdc = "0x" + USDC[2:].upper()
        route = make_route(token_in=ETH, token_out=USDC, token_addresses=[ETH, upper_usdc])

        result = calculate_limits(SwapType.EXACT_IN, route)

        assert result.as_list() == ["1000000000000000000", "-1980000000"]

    def test_output_first_in_token_list(self):
        """Limits follow tokenAddresses order, not tokenIn/tokenOut order."""
        route = make_route(
            token_in=ETH,
            token_out=USDC,
            token_addresses=[USDC, ETH],
            swaps=[make_hop(asset_in_index=1, asset_out_index=0)],
        )

        result = calculate_limits(SwapType.EXACT_IN, route)

        assert result.as_list() == ["-1980000000", "1000000000000000000"]


class TestExactOut:
    """ExactOut: returnAmount is the max send, -99% of swapAmount the min receive."""

    def test_dai_for_exact_usdc(self):
        """Buy 1000 USDC, solver estimates 1010 DAI in."""
        route = make_route(
            token_in=DAI,
            token_out=USDC,
            swap_amount=1_000_000_000,
            return_amount=1010 * 10**18,
            swap_type=SwapType.EXACT_OUT,
        )

        result = calculate_limits(SwapType.EXACT_OUT, route)

        assert result.as_list() == ["1010000000000000000000", "-990000000"]


class TestMultiHop:
    """Intermediate tokens are always zero."""

    def test_middle_token_zero(self):
        """ETH -> WETH -> USDC leaves WETH at 0."""
        route = make_route(
            token_in=ETH,
            token_out=USDC,
            token_addresses=[ETH, WETH, USDC],
            swaps=[
                make_hop(asset_in_index=0, asset_out_index=1),
                make_hop(pool_id=POOL_B, asset_in_index=1, asset_out_index=2, amount=0),
            ],
        )

        result = calculate_limits(SwapType.EXACT_IN, route)

        assert result.as_list() == ["1000000000000000000", "0", "-1980000000"]

    @pytest.mark.parametrize("extra_tokens", [0, 1, 3])
    def test_length_matches_token_addresses(self, extra_tokens):
        """One limit per token regardless of how many hops the route has."""
        intermediates = [WETH, DAI, BAL][:extra_tokens]
        tokens = [ETH, *intermediates, USDC]
        swaps = [
            make_hop(asset_in_index=i, asset_out_index=i + 1) for i in range(len(tokens) - 1)
        ]
        route = make_route(token_addresses=tokens, swaps=swaps)

        result = calculate_limits(SwapType.EXACT_IN, route)

        assert len(result) == len(tokens)
        assert result.limits[1:-1] == ("0",) * extra_tokens


class TestBoundGaps:
    """Tokens missing from tokenAddresses are reported, not raised."""

    def test_missing_token_out(self):
        """tokenOut absent: only the input side is bounded."""
        route = make_route(token_in=ETH, token_out=USDC, token_addresses=[ETH, WETH])

        result = calculate_limits(SwapType.EXACT_IN, route)

        assert result.as_list() == ["1000000000000000000", "0"]
        assert result.gaps == (BoundGap.TOKEN_OUT,)
        assert not result.is_complete

    def test_both_missing(self):
        """Neither side found: all zeros and two gaps."""
        route = make_route(token_in=ETH, token_out=USDC, token_addresses=[WETH, DAI])

        result = calculate_limits(SwapType.EXACT_IN, route)

        assert result.as_list() == ["0", "0"]
        assert set(result.gaps) == {BoundGap.TOKEN_IN, BoundGap.TOKEN_OUT}

    def test_find_bound_gaps_on_complete_route(self, eth_usdc_route):
        assert find_bound_gaps(eth_usdc_route) == ()


class TestSelfSwap:
    """tokenIn == tokenOut is rejected rather than resolved by iteration order."""

    def test_self_swap_raises(self):
        route = make_route(token_in=USDC, token_out=USDC, token_addresses=[USDC, DAI])

        with pytest.raises(InvalidRoute):
            calculate_limits(SwapType.EXACT_IN, route)

    def test_self_swap_case_insensitive(self):
        route = make_route(
            token_in=USDC, token_out="0x" + USDC[2:].upper(), token_addresses=[USDC, DAI]
        )

        with pytest.raises(InvalidRoute):
            calculate_limits(SwapType.EXACT_OUT, route)


class TestDeterminism:
    def test_repeated_calls_identical(self, eth_usdc_route):
        """Recomputing from the same route gives the same limits."""
        first = calculate_limits(SwapType.EXACT_IN, eth_usdc_route)
        second = calculate_limits(SwapType.EXACT_IN, eth_usdc_route)

        assert first == second

    def test_min_receive_bound_of_zero(self):
        """A zero estimate yields "0", not "-0"."""
        assert min_receive_bound(Decimal("0")) == "0"
