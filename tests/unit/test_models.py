"""Tests for route, token and type models."""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from batchswap.models import FundManagement, Hop, Route, SwapType, TokenDescriptor
from batchswap.models.types import (
    UINT256_MAX,
    hex_to_bytes,
    is_native,
    is_valid_address,
    normalize_address,
    validate_uint256,
)
from tests.helpers import ETH, POOL_A, TRADER, USDC, WETH, make_hop, make_route


class TestUint256:
    def test_accepts_int_and_string(self):
        assert validate_uint256(5) == "5"
        assert validate_uint256("5") == "5"
        assert validate_uint256(UINT256_MAX) == str(UINT256_MAX)

    @pytest.mark.parametrize("value", [-1, "-1", UINT256_MAX + 1, "abc", 1.5, True])
    def test_rejects(self, value):
        with pytest.raises(ValueError):
            validate_uint256(value)


class TestAddressHelpers:
    def test_normalize(self):
        assert normalize_address("0xABCDEF0000000000000000000000000000000000") == (
            "0xabcdef0000000000000000000000000000000000"
        )
        assert normalize_address("abcdef0000000000000000000000000000000000").startswith("0x")

    def test_normalize_validate(self):
        with pytest.raises(ValueError):
            normalize_address("0x1234", validate=True)

    def test_is_valid_address(self):
        assert is_valid_address(USDC)
        assert not is_valid_address("0x1234")
        assert not is_valid_address("0x" + "zz" * 20)
        assert not is_valid_address("0x" + "0" * 38 + "_1")
        assert not is_valid_address("0X" + USDC[2:])

    def test_is_native(self):
        assert is_native(ETH)
        assert not is_native(WETH)

    def test_hex_to_bytes(self):
        assert hex_to_bytes("0x") == b""
        assert hex_to_bytes("0XdeAD") == b"\xde\xad"


class TestHop:
    def test_aliases(self):
        """Hops validate from SOR field names."""
        hop = Hop.model_validate(
            {"poolId": POOL_A, "assetInIndex": 0, "assetOutIndex": 1, "amount": "7"}
        )

        assert hop.user_data == "0x"
        assert hop.as_abi_tuple() == (bytes.fromhex(POOL_A[2:]), 0, 1, 7, b"")

    def test_rejects_short_pool_id(self):
        with pytest.raises(ValidationError):
            make_hop(pool_id="0x1234")

    def test_rejects_negative_index(self):
        with pytest.raises(ValidationError):
            make_hop(asset_in_index=-1)


class TestRoute:
    def test_duplicate_tokens_rejected(self):
        """Addresses are compared case-insensitively."""
        with pytest.raises(ValidationError, match="Duplicate"):
            make_route(token_addresses=[USDC, "0x" + USDC[2:].upper()])

    def test_hop_index_out_of_range(self):
        with pytest.raises(ValidationError, match="outside tokenAddresses"):
            make_route(swaps=[make_hop(asset_out_index=2)])

    def test_negative_amount_rejected(self):
        with pytest.raises(ValidationError):
            make_route(return_amount=-1)

    @pytest.mark.parametrize("field", ["swap_amount", "return_amount"])
    def test_fractional_base_units_rejected(self, field):
        """Base-unit amounts must be whole; 1.5 wei is never truncated to 1."""
        with pytest.raises(ValidationError, match="whole number"):
            make_route(swaps=[make_hop()], **{field: "1.5"})

    def test_integral_decimal_with_exponent_accepted(self):
        route = make_route(swap_amount=Decimal("1E+18"), swaps=[make_hop()])

        assert route.swap_amount == Decimal(10**18)

    def test_viability(self):
        assert make_route(return_amount=1).is_viable
        assert not make_route(return_amount=0).is_viable

    def test_index_of(self, eth_usdc_route):
        assert eth_usdc_route.index_of(USDC.upper().replace("0X", "0x")) == 1
        assert eth_usdc_route.index_of(WETH) is None

    def test_from_sor_json(self):
        route = Route.model_validate(
            {
                "swapType": 1,
                "swaps": [],
                "tokenAddresses": [],
                "tokenIn": ETH,
                "tokenOut": USDC,
                "swapAmount": "0",
                "returnAmount": "0",
            }
        )

        assert route.swap_type is SwapType.EXACT_OUT
        assert route.return_amount == Decimal(0)
        assert not route.is_viable

    def test_swap_type_labels(self):
        assert SwapType.EXACT_IN.label == "SwapExactIn"
        assert SwapType.EXACT_OUT.label == "SwapExactOut"


class TestFundManagement:
    def test_defaults_to_external_balances(self):
        funds = FundManagement(sender=TRADER, recipient=TRADER)

        assert funds.model_dump(by_alias=True) == {
            "sender": TRADER,
            "recipient": TRADER,
            "fromInternalBalance": False,
            "toInternalBalance": False,
        }


class TestTokenDescriptor:
    def test_native(self):
        assert TokenDescriptor(symbol="ETH", address=ETH).is_native
        assert not TokenDescriptor(symbol="USDC", address=USDC, decimals=6).is_native

    def test_decimals_bounds(self):
        with pytest.raises(ValidationError):
            TokenDescriptor(symbol="X", address=USDC, decimals=-1)
