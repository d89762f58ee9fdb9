"""ABI encoding of Balancer V2 adapter call arguments.

The adapter decodes these payloads with fixed Solidity types, so field order
and widths here must match its abi.decode calls exactly.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from eth_abi import decode, encode  # type: ignore[attr-defined]
from eth_abi.exceptions import DecodingError, EncodingError
from eth_utils import function_signature_to_4byte_selector

from batchswap.errors import EncodingFailure
from batchswap.models.route import Hop, PoolRequest, SwapType
from batchswap.models.types import hex_to_bytes, is_valid_address, normalize_address

# Adapter actions, as registered with the integration manager
TAKE_ORDER_SELECTOR = function_signature_to_4byte_selector("takeOrder(address,bytes,bytes)")
LEND_SELECTOR = function_signature_to_4byte_selector("lend(address,bytes,bytes)")
REDEEM_SELECTOR = function_signature_to_4byte_selector("redeem(address,bytes,bytes)")

# (bytes32 poolId, uint256 assetInIndex, uint256 assetOutIndex, uint256 amount, bytes userData)
BATCH_SWAP_STEP = "(bytes32,uint256,uint256,uint256,bytes)"

# takeOrder: (swapType, swaps, tokenAddresses, tokenOutAmount, limits, deadline)
SWAP_ARGS_TYPES = ["uint8", f"{BATCH_SWAP_STEP}[]", "address[]", "uint256", "int256[]", "uint256"]

# (address[] assets, uint256[] amounts, bytes userData, bool internalBalance)
POOL_REQUEST = "(address[],uint256[],bytes,bool)"
LEND_ARGS_TYPES = ["bytes32", POOL_REQUEST]
REDEEM_ARGS_TYPES = ["bytes32", "address", POOL_REQUEST]

# callOnIntegration: (adapter, selector, encodedCallArgs)
INTEGRATION_CALL_TYPES = ["address", "bytes4", "bytes"]

# parseAssetsForMethod result, re-encoded for the settlement pre-check
ASSET_TRANSFER_TYPES = ["uint256", "address[]", "uint256[]", "address[]"]


@dataclass(frozen=True)
class SwapCallArgs:
    """Decoded takeOrder arguments."""

    swap_type: SwapType
    swaps: tuple[Hop, ...]
    token_addresses: tuple[str, ...]
    token_out_amount: int
    limits: tuple[str, ...]
    deadline: int


def _address_bytes(address: str) -> bytes:
    if not is_valid_address(address):
        raise EncodingFailure(f"Malformed address: {address!r}")
    try:
        return bytes.fromhex(normalize_address(address)[2:])
    except ValueError as err:
        raise EncodingFailure(f"Malformed address: {address!r}") from err


def _bytes32(value: str) -> bytes:
    try:
        raw = hex_to_bytes(value)
    except ValueError as err:
        raise EncodingFailure(f"bytes32 value is not hex: {value!r}") from err
    # eth_abi right-pads short values; a short pool id is a bug, not padding
    if len(raw) != 32:
        raise EncodingFailure(f"bytes32 value must be 32 bytes, got {len(raw)}: {value!r}")
    return raw


def _integer(value: int | str | Decimal, name: str) -> int:
    if isinstance(value, bool):
        raise EncodingFailure(f"{name} must be an integer, got bool")
    if isinstance(value, int):
        return value
    try:
        as_decimal = Decimal(str(value))
    except InvalidOperation as err:
        raise EncodingFailure(f"{name} is not a number: {value!r}") from err
    if not as_decimal.is_finite() or as_decimal != as_decimal.to_integral_value():
        raise EncodingFailure(f"{name} must be an integer amount, got {value!r}")
    return int(as_decimal)


def _encode(types: list[str], values: list[object]) -> bytes:
    try:
        return encode(types, values)
    except EncodingError as err:
        raise EncodingFailure(f"Cannot encode {types}: {err}") from err


def encode_swap_args(
    swap_type: SwapType,
    swaps: Sequence[Hop],
    token_addresses: Sequence[str],
    token_out_amount: int | str | Decimal,
    limits: Sequence[str | int],
    deadline: int,
) -> bytes:
    """Encode takeOrder call arguments for the Balancer V2 adapter.

    Layout: (uint8 swapType, BatchSwapStep[] swaps, address[] tokenAddresses,
    uint256 tokenOutAmount, int256[] limits, uint256 deadline).

    Args:
        swap_type: ExactIn or ExactOut
        swaps: Hops of the route
        token_addresses: Token list the hop indices refer to
        token_out_amount: Expected output amount in base units
        limits: Signed limits aligned with token_addresses
        deadline: Unix timestamp after which the vault rejects the swap

    Returns:
        ABI-encoded arguments

    Raises:
        EncodingFailure: If limits and token_addresses differ in length, an
            address or pool id is malformed, or a value does not fit its type
    """
    if len(limits) != len(token_addresses):
        raise EncodingFailure(
            f"limits length {len(limits)} does not match tokenAddresses length "
            f"{len(token_addresses)}"
        )

    steps = [hop.as_abi_tuple() for hop in swaps]
    tokens = [_address_bytes(token) for token in token_addresses]
    signed_limits = [_integer(limit, "limit") for limit in limits]

    return _encode(
        SWAP_ARGS_TYPES,
        [
            int(swap_type),
            steps,
            tokens,
            _integer(token_out_amount, "tokenOutAmount"),
            signed_limits,
            _integer(deadline, "deadline"),
        ],
    )


def decode_swap_args(data: bytes) -> SwapCallArgs:
    """Decode a payload produced by encode_swap_args.

    Raises:
        EncodingFailure: If the data does not decode as takeOrder arguments
    """
    try:
        swap_type, steps, tokens, token_out_amount, limits, deadline = decode(
            SWAP_ARGS_TYPES, data
        )
        direction = SwapType(swap_type)
    except (DecodingError, ValueError) as err:
        raise EncodingFailure(f"Cannot decode swap args: {err}") from err

    swaps = tuple(
        Hop(
            pool_id="0x" + pool_id.hex(),
            asset_in_index=asset_in,
            asset_out_index=asset_out,
            amount=str(amount),
            user_data="0x" + user_data.hex(),
        )
        for pool_id, asset_in, asset_out, amount, user_data in steps
    )
    return SwapCallArgs(
        swap_type=direction,
        swaps=swaps,
        token_addresses=tuple(normalize_address(t) for t in tokens),
        token_out_amount=token_out_amount,
        limits=tuple(str(limit) for limit in limits),
        deadline=deadline,
    )


@dataclass(frozen=True)
class AssetsForMethod:
    """Assets an adapter call will spend and receive, as classified by the adapter.

    The four sequences are taken as-is; keeping spend_assets and
    spend_asset_amounts aligned is the adapter's responsibility.
    """

    spend_assets_handle_type: int
    spend_assets: tuple[str, ...]
    spend_asset_amounts: tuple[int, ...]
    expected_incoming_assets: tuple[str, ...]


def encode_asset_transfer_args(assets: AssetsForMethod) -> bytes:
    """Encode (uint256 handleType, address[] spend, uint256[] amounts, address[] incoming)."""
    return _encode(
        ASSET_TRANSFER_TYPES,
        [
            _integer(assets.spend_assets_handle_type, "spendAssetsHandleType"),
            [_address_bytes(a) for a in assets.spend_assets],
            [_integer(amount, "spendAssetAmount") for amount in assets.spend_asset_amounts],
            [_address_bytes(a) for a in assets.expected_incoming_assets],
        ],
    )


def decode_asset_transfer_args(data: bytes) -> AssetsForMethod:
    """Decode a payload produced by encode_asset_transfer_args.

    Raises:
        EncodingFailure: If the data does not decode as asset transfer arguments
    """
    try:
        handle_type, spend_assets, amounts, incoming = decode(ASSET_TRANSFER_TYPES, data)
    except DecodingError as err:
        raise EncodingFailure(f"Cannot decode asset transfer args: {err}") from err
    return AssetsForMethod(
        spend_assets_handle_type=handle_type,
        spend_assets=tuple(normalize_address(a) for a in spend_assets),
        spend_asset_amounts=tuple(amounts),
        expected_incoming_assets=tuple(normalize_address(a) for a in incoming),
    )


def _pool_request_tuple(request: PoolRequest) -> tuple[list[bytes], list[int], bytes, bool]:
    return (
        [_address_bytes(asset) for asset in request.assets],
        [int(amount) for amount in request.amounts],
        hex_to_bytes(request.user_data),
        request.use_internal_balance,
    )


def encode_lend_args(pool_id: str, request: PoolRequest) -> bytes:
    """Encode lend (join pool) arguments: (bytes32 poolId, JoinPoolRequest)."""
    return _encode(LEND_ARGS_TYPES, [_bytes32(pool_id), _pool_request_tuple(request)])


def encode_redeem_args(pool_id: str, recipient: str, request: PoolRequest) -> bytes:
    """Encode redeem (exit pool) arguments: (bytes32 poolId, address recipient, ExitPoolRequest)."""
    return _encode(
        REDEEM_ARGS_TYPES,
        [_bytes32(pool_id), _address_bytes(recipient), _pool_request_tuple(request)],
    )


def encode_call_on_integration_args(
    adapter: str, selector: bytes, encoded_call_args: bytes
) -> bytes:
    """Wrap adapter call arguments for the integration manager.

    Raises:
        EncodingFailure: If the selector is not 4 bytes or the adapter address is malformed
    """
    if len(selector) != 4:
        raise EncodingFailure(f"Selector must be 4 bytes, got {len(selector)}")
    return _encode(
        INTEGRATION_CALL_TYPES, [_address_bytes(adapter), selector, encoded_call_args]
    )


__all__ = [
    "TAKE_ORDER_SELECTOR",
    "LEND_SELECTOR",
    "REDEEM_SELECTOR",
    "SWAP_ARGS_TYPES",
    "ASSET_TRANSFER_TYPES",
    "SwapCallArgs",
    "AssetsForMethod",
    "encode_swap_args",
    "decode_swap_args",
    "encode_asset_transfer_args",
    "decode_asset_transfer_args",
    "encode_lend_args",
    "encode_redeem_args",
    "encode_call_on_integration_args",
]
