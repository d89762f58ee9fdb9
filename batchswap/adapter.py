"""Adapter asset classification and the asset-transfer pre-check payload."""

from __future__ import annotations

from enum import IntEnum
from typing import Protocol

import structlog

from batchswap.encoding import AssetsForMethod, encode_asset_transfer_args
from batchswap.errors import BatchSwapError, QueryFailure

logger = structlog.get_logger()


class SpendAssetsHandleType(IntEnum):
    """How the integration manager moves spend assets to the adapter."""

    NONE = 0
    APPROVE = 1
    TRANSFER = 2


class AdapterQuery(Protocol):
    """Protocol for the adapter's read-only parseAssetsForMethod call.

    This allows swapping between the RPC-backed query and a fake in tests.
    """

    async def parse_assets_for_method(
        self, selector: bytes, encoded_call_args: bytes
    ) -> AssetsForMethod:
        """Classify the assets a call with these arguments would spend and receive.

        Raises:
            QueryFailure: If the read reverts or the node is unreachable
        """
        ...


async def derive_asset_transfer_args(
    adapter_query: AdapterQuery, selector: bytes, encoded_call_args: bytes
) -> bytes:
    """Query the adapter and re-encode its answer for the settlement layer.

    No consistency checks are applied to the adapter's answer.

    Args:
        adapter_query: Adapter read collaborator
        selector: Adapter method selector (e.g. TAKE_ORDER_SELECTOR)
        encoded_call_args: Arguments as produced by encode_swap_args

    Returns:
        ABI-encoded (uint256, address[], uint256[], address[])

    Raises:
        QueryFailure: If the adapter query fails
        EncodingFailure: If the answer cannot be encoded
    """
    try:
        assets = await adapter_query.parse_assets_for_method(selector, encoded_call_args)
    except BatchSwapError:
        raise
    except Exception as e:
        raise QueryFailure(f"parseAssetsForMethod failed: {e}") from e

    logger.debug(
        "adapter_assets_parsed",
        selector="0x" + selector.hex(),
        handle_type=assets.spend_assets_handle_type,
        spend_assets=list(assets.spend_assets),
        incoming_assets=list(assets.expected_incoming_assets),
    )
    return encode_asset_transfer_args(assets)


# Adapter ABI - minimal, just the function we need
ADAPTER_ABI = [
    {
        "name": "parseAssetsForMethod",
        "type": "function",
        "stateMutability": "view",
        "inputs": [
            {"name": "_selector", "type": "bytes4"},
            {"name": "_encodedCallArgs", "type": "bytes"},
        ],
        "outputs": [
            {"name": "spendAssetsHandleType_", "type": "uint8"},
            {"name": "spendAssets_", "type": "address[]"},
            {"name": "spendAssetAmounts_", "type": "uint256[]"},
            {"name": "incomingAssets_", "type": "address[]"},
            {"name": "minIncomingAssetAmounts_", "type": "uint256[]"},
        ],
    },
]


class Web3AdapterQuery:
    """Adapter query that calls parseAssetsForMethod via RPC.

    The adapter also returns minimum incoming amounts; only the first four
    outputs are used.
    """

    def __init__(self, web3_provider: str, adapter_address: str):
        """Initialize with an HTTP RPC URL and the deployed adapter address."""
        try:
            from web3 import AsyncWeb3
        except ImportError as e:
            raise ImportError(
                "web3 package required for Web3AdapterQuery. Install with: pip install web3"
            ) from e

        self.w3 = AsyncWeb3(AsyncWeb3.AsyncHTTPProvider(web3_provider))
        self.adapter = self.w3.eth.contract(
            address=AsyncWeb3.to_checksum_address(adapter_address),
            abi=ADAPTER_ABI,
        )

    async def parse_assets_for_method(
        self, selector: bytes, encoded_call_args: bytes
    ) -> AssetsForMethod:
        try:
            result = await self.adapter.functions.parseAssetsForMethod(
                selector, encoded_call_args
            ).call()
        except Exception as e:
            logger.warning(
                "adapter_query_failed",
                selector="0x" + selector.hex(),
                error=str(e),
            )
            raise QueryFailure(f"parseAssetsForMethod call failed: {e}") from e

        handle_type, spend_assets, amounts, incoming = result[:4]
        return AssetsForMethod(
            spend_assets_handle_type=int(handle_type),
            spend_assets=tuple(spend_assets),
            spend_asset_amounts=tuple(int(a) for a in amounts),
            expected_incoming_assets=tuple(incoming),
        )


__all__ = [
    "SpendAssetsHandleType",
    "AdapterQuery",
    "derive_asset_transfer_args",
    "ADAPTER_ABI",
    "Web3AdapterQuery",
]
