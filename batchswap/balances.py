"""Balance auditing around a swap submission.

Native ETH and ERC-20 balances are read through different calls but both
come back as exact Decimals scaled by the token's decimals.
"""

from __future__ import annotations

import decimal
from decimal import Decimal
from typing import Protocol

import structlog

from batchswap.errors import BatchSwapError, QueryFailure
from batchswap.models.balances import DECIMAL_HIGH_PREC_CONTEXT, Balances, compute_delta
from batchswap.models.tokens import TokenDescriptor
from batchswap.models.types import is_native

logger = structlog.get_logger()


def scale_amount(amount: Decimal | int, decimals: int) -> Decimal:
    """Shift an amount by ``decimals`` powers of ten, exactly.

    ``scale_amount(1, 18)`` converts 1 ETH to wei; ``scale_amount(wei, -18)``
    converts back.
    """
    return Decimal(amount).scaleb(decimals, DECIMAL_HIGH_PREC_CONTEXT)


class BalanceReader(Protocol):
    """Protocol for balance reads. Amounts are raw base units."""

    async def native_balance(self, account: str) -> int:
        """ETH balance of the account in wei."""
        ...

    async def token_balance(self, account: str, token: str) -> int:
        """ERC-20 balanceOf(account) for the token."""
        ...


class BalanceAuditor:
    """Captures balances for one account before and after a swap.

    Each read is a separate awaited call; failures surface as QueryFailure
    and are never retried here.
    """

    def __init__(self, reader: BalanceReader, account: str) -> None:
        self.reader = reader
        self.account = account

    async def capture_balance(self, asset: str, decimals: int = 0) -> Decimal:
        """Read the account's balance of one asset.

        Args:
            asset: Token address, or the zero address for native ETH
            decimals: Token decimals used to scale the raw amount (0 keeps base units)

        Returns:
            Balance as an exact Decimal

        Raises:
            QueryFailure: If the underlying read fails
        """
        try:
            if is_native(asset):
                raw = await self.reader.native_balance(self.account)
            else:
                raw = await self.reader.token_balance(self.account, asset)
        except BatchSwapError:
            raise
        except Exception as e:
            logger.warning(
                "balance_query_failed", account=self.account, asset=asset, error=str(e)
            )
            raise QueryFailure(f"Balance read failed for {asset}: {e}") from e

        return scale_amount(raw, -decimals)

    async def _capture_pair(
        self, token_in: TokenDescriptor, token_out: TokenDescriptor
    ) -> tuple[Decimal, Decimal]:
        balance_in = await self.capture_balance(token_in.address, token_in.decimals)
        balance_out = await self.capture_balance(token_out.address, token_out.decimals)
        return balance_in, balance_out

    async def snapshot_before(
        self, token_in: TokenDescriptor, token_out: TokenDescriptor
    ) -> Balances:
        """Capture pre-submission balances into a fresh snapshot."""
        balance_in, balance_out = await self._capture_pair(token_in, token_out)
        logger.debug(
            "balances_before",
            account=self.account,
            token_in=str(balance_in),
            token_out=str(balance_out),
        )
        return Balances().with_before(balance_in, balance_out)

    async def snapshot_after(
        self,
        balances: Balances,
        token_in: TokenDescriptor,
        token_out: TokenDescriptor,
    ) -> Balances:
        """Fill in post-confirmation balances.

        If no "before" values were captured, the current balances are used
        for both sides so the snapshot is still complete (delta of zero).
        """
        balance_in, balance_out = await self._capture_pair(token_in, token_out)
        if not balances.has_before:
            balances = balances.with_before(balance_in, balance_out)
        logger.debug(
            "balances_after",
            account=self.account,
            token_in=str(balance_in),
            token_out=str(balance_out),
        )
        return balances.with_after(balance_in, balance_out)


# ERC-20 ABI - minimal, just balanceOf
ERC20_BALANCE_OF_ABI = [
    {
        "name": "balanceOf",
        "type": "function",
        "stateMutability": "view",
        "inputs": [{"name": "account", "type": "address"}],
        "outputs": [{"name": "", "type": "uint256"}],
    },
]


class Web3BalanceReader:
    """Balance reader backed by an RPC node."""

    def __init__(self, web3_provider: str):
        """Initialize with an HTTP RPC URL (e.g., "https://eth.llamarpc.com")."""
        try:
            from web3 import AsyncWeb3
        except ImportError as e:
            raise ImportError(
                "web3 package required for Web3BalanceReader. Install with: pip install web3"
            ) from e

        self._to_checksum = AsyncWeb3.to_checksum_address
        self.w3 = AsyncWeb3(AsyncWeb3.AsyncHTTPProvider(web3_provider))

    async def native_balance(self, account: str) -> int:
        return int(await self.w3.eth.get_balance(self._to_checksum(account)))

    async def token_balance(self, account: str, token: str) -> int:
        contract = self.w3.eth.contract(
            address=self._to_checksum(token), abi=ERC20_BALANCE_OF_ABI
        )
        return int(await contract.functions.balanceOf(self._to_checksum(account)).call())


__all__ = [
    "BalanceReader",
    "BalanceAuditor",
    "Web3BalanceReader",
    "compute_delta",
    "scale_amount",
]
