"""Pydantic models for solved routes.

Field names and aliases follow the SwapInfo structure returned by the
Balancer smart order router, so solver responses validate directly.
"""

from __future__ import annotations

from decimal import Decimal
from enum import IntEnum

from pydantic import BaseModel, Field, field_validator, model_validator

from batchswap.models.types import Address, Bytes, Bytes32, Uint256, hex_to_bytes, same_address


class SwapType(IntEnum):
    """Swap direction, encoded as uint8 by the vault."""

    EXACT_IN = 0
    EXACT_OUT = 1

    @property
    def label(self) -> str:
        """Human-readable label as printed by the SOR tooling."""
        return "SwapExactIn" if self is SwapType.EXACT_IN else "SwapExactOut"


class Hop(BaseModel):
    """One pool-level step of a batch swap (BatchSwapStep in the vault ABI).

    Indices point into the route's token list, not at token identities.
    """

    pool_id: Bytes32 = Field(alias="poolId")
    asset_in_index: int = Field(alias="assetInIndex", ge=0)
    asset_out_index: int = Field(alias="assetOutIndex", ge=0)
    amount: Uint256
    user_data: Bytes = Field(default="0x", alias="userData")

    model_config = {"populate_by_name": True, "frozen": True}

    def as_abi_tuple(self) -> tuple[bytes, int, int, int, bytes]:
        """Values in (bytes32,uint256,uint256,uint256,bytes) order."""
        return (
            hex_to_bytes(self.pool_id),
            self.asset_in_index,
            self.asset_out_index,
            int(self.amount),
            hex_to_bytes(self.user_data),
        )


class Route(BaseModel):
    """A solved route: hops over a token list plus the solver's estimate.

    Amounts are whole token base units (e.g. wei). The model checks hop indices
    and token-list uniqueness; it does not require tokenIn/tokenOut to be in
    the token list, since limit calculation reports that as a gap instead.
    """

    swap_type: SwapType = Field(alias="swapType")
    swaps: tuple[Hop, ...] = ()
    token_addresses: tuple[Address, ...] = Field(default=(), alias="tokenAddresses")
    token_in: Address = Field(alias="tokenIn")
    token_out: Address = Field(alias="tokenOut")
    swap_amount: Decimal = Field(alias="swapAmount", ge=0)
    return_amount: Decimal = Field(alias="returnAmount", ge=0)
    return_amount_considering_fees: Decimal | None = Field(
        default=None, alias="returnAmountConsideringFees"
    )
    market_sp: Decimal | None = Field(default=None, alias="marketSp")

    model_config = {"populate_by_name": True, "frozen": True}

    @field_validator("swap_amount", "return_amount")
    @classmethod
    def _check_integral(cls, value: Decimal) -> Decimal:
        if not value.is_finite() or value != value.to_integral_value():
            raise ValueError(f"Amount must be a whole number of base units: {value}")
        return value

    @model_validator(mode="after")
    def _check_structure(self) -> Route:
        seen: set[str] = set()
        for token in self.token_addresses:
            key = token.lower()
            if key in seen:
                raise ValueError(f"Duplicate token address in route: {token}")
            seen.add(key)

        count = len(self.token_addresses)
        for i, hop in enumerate(self.swaps):
            if hop.asset_in_index >= count or hop.asset_out_index >= count:
                raise ValueError(
                    f"Hop {i} references token index outside tokenAddresses "
                    f"(in={hop.asset_in_index}, out={hop.asset_out_index}, tokens={count})"
                )
        return self

    @property
    def is_viable(self) -> bool:
        """True if the solver found a route with a positive return."""
        return self.return_amount > 0

    @property
    def is_self_swap(self) -> bool:
        return same_address(self.token_in, self.token_out)

    def index_of(self, token: str) -> int | None:
        """Position of a token in tokenAddresses (case-insensitive), or None."""
        for i, candidate in enumerate(self.token_addresses):
            if same_address(candidate, token):
                return i
        return None


class FundManagement(BaseModel):
    """Where the vault pulls funds from and sends proceeds to."""

    sender: Address
    recipient: Address
    from_internal_balance: bool = Field(default=False, alias="fromInternalBalance")
    to_internal_balance: bool = Field(default=False, alias="toInternalBalance")

    model_config = {"populate_by_name": True, "frozen": True}


class PoolRequest(BaseModel):
    """Join or exit request for a single pool.

    Used for both directions: ``amounts`` are maximum amounts in for a join
    and minimum amounts out for an exit; ``use_internal_balance`` maps to
    fromInternalBalance / toInternalBalance respectively.
    """

    assets: tuple[Address, ...]
    amounts: tuple[Uint256, ...]
    user_data: Bytes = Field(default="0x", alias="userData")
    use_internal_balance: bool = Field(default=False, alias="useInternalBalance")

    model_config = {"populate_by_name": True, "frozen": True}

    @model_validator(mode="after")
    def _check_lengths(self) -> PoolRequest:
        if len(self.assets) != len(self.amounts):
            raise ValueError(
                f"assets and amounts length mismatch: {len(self.assets)} != {len(self.amounts)}"
            )
        return self
