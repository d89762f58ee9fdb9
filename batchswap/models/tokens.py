"""Token metadata."""

from pydantic import BaseModel, Field

from batchswap.models.types import Address, is_native


class TokenDescriptor(BaseModel):
    """A token known to a network: symbol, address and decimals."""

    symbol: str
    address: Address
    # Most tokens use 18 decimals, but USDC uses 6 and WBTC uses 8
    decimals: int = Field(default=18, ge=0, le=77)

    model_config = {"frozen": True}

    @property
    def is_native(self) -> bool:
        """True for native ETH (zero-address sentinel)."""
        return is_native(self.address)
