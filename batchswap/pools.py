"""Balancer V2 pool id helpers.

A pool id packs three fields into 32 bytes:
[ pool address (20 bytes) | specialization (2 bytes) | nonce (10 bytes) ]
"""

from __future__ import annotations

from enum import IntEnum

from batchswap.models.types import hex_to_bytes


class PoolSpecialization(IntEnum):
    """Vault pool specialization, stored in bytes 20-21 of the pool id."""

    GENERAL = 0
    MINIMAL_SWAP_INFO = 1
    TWO_TOKEN = 2


def _pool_id_bytes(pool_id: str) -> bytes:
    try:
        raw = hex_to_bytes(pool_id)
    except ValueError as err:
        raise ValueError(f"Pool id is not hex: {pool_id}") from err
    if len(raw) != 32:
        raise ValueError(f"Pool id must be 32 bytes, got {len(raw)}: {pool_id}")
    return raw


def get_pool_address(pool_id: str) -> str:
    """Pool contract address (lowercase) embedded in a pool id."""
    return "0x" + _pool_id_bytes(pool_id)[:20].hex()


def get_pool_specialization(pool_id: str) -> PoolSpecialization:
    raw = _pool_id_bytes(pool_id)
    return PoolSpecialization(int.from_bytes(raw[20:22], "big"))


def get_pool_nonce(pool_id: str) -> int:
    return int.from_bytes(_pool_id_bytes(pool_id)[22:], "big")


__all__ = [
    "PoolSpecialization",
    "get_pool_address",
    "get_pool_specialization",
    "get_pool_nonce",
]
