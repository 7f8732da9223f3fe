# src/solmarket/adapters/decoding/layouts.py
"""
Pool Account Layouts - Fixed-offset Field Extraction

DEX pool accounts are fixed-size binary records. This module keeps one
versioned offset table per layout and extracts the address fields needed
to price a pool. A buffer shorter than the table's last field is rejected
with MalformedLayoutError instead of being decoded into garbage.

Files that USE this module:
- solmarket.application.pool_resolver (AmmScanStrategy decodes scan matches)
- tests.test_decoding (unit tests)

Files that this module USES:
- solmarket.adapters.decoding.base58 (b58encode for address rendering)
- solmarket.domain.errors (MalformedLayoutError)
"""

from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass
from typing import Any

from solmarket.adapters.decoding.base58 import b58encode
from solmarket.domain.errors import MalformedLayoutError

ADDRESS_SIZE = 32


@dataclass(frozen=True)
class PoolLayout:
    """
    Offsets of the address fields inside one DEX pool account.

    The base side is the pool's "coin" mint and the quote side its "pc" mint.
    """
    name: str
    version: int
    account_size: int
    lp_mint_offset: int
    base_mint_offset: int
    quote_mint_offset: int
    base_vault_offset: int
    quote_vault_offset: int

    @property
    def min_length(self) -> int:
        """Bytes needed to read every address field."""
        return max(
            self.lp_mint_offset,
            self.base_mint_offset,
            self.quote_mint_offset,
            self.base_vault_offset,
            self.quote_vault_offset,
        ) + ADDRESS_SIZE


RAYDIUM_AMM_V4 = PoolLayout(
    name="raydium-amm",
    version=4,
    account_size=752,
    lp_mint_offset=272,
    base_mint_offset=304,
    quote_mint_offset=336,
    base_vault_offset=368,
    quote_vault_offset=400,
)


@dataclass(frozen=True)
class PoolKeys:
    """Addresses read out of a pool account."""
    lp_mint: str
    base_mint: str
    quote_mint: str
    base_vault: str
    quote_vault: str


def read_address(buffer: bytes, offset: int) -> str:
    """
    Read a 32-byte address at offset and render it as base58.

    No bounds checking: a short buffer yields a shorter, wrong address.
    """
    return b58encode(bytes(buffer[offset:offset + ADDRESS_SIZE]))


def decode_account_data(data: Any) -> bytes:
    """
    Turn an RPC account data field into raw bytes.

    Accepts the ["<base64>", "base64"] pair returned with base64 encoding,
    or a bare base64 string.

    Raises:
        MalformedLayoutError: If the field is not base64 data
    """
    if isinstance(data, (list, tuple)) and data:
        data = data[0]
    if not isinstance(data, str):
        raise MalformedLayoutError(f"Unexpected account data type: {type(data).__name__}")
    try:
        return base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError) as e:
        raise MalformedLayoutError(f"Account data is not valid base64: {e}") from e


def decode_pool_keys(buffer: bytes, layout: PoolLayout = RAYDIUM_AMM_V4) -> PoolKeys:
    """
    Extract the address fields of a pool account.

    Raises:
        MalformedLayoutError: If buffer is too short for the layout
    """
    if len(buffer) < layout.min_length:
        raise MalformedLayoutError(
            f"{layout.name} v{layout.version} needs {layout.min_length} bytes, got {len(buffer)}"
        )
    return PoolKeys(
        lp_mint=read_address(buffer, layout.lp_mint_offset),
        base_mint=read_address(buffer, layout.base_mint_offset),
        quote_mint=read_address(buffer, layout.quote_mint_offset),
        base_vault=read_address(buffer, layout.base_vault_offset),
        quote_vault=read_address(buffer, layout.quote_vault_offset),
    )
