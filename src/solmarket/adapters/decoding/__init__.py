"""
Decoding Adapters - Binary Account Data

Stateless helpers for base58 addresses and fixed-layout pool accounts.
"""

from solmarket.adapters.decoding.base58 import b58decode, b58encode
from solmarket.adapters.decoding.layouts import (
    RAYDIUM_AMM_V4,
    PoolKeys,
    PoolLayout,
    decode_account_data,
    decode_pool_keys,
    read_address,
)

__all__ = [
    "b58encode",
    "b58decode",
    "RAYDIUM_AMM_V4",
    "PoolKeys",
    "PoolLayout",
    "decode_account_data",
    "decode_pool_keys",
    "read_address",
]
