# src/solmarket/shared/validators.py
"""
Input Validation Utilities - Configuration and Address Validation

This module provides validation functions used when loading configuration.
It checks RPC endpoint URLs and base58-encoded account addresses so that a
misconfigured deployment fails at startup instead of on the first query.

Files that USE this module:
- solmarket.config.settings (uses validation functions in Settings field validators)

Files that this module USES:
- solmarket.adapters.decoding.base58 (b58decode for address checks)
"""
import urllib.parse

from solmarket.adapters.decoding.base58 import b58decode

ADDRESS_LENGTH = 32


def validate_rpc_url(url: str) -> bool:
    """
    Validate an RPC endpoint URL.

    Args:
        url: Endpoint URL to validate

    Returns:
        True if the URL uses http(s) and names a host, False otherwise
    """
    if not url or url.isspace():
        return False

    parsed = urllib.parse.urlparse(url)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def validate_address(address: str) -> bool:
    """
    Validate a base58 account address.

    Args:
        address: Address string to validate

    Returns:
        True if the string is base58 and decodes to exactly 32 bytes
    """
    if not address:
        return False

    try:
        return len(b58decode(address)) == ADDRESS_LENGTH
    except ValueError:
        return False
