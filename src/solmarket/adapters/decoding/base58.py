# src/solmarket/adapters/decoding/base58.py
"""
Base58 Address Encoding

Solana renders 32-byte public keys in base58 with the Bitcoin alphabet.
Encoding treats the bytes as one big unsigned integer and divides by 58;
every leading zero byte becomes one leading '1' so that fixed-width keys
survive a decode.

Files that USE this module:
- solmarket.adapters.decoding.layouts (read_address for pool account fields)
- solmarket.shared.validators (b58decode for address validation)
- tests.test_decoding (unit tests)

Files that this module USES:
- None (pure functions)
"""

ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
_INDEX = {char: i for i, char in enumerate(ALPHABET)}


def b58encode(data: bytes) -> str:
    """
    Encode bytes as a base58 string.

    Args:
        data: Raw bytes (32 for an account address)

    Returns:
        Base58 text; empty input gives an empty string
    """
    if not data:
        return ""

    num = int.from_bytes(data, "big")
    digits = []
    while num > 0:
        num, rem = divmod(num, 58)
        digits.append(ALPHABET[rem])

    pad = 0
    for byte in data:
        if byte != 0:
            break
        pad += 1

    return ALPHABET[0] * pad + "".join(reversed(digits))


def b58decode(text: str) -> bytes:
    """
    Decode a base58 string back to bytes.

    Raises:
        ValueError: If text contains a character outside the alphabet
    """
    num = 0
    for char in text:
        try:
            num = num * 58 + _INDEX[char]
        except KeyError:
            raise ValueError(f"Invalid base58 character: {char!r}") from None

    pad = len(text) - len(text.lstrip(ALPHABET[0]))
    body = num.to_bytes((num.bit_length() + 7) // 8, "big") if num else b""
    return b"\x00" * pad + body
