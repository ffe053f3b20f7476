"""Base58 encoding (Bitcoin alphabet), used by EOS key strings."""

from __future__ import annotations

from typing import Final

ALPHABET: Final[str] = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
"""Base58 alphabet (Bitcoin style, excludes 0, O, I, l)."""


def b58encode(data: bytes) -> str:
    """
    Encode bytes as a Base58 string.

    Leading zero bytes become leading '1' characters.
    """
    leading_zeros = len(data) - len(data.lstrip(b"\x00"))

    num = int.from_bytes(data, "big")
    digits: list[str] = []
    while num > 0:
        num, remainder = divmod(num, 58)
        digits.append(ALPHABET[remainder])

    digits.extend(ALPHABET[0] * leading_zeros)
    return "".join(reversed(digits))


def b58decode(text: str) -> bytes:
    """
    Decode a Base58 string.

    Raises:
        ValueError: If the string contains characters outside the alphabet.
    """
    leading_ones = len(text) - len(text.lstrip(ALPHABET[0]))

    num = 0
    for char in text:
        index = ALPHABET.find(char)
        if index < 0:
            raise ValueError(f"Invalid Base58 character: {char!r}")
        num = num * 58 + index

    body = num.to_bytes((num.bit_length() + 7) // 8, "big") if num else b""
    return b"\x00" * leading_ones + body
