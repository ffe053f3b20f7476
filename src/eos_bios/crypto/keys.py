"""
secp256k1 key pairs in the chain's legacy string encodings.

Public keys are the 33-byte compressed point, written as ``EOS`` followed by
Base58 of the point and the first 4 bytes of its RIPEMD-160 digest.

Private keys use the Wallet Import Format (WIF): Base58 of ``0x80``, the
32-byte scalar and the first 4 bytes of a double SHA-256 over both.
"""

from __future__ import annotations

import hashlib
import hmac
from dataclasses import dataclass
from typing import Final

from Crypto.Hash import RIPEMD160
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec

from eos_bios.types import KeyFormatError

from .base58 import b58decode, b58encode

__all__ = [
    "EphemeralKeyPair",
    "PUBLIC_KEY_PREFIX",
    "PublicKey",
]

PUBLIC_KEY_PREFIX: Final[str] = "EOS"
"""Prefix of legacy public key strings."""

WIF_VERSION: Final[int] = 0x80
"""Version byte prepended to private keys in WIF."""

_CHECKSUM_LENGTH: Final[int] = 4
_COMPRESSED_POINT_LENGTH: Final[int] = 33
_SCALAR_LENGTH: Final[int] = 32


def _ripemd160(data: bytes) -> bytes:
    return RIPEMD160.new(data).digest()


def _double_sha256(data: bytes) -> bytes:
    return hashlib.sha256(hashlib.sha256(data).digest()).digest()


@dataclass(frozen=True, slots=True)
class PublicKey:
    """
    A compressed secp256k1 public key.

    Attributes:
        data: 33-byte compressed point.
    """

    data: bytes

    def __post_init__(self) -> None:
        if len(self.data) != _COMPRESSED_POINT_LENGTH:
            raise KeyFormatError(
                f"public key must be {_COMPRESSED_POINT_LENGTH} bytes, got {len(self.data)}"
            )

    @classmethod
    def from_string(cls, text: str) -> PublicKey:
        """
        Parse an ``EOS...`` public key string.

        Raises:
            KeyFormatError: On a wrong prefix, bad Base58, bad length or checksum.
        """
        text = text.strip()
        if not text.startswith(PUBLIC_KEY_PREFIX):
            raise KeyFormatError(f"public key must start with {PUBLIC_KEY_PREFIX!r}")

        try:
            raw = b58decode(text[len(PUBLIC_KEY_PREFIX) :])
        except ValueError as exc:
            raise KeyFormatError(f"public key is not valid Base58: {exc}") from exc

        if len(raw) != _COMPRESSED_POINT_LENGTH + _CHECKSUM_LENGTH:
            raise KeyFormatError(f"public key has wrong length ({len(raw)} bytes)")

        point, checksum = raw[:-_CHECKSUM_LENGTH], raw[-_CHECKSUM_LENGTH:]
        if not hmac.compare_digest(_ripemd160(point)[:_CHECKSUM_LENGTH], checksum):
            raise KeyFormatError("public key checksum mismatch")

        return cls(data=point)

    def __str__(self) -> str:
        checksum = _ripemd160(self.data)[:_CHECKSUM_LENGTH]
        return PUBLIC_KEY_PREFIX + b58encode(self.data + checksum)


@dataclass(frozen=True, slots=True)
class EphemeralKeyPair:
    """
    One-time secp256k1 key pair used to sign the bootstrap transactions.

    The boot node generates it, signs the whole boot sequence with it, and
    later discloses the private half to prove it kept nothing to itself.

    Attributes:
        private_key: The secp256k1 private key.
    """

    private_key: ec.EllipticCurvePrivateKey

    @classmethod
    def generate(cls) -> EphemeralKeyPair:
        """Generate a fresh random key pair."""
        return cls(private_key=ec.generate_private_key(ec.SECP256K1()))

    @classmethod
    def from_scalar(cls, data: bytes) -> EphemeralKeyPair:
        """
        Load a key pair from a raw 32-byte private scalar.

        Raises:
            KeyFormatError: If the bytes are not a valid secp256k1 scalar.
        """
        if len(data) != _SCALAR_LENGTH:
            raise KeyFormatError(f"Expected {_SCALAR_LENGTH} bytes, got {len(data)}")
        try:
            private_key = ec.derive_private_key(int.from_bytes(data, "big"), ec.SECP256K1())
        except ValueError as exc:
            raise KeyFormatError(f"invalid private scalar: {exc}") from exc
        return cls(private_key=private_key)

    @classmethod
    def from_wif(cls, text: str) -> EphemeralKeyPair:
        """
        Decode a WIF private key string.

        Raises:
            KeyFormatError: On bad Base58, wrong version, length or checksum.
        """
        try:
            raw = b58decode(text.strip())
        except ValueError as exc:
            raise KeyFormatError(f"private key is not valid Base58: {exc}") from exc

        if len(raw) != 1 + _SCALAR_LENGTH + _CHECKSUM_LENGTH:
            raise KeyFormatError(f"private key has wrong length ({len(raw)} bytes)")

        payload, checksum = raw[:-_CHECKSUM_LENGTH], raw[-_CHECKSUM_LENGTH:]
        if payload[0] != WIF_VERSION:
            raise KeyFormatError(f"unexpected WIF version byte 0x{payload[0]:02x}")
        if not hmac.compare_digest(_double_sha256(payload)[:_CHECKSUM_LENGTH], checksum):
            raise KeyFormatError("private key checksum mismatch")

        return cls.from_scalar(payload[1:])

    def scalar(self) -> bytes:
        """Return the raw 32-byte private scalar."""
        return self.private_key.private_numbers().private_value.to_bytes(_SCALAR_LENGTH, "big")

    def to_wif(self) -> str:
        """Encode the private key in Wallet Import Format."""
        payload = bytes([WIF_VERSION]) + self.scalar()
        return b58encode(payload + _double_sha256(payload)[:_CHECKSUM_LENGTH])

    def public_key(self) -> PublicKey:
        """Derive the compressed public key."""
        point = self.private_key.public_key().public_bytes(
            encoding=serialization.Encoding.X962,
            format=serialization.PublicFormat.CompressedPoint,
        )
        return PublicKey(data=point)

    def redacted_wif(self) -> str:
        """WIF with everything but the first and last 7 characters hidden, for logs."""
        wif = self.to_wif()
        return f"{wif[:7]}..{wif[-7:]}"
