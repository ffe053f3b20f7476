"""
Cryptographic helpers for the launch.

- Ephemeral secp256k1 key pairs and their string encodings
- CRC-64/ECMA, used to reduce the entropy block hash to a seed
"""

from .crc64 import crc64_ecma
from .keys import PUBLIC_KEY_PREFIX, EphemeralKeyPair, PublicKey

__all__ = [
    "EphemeralKeyPair",
    "PUBLIC_KEY_PREFIX",
    "PublicKey",
    "crc64_ecma",
]
