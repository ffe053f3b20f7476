"""
Genesis data.

The boot node creates the genesis descriptor and publishes it out of band
(social media, IPFS, direct paste). Every other node needs it before it can
start its own node, so it accepts the document in whichever form it arrives:

- Raw JSON
- Base64-encoded JSON
- An ``/ipfs/Qm...`` link to a ``genesis.json``
"""

from __future__ import annotations

import base64
import binascii
from datetime import UTC, datetime
from typing import Final

from pydantic import ValidationError, field_validator

from eos_bios.crypto import PublicKey
from eos_bios.interfaces import ContentFetcher
from eos_bios.types import GenesisFormatError, KeyFormatError, StrictBaseModel

GENESIS_TIMESTAMP_FORMAT: Final[str] = "%Y-%m-%dT%H:%M:%S"
"""Second-precision UTC timestamp format of ``initial_timestamp``."""

IPFS_MARKER: Final[str] = "/ipfs/"
"""Substring identifying a content-addressed link in operator input."""


class GenesisJSON(StrictBaseModel):
    """Launch genesis descriptor."""

    initial_timestamp: str
    """UTC time the boot node generated the genesis, second precision."""

    initial_key: str
    """Ephemeral public key that controls the chain until handoff."""

    initial_chain_id: str
    """Identifier of the target chain, hex encoded."""

    @field_validator("initial_timestamp")
    @classmethod
    def check_timestamp(cls, v: str) -> str:
        """Reject timestamps not in the genesis format."""
        datetime.strptime(v, GENESIS_TIMESTAMP_FORMAT)
        return v

    @field_validator("initial_key")
    @classmethod
    def check_key(cls, v: str) -> str:
        """Reject strings that are not public keys."""
        try:
            PublicKey.from_string(v)
        except KeyFormatError as exc:
            raise ValueError(exc.message) from exc
        return v

    @field_validator("initial_chain_id")
    @classmethod
    def check_chain_id(cls, v: str) -> str:
        """Reject non-hex chain identifiers."""
        bytes.fromhex(v)
        return v

    @classmethod
    def create(
        cls,
        initial_key: PublicKey,
        chain_id: bytes,
        now: datetime | None = None,
    ) -> GenesisJSON:
        """
        Build the genesis for a chain about to be booted.

        Args:
            initial_key: The ephemeral public key.
            chain_id: Target chain identifier.
            now: Generation time; defaults to the current UTC time.
        """
        now = now if now is not None else datetime.now(UTC)
        return cls(
            initial_timestamp=now.astimezone(UTC).strftime(GENESIS_TIMESTAMP_FORMAT),
            initial_key=str(initial_key),
            initial_chain_id=chain_id.hex(),
        )

    @classmethod
    def from_json(cls, content: str | bytes) -> GenesisJSON:
        """
        Parse a JSON genesis document.

        Raises:
            GenesisFormatError: If the content is not a valid genesis.
        """
        try:
            return cls.model_validate_json(content)
        except ValidationError as exc:
            raise GenesisFormatError(f"invalid genesis data: {exc}") from exc

    def to_json(self) -> str:
        """Serialize to the compact JSON form that gets published."""
        return self.model_dump_json()

    def public_key(self) -> PublicKey:
        """The decoded initial key."""
        return PublicKey.from_string(self.initial_key)


async def parse_genesis_input(text: str, fetcher: ContentFetcher) -> GenesisJSON:
    """
    Decode genesis data pasted by an operator.

    Args:
        text: One line of input: raw JSON, base64 JSON or an IPFS link.
        fetcher: Resolves IPFS links.

    Raises:
        GenesisFormatError: If the input cannot be turned into a genesis.
    """
    text = text.strip()
    if not text:
        raise GenesisFormatError("empty genesis input")

    if text.startswith("{"):
        return GenesisJSON.from_json(text)

    if IPFS_MARKER in text:
        try:
            content = await fetcher.get(text)
        except Exception as exc:
            raise GenesisFormatError(f"error fetching {text}: {exc}") from exc
        return GenesisJSON.from_json(content)

    try:
        decoded = base64.b64decode(text, validate=True)
    except binascii.Error as exc:
        raise GenesisFormatError(f"genesis is not JSON, base64 or an IPFS link: {exc}") from exc
    return GenesisJSON.from_json(decoded)
