"""
Handoff verification.

The last step of every launch. The boot node discloses the private half of
its ephemeral key; each node checks that it matches the initial key recorded
in the genesis. A match proves the boot node gave up the only credential
that controlled the chain during bootstrap.
"""

from __future__ import annotations

import logging

from eos_bios.crypto import EphemeralKeyPair
from eos_bios.interfaces import ContentFetcher, LineSource
from eos_bios.launch.genesis import IPFS_MARKER, GenesisJSON
from eos_bios.types import KeyFormatError

logger = logging.getLogger(__name__)


def verify_handoff_key(private_key: EphemeralKeyPair, genesis: GenesisJSON) -> bool:
    """Whether ``private_key`` derives the genesis's initial public key."""
    return private_key.public_key() == genesis.public_key()


async def await_handoff(
    genesis: GenesisJSON,
    lines: LineSource,
    fetcher: ContentFetcher,
) -> EphemeralKeyPair:
    """
    Prompt until the disclosed ephemeral key matches the genesis.

    Accepts a WIF private key or an ``/ipfs/...`` link to one. Invalid input
    and keys that do not match are reported and the prompt repeats; there is
    no timeout.

    Returns:
        The verified key.

    Raises:
        EOFError: If the input is closed before a matching key arrives.
    """
    while True:
        logger.info("Please paste the private key (or ipfs link):")
        try:
            text = await lines.read_line()
        except EOFError:
            raise
        except Exception as exc:
            logger.warning("Error reading line: %s", exc)
            continue

        if IPFS_MARKER in text:
            try:
                text = (await fetcher.get(text.strip())).decode("utf-8")
            except Exception as exc:
                logger.warning("error fetching ipfs content: %s", exc)
                continue

        try:
            key = EphemeralKeyPair.from_wif(text.strip())
        except KeyFormatError as exc:
            logger.warning("Invalid private key pasted: %s", exc)
            continue

        if verify_handoff_key(key, genesis):
            logger.info("HANDOFF VERIFIED! EOS CHAIN IS ALIVE !")
            return key

        logger.warning("WARNING: private key provided does NOT match the genesis data")
