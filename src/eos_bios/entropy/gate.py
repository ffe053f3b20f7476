"""
Entropy gate.

Role assignment must not be predictable, or a party could arrange to become
the boot node. The launch data names a block height on an independent chain
that does not exist yet when the launch is planned. Every node waits for that
block, reduces its hash to a seed, and shuffles the roster with it.

The seed is a fairness mechanism, not a security boundary: a 64-bit checksum
of the hash is plenty to seed the shuffle.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field

from eos_bios.crypto import crc64_ecma
from eos_bios.interfaces import ExternalClock
from eos_bios.polling import PollPolicy, poll_until

from .config import ENTROPY_POLL_INTERVAL

logger = logging.getLogger(__name__)


def seed_from_block_hash(block_hash: str) -> int:
    """
    Reduce a hex block hash to an integer seed.

    Args:
        block_hash: Hex string, with or without a ``0x`` prefix.

    Returns:
        The CRC-64/ECMA checksum of the decoded hash bytes.

    Raises:
        ValueError: If ``block_hash`` is not valid hex.
    """
    text = block_hash.removeprefix("0x")
    return crc64_ecma(bytes.fromhex(text))


def seeded_random(seed: int) -> random.Random:
    """Create the reproducible generator every node derives from the same seed."""
    return random.Random(seed)


@dataclass(slots=True)
class EntropyGate:
    """Waits for the launch entropy block and derives the shuffle seed."""

    clock: ExternalClock
    """Service reporting block hashes of the entropy chain."""

    policy: PollPolicy = field(default_factory=lambda: PollPolicy(interval=ENTROPY_POLL_INTERVAL))
    """How often to ask; unbounded by default."""

    async def await_entropy(self, height: int) -> int:
        """
        Block until block ``height`` exists, then return its seed.

        Clock errors, blocks not produced yet and malformed hashes are all
        logged and retried; this never fails on its own.
        """

        async def attempt() -> int | None:
            block_hash = await self.clock.poll_future_block(height)
            if not block_hash:
                logger.info("block %d not produced yet..", height)
                return None
            try:
                seed = seed_from_block_hash(block_hash)
            except ValueError:
                logger.warning("entropy service returned invalid hex %r", block_hash)
                return None
            logger.info("Block %d hash %s used to seed randomization", height, block_hash)
            return seed

        return await poll_until(attempt, self.policy, what=f"entropy block {height}")
