"""
Launch entropy.

Derives the roster shuffle seed from a block that did not exist when the
launch was planned.
"""

from .config import ENTROPY_POLL_INTERVAL
from .gate import EntropyGate, seed_from_block_hash, seeded_random

__all__ = [
    "ENTROPY_POLL_INTERVAL",
    "EntropyGate",
    "seed_from_block_hash",
    "seeded_random",
]
