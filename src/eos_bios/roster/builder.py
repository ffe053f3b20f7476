"""
Producer roster construction.

The roster is the launch's producer schedule, derived in three steps:

1. Start from the candidates in canonical discovery order
2. Let the entropy seed reorder a small top slice, so nobody can know in
   advance who becomes boot node
3. Pad with clones up to a full schedule when the network is small

Every step is deterministic given the candidates and the seed, so all nodes
compute the same roster independently.
"""

from __future__ import annotations

import logging
import math
import random
from collections.abc import Iterator, Sequence
from dataclasses import dataclass

from .config import (
    APPOINTED_PRODUCER_COUNT,
    CLONE_PREFIX_LENGTH,
    ROSTER_SIZE,
    SHUFFLE_CAP,
    SHUFFLE_FRACTION,
    SHUFFLE_ROUNDS,
)
from .peer import Peer

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Roster:
    """
    Ordered, padded launch schedule.

    - Index 0: the boot node
    - Indices 1..21 (while present): appointed block producers
    - Anything after: plain participants
    """

    peers: tuple[Peer, ...]
    """Roster entries in schedule order."""

    def __len__(self) -> int:
        return len(self.peers)

    def __iter__(self) -> Iterator[Peer]:
        return iter(self.peers)

    def __getitem__(self, index: int) -> Peer:
        return self.peers[index]

    @property
    def boot_node(self) -> Peer:
        """The peer that runs the boot sequence."""
        return self.peers[0]

    @property
    def appointed_producers(self) -> tuple[Peer, ...]:
        """Entries at indices 1..21."""
        return self.peers[1 : APPOINTED_PRODUCER_COUNT + 1]

    @property
    def participants(self) -> tuple[Peer, ...]:
        """Entries past the appointed producer slots."""
        return self.peers[APPOINTED_PRODUCER_COUNT + 1 :]

    def account_names(self) -> list[str]:
        """Account names in schedule order."""
        return [peer.account_name for peer in self.peers]


def shuffle_window(candidate_count: int) -> int:
    """
    Number of top candidates the seed may reorder.

    A quarter of the candidates rounded up, capped at five.
    """
    return min(math.ceil(candidate_count * SHUFFLE_FRACTION), SHUFFLE_CAP)


def shuffle_top(peers: Sequence[Peer], rng: random.Random) -> list[Peer]:
    """
    Reorder the top slice of ``peers`` with randomized swaps.

    Performs a fixed number of swap attempts, each between two indices drawn
    independently from the top window; equal draws are skipped. This is not a
    uniform permutation, only a seeded mixing of who is near the top.
    Entries past the window never move.

    Args:
        peers: Candidates in canonical order.
        rng: Generator seeded from the launch entropy.

    Returns:
        A new list; ``peers`` is not modified.
    """
    shuffled = list(peers)
    window = shuffle_window(len(shuffled))
    if window <= 1:
        logger.info("No shuffling, network too small")
        return shuffled

    logger.info("Shuffling top %d producers", window)
    for _ in range(SHUFFLE_ROUNDS):
        source = rng.randrange(window)
        target = rng.randrange(window)
        if source == target:
            continue
        shuffled[source], shuffled[target] = shuffled[target], shuffled[source]

    return shuffled


def account_variation(name: str, variation: int) -> str:
    """
    Derive a clone account name.

    Keeps the first 10 characters of ``name`` and appends a dot and a letter:
    variation 1 gives ``.a``, variation 2 gives ``.b``, and so on.
    """
    return f"{name[:CLONE_PREFIX_LENGTH]}.{chr(ord('a') + variation - 1)}"


def pad_with_clones(peers: Sequence[Peer]) -> list[Peer]:
    """
    Fill the schedule up to the roster size with clones.

    Clone sources cycle through indices 1..n-1 of the real candidates; the
    boot node (index 0) is never cloned. Single-candidate networks and
    networks already at full size are returned unchanged.
    """
    padded = list(peers)
    candidate_count = len(padded)
    if candidate_count < 2:
        return padded

    clone_sources = candidate_count - 1
    count = 0
    while len(padded) < ROSTER_SIZE:
        source = padded[1 + count % clone_sources]
        count += 1
        padded.append(
            Peer(
                discovery=source.discovery,
                cloned_account_name=account_variation(source.account_name, count),
            )
        )

    return padded


def build_roster(candidates: Sequence[Peer], rng: random.Random | None = None) -> Roster:
    """
    Build the launch roster from discovered candidates.

    Args:
        candidates: Peers in canonical discovery order.
        rng: Seeded generator; without it the discovery order is kept.

    Returns:
        The ordered, padded roster.
    """
    ordered = list(candidates)
    if rng is not None:
        logger.info("Shuffling producers listed in the launch file")
        ordered = shuffle_top(ordered, rng)

    return Roster(peers=tuple(pad_with_clones(ordered)))
