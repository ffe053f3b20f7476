"""
Roster configuration constants.

Sizes of the launch producer schedule and parameters of the seeded shuffle.
"""

from __future__ import annotations

from typing import Final

ROSTER_SIZE: Final[int] = 22
"""Target roster length: one boot node plus a full schedule of producers."""

APPOINTED_PRODUCER_COUNT: Final[int] = 21
"""Number of roster slots (indices 1..21) held by appointed block producers."""

SHUFFLE_FRACTION: Final[float] = 0.25
"""Fraction of the candidate list, from the top, that the seed may reorder."""

SHUFFLE_CAP: Final[int] = 5
"""Upper bound on how many top candidates are shuffled."""

SHUFFLE_ROUNDS: Final[int] = 100
"""Number of randomized swap attempts performed by the shuffle."""

CLONE_PREFIX_LENGTH: Final[int] = 10
"""Characters of the source account name kept in a clone's name."""

MESH_FANOUT: Final[int] = 10
"""Default number of peer addresses announced for mesh connection."""
