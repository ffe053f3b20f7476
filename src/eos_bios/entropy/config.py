"""Entropy gate configuration constants."""

from __future__ import annotations

from typing import Final

ENTROPY_POLL_INTERVAL: Final[float] = 2.0
"""Seconds between polls of the external clock."""
