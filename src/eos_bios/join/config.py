"""Join flow configuration constants."""

from __future__ import annotations

from typing import Final

SYNC_POLL_INTERVAL: Final[float] = 1.0
"""Seconds between checks that the boot sequence disabled the system account."""
