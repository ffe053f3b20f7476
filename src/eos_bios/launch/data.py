"""Launch data: the manifest every participant agreed on."""

from __future__ import annotations

from pydantic import Field

from eos_bios.types import FrozenModel


class LaunchData(FrozenModel):
    """
    The agreed launch manifest.

    Produced by the discovery graph's consensus and consumed read-only.
    Content is referenced by cache key rather than embedded.
    """

    launch_ethereum_block: int = Field(ge=0)
    """Height of the future block whose hash seeds the roster shuffle."""

    boot_sequence: str
    """Cache key of the boot sequence YAML document."""

    snapshot: str = ""
    """Cache key of the snapshot CSV, empty when the launch has none."""

    min_launch_signers: int = Field(default=1, ge=0)
    """Signatures required on the launch data; enforced by the consensus layer."""
