"""
Launch documents: the manifest, the genesis and the snapshot.

All of them are immutable once loaded.
"""

from .data import LaunchData
from .genesis import GenesisJSON, parse_genesis_input
from .snapshot import Snapshot, SnapshotLine

__all__ = [
    "GenesisJSON",
    "LaunchData",
    "Snapshot",
    "SnapshotLine",
    "parse_genesis_input",
]
