"""Test helpers for eos_bios unit tests."""

from __future__ import annotations

from .builders import (
    BOOT_SEQUENCE_KEY,
    BOOT_SEQUENCE_YAML,
    CHAIN_ID,
    GENESIS_TIME,
    SNAPSHOT_KEY,
    make_account_state,
    make_bundle,
    make_genesis,
    make_key,
    make_launch_data,
    make_peer,
    make_peers,
    make_roster,
    make_state,
    peer_name,
)
from .mocks import (
    MockCache,
    MockChainClient,
    MockClock,
    MockFetcher,
    MockNetwork,
    RecordingHookDispatcher,
    ScriptedLineSource,
)

__all__ = [
    "BOOT_SEQUENCE_KEY",
    "BOOT_SEQUENCE_YAML",
    "CHAIN_ID",
    "GENESIS_TIME",
    "MockCache",
    "MockChainClient",
    "MockClock",
    "MockFetcher",
    "MockNetwork",
    "RecordingHookDispatcher",
    "SNAPSHOT_KEY",
    "ScriptedLineSource",
    "make_account_state",
    "make_bundle",
    "make_genesis",
    "make_key",
    "make_launch_data",
    "make_peer",
    "make_peers",
    "make_roster",
    "make_state",
    "peer_name",
]
