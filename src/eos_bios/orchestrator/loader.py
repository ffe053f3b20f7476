"""
Launch bundle loading.

Before anything else, a node fetches what the launch data points to: the
boot sequence, the snapshot, and the contract files the boot sequence
deploys. Anything missing or malformed stops the run before it starts.
"""

from __future__ import annotations

import logging

from eos_bios.bootseq import BootSequence
from eos_bios.interfaces import CacheStore, Network
from eos_bios.launch import LaunchData, Snapshot
from eos_bios.state import LaunchBundle
from eos_bios.types import LaunchPreconditionError

logger = logging.getLogger(__name__)


async def _read(cache: CacheStore, key: str, resource: str) -> bytes:
    try:
        return await cache.read(key)
    except Exception as exc:
        raise LaunchPreconditionError(resource, f"reading {key!r} from cache: {exc}") from exc


async def fetch_launch_data(network: Network) -> LaunchData:
    """
    Ask the discovery graph for the agreed launch data.

    Raises:
        LaunchPreconditionError: If the graph reached no agreement.
    """
    try:
        return await network.consensus_launch_data()
    except Exception as exc:
        raise LaunchPreconditionError(
            "launch_data", f"couldn't get consensus on launch data: {exc}"
        ) from exc


async def load_launch_bundle(network: Network, cache: CacheStore) -> LaunchBundle:
    """
    Load the launch data and everything it references.

    Raises:
        LaunchPreconditionError: If any piece is missing or unparsable.
    """
    launch_data = await fetch_launch_data(network)

    raw_sequence = await _read(cache, launch_data.boot_sequence, "boot_sequence")
    boot_sequence = BootSequence.from_yaml(raw_sequence)
    logger.info("Loaded boot sequence with %d steps", len(boot_sequence))

    snapshot = Snapshot()
    if launch_data.snapshot:
        raw_snapshot = await _read(cache, launch_data.snapshot, "snapshot")
        try:
            snapshot = Snapshot.from_csv(raw_snapshot)
        except ValueError as exc:
            raise LaunchPreconditionError("snapshot", f"loading snapshot csv: {exc}") from exc
        logger.info("Loaded snapshot with %d accounts", len(snapshot))

    contracts = {}
    for ref in boot_sequence.contract_refs():
        contracts[ref] = await _read(cache, ref, "contract")

    return LaunchBundle(
        launch_data=launch_data,
        boot_sequence=boot_sequence,
        snapshot=snapshot,
        contracts=contracts,
    )
