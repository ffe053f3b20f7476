"""
Orchestration state.

One launch run moves through a fixed set of phases. Every phase takes the
state produced by the previous one and returns a new, updated value;
nothing is mutated in place.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Self

from eos_bios.bootseq.operations import BootSequence
from eos_bios.crypto import EphemeralKeyPair
from eos_bios.launch.data import LaunchData
from eos_bios.launch.genesis import GenesisJSON
from eos_bios.launch.snapshot import Snapshot
from eos_bios.roster import Peer, Role, Roster


class Phase(Enum):
    """
    Orchestration phases.

    State Machine Diagram
    ---------------------
    ::

        INIT --> ENTROPY_WAIT --> GRAPH_FINALIZE --> ROLE_DISPATCH --+--> BOOTING --+--> DONE
          |                                              ^           |              |
          +----------------------------------------------+           +--> JOINING --+

    ``orchestrate`` walks the whole machine. ``join`` and ``boot`` go from
    INIT straight to ROLE_DISPATCH: the role is fixed by the caller and no
    entropy is involved.
    """

    INIT = auto()
    """Launch data, boot sequence and snapshot loaded; unshuffled roster built."""

    ENTROPY_WAIT = auto()
    """Waiting for the entropy block to be produced."""

    GRAPH_FINALIZE = auto()
    """Discovery re-run and roster rebuilt with the seed."""

    ROLE_DISPATCH = auto()
    """Role known, branching to boot or join."""

    BOOTING = auto()
    """Running the boot sequence."""

    JOINING = auto()
    """Joining the network and verifying the handoff."""

    DONE = auto()
    """Run completed."""


@dataclass(frozen=True, slots=True)
class LaunchBundle:
    """Everything loaded from the launch data before the run starts."""

    launch_data: LaunchData
    """The agreed launch manifest."""

    boot_sequence: BootSequence
    """Steps the boot node runs."""

    snapshot: Snapshot = field(default_factory=Snapshot)
    """Preloaded balances, empty when the launch has none."""

    contracts: Mapping[str, bytes] = field(default_factory=dict)
    """Contract files referenced by the boot sequence, by cache key."""


@dataclass(frozen=True, slots=True)
class OrchestrationState:
    """Accumulated results of one orchestration run."""

    phase: Phase
    """Phase that produced this state."""

    bundle: LaunchBundle
    """Loaded launch inputs."""

    local_peer: Peer
    """The local node's discovery entry."""

    roster: Roster
    """Current producer roster."""

    role: Role
    """Role of the local node in ``roster``."""

    my_peers: tuple[Peer, ...]
    """Roster entries the local node answers for."""

    seed: int | None = None
    """Entropy seed, once known."""

    genesis: GenesisJSON | None = None
    """Genesis, once generated or received."""

    ephemeral_key: EphemeralKeyPair | None = None
    """Boot node only: the key that signed the boot sequence."""

    handoff_verified: bool = False
    """Whether the disclosed ephemeral key matched the genesis."""

    def advance(self, phase: Phase, **changes: Any) -> Self:
        """Return a copy in ``phase`` with ``changes`` applied."""
        return dataclasses.replace(self, phase=phase, **changes)
