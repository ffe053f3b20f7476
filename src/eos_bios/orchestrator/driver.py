"""
Orchestration driver.

Ties the launch together for one invocation mode:

- ``orchestrate``: the full community launch. Wait for the entropy block,
  finalize the graph, derive the roster with the seed, then boot or join
  depending on the role that falls out.
- ``join``: join a network whose boot node is already known.
- ``boot``: boot a network with the local node as boot node.

Every mode dispatches ``init`` before its work and ``done`` after it. Any
error, from a phase or a hook, aborts the run.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from eos_bios.boot import BootSequenceExecutor
from eos_bios.entropy import EntropyGate, seeded_random
from eos_bios.hooks import HookEvent, LifecyclePayload
from eos_bios.interfaces import (
    CacheStore,
    ChainClient,
    ContentFetcher,
    ExternalClock,
    HookDispatcher,
    LineSource,
    Network,
)
from eos_bios.join import JoinVerifyFlow
from eos_bios.launch import GenesisJSON
from eos_bios.roster import (
    Role,
    build_roster,
    log_shuffling_results,
    my_peers,
    resolve_role,
)
from eos_bios.state import LaunchBundle, OrchestrationState, Phase
from eos_bios.types import BiosError, LaunchPreconditionError

from .config import OrchestratorConfig
from .loader import load_launch_bundle

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class Orchestrator:
    """Runs one launch for the local node."""

    network: Network
    """Discovery graph."""

    cache: CacheStore
    """Content referenced by the launch data."""

    chain: ChainClient
    """Signer and RPC access to the chain being launched."""

    clock: ExternalClock
    """Entropy source."""

    lines: LineSource
    """Operator input."""

    fetcher: ContentFetcher
    """Resolves IPFS links in operator input."""

    hooks: HookDispatcher
    """Lifecycle event sink."""

    config: OrchestratorConfig = field(default_factory=OrchestratorConfig)
    """Run tunables."""

    def boot_executor(self) -> BootSequenceExecutor:
        """Executor wired to this run's collaborators."""
        return BootSequenceExecutor(
            chain=self.chain,
            hooks=self.hooks,
            actions_per_transaction=self.config.actions_per_transaction,
            mesh_fanout=self.config.mesh_fanout,
        )

    def join_flow(self) -> JoinVerifyFlow:
        """Join flow wired to this run's collaborators."""
        return JoinVerifyFlow(
            chain=self.chain,
            hooks=self.hooks,
            lines=self.lines,
            fetcher=self.fetcher,
            sync_policy=self.config.sync_policy(),
            mesh_fanout=self.config.mesh_fanout,
        )

    def assign_roles(
        self,
        bundle: LaunchBundle,
        *,
        phase: Phase,
        seed: int | None = None,
        genesis: GenesisJSON | None = None,
    ) -> OrchestrationState:
        """
        Build the roster from the current graph and resolve the local role.

        Raises:
            LaunchPreconditionError: If discovery found no candidates.
        """
        candidates = self.network.ordered_peers()
        if not candidates:
            raise LaunchPreconditionError("peers", "discovery graph has no launch candidates")

        rng = seeded_random(seed) if seed is not None else None
        roster = build_roster(candidates, rng)
        local = self.network.my_peer

        return OrchestrationState(
            phase=phase,
            bundle=bundle,
            local_peer=local,
            roster=roster,
            role=resolve_role(roster, local.account_name),
            my_peers=tuple(my_peers(roster, local)),
            seed=seed,
            genesis=genesis,
        )

    async def initialize(self, *, genesis: GenesisJSON | None = None) -> OrchestrationState:
        """Load the launch bundle and derive the unshuffled roster."""
        bundle = await load_launch_bundle(self.network, self.cache)
        state = self.assign_roles(bundle, phase=Phase.INIT, genesis=genesis)
        logger.info("Phase %s: %d roster entries", state.phase.name, len(state.roster))
        return state

    async def orchestrate(self) -> OrchestrationState:
        """
        Run the full community launch.

        Returns:
            Final state in the DONE phase.
        """
        logger.info("Starting orchestration process")
        state = await self.initialize()
        logger.info("Pre-randomized network discovered: %s", state.roster.account_names())

        height = state.bundle.launch_data.launch_ethereum_block
        logger.info("Phase %s: waiting for block %d", Phase.ENTROPY_WAIT.name, height)
        seed = await EntropyGate(self.clock, self.config.entropy_policy()).await_entropy(height)
        state = state.advance(Phase.ENTROPY_WAIT, seed=seed)

        # Shuffling may change who the boot node is, so use the freshest graph.
        logger.info("Block used to seed randomization, updating graph one last time...")
        try:
            await self.network.update_graph()
        except Exception as exc:
            raise BiosError(f"orchestrate: update graph: {exc}") from exc

        bundle = await load_launch_bundle(self.network, self.cache)
        state = self.assign_roles(bundle, phase=Phase.GRAPH_FINALIZE, seed=seed)
        logger.info("Network used for launch: %s", state.roster.account_names())

        await self.hooks.dispatch(HookEvent.INIT, LifecyclePayload("orchestrate"))

        state = state.advance(Phase.ROLE_DISPATCH)
        log_shuffling_results(state.roster, state.role)

        match state.role:
            case Role.BOOT_NODE:
                state = await self.boot_executor().run(state)
            case Role.APPOINTED_BLOCK_PRODUCER:
                state = await self.join_flow().run(state, verify=True)
            case Role.PARTICIPANT:
                state = await self.join_flow().run(state, verify=False)

        await self.hooks.dispatch(HookEvent.DONE, LifecyclePayload("orchestrate"))
        return state.advance(Phase.DONE)

    async def join(
        self,
        *,
        verify: bool = False,
        genesis: GenesisJSON | None = None,
    ) -> OrchestrationState:
        """
        Join a network whose boot is run by someone else.

        Args:
            verify: Whether to check the chain was booted before the handoff.
            genesis: Genesis if already known; otherwise it is prompted for.
        """
        logger.info("Starting network join process")
        state = await self.initialize(genesis=genesis)

        await self.hooks.dispatch(HookEvent.INIT, LifecyclePayload("join"))
        state = state.advance(Phase.ROLE_DISPATCH)
        state = await self.join_flow().run(state, verify=verify)

        await self.hooks.dispatch(HookEvent.DONE, LifecyclePayload("join"))
        return state.advance(Phase.DONE)

    async def boot(self) -> OrchestrationState:
        """Boot a network from the local node."""
        logger.info("Starting network boot process")
        state = await self.initialize()

        await self.hooks.dispatch(HookEvent.INIT, LifecyclePayload("boot"))
        state = state.advance(Phase.ROLE_DISPATCH)
        state = await self.boot_executor().run(state)

        await self.hooks.dispatch(HookEvent.DONE, LifecyclePayload("boot"))
        return state.advance(Phase.DONE)
