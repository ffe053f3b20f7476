"""
Boot sequence executor.

Runs on the boot node only. The boot node creates the chain with a key pair
nobody has seen before, publishes the genesis built on it, signs every
bootstrap transaction with it, and finally hands the private key over so
anyone can check it was not kept for later use.

Steps, strictly in order:

1. Generate the ephemeral key pair and import it into the signer
2. Publish the genesis (``boot_publish_genesis``, then ``boot_node``)
3. Run every boot sequence step as one or more chunked transactions
4. Announce the mesh addresses (``boot_connect_mesh``)
5. Publish the handoff (``boot_publish_handoff``)
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime

from eos_bios.bootseq import (
    ACTIONS_PER_TRANSACTION,
    BiosContext,
    BootSequence,
    chunkify_actions,
    operation_actions,
)
from eos_bios.crypto import EphemeralKeyPair
from eos_bios.hooks import (
    BootNodePayload,
    ConnectMeshPayload,
    GenesisPayload,
    HandoffPayload,
    HookEvent,
)
from eos_bios.interfaces import ChainClient, HookDispatcher
from eos_bios.launch.genesis import GenesisJSON
from eos_bios.roster import topmost_peer_addresses
from eos_bios.roster.config import MESH_FANOUT
from eos_bios.state import OrchestrationState, Phase
from eos_bios.types import BiosError, BootSequenceError

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(UTC)


@dataclass(slots=True)
class BootSequenceExecutor:
    """Drives the boot node from a fresh key to the handoff."""

    chain: ChainClient
    """Signer and RPC access to the chain being booted."""

    hooks: HookDispatcher
    """Receives the boot node's lifecycle events."""

    actions_per_transaction: int = ACTIONS_PER_TRANSACTION
    """Chunking threshold for each step's actions."""

    mesh_fanout: int = MESH_FANOUT
    """Number of peer addresses announced for the mesh."""

    key_factory: Callable[[], EphemeralKeyPair] = EphemeralKeyPair.generate
    """Source of the ephemeral key pair (injectable for testing)."""

    now_fn: Callable[[], datetime] = _utc_now
    """Clock used for the genesis timestamp (injectable for testing)."""

    async def run(self, state: OrchestrationState) -> OrchestrationState:
        """
        Boot the chain.

        Args:
            state: State after role dispatch.

        Returns:
            State in the BOOTING phase carrying the genesis and ephemeral key.

        Raises:
            BiosError: If the key cannot be imported.
            BootSequenceError: If any step fails; the sequence is not resumed.
            HookError: If a hook fails.
        """
        logger.info("START BOOT SEQUENCE...")

        ephemeral_key = self.key_factory()
        public_key = str(ephemeral_key.public_key())
        private_key = ephemeral_key.to_wif()
        logger.info(
            "Generated ephemeral keys: pub=%s priv=%s", public_key, ephemeral_key.redacted_wif()
        )

        # Every bootstrap transaction is signed with the ephemeral key.
        try:
            await self.chain.import_private_key(private_key)
        except Exception as exc:
            raise BiosError(f"importing ephemeral key: {exc}") from exc

        for key in await self.chain.available_keys():
            logger.info("Available key in the signer: %s", key)

        genesis = GenesisJSON.create(ephemeral_key.public_key(), self.chain.chain_id, self.now_fn())
        genesis_json = genesis.to_json()

        await self.hooks.dispatch(HookEvent.BOOT_PUBLISH_GENESIS, GenesisPayload(genesis_json))
        await self.hooks.dispatch(
            HookEvent.BOOT_NODE,
            BootNodePayload(
                genesis_json=genesis_json,
                public_key=public_key,
                private_key=private_key,
            ),
        )

        context = BiosContext(
            roster=state.roster,
            genesis=genesis,
            ephemeral_key=ephemeral_key.public_key(),
            snapshot=state.bundle.snapshot,
            contracts=state.bundle.contracts,
        )
        await self.execute_sequence(state.bundle.boot_sequence, context)

        addresses = topmost_peer_addresses(state.roster, limit=self.mesh_fanout)
        await self.hooks.dispatch(HookEvent.BOOT_CONNECT_MESH, ConnectMeshPayload(addresses))

        await self.hooks.dispatch(
            HookEvent.BOOT_PUBLISH_HANDOFF,
            HandoffPayload(public_key=public_key, private_key=private_key),
        )

        return state.advance(Phase.BOOTING, genesis=genesis, ephemeral_key=ephemeral_key)

    async def execute_sequence(self, sequence: BootSequence, context: BiosContext) -> int:
        """
        Run each step in document order, one transaction per chunk.

        Steps producing no actions send nothing. A chunk is only pushed after
        the previous push returned.

        Returns:
            Number of transactions pushed.

        Raises:
            BootSequenceError: On the first failing step or chunk.
        """
        pushed = 0
        for step in sequence.boot_sequence:
            logger.info("%s  [%s]", step.label, step.op)

            try:
                actions = operation_actions(step, context)
            except ValueError as exc:
                raise BootSequenceError(step.label, step.op, f"getting actions: {exc}") from exc

            for index, chunk in enumerate(chunkify_actions(actions, self.actions_per_transaction)):
                try:
                    await self.chain.sign_push_actions(chunk)
                except Exception as exc:
                    raise BootSequenceError(
                        step.label,
                        step.op,
                        f"sign and push: {exc}",
                        chunk_index=index,
                    ) from exc
                pushed += 1

        return pushed
