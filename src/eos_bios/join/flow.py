"""
Join and verify flow.

Every node other than the boot node runs this flow:

1. Obtain the genesis published by the boot node, unless already known
2. Work out which peers to dial, and tell the local node manager
   (``join_network``) so it can start a node on that genesis
3. Appointed block producers only: watch the chain until the system account
   has been disabled, proof that the boot sequence ran to completion
4. Wait for the boot node to disclose its ephemeral key, and check it
   against the genesis

Plain participants skip step 3 and rely on the appointed producers.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from eos_bios.bootseq import AccountState
from eos_bios.hooks import HookEvent, JoinNetworkPayload
from eos_bios.interfaces import ChainClient, ContentFetcher, HookDispatcher, LineSource
from eos_bios.launch.genesis import GenesisJSON, parse_genesis_input
from eos_bios.polling import PollPolicy, poll_until, print_progress
from eos_bios.roster import Roster, my_mesh_addresses
from eos_bios.roster.config import MESH_FANOUT
from eos_bios.state import OrchestrationState, Phase
from eos_bios.types import SYSTEM_ACCOUNT, GenesisFormatError

from .config import SYNC_POLL_INTERVAL
from .handoff import await_handoff

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class JoinVerifyFlow:
    """Drives a non-boot node from genesis to verified handoff."""

    chain: ChainClient
    """RPC access to the launched chain, for verification."""

    hooks: HookDispatcher
    """Receives the ``join_network`` event."""

    lines: LineSource
    """Operator input: pasted genesis and handoff key."""

    fetcher: ContentFetcher
    """Resolves ``/ipfs/...`` links pasted by the operator."""

    sync_policy: PollPolicy = field(
        default_factory=lambda: PollPolicy(interval=SYNC_POLL_INTERVAL)
    )
    """How often to check the system account; unbounded by default."""

    mesh_fanout: int = MESH_FANOUT
    """Number of peer addresses to dial."""

    progress: Callable[[str], None] = print_progress
    """Sink for the verification progress markers."""

    async def run(self, state: OrchestrationState, *, verify: bool) -> OrchestrationState:
        """
        Join the network and verify the handoff.

        Args:
            state: State after role dispatch.
            verify: Whether to check the chain was booted (appointed producers).

        Returns:
            State in the JOINING phase with the genesis and a verified handoff.
        """
        genesis = state.genesis
        if genesis is None:
            genesis = await self.await_genesis(state.roster)

        addresses = my_mesh_addresses(state.roster, state.my_peers, limit=self.mesh_fanout)
        my_accounts = list(dict.fromkeys(peer.account_name for peer in state.my_peers))
        await self.hooks.dispatch(
            HookEvent.JOIN_NETWORK,
            JoinNetworkPayload(
                genesis_json=genesis.to_json(),
                my_accounts=my_accounts,
                p2p_addresses=addresses,
            ),
        )

        if verify:
            logger.info("Launching chain verification")
            await self.verify_chain()
            logger.info("All good! Chain verification succeeded!")
        else:
            logger.info("Not doing validation, the Appointed Block Producer will have done it.")

        logger.info("Awaiting for private key, for handoff verification.")
        logger.info(
            "This is the last step, and is done for the BIOS Boot node "
            "to prove it kept nothing to itself."
        )
        await await_handoff(genesis, self.lines, self.fetcher)

        return state.advance(Phase.JOINING, genesis=genesis, handoff_verified=True)

    async def await_genesis(self, roster: Roster) -> GenesisJSON:
        """
        Prompt until the operator provides valid genesis data.

        Lists the boot node's public channels first, since that is where the
        genesis will be announced.

        Raises:
            EOFError: If the input is closed before valid data arrives.
        """
        logger.info("The BIOS node will publish the Genesis data through their social media.")
        for label, value in roster.boot_node.discovery.contact_points():
            logger.info("  %s: %s", label, value)
        logger.info(
            "Genesis data can be base64-encoded JSON, raw JSON "
            "or an `/ipfs/Qm...` link pointing to genesis.json"
        )

        while True:
            logger.info("Paste genesis here:")
            try:
                text = await self.lines.read_line()
            except EOFError:
                raise
            except Exception as exc:
                logger.warning("error reading line: %s", exc)
                continue

            try:
                return await parse_genesis_input(text, self.fetcher)
            except GenesisFormatError as exc:
                logger.warning("%s", exc)

    async def verify_chain(self) -> AccountState:
        """
        Wait until the system account shows as disabled.

        The boot sequence ends by resigning the system account. Seeing it
        disabled means the chain is synced up to the end of the boot.
        Query errors are transient and retried.
        """

        async def attempt() -> AccountState | None:
            account = await self.chain.get_account(SYSTEM_ACCOUNT)
            return account if account.is_disabled() else None

        logger.info("Verifying the `%s` system account was properly disabled", SYSTEM_ACCOUNT)
        account = await poll_until(
            attempt,
            self.sync_policy,
            what=f"{SYSTEM_ACCOUNT} account disabled",
            progress=self.progress,
        )
        logger.info("Chain sync'd!")
        return account
