"""
Collaborator protocols.

The orchestrator drives the launch but owns none of the infrastructure it
talks to. Discovery, content storage, the chain's RPC and wallet, the
entropy clock, operator input and lifecycle hooks are all injected through
the narrow protocols below.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from eos_bios.bootseq.actions import AccountState, Action
    from eos_bios.hooks.events import HookEvent, HookPayload
    from eos_bios.launch.data import LaunchData
    from eos_bios.roster.peer import Peer


class Network(Protocol):
    """Discovery graph, as seen from the local node."""

    @property
    def my_peer(self) -> Peer:
        """The local node's own discovery entry."""
        ...

    async def consensus_launch_data(self) -> LaunchData:
        """Launch data agreed on by the graph; raises when there is no agreement."""
        ...

    def ordered_peers(self) -> list[Peer]:
        """Candidates in canonical order."""
        ...

    async def update_graph(self) -> None:
        """Traverse the graph again; may change ``ordered_peers()``."""
        ...


class CacheStore(Protocol):
    """Content lookup by logical key."""

    async def read(self, key: str) -> bytes:
        """Return the content for ``key``; raises when it is absent."""
        ...


class ContentFetcher(Protocol):
    """Fetch-by-reference from distributed storage (``/ipfs/Qm...``)."""

    async def get(self, ref: str) -> bytes:
        """Return the content behind ``ref``."""
        ...


class ChainClient(Protocol):
    """RPC and signing access to the chain being launched."""

    @property
    def chain_id(self) -> bytes:
        """Identifier of the target chain."""
        ...

    async def import_private_key(self, wif: str) -> None:
        """Register a signing credential."""
        ...

    async def available_keys(self) -> list[str]:
        """Public keys the signer can sign with."""
        ...

    async def sign_push_actions(self, actions: Sequence[Action]) -> Any:
        """Sign and broadcast one transaction; raises on rejection."""
        ...

    async def get_account(self, name: str) -> AccountState:
        """Read-only account query."""
        ...


class ExternalClock(Protocol):
    """Source of hard-to-predict values: future block hashes of another chain."""

    async def poll_future_block(self, height: int) -> str:
        """Hex hash of block ``height``, or an empty string if not produced yet."""
        ...


class LineSource(Protocol):
    """One blocking line of operator input at a time."""

    async def read_line(self) -> str:
        """Return the next line of input."""
        ...


class HookDispatcher(Protocol):
    """Fire-and-forget notifications to external systems."""

    async def dispatch(self, event: HookEvent, payload: HookPayload) -> None:
        """Notify; raising aborts the run."""
        ...
