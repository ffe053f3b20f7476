"""
Mock collaborators for orchestration tests.

Each mock implements one protocol from ``eos_bios.interfaces`` with canned
answers and records what it was asked.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from eos_bios.bootseq import AccountState, Action
from eos_bios.hooks import HookEvent, HookPayload
from eos_bios.launch import LaunchData
from eos_bios.roster import Peer

from .builders import CHAIN_ID


@dataclass
class MockNetwork:
    """Discovery graph with a fixed candidate list."""

    peers: list[Peer]
    local: Peer
    launch_data: LaunchData | None = None
    updated_peers: list[Peer] | None = None
    """Candidates to switch to on ``update_graph``, if any."""
    update_calls: int = 0

    @property
    def my_peer(self) -> Peer:
        return self.local

    async def consensus_launch_data(self) -> LaunchData:
        if self.launch_data is None:
            raise RuntimeError("no launch data agreement")
        return self.launch_data

    def ordered_peers(self) -> list[Peer]:
        return list(self.peers)

    async def update_graph(self) -> None:
        self.update_calls += 1
        if self.updated_peers is not None:
            self.peers = self.updated_peers


@dataclass
class MockCache:
    """Content store over a dict; missing keys raise KeyError."""

    contents: dict[str, bytes] = field(default_factory=dict)
    reads: list[str] = field(default_factory=list)

    async def read(self, key: str) -> bytes:
        self.reads.append(key)
        return self.contents[key]


@dataclass
class MockFetcher:
    """IPFS fetcher over a dict; missing refs raise KeyError."""

    contents: dict[str, bytes] = field(default_factory=dict)

    async def get(self, ref: str) -> bytes:
        return self.contents[ref]


@dataclass
class MockChainClient:
    """
    Chain client recording imported keys and pushed transactions.

    ``account_states`` are served in order to ``get_account``, the last one
    repeating. ``fail_push_at`` makes the push with that index raise.
    """

    chain_id: bytes = CHAIN_ID
    account_states: list[AccountState | Exception] = field(default_factory=list)
    fail_push_at: int | None = None
    imported: list[str] = field(default_factory=list)
    pushed: list[list[Action]] = field(default_factory=list)
    account_queries: list[str] = field(default_factory=list)

    async def import_private_key(self, wif: str) -> None:
        self.imported.append(wif)

    async def available_keys(self) -> list[str]:
        return ["EOS-available-key"]

    async def sign_push_actions(self, actions: Sequence[Action]) -> Any:
        if self.fail_push_at is not None and len(self.pushed) == self.fail_push_at:
            raise RuntimeError("transaction rejected")
        self.pushed.append(list(actions))
        return {"transaction_id": f"tx{len(self.pushed)}"}

    async def get_account(self, name: str) -> AccountState:
        self.account_queries.append(name)
        index = min(len(self.account_queries), len(self.account_states)) - 1
        response = self.account_states[index]
        if isinstance(response, Exception):
            raise response
        return response


@dataclass
class MockClock:
    """Entropy clock answering from a script, the last answer repeating."""

    responses: list[str | Exception]
    heights: list[int] = field(default_factory=list)

    async def poll_future_block(self, height: int) -> str:
        self.heights.append(height)
        response = self.responses[min(len(self.heights), len(self.responses)) - 1]
        if isinstance(response, Exception):
            raise response
        return response


@dataclass
class ScriptedLineSource:
    """Operator input from a script; EOFError once exhausted."""

    lines: list[str | Exception]
    consumed: int = 0

    async def read_line(self) -> str:
        if self.consumed >= len(self.lines):
            raise EOFError("no more input")
        line = self.lines[self.consumed]
        self.consumed += 1
        if isinstance(line, Exception):
            raise line
        return line


@dataclass
class RecordingHookDispatcher:
    """Hook dispatcher recording events; optionally failing on one of them."""

    fail_on: HookEvent | None = None
    dispatched: list[tuple[HookEvent, HookPayload]] = field(default_factory=list)

    @property
    def events(self) -> list[HookEvent]:
        return [event for event, _ in self.dispatched]

    def payload(self, event: HookEvent) -> HookPayload:
        """Payload of the first dispatch of ``event``."""
        return next(payload for recorded, payload in self.dispatched if recorded == event)

    async def dispatch(self, event: HookEvent, payload: HookPayload) -> None:
        self.dispatched.append((event, payload))
        if event == self.fail_on:
            raise RuntimeError(f"hook {event} failed")
