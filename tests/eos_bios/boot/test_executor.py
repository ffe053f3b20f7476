"""Tests for the boot sequence executor."""

from __future__ import annotations

import textwrap
from unittest.mock import AsyncMock

import pytest

from eos_bios.boot import BootSequenceExecutor
from eos_bios.bootseq import BiosContext, BootSequence
from eos_bios.hooks import BootNodePayload, ConnectMeshPayload, HandoffPayload, HookEvent
from eos_bios.launch import GenesisJSON, Snapshot
from eos_bios.state import Phase
from eos_bios.types import BiosError, BootSequenceError
from tests.eos_bios.helpers import (
    CHAIN_ID,
    GENESIS_TIME,
    MockChainClient,
    RecordingHookDispatcher,
    make_bundle,
    make_genesis,
    make_key,
    make_peers,
    make_roster,
    make_state,
)

EPHEMERAL = make_key(77)

SNAPSHOT = Snapshot.from_csv(
    "\n".join(
        f"0x0{i},genesis1111{i},{make_key(8).public_key()},1.0000 EOS" for i in range(1, 4)
    ).encode()
)


def _executor(
    chain: MockChainClient,
    hooks: RecordingHookDispatcher,
    **kwargs: object,
) -> BootSequenceExecutor:
    return BootSequenceExecutor(
        chain=chain,
        hooks=hooks,
        key_factory=lambda: EPHEMERAL,
        now_fn=lambda: GENESIS_TIME,
        **kwargs,  # type: ignore[arg-type]
    )


def _context(snapshot: Snapshot = SNAPSHOT) -> BiosContext:
    return BiosContext(
        roster=make_roster(3),
        genesis=make_genesis(EPHEMERAL),
        ephemeral_key=EPHEMERAL.public_key(),
        snapshot=snapshot,
    )


def _sequence(text: str) -> BootSequence:
    return BootSequence.from_yaml(textwrap.dedent(text))


class TestExecuteSequence:
    """Turning steps into transactions."""

    @pytest.mark.asyncio
    async def test_empty_step_sends_nothing(self) -> None:
        """A step without actions is skipped; the next step gets one transaction."""
        chain = MockChainClient()
        sequence = _sequence(
            """\
            boot_sequence:
            - op: system.resign_accounts
              label: Nothing to resign
              data: {accounts: []}
            - op: snapshot.create_accounts
              label: Preload accounts
            """
        )

        pushed = await _executor(chain, RecordingHookDispatcher()).execute_sequence(
            sequence, _context()
        )

        assert pushed == 1
        assert len(chain.pushed) == 1
        assert [action.data["name"] for action in chain.pushed[0]] == [
            "genesis11111",
            "genesis11112",
            "genesis11113",
        ]

    @pytest.mark.asyncio
    async def test_steps_run_in_document_order(self) -> None:
        chain = MockChainClient()
        sequence = _sequence(
            """\
            boot_sequence:
            - op: system.setpriv
              data: {account: eosio.msig}
            - op: system.newaccount
              data: {new_account: eosio.token}
            - op: system.setprods
            """
        )

        await _executor(chain, RecordingHookDispatcher()).execute_sequence(sequence, _context())

        assert [tx[0].name for tx in chain.pushed] == ["setpriv", "newaccount", "setprods"]

    @pytest.mark.asyncio
    async def test_large_step_is_chunked(self) -> None:
        chain = MockChainClient()
        sequence = _sequence("boot_sequence:\n- op: snapshot.create_accounts\n")

        pushed = await _executor(
            chain, RecordingHookDispatcher(), actions_per_transaction=1
        ).execute_sequence(sequence, _context())

        # A chunk is flushed once it holds more than one action.
        assert pushed == 2
        assert [len(tx) for tx in chain.pushed] == [2, 1]

    @pytest.mark.asyncio
    async def test_push_failure_aborts_sequence(self) -> None:
        chain = MockChainClient(fail_push_at=1)
        sequence = _sequence(
            """\
            boot_sequence:
            - op: system.setpriv
              label: first
              data: {account: eosio.msig}
            - op: system.setpriv
              label: second
              data: {account: eosio.token}
            - op: system.setprods
              label: third
            """
        )

        with pytest.raises(BootSequenceError) as exc_info:
            await _executor(chain, RecordingHookDispatcher()).execute_sequence(
                sequence, _context()
            )

        assert exc_info.value.label == "second"
        assert exc_info.value.op == "system.setpriv"
        assert exc_info.value.chunk_index == 0
        assert len(chain.pushed) == 1

    @pytest.mark.asyncio
    async def test_step_without_inputs_aborts_before_pushing(self) -> None:
        chain = MockChainClient()
        sequence = _sequence(
            """\
            boot_sequence:
            - op: system.setcode
              label: deploy bios
              data: {account: eosio, code_ref: bios.wasm}
            """
        )

        with pytest.raises(BootSequenceError, match="deploy bios") as exc_info:
            await _executor(chain, RecordingHookDispatcher()).execute_sequence(
                sequence, _context()
            )

        assert exc_info.value.chunk_index is None
        assert chain.pushed == []


class TestRun:
    """The full boot node duty."""

    @pytest.mark.asyncio
    async def test_hooks_fire_in_order(self) -> None:
        peers = make_peers(12)
        roster = make_roster(12)
        chain = MockChainClient()
        hooks = RecordingHookDispatcher()

        await _executor(chain, hooks).run(make_state(roster, peers[0]))

        assert hooks.events == [
            HookEvent.BOOT_PUBLISH_GENESIS,
            HookEvent.BOOT_NODE,
            HookEvent.BOOT_CONNECT_MESH,
            HookEvent.BOOT_PUBLISH_HANDOFF,
        ]

    @pytest.mark.asyncio
    async def test_ephemeral_key_signs_and_is_disclosed(self) -> None:
        peers = make_peers(12)
        roster = make_roster(12)
        chain = MockChainClient()
        hooks = RecordingHookDispatcher()

        state = await _executor(chain, hooks).run(make_state(roster, peers[0]))

        wif = EPHEMERAL.to_wif()
        public_key = str(EPHEMERAL.public_key())
        assert chain.imported == [wif]
        assert hooks.payload(HookEvent.BOOT_PUBLISH_HANDOFF) == HandoffPayload(
            public_key=public_key, private_key=wif
        )

        boot_payload = hooks.payload(HookEvent.BOOT_NODE)
        assert isinstance(boot_payload, BootNodePayload)
        assert GenesisJSON.from_json(boot_payload.genesis_json) == state.genesis

        assert state.phase is Phase.BOOTING
        assert state.ephemeral_key is EPHEMERAL
        assert state.genesis == GenesisJSON.create(EPHEMERAL.public_key(), CHAIN_ID, GENESIS_TIME)

    @pytest.mark.asyncio
    async def test_boot_sequence_is_pushed(self) -> None:
        peers = make_peers(3)
        chain = MockChainClient()

        await _executor(chain, RecordingHookDispatcher()).run(
            make_state(make_roster(3), peers[0], bundle=make_bundle())
        )

        assert [tx[0].name for tx in chain.pushed] == ["newaccount", "setprods", "updateauth"]

    @pytest.mark.asyncio
    async def test_mesh_excludes_boot_node(self) -> None:
        peers = make_peers(12)
        hooks = RecordingHookDispatcher()

        await _executor(MockChainClient(), hooks, mesh_fanout=3).run(
            make_state(make_roster(12), peers[0])
        )

        assert hooks.payload(HookEvent.BOOT_CONNECT_MESH) == ConnectMeshPayload(
            ["bpaab.example.org:9876", "bpaac.example.org:9876", "bpaad.example.org:9876"]
        )

    @pytest.mark.asyncio
    async def test_failing_hook_stops_the_boot(self) -> None:
        peers = make_peers(3)
        chain = MockChainClient()
        hooks = RecordingHookDispatcher(fail_on=HookEvent.BOOT_NODE)

        with pytest.raises(RuntimeError, match="boot_node"):
            await _executor(chain, hooks).run(make_state(make_roster(3), peers[0]))

        assert chain.pushed == []

    @pytest.mark.asyncio
    async def test_key_import_failure(self) -> None:
        chain = MockChainClient()
        rejected = PermissionError("wallet locked")
        chain.import_private_key = AsyncMock(side_effect=rejected)  # type: ignore[method-assign]
        peers = make_peers(3)
        hooks = RecordingHookDispatcher()

        with pytest.raises(BiosError, match="wallet locked"):
            await _executor(chain, hooks).run(make_state(make_roster(3), peers[0]))

        assert hooks.events == []
