"""Tests for handoff verification."""

from __future__ import annotations

import pytest

from eos_bios.join import await_handoff, verify_handoff_key
from tests.eos_bios.helpers import MockFetcher, ScriptedLineSource, make_genesis, make_key

BOOT_KEY = make_key(31)
GENESIS = make_genesis(BOOT_KEY)
IPFS_LINK = "/ipfs/QmHandoffKey"


class TestVerifyHandoffKey:
    """Matching a disclosed key against the genesis."""

    def test_matching_key(self) -> None:
        assert verify_handoff_key(BOOT_KEY, GENESIS)

    def test_other_key(self) -> None:
        assert not verify_handoff_key(make_key(32), GENESIS)


class TestAwaitHandoff:
    """Prompting until the right key is pasted."""

    @pytest.mark.asyncio
    async def test_accepts_matching_wif(self) -> None:
        lines = ScriptedLineSource([BOOT_KEY.to_wif() + "\n"])
        key = await await_handoff(GENESIS, lines, MockFetcher())
        assert key.to_wif() == BOOT_KEY.to_wif()

    @pytest.mark.asyncio
    async def test_keeps_waiting_after_mismatch(self) -> None:
        """A valid but wrong key is reported and the prompt repeats."""
        lines = ScriptedLineSource([make_key(32).to_wif(), BOOT_KEY.to_wif()])
        key = await await_handoff(GENESIS, lines, MockFetcher())
        assert key.scalar() == BOOT_KEY.scalar()
        assert lines.consumed == 2

    @pytest.mark.asyncio
    async def test_mismatch_alone_never_verifies(self) -> None:
        lines = ScriptedLineSource([make_key(32).to_wif()])
        with pytest.raises(EOFError):
            await await_handoff(GENESIS, lines, MockFetcher())

    @pytest.mark.asyncio
    async def test_skips_invalid_input(self) -> None:
        lines = ScriptedLineSource(["garbage", OSError("tty glitch"), BOOT_KEY.to_wif()])
        key = await await_handoff(GENESIS, lines, MockFetcher())
        assert key.scalar() == BOOT_KEY.scalar()

    @pytest.mark.asyncio
    async def test_resolves_ipfs_link(self) -> None:
        fetcher = MockFetcher({IPFS_LINK: (BOOT_KEY.to_wif() + "\n").encode()})
        lines = ScriptedLineSource([f"{IPFS_LINK}\n"])
        key = await await_handoff(GENESIS, lines, fetcher)
        assert key.scalar() == BOOT_KEY.scalar()

    @pytest.mark.asyncio
    async def test_ipfs_fetch_failure_is_retried(self) -> None:
        lines = ScriptedLineSource([IPFS_LINK, BOOT_KEY.to_wif()])
        key = await await_handoff(GENESIS, lines, MockFetcher())
        assert key.scalar() == BOOT_KEY.scalar()
