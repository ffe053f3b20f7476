"""Tests for the exception hierarchy."""

from __future__ import annotations

from eos_bios.types import (
    BiosError,
    BootSequenceError,
    HookError,
    LaunchPreconditionError,
    PollExhaustedError,
)


def test_all_errors_are_bios_errors() -> None:
    errors = [
        LaunchPreconditionError("snapshot", "missing"),
        BootSequenceError("label", "system.setprods", "bad"),
        HookError("done", "failed"),
        PollExhaustedError("thing", 2),
    ]
    assert all(isinstance(error, BiosError) for error in errors)


def test_precondition_message() -> None:
    error = LaunchPreconditionError("boot_sequence", "not found")
    assert str(error) == "boot_sequence: not found"
    assert error.resource == "boot_sequence"


def test_boot_sequence_message_mentions_chunk() -> None:
    error = BootSequenceError(
        "Create accounts", "snapshot.create_accounts", "rejected", chunk_index=2
    )
    assert str(error) == "step 'Create accounts' [snapshot.create_accounts], chunk 2: rejected"
    assert repr(error) == f"BootSequenceError({str(error)!r})"


def test_boot_sequence_message_without_chunk() -> None:
    error = BootSequenceError("Deploy", "system.setcode", "missing contract")
    assert str(error) == "step 'Deploy' [system.setcode]: missing contract"
    assert error.chunk_index is None
