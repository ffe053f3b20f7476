"""Exception hierarchy for the launch orchestrator."""

from __future__ import annotations


class BiosError(Exception):
    """
    Base exception for all launch orchestration errors.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r})"


class LaunchPreconditionError(BiosError):
    """
    Raised when an input required before launching is missing or unparsable.

    Covers the launch data, the boot sequence, the snapshot, contract files
    and an empty discovery graph. Always fatal: the run cannot start.

    Attributes:
        resource: What could not be loaded (e.g. "boot_sequence").
        detail: Description of what went wrong.
    """

    def __init__(self, resource: str, detail: str) -> None:
        self.resource = resource
        self.detail = detail
        super().__init__(f"{resource}: {detail}")


class BootSequenceError(BiosError):
    """
    Raised when a boot sequence step cannot be turned into actions or pushed.

    The whole sequence is aborted; there is no partial resume.

    Attributes:
        label: Human label of the failing step.
        op: Operation tag of the failing step.
        chunk_index: Index of the failing transaction chunk, if the failure
            happened while pushing.
        detail: Description of what went wrong.
    """

    def __init__(
        self,
        label: str,
        op: str,
        detail: str,
        *,
        chunk_index: int | None = None,
    ) -> None:
        self.label = label
        self.op = op
        self.detail = detail
        self.chunk_index = chunk_index

        if chunk_index is not None:
            msg = f"step {label!r} [{op}], chunk {chunk_index}: {detail}"
        else:
            msg = f"step {label!r} [{op}]: {detail}"
        super().__init__(msg)


class HookError(BiosError):
    """
    Raised when a lifecycle hook fails.

    Attributes:
        event: Name of the hook event.
        returncode: Exit status of the hook script, if one ran.
    """

    def __init__(self, event: str, detail: str, *, returncode: int | None = None) -> None:
        self.event = event
        self.returncode = returncode
        super().__init__(f"hook {event}: {detail}")


class GenesisFormatError(BiosError):
    """Raised when pasted or fetched genesis data is not a valid genesis document."""


class KeyFormatError(BiosError):
    """Raised when a key string cannot be decoded."""


class PollExhaustedError(BiosError):
    """
    Raised when a bounded poll policy runs out of attempts.

    Production policies are unbounded and never raise this.

    Attributes:
        attempts: Number of attempts made.
    """

    def __init__(self, what: str, attempts: int) -> None:
        self.attempts = attempts
        super().__init__(f"{what}: gave up after {attempts} attempts")
