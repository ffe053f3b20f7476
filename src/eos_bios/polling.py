"""
Retry-with-interval primitive.

Every wait in the launch protocol is the same shape: ask a collaborator,
and if the answer is not there yet (or the collaborator failed), sleep and
ask again. Production waits never give up; a human operator owns timeouts.
Tests inject zero intervals or a bounded attempt count.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TypeVar

from eos_bios.types import PollExhaustedError

logger = logging.getLogger(__name__)

T = TypeVar("T")

Sleeper = Callable[[float], Awaitable[None]]
"""Coroutine used to wait between attempts."""

Attempt = Callable[[], Awaitable[T | None]]
"""One poll attempt: returns the awaited value, or None when not ready yet."""


def _no_progress(marker: str) -> None:  # noqa: ARG001
    """Default progress sink that discards markers."""


def print_progress(marker: str) -> None:
    """Progress sink writing markers inline on stdout."""
    print(marker, end="", flush=True)


@dataclass(frozen=True, slots=True)
class PollPolicy:
    """
    How to repeat a poll.

    Attributes:
        interval: Seconds to sleep after an unsuccessful attempt.
        max_attempts: Attempt cap; None means poll forever.
        sleep: Sleep coroutine (injectable for testing).
    """

    interval: float
    max_attempts: int | None = None
    sleep: Sleeper = asyncio.sleep

    @property
    def is_bounded(self) -> bool:
        """Whether this policy can give up."""
        return self.max_attempts is not None


async def poll_until(
    attempt: Attempt[T],
    policy: PollPolicy,
    *,
    what: str,
    progress: Callable[[str], None] = _no_progress,
) -> T:
    """
    Repeat ``attempt`` until it returns a value.

    An attempt that returns None counts as "not ready" and emits ``.``.
    An attempt that raises is logged without a stack trace, emits ``e``,
    and is retried: collaborator failures inside a poll are transient.

    Args:
        attempt: The attempt to repeat.
        policy: Interval and attempt cap.
        what: Short description used in log messages.
        progress: Sink for progress markers.

    Returns:
        The first non-None value returned by ``attempt``.

    Raises:
        PollExhaustedError: Only when a bounded policy runs out of attempts.
    """
    attempts = 0
    while True:
        attempts += 1
        try:
            result = await attempt()
        except Exception as exc:
            logger.warning("%s: attempt %d failed: %s", what, attempts, exc)
            progress("e")
        else:
            if result is not None:
                return result
            logger.debug("%s: not ready (attempt %d)", what, attempts)
            progress(".")

        if policy.max_attempts is not None and attempts >= policy.max_attempts:
            raise PollExhaustedError(what, attempts)

        await policy.sleep(policy.interval)
