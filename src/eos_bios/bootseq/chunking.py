"""Splitting a step's actions into transactions."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TypeVar

from .config import ACTIONS_PER_TRANSACTION

T = TypeVar("T")


def chunkify_actions(
    actions: Sequence[T],
    chunk_size: int = ACTIONS_PER_TRANSACTION,
) -> list[list[T]]:
    """
    Partition ``actions`` into transaction-sized chunks, preserving order.

    A chunk is flushed when its running size exceeds ``chunk_size`` before the
    next action is added, so full chunks hold ``chunk_size + 1`` actions.

    Returns:
        Chunks in order; empty when there are no actions.
    """
    chunks: list[list[T]] = []
    current: list[T] = []
    for action in actions:
        if len(current) > chunk_size:
            chunks.append(current)
            current = []
        current.append(action)
    if current:
        chunks.append(current)
    return chunks
