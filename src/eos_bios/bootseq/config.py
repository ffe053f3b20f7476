"""Boot sequence configuration constants."""

from __future__ import annotations

from typing import Final

ACTIONS_PER_TRANSACTION: Final[int] = 400
"""
Chunking threshold for boot sequence transactions.

Bulk operations (snapshot transfers in particular) exhaust per-transaction
resource limits somewhat above this many actions. A chunk is flushed once
its size exceeds the threshold, so chunks hold up to 401 actions.
"""

EPHEMERAL_KEY_REF: Final[str] = "ephemeral"
"""Key placeholder in boot sequence data, replaced by the ephemeral public key."""

TOKEN_CONTRACT: Final[str] = "eosio.token"
"""Default account hosting the token contract."""
