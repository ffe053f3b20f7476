"""
Boot sequence: the ordered operations that initialize a new chain.

Defines the closed set of operations, how each one expands into chain
actions, and how actions are split into transactions.
"""

from .actions import AccountPermission, AccountState, Action, Authority, PermissionLevel
from .chunking import chunkify_actions
from .config import ACTIONS_PER_TRANSACTION, EPHEMERAL_KEY_REF
from .operations import BiosContext, BootOperation, BootSequence, operation_actions

__all__ = [
    # Actions
    "AccountPermission",
    "AccountState",
    "Action",
    "Authority",
    "PermissionLevel",
    # Operations
    "BiosContext",
    "BootOperation",
    "BootSequence",
    "operation_actions",
    # Chunking
    "ACTIONS_PER_TRANSACTION",
    "EPHEMERAL_KEY_REF",
    "chunkify_actions",
]
