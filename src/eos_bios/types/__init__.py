"""Reusable type definitions for the launch orchestrator."""

from .account import SYSTEM_ACCOUNT, AccountName, is_valid_account_name
from .base import FrozenModel, StrictBaseModel
from .exceptions import (
    BiosError,
    BootSequenceError,
    GenesisFormatError,
    HookError,
    KeyFormatError,
    LaunchPreconditionError,
    PollExhaustedError,
)

__all__ = [
    # Models
    "FrozenModel",
    "StrictBaseModel",
    # Accounts
    "AccountName",
    "SYSTEM_ACCOUNT",
    "is_valid_account_name",
    # Exceptions
    "BiosError",
    "BootSequenceError",
    "GenesisFormatError",
    "HookError",
    "KeyFormatError",
    "LaunchPreconditionError",
    "PollExhaustedError",
]
