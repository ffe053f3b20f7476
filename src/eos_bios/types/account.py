"""
Chain account names.

Account names are at most 12 characters drawn from ``a-z``, ``1-5`` and ``.``.
They cannot end with a dot.
"""

from __future__ import annotations

import re
from typing import Annotated, Final

from pydantic import AfterValidator

MAX_ACCOUNT_NAME_LENGTH: Final[int] = 12
"""Maximum number of characters in an account name."""

_ACCOUNT_NAME_RE: Final = re.compile(rf"^[a-z1-5.]{{1,{MAX_ACCOUNT_NAME_LENGTH}}}$")


def is_valid_account_name(name: str) -> bool:
    """Check whether ``name`` is a well-formed chain account name."""
    return bool(_ACCOUNT_NAME_RE.match(name)) and not name.endswith(".")


def _validate_account_name(name: str) -> str:
    if not is_valid_account_name(name):
        raise ValueError(f"invalid account name {name!r}")
    return name


AccountName = Annotated[str, AfterValidator(_validate_account_name)]
"""A validated account name, usable as a pydantic field type."""

SYSTEM_ACCOUNT: Final[str] = "eosio"
"""The privileged system account the boot sequence disables."""
