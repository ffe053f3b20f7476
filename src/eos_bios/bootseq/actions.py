"""
Chain actions and account state.

Actions carry their arguments as plain JSON-compatible mappings; turning them
into the chain's binary form is the chain client's job, using the contracts'
ABIs.
"""

from __future__ import annotations

from typing import Any

from pydantic import Field

from eos_bios.types import SYSTEM_ACCOUNT, FrozenModel


class PermissionLevel(FrozenModel):
    """An ``actor@permission`` pair authorizing an action."""

    actor: str
    permission: str = "active"


class Action(FrozenModel):
    """One contract call."""

    account: str
    """Account hosting the contract."""

    name: str
    """Action name within the contract."""

    authorization: list[PermissionLevel]
    """Permissions the transaction must satisfy for this action."""

    data: dict[str, Any] = Field(default_factory=dict)
    """Action arguments, JSON-compatible."""


class KeyWeight(FrozenModel):
    key: str
    weight: int


class PermissionLevelWeight(FrozenModel):
    permission: PermissionLevel
    weight: int


class Authority(FrozenModel):
    """Threshold and weighted keys/accounts required to satisfy a permission."""

    threshold: int
    keys: list[KeyWeight] = Field(default_factory=list)
    accounts: list[PermissionLevelWeight] = Field(default_factory=list)
    waits: list[dict[str, Any]] = Field(default_factory=list)


class AccountPermission(FrozenModel):
    """One named permission of an account, as reported by the chain."""

    perm_name: str
    parent: str = ""
    required_auth: Authority


class AccountState(FrozenModel):
    """The subset of an account query the launch verification needs."""

    account_name: str
    permissions: list[AccountPermission] = Field(default_factory=list)

    def is_disabled(self) -> bool:
        """
        Whether the account was resigned by the boot sequence.

        A disabled account has exactly two permissions (owner and active),
        both with an authority threshold of 0.
        """
        return len(self.permissions) == 2 and all(
            permission.required_auth.threshold == 0 for permission in self.permissions
        )


def key_authority(key: str) -> dict[str, Any]:
    """Authority satisfied by a single key."""
    return {
        "threshold": 1,
        "keys": [{"key": key, "weight": 1}],
        "accounts": [],
        "waits": [],
    }


def disabled_authority() -> dict[str, Any]:
    """Authority with a zero threshold and nothing able to satisfy it."""
    return {"threshold": 0, "keys": [], "accounts": [], "waits": []}


def _system(name: str, data: dict[str, Any], actor: str = SYSTEM_ACCOUNT) -> Action:
    return Action(
        account=SYSTEM_ACCOUNT,
        name=name,
        authorization=[PermissionLevel(actor=actor)],
        data=data,
    )


def new_account(creator: str, name: str, key: str) -> Action:
    """Create ``name`` with ``key`` as owner and active key."""
    return _system(
        "newaccount",
        {
            "creator": creator,
            "name": name,
            "owner": key_authority(key),
            "active": key_authority(key),
        },
        actor=creator,
    )


def set_code(account: str, code: bytes) -> Action:
    """Deploy contract code to ``account``."""
    return _system(
        "setcode",
        {"account": account, "vmtype": 0, "vmversion": 0, "code": code.hex()},
        actor=account,
    )


def set_abi(account: str, abi: bytes) -> Action:
    """Publish the ABI of ``account``'s contract."""
    return _system("setabi", {"account": account, "abi": abi.hex()}, actor=account)


def set_priv(account: str) -> Action:
    """Mark ``account`` as privileged."""
    return _system("setpriv", {"account": account, "is_priv": 1})


def set_prods(schedule: list[tuple[str, str]]) -> Action:
    """Install a producer schedule of (producer name, block signing key) pairs."""
    return _system(
        "setprods",
        {
            "schedule": [
                {"producer_name": name, "block_signing_key": key} for name, key in schedule
            ]
        },
    )


def update_auth(account: str, permission: str, parent: str, auth: dict[str, Any]) -> Action:
    """Replace one permission of ``account``."""
    return Action(
        account=SYSTEM_ACCOUNT,
        name="updateauth",
        authorization=[PermissionLevel(actor=account, permission="owner")],
        data={"account": account, "permission": permission, "parent": parent, "auth": auth},
    )


def token_create(contract: str, issuer: str, maximum_supply: str) -> Action:
    """Create a token with its issuer and supply cap."""
    return Action(
        account=contract,
        name="create",
        authorization=[PermissionLevel(actor=contract)],
        data={"issuer": issuer, "maximum_supply": maximum_supply},
    )


def token_issue(contract: str, issuer: str, to: str, quantity: str, memo: str) -> Action:
    """Issue new tokens to ``to``."""
    return Action(
        account=contract,
        name="issue",
        authorization=[PermissionLevel(actor=issuer)],
        data={"to": to, "quantity": quantity, "memo": memo},
    )


def token_transfer(contract: str, sender: str, to: str, quantity: str, memo: str) -> Action:
    """Move tokens from ``sender`` to ``to``."""
    return Action(
        account=contract,
        name="transfer",
        authorization=[PermissionLevel(actor=sender)],
        data={"from": sender, "to": to, "quantity": quantity, "memo": memo},
    )
