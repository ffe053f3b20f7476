"""
Boot sequence operations.

The boot sequence is a YAML document listing the steps the boot node runs,
in order::

    boot_sequence:
    - op: system.newaccount
      label: Create the token account
      data:
        creator: eosio
        new_account: eosio.token
        pubkey: ephemeral

The set of operations is closed: each ``op`` tag maps to one model below, and
``operation_actions`` turns a step into chain actions from the launch context.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Annotated, Literal

import yaml
from pydantic import ConfigDict, Field, ValidationError

from eos_bios.crypto import PublicKey
from eos_bios.launch.genesis import GenesisJSON
from eos_bios.launch.snapshot import Snapshot
from eos_bios.roster import Roster
from eos_bios.types import SYSTEM_ACCOUNT, AccountName, FrozenModel, LaunchPreconditionError

from . import actions as acts
from .actions import Action
from .config import EPHEMERAL_KEY_REF, TOKEN_CONTRACT


class _Document(FrozenModel):
    """Boot sequence models reject unknown fields to catch typos in the document."""

    model_config = FrozenModel.model_config | ConfigDict(extra="forbid")


@dataclass(frozen=True, slots=True)
class BiosContext:
    """Everything a step may read to produce its actions."""

    roster: Roster
    """The launch roster."""

    genesis: GenesisJSON
    """The published genesis."""

    ephemeral_key: PublicKey
    """Public half of the boot node's ephemeral key."""

    snapshot: Snapshot = field(default_factory=Snapshot)
    """Preloaded balances, empty when the launch has none."""

    contracts: Mapping[str, bytes] = field(default_factory=dict)
    """Contract files referenced by the sequence, by cache key."""

    def resolve_key(self, key: str) -> str:
        """Replace the ephemeral placeholder with the actual ephemeral public key."""
        if key == EPHEMERAL_KEY_REF:
            return str(self.ephemeral_key)
        return key


# Operation data


class SetCodeData(_Document):
    account: AccountName
    code_ref: str
    """Cache key of the contract's WebAssembly code."""
    abi_ref: str = ""
    """Cache key of the contract's ABI; empty to skip ``setabi``."""


class NewAccountData(_Document):
    creator: AccountName = SYSTEM_ACCOUNT
    new_account: AccountName
    pubkey: str = EPHEMERAL_KEY_REF


class SetPrivData(_Document):
    account: AccountName


class SetProdsData(_Document):
    pass


class ResignAccountsData(_Document):
    accounts: list[AccountName]


class TokenCreateData(_Document):
    account: AccountName = TOKEN_CONTRACT
    issuer: AccountName = SYSTEM_ACCOUNT
    amount: str


class TokenIssueData(_Document):
    account: AccountName = TOKEN_CONTRACT
    issuer: AccountName = SYSTEM_ACCOUNT
    to: AccountName
    amount: str
    memo: str = ""


class CreateProducersData(_Document):
    creator: AccountName = SYSTEM_ACCOUNT


class SnapshotCreateAccountsData(_Document):
    creator: AccountName = SYSTEM_ACCOUNT
    test_users_count: int = Field(default=0, ge=0)
    """Only create the first N accounts (0 means all), for test networks."""


class SnapshotTransferData(_Document):
    account: AccountName = TOKEN_CONTRACT
    sender: AccountName = SYSTEM_ACCOUNT
    test_users_count: int = Field(default=0, ge=0)
    memo: str = ""


# Operations


class SetCodeOp(_Document):
    op: Literal["system.setcode"]
    label: str = ""
    data: SetCodeData


class NewAccountOp(_Document):
    op: Literal["system.newaccount"]
    label: str = ""
    data: NewAccountData


class SetPrivOp(_Document):
    op: Literal["system.setpriv"]
    label: str = ""
    data: SetPrivData


class SetProdsOp(_Document):
    op: Literal["system.setprods"]
    label: str = ""
    data: SetProdsData = Field(default_factory=SetProdsData)


class ResignAccountsOp(_Document):
    op: Literal["system.resign_accounts"]
    label: str = ""
    data: ResignAccountsData


class TokenCreateOp(_Document):
    op: Literal["token.create"]
    label: str = ""
    data: TokenCreateData


class TokenIssueOp(_Document):
    op: Literal["token.issue"]
    label: str = ""
    data: TokenIssueData


class CreateProducersOp(_Document):
    op: Literal["producers.create_accounts"]
    label: str = ""
    data: CreateProducersData = Field(default_factory=CreateProducersData)


class SnapshotCreateAccountsOp(_Document):
    op: Literal["snapshot.create_accounts"]
    label: str = ""
    data: SnapshotCreateAccountsData = Field(default_factory=SnapshotCreateAccountsData)


class SnapshotTransferOp(_Document):
    op: Literal["snapshot.transfer"]
    label: str = ""
    data: SnapshotTransferData = Field(default_factory=SnapshotTransferData)


BootOperation = Annotated[
    SetCodeOp
    | NewAccountOp
    | SetPrivOp
    | SetProdsOp
    | ResignAccountsOp
    | TokenCreateOp
    | TokenIssueOp
    | CreateProducersOp
    | SnapshotCreateAccountsOp
    | SnapshotTransferOp,
    Field(discriminator="op"),
]
"""One boot sequence step, discriminated by its ``op`` tag."""


class BootSequence(FrozenModel):
    """The ordered list of steps run by the boot node."""

    boot_sequence: list[BootOperation]

    def __len__(self) -> int:
        return len(self.boot_sequence)

    def contract_refs(self) -> list[str]:
        """Cache keys of every contract file the sequence deploys, in order."""
        refs: list[str] = []
        for step in self.boot_sequence:
            if isinstance(step, SetCodeOp):
                refs.extend(ref for ref in (step.data.code_ref, step.data.abi_ref) if ref)
        return list(dict.fromkeys(refs))

    @classmethod
    def from_yaml(cls, content: str | bytes) -> BootSequence:
        """
        Load a boot sequence document.

        Raises:
            LaunchPreconditionError: If the document is not valid YAML or
                does not describe a boot sequence.
        """
        try:
            return cls.model_validate(yaml.safe_load(content))
        except (yaml.YAMLError, ValidationError) as exc:
            raise LaunchPreconditionError("boot_sequence", f"loading boot sequence: {exc}") from exc


def _signing_key(peer_name: str, key: str) -> str:
    if not key:
        raise ValueError(f"producer {peer_name} has no eosio_abp_signing_key")
    return key


def _producer_schedule(ctx: BiosContext) -> list[tuple[str, str]]:
    producers = ctx.roster.appointed_producers
    if not producers:
        # Single-node network: the boot node produces alone.
        return [(ctx.roster.boot_node.account_name, str(ctx.ephemeral_key))]
    return [
        (peer.account_name, _signing_key(peer.account_name, peer.discovery.eosio_abp_signing_key))
        for peer in producers
    ]


def _producer_accounts(ctx: BiosContext, creator: str) -> list[Action]:
    created: dict[str, Action] = {}
    for peer in ctx.roster:
        name = peer.account_name
        if name == SYSTEM_ACCOUNT or name in created:
            continue
        key = _signing_key(name, peer.discovery.eosio_abp_signing_key)
        created[name] = acts.new_account(creator, name, key)
    return list(created.values())


def _contract(ctx: BiosContext, ref: str) -> bytes:
    try:
        return ctx.contracts[ref]
    except KeyError:
        raise ValueError(f"contract file {ref!r} was not loaded") from None


def operation_actions(step: BootOperation, ctx: BiosContext) -> list[Action]:
    """
    Produce the chain actions of one boot sequence step.

    Args:
        step: The step to expand.
        ctx: Launch context the step reads from.

    Returns:
        Actions in submission order; possibly empty.

    Raises:
        ValueError: If the context lacks something the step needs.
    """
    match step:
        case SetCodeOp(data=data):
            actions = [acts.set_code(data.account, _contract(ctx, data.code_ref))]
            if data.abi_ref:
                actions.append(acts.set_abi(data.account, _contract(ctx, data.abi_ref)))
            return actions

        case NewAccountOp(data=data):
            return [acts.new_account(data.creator, data.new_account, ctx.resolve_key(data.pubkey))]

        case SetPrivOp(data=data):
            return [acts.set_priv(data.account)]

        case SetProdsOp():
            return [acts.set_prods(_producer_schedule(ctx))]

        case ResignAccountsOp(data=data):
            resigned = []
            for account in data.accounts:
                resigned.append(
                    acts.update_auth(account, "active", "owner", acts.disabled_authority())
                )
                resigned.append(acts.update_auth(account, "owner", "", acts.disabled_authority()))
            return resigned

        case TokenCreateOp(data=data):
            return [acts.token_create(data.account, data.issuer, data.amount)]

        case TokenIssueOp(data=data):
            return [acts.token_issue(data.account, data.issuer, data.to, data.amount, data.memo)]

        case CreateProducersOp(data=data):
            return _producer_accounts(ctx, data.creator)

        case SnapshotCreateAccountsOp(data=data):
            return [
                acts.new_account(data.creator, line.account_name, line.public_key)
                for line in ctx.snapshot.head(data.test_users_count)
            ]

        case SnapshotTransferOp(data=data):
            return [
                acts.token_transfer(
                    data.account, data.sender, line.account_name, line.balance, data.memo
                )
                for line in ctx.snapshot.head(data.test_users_count)
            ]

    raise ValueError(f"unsupported boot operation {step!r}")
