"""
Factory functions for launch test objects.

Keys are derived from small integer scalars so every test sees the same
values; names are valid account names.
"""

from __future__ import annotations

import textwrap
from datetime import UTC, datetime

from eos_bios.bootseq import AccountPermission, AccountState, Authority, BootSequence
from eos_bios.crypto import EphemeralKeyPair
from eos_bios.launch import GenesisJSON, LaunchData, Snapshot
from eos_bios.roster import Discovery, Peer, Roster, build_roster, my_peers, resolve_role
from eos_bios.state import LaunchBundle, OrchestrationState, Phase

CHAIN_ID = bytes.fromhex("ab" * 32)
"""Chain identifier reported by the mock chain client."""

GENESIS_TIME = datetime(2018, 6, 1, 12, 0, 0, tzinfo=UTC)
"""Fixed generation time for genesis documents."""

BOOT_SEQUENCE_KEY = "boot_sequence.yaml"
SNAPSHOT_KEY = "snapshot.csv"

BOOT_SEQUENCE_YAML = textwrap.dedent(
    """\
    boot_sequence:
    - op: system.newaccount
      label: Create the token account
      data:
        new_account: eosio.token
    - op: system.setprods
      label: Install the appointed producers
    - op: system.resign_accounts
      label: Disable the system account
      data:
        accounts: [eosio]
    """
)
"""Small boot sequence producing one action per step, except resign (2)."""


def make_key(seed: int = 1) -> EphemeralKeyPair:
    """Deterministic key pair from a small scalar."""
    return EphemeralKeyPair.from_scalar(seed.to_bytes(32, "big"))


def peer_name(index: int) -> str:
    """Account name of the ``index``-th test candidate: bpaaa, bpaab, ..."""
    letters = "".join(chr(ord("a") + (index // 26**power) % 26) for power in (2, 1, 0))
    return f"bp{letters}"


def make_peer(index: int = 0, name: str | None = None, **discovery: str) -> Peer:
    """Real peer with a signing key, p2p address and website."""
    name = name or peer_name(index)
    fields = {
        "eosio_account_name": name,
        "eosio_abp_signing_key": str(make_key(1000 + index).public_key()),
        "organization_name": f"Org {name}",
        "website": f"https://{name}.example.org",
        "target_p2p_address": f"{name}.example.org:9876",
        "target_http_address": f"http://{name}.example.org:8888",
    } | discovery
    return Peer(discovery=Discovery(**fields))


def make_peers(count: int) -> list[Peer]:
    """``count`` distinct real peers in canonical order."""
    return [make_peer(index) for index in range(count)]


def make_roster(count: int) -> Roster:
    """Unshuffled roster over ``count`` real peers."""
    return build_roster(make_peers(count))


def make_genesis(key: EphemeralKeyPair | None = None) -> GenesisJSON:
    """Genesis whose initial key is ``key`` (or the default test key)."""
    key = key or make_key()
    return GenesisJSON.create(key.public_key(), CHAIN_ID, GENESIS_TIME)


def make_launch_data(snapshot: str = "") -> LaunchData:
    return LaunchData(
        launch_ethereum_block=5_000_000,
        boot_sequence=BOOT_SEQUENCE_KEY,
        snapshot=snapshot,
    )


def make_bundle(
    sequence_yaml: str = BOOT_SEQUENCE_YAML,
    snapshot: Snapshot | None = None,
    contracts: dict[str, bytes] | None = None,
) -> LaunchBundle:
    """Launch bundle built directly, without going through the cache."""
    return LaunchBundle(
        launch_data=make_launch_data(),
        boot_sequence=BootSequence.from_yaml(sequence_yaml),
        snapshot=snapshot or Snapshot(),
        contracts=contracts or {},
    )


def make_state(
    roster: Roster,
    local: Peer,
    *,
    bundle: LaunchBundle | None = None,
    genesis: GenesisJSON | None = None,
    phase: Phase = Phase.ROLE_DISPATCH,
) -> OrchestrationState:
    """State as it looks right after role dispatch for ``local``."""
    return OrchestrationState(
        phase=phase,
        bundle=bundle or make_bundle(),
        local_peer=local,
        roster=roster,
        role=resolve_role(roster, local.account_name),
        my_peers=tuple(my_peers(roster, local)),
        genesis=genesis,
    )


def make_account_state(*, disabled: bool, name: str = "eosio") -> AccountState:
    """System account before (threshold 1) or after (threshold 0) resignation."""
    threshold = 0 if disabled else 1
    return AccountState(
        account_name=name,
        permissions=[
            AccountPermission(
                perm_name=perm, parent=parent, required_auth=Authority(threshold=threshold)
            )
            for perm, parent in (("active", "owner"), ("owner", ""))
        ],
    )
