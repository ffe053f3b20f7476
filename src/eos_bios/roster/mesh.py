"""Peer-to-peer addresses announced when the network forms its mesh."""

from __future__ import annotations

from collections.abc import Iterable

from .builder import Roster
from .config import MESH_FANOUT
from .peer import Peer


def mesh_addresses(
    roster: Roster,
    exclude_accounts: Iterable[str] = (),
    limit: int = MESH_FANOUT,
) -> list[str]:
    """
    Distinct p2p addresses of the topmost roster entries.

    Clones share their source's address, so each address appears once.
    Entries whose declared discovery account is excluded (the caller's own
    identities) and entries without an address are skipped.

    Args:
        roster: The launch roster.
        exclude_accounts: Declared discovery accounts to skip.
        limit: Maximum number of addresses to return.

    Returns:
        Addresses in roster order.
    """
    excluded = set(exclude_accounts)
    addresses: list[str] = []
    for peer in roster:
        if len(addresses) >= limit:
            break
        address = peer.discovery.target_p2p_address
        if not address or address in addresses:
            continue
        if peer.discovery.eosio_account_name in excluded:
            continue
        addresses.append(address)
    return addresses


def topmost_peer_addresses(roster: Roster, limit: int = MESH_FANOUT) -> list[str]:
    """Addresses the boot node announces: the top of the roster, minus itself."""
    return mesh_addresses(
        roster,
        exclude_accounts=[roster.boot_node.discovery.eosio_account_name],
        limit=limit,
    )


def my_mesh_addresses(roster: Roster, peers: Iterable[Peer], limit: int = MESH_FANOUT) -> list[str]:
    """Addresses a joining node dials: the top of the roster, minus its own identities."""
    return mesh_addresses(
        roster,
        exclude_accounts=[peer.discovery.eosio_account_name for peer in peers],
        limit=limit,
    )
