"""
Producer roster and role assignment.

Turns the discovered candidates and the launch entropy into the ordered
producer schedule, and tells each node what it has to do.
"""

from .builder import Roster, account_variation, build_roster, pad_with_clones, shuffle_top
from .config import APPOINTED_PRODUCER_COUNT, ROSTER_SIZE
from .mesh import mesh_addresses, my_mesh_addresses, topmost_peer_addresses
from .peer import Discovery, Peer
from .roles import (
    Role,
    is_appointed_producer,
    is_boot_node,
    log_shuffling_results,
    my_peers,
    resolve_role,
)

__all__ = [
    # Peers
    "Discovery",
    "Peer",
    # Roster
    "APPOINTED_PRODUCER_COUNT",
    "ROSTER_SIZE",
    "Roster",
    "account_variation",
    "build_roster",
    "pad_with_clones",
    "shuffle_top",
    # Roles
    "Role",
    "is_appointed_producer",
    "is_boot_node",
    "log_shuffling_results",
    "my_peers",
    "resolve_role",
    # Mesh
    "mesh_addresses",
    "my_mesh_addresses",
    "topmost_peer_addresses",
]
