"""
Lifecycle hook events and their payloads.

External systems observe the launch through these notifications: status
pages, scripts that publish the genesis on social media, node managers that
restart the local node with new configuration. Events fire in this order::

    init -> boot_publish_genesis -> boot_node -> join_network
         -> boot_connect_mesh -> boot_publish_handoff -> done

A given node only sees the events of its own branch.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import StrEnum
from typing import Any


class HookEvent(StrEnum):
    """Names of the lifecycle events."""

    INIT = "init"
    BOOT_PUBLISH_GENESIS = "boot_publish_genesis"
    BOOT_NODE = "boot_node"
    JOIN_NETWORK = "join_network"
    BOOT_CONNECT_MESH = "boot_connect_mesh"
    BOOT_PUBLISH_HANDOFF = "boot_publish_handoff"
    DONE = "done"


class _Payload:
    """Common conversions for hook payloads."""

    def to_dict(self) -> dict[str, Any]:
        """JSON-compatible form of the payload."""
        return asdict(self)  # type: ignore[call-overload]

    def script_args(self) -> list[str]:
        """Positional arguments handed to hook scripts."""
        args = []
        for value in self.to_dict().values():
            args.append(",".join(value) if isinstance(value, list) else str(value))
        return args


@dataclass(frozen=True, slots=True)
class LifecyclePayload(_Payload):
    """Payload of ``init`` and ``done``."""

    operation: str
    """Invocation mode: ``orchestrate``, ``join`` or ``boot``."""


@dataclass(frozen=True, slots=True)
class GenesisPayload(_Payload):
    """Payload of ``boot_publish_genesis``."""

    genesis_json: str


@dataclass(frozen=True, slots=True)
class BootNodePayload(_Payload):
    """Payload of ``boot_node``: genesis and both halves of the ephemeral key."""

    genesis_json: str
    public_key: str
    private_key: str


@dataclass(frozen=True, slots=True)
class JoinNetworkPayload(_Payload):
    """Payload of ``join_network``."""

    genesis_json: str
    my_accounts: list[str]
    """Account names this node answers for, clones included."""
    p2p_addresses: list[str]
    """Addresses to dial to join the mesh."""


@dataclass(frozen=True, slots=True)
class ConnectMeshPayload(_Payload):
    """Payload of ``boot_connect_mesh``."""

    p2p_addresses: list[str]


@dataclass(frozen=True, slots=True)
class HandoffPayload(_Payload):
    """Payload of ``boot_publish_handoff``: the key to disclose."""

    public_key: str
    private_key: str


HookPayload = (
    LifecyclePayload
    | GenesisPayload
    | BootNodePayload
    | JoinNetworkPayload
    | ConnectMeshPayload
    | HandoffPayload
)
"""Any hook payload."""
