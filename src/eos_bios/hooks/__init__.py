"""Lifecycle hooks: events the launch emits for external systems."""

from .dispatcher import ScriptHookDispatcher
from .events import (
    BootNodePayload,
    ConnectMeshPayload,
    GenesisPayload,
    HandoffPayload,
    HookEvent,
    HookPayload,
    JoinNetworkPayload,
    LifecyclePayload,
)

__all__ = [
    "BootNodePayload",
    "ConnectMeshPayload",
    "GenesisPayload",
    "HandoffPayload",
    "HookEvent",
    "HookPayload",
    "JoinNetworkPayload",
    "LifecyclePayload",
    "ScriptHookDispatcher",
]
