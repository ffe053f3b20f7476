"""
Launch orchestration for EOS.IO Software-based networks.

Coordinates the cooperative boot of a new network among independently
operated nodes: deterministic producer ordering seeded by external entropy,
role assignment, the boot node's chain initialization, and the join and
handoff verification performed by everyone else.
"""

from .orchestrator import OrchestrationState, Orchestrator, OrchestratorConfig, Phase
from .roster import Role

__all__ = [
    "OrchestrationState",
    "Orchestrator",
    "OrchestratorConfig",
    "Phase",
    "Role",
]
