"""
Orchestration driver: one launch run, from launch data to handoff.
"""

from eos_bios.state import LaunchBundle, OrchestrationState, Phase

from .config import OrchestratorConfig
from .driver import Orchestrator
from .loader import load_launch_bundle

__all__ = [
    "LaunchBundle",
    "OrchestrationState",
    "Orchestrator",
    "OrchestratorConfig",
    "Phase",
    "load_launch_bundle",
]
