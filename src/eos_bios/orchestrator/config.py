"""
Orchestrator configuration.

Operational parameters of one run: poll intervals, chunking and mesh sizes,
and where hook scripts live. Defaults match the launch protocol; the test
environment polls without sleeping.

The optional YAML file uses the field names directly::

    entropy_poll_interval: 2.0
    sync_poll_interval: 1.0
    actions_per_transaction: 400
    mesh_fanout: 10
    hooks_dir: ./hooks
"""

from __future__ import annotations

from pathlib import Path
from typing import Final

import yaml
from pydantic import ConfigDict, Field

from eos_bios.bootseq import ACTIONS_PER_TRANSACTION
from eos_bios.config import BIOS_ENV
from eos_bios.entropy import ENTROPY_POLL_INTERVAL
from eos_bios.hooks import ScriptHookDispatcher
from eos_bios.join import SYNC_POLL_INTERVAL
from eos_bios.polling import PollPolicy
from eos_bios.roster.config import MESH_FANOUT
from eos_bios.types import FrozenModel

_TEST_ENV: Final[bool] = BIOS_ENV == "test"


class OrchestratorConfig(FrozenModel):
    """Tunables of an orchestration run."""

    model_config = FrozenModel.model_config | ConfigDict(extra="forbid")

    entropy_poll_interval: float = Field(
        default=0.0 if _TEST_ENV else ENTROPY_POLL_INTERVAL, ge=0
    )
    """Seconds between polls for the entropy block."""

    sync_poll_interval: float = Field(default=0.0 if _TEST_ENV else SYNC_POLL_INTERVAL, ge=0)
    """Seconds between checks of the system account during verification."""

    actions_per_transaction: int = Field(default=ACTIONS_PER_TRANSACTION, gt=0)
    """Chunking threshold for boot sequence transactions."""

    mesh_fanout: int = Field(default=MESH_FANOUT, gt=0)
    """Number of peer addresses announced or dialed."""

    hooks_dir: Path | None = None
    """Directory of ``hook_<event>.sh`` scripts, if hooks run as scripts."""

    def entropy_policy(self) -> PollPolicy:
        """Unbounded poll policy for the entropy gate."""
        return PollPolicy(interval=self.entropy_poll_interval)

    def sync_policy(self) -> PollPolicy:
        """Unbounded poll policy for chain verification."""
        return PollPolicy(interval=self.sync_poll_interval)

    def script_hooks(self) -> ScriptHookDispatcher | None:
        """Dispatcher running the scripts in ``hooks_dir``, if one is configured."""
        if self.hooks_dir is None:
            return None
        return ScriptHookDispatcher(self.hooks_dir)

    @classmethod
    def from_yaml_file(cls, path: Path | str) -> OrchestratorConfig:
        """
        Load configuration from a YAML file.

        Raises:
            FileNotFoundError: If the file does not exist.
            yaml.YAMLError: If the file is not valid YAML.
            pydantic.ValidationError: If the data fails validation.
        """
        path = Path(path)
        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f)
        return cls.model_validate(data or {})

    @classmethod
    def from_yaml(cls, content: str) -> OrchestratorConfig:
        """Load configuration from a YAML string."""
        return cls.model_validate(yaml.safe_load(content) or {})
