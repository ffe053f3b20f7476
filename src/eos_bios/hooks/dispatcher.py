"""
Script-based hook dispatcher.

Each event runs ``hook_<event>.sh`` from a hooks directory, if present, with
the payload as positional arguments. The payload is also exported as JSON in
``BIOS_HOOK_PAYLOAD``. A missing script means nobody is listening: the event
is skipped. A failing script aborts the launch.
"""

from __future__ import annotations

import asyncio
import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from eos_bios.types import HookError

from .events import HookEvent, HookPayload

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ScriptHookDispatcher:
    """Runs one shell script per lifecycle event."""

    hooks_dir: Path
    """Directory holding the ``hook_<event>.sh`` scripts."""

    shell: str = "bash"
    """Interpreter the scripts are run with."""

    def script_for(self, event: HookEvent) -> Path:
        """Path of the script handling ``event``."""
        return self.hooks_dir / f"hook_{event}.sh"

    async def dispatch(self, event: HookEvent, payload: HookPayload) -> None:
        """
        Run the script for ``event`` and wait for it to finish.

        Raises:
            HookError: If the script cannot be started or exits non-zero.
        """
        script = self.script_for(event)
        if not script.is_file():
            logger.info("No %s hook script, skipping", script.name)
            return

        logger.info("Dispatching hook %s", event)
        env = os.environ | {
            "BIOS_HOOK_EVENT": str(event),
            "BIOS_HOOK_PAYLOAD": json.dumps(payload.to_dict()),
        }
        try:
            process = await asyncio.create_subprocess_exec(
                self.shell,
                str(script),
                *payload.script_args(),
                cwd=self.hooks_dir,
                env=env,
            )
        except OSError as exc:
            raise HookError(str(event), f"cannot run {script.name}: {exc}") from exc

        returncode = await process.wait()
        if returncode != 0:
            raise HookError(
                str(event),
                f"{script.name} exited with status {returncode}",
                returncode=returncode,
            )
