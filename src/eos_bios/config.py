"""
Global configuration for the launch orchestrator.

This module contains environment-specific settings that apply across all packages.
"""

import os

_SUPPORTED_BIOS_ENVS: list[str] = ["prod", "test"]

BIOS_ENV = os.environ.get("BIOS_ENV", "prod").lower()
"""The environment flag ('prod' or 'test'). Defaults to 'prod'."""

if BIOS_ENV not in _SUPPORTED_BIOS_ENVS:
    raise ValueError(
        f"Invalid BIOS_ENV environment variable: '{BIOS_ENV}'. "
        f"Supported values: {_SUPPORTED_BIOS_ENVS}"
    )
