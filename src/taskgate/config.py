"""Configuration defaults, env vars, and runtime options for taskgate."""

from __future__ import annotations

import os
from dataclasses import dataclass


VERSION = "0.1.0"

DEFAULT_PROMPT = "taskgate>"

_TRUTHY = ("1", "true", "yes", "on")


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in _TRUTHY


@dataclass
class Config:
    """Runtime configuration — mirrors the CLI flags."""

    # Output
    verbose: bool = False

    # Diagnostics (enables the shell's ``dump`` command)
    debug: bool = False

    # Shell
    prompt: str = ""

    def __post_init__(self) -> None:
        if not self.debug:
            self.debug = _env_flag("TASKGATE_DEBUG")
        if not self.prompt:
            self.prompt = os.environ.get("TASKGATE_PROMPT") or DEFAULT_PROMPT
