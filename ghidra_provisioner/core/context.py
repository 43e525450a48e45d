"""
Execution context — the single object every pipeline step receives.

Instead of reading ambient process state (euid, PATH, cwd) from inside
each step, the CLI snapshots it ONCE into an ``ExecutionContext`` and
threads that through the pipeline:

    - CLI:     main.py      → ExecutionContext.from_environment(settings)
    - Tests:   conftest.py  → ExecutionContext(settings, euid=0, search_path=...)

The only mutable field is ``package_manager``, filled in by the
detection step and read by the dependency installer.
"""

from __future__ import annotations

import os
import shutil
from dataclasses import dataclass, field
from typing import Any, Callable

from ghidra_provisioner.core.models.settings import Settings

Runner = Callable[..., dict[str, Any]]


def _default_runner() -> Runner:
    from ghidra_provisioner.core.services.provision.execution.subprocess_runner import (
        run_command,
    )

    return run_command


@dataclass
class ExecutionContext:
    """Explicit process state for one provisioning run."""

    settings: Settings
    euid: int
    search_path: str
    env: dict[str, str] = field(default_factory=dict)
    runner: Runner = field(default_factory=_default_runner)
    package_manager: str | None = None

    @classmethod
    def from_environment(cls, settings: Settings, **overrides: Any) -> ExecutionContext:
        """Snapshot the current process environment."""
        env = dict(os.environ)
        values: dict[str, Any] = {
            "settings": settings,
            "euid": os.geteuid(),
            "search_path": env.get("PATH", os.defpath),
            "env": env,
        }
        values.update(overrides)
        return cls(**values)

    def which(self, name: str) -> str | None:
        """Resolve an executable on the context's search path."""
        return shutil.which(name, path=self.search_path)

    def command_env(self) -> dict[str, str]:
        """Environment for child processes (PATH pinned to the snapshot)."""
        env = dict(self.env)
        env["PATH"] = self.search_path
        return env

    def run(self, cmd: list[str], **kwargs: Any) -> dict[str, Any]:
        """Run a command through the configured runner."""
        kwargs.setdefault("timeout", self.settings.command_timeout)
        kwargs.setdefault("env", self.command_env())
        return self.runner(cmd, **kwargs)
