"""
L4 Execution — Secondary package install (ThingFinder).

``git clone`` → ``pip install -r requirements.txt`` → ``pip install <dir>``.

There is no "already cloned" check: a second run into a
populated directory fails at the clone, and pip is never reached.
"""

from __future__ import annotations

import logging

from ghidra_provisioner.core.context import ExecutionContext
from ghidra_provisioner.core.errors import SecondaryInstallFailure
from ghidra_provisioner.core.services.provision.execution.subprocess_runner import (
    failure_detail,
)

logger = logging.getLogger(__name__)


def secondary_commands(ctx: ExecutionContext) -> list[tuple[str, list[str]]]:
    """``(label, command)`` pairs in execution order."""
    settings = ctx.settings
    pkg = settings.secondary
    pip = [settings.python_executable, "-m", "pip"]
    target = str(pkg.directory)
    return [
        (f"Cloning {pkg.name} repository",
         ["git", "clone", pkg.repository, target]),
        (f"Installing {pkg.name} dependencies",
         pip + ["install", "-r", str(pkg.directory / pkg.requirements_file)]),
        (f"Installing {pkg.name} package",
         pip + ["install", target]),
    ]


def install_secondary_package(ctx: ExecutionContext) -> dict:
    """Clone and pip-install the secondary package.

    Raises:
        SecondaryInstallFailure: Clone or either pip install failed.
    """
    pkg = ctx.settings.secondary
    git = ctx.which("git")
    if not git:
        raise SecondaryInstallFailure(
            f"git is not available; cannot clone {pkg.repository}",
        )

    for label, cmd in secondary_commands(ctx):
        logger.info("%s: %s", label, " ".join(cmd))
        result = ctx.run(cmd)
        if not result.get("ok"):
            raise SecondaryInstallFailure(
                f"{label} failed: {' '.join(cmd)}",
                detail=failure_detail(result),
            )

    return {"name": pkg.name, "directory": str(pkg.directory)}
