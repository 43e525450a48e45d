"""
L4 Execution — Optional pip preparation.

Disabled by default.  Enabling it in ``provision.yml`` upgrades pip and
installs the listed packages before the secondary package.
"""

from __future__ import annotations

import logging

from ghidra_provisioner.core.context import ExecutionContext
from ghidra_provisioner.core.errors import SecondaryInstallFailure
from ghidra_provisioner.core.services.provision.execution.subprocess_runner import (
    failure_detail,
)

logger = logging.getLogger(__name__)


def python_package_commands(ctx: ExecutionContext) -> list[list[str]]:
    """pip commands for the configured packages (empty when disabled)."""
    cfg = ctx.settings.python_packages
    if not cfg.enabled:
        return []
    pip = [ctx.settings.python_executable, "-m", "pip"]
    commands: list[list[str]] = []
    if cfg.upgrade_pip:
        commands.append(pip + ["install", "--upgrade", "pip"])
    if cfg.packages:
        commands.append(pip + ["install"] + list(cfg.packages))
    return commands


def install_python_packages(ctx: ExecutionContext) -> list[list[str]]:
    """Run the pip preparation commands, if any.

    Raises:
        SecondaryInstallFailure: A pip command failed.
    """
    commands = python_package_commands(ctx)
    for cmd in commands:
        logger.info("Running: %s", " ".join(cmd))
        result = ctx.run(cmd)
        if not result.get("ok"):
            raise SecondaryInstallFailure(
                f"Python package install failed: {' '.join(cmd)}",
                detail=failure_detail(result),
            )
    return commands
