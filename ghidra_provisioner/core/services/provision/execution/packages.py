"""
L4 Execution — System dependency installation.

Runs the package manager's update-and-install sequence.  First failing
command aborts; no retry.
"""

from __future__ import annotations

import logging

from ghidra_provisioner.core.context import ExecutionContext
from ghidra_provisioner.core.errors import DependencyInstallFailure, UnsupportedEnvironment
from ghidra_provisioner.core.services.provision.domain.package_plan import package_commands
from ghidra_provisioner.core.services.provision.execution.subprocess_runner import (
    failure_detail,
)

logger = logging.getLogger(__name__)


def dependency_commands(ctx: ExecutionContext, manager: str) -> list[list[str]]:
    """Commands ``install_dependencies`` would run for ``manager``."""
    settings = ctx.settings
    package_set = settings.package_sets.get(manager)
    if package_set is None:
        raise UnsupportedEnvironment(f"No package set configured for {manager}")
    return package_commands(
        package_set,
        java_major=settings.java_min_version,
        extended=settings.extended,
        extended_only=settings.extended_only_packages,
    )


def install_dependencies(ctx: ExecutionContext, manager: str) -> list[list[str]]:
    """Install OS packages with the detected package manager.

    Returns:
        The commands that were run, in order.

    Raises:
        DependencyInstallFailure: Any command exited non-zero.
    """
    env = ctx.command_env()
    if manager == "apt-get":
        env["DEBIAN_FRONTEND"] = "noninteractive"

    commands = dependency_commands(ctx, manager)
    for cmd in commands:
        logger.info("Running: %s", " ".join(cmd))
        result = ctx.run(cmd, env=env)
        if not result.get("ok"):
            raise DependencyInstallFailure(
                f"Dependency install failed: {' '.join(cmd)}",
                detail=failure_detail(result),
            )
    return commands
