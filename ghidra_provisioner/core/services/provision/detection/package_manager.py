"""
L3 Detection — System package manager.

Probes the search path for known package-manager executables in a fixed
priority order.  Read-only.
"""

from __future__ import annotations

import logging

from ghidra_provisioner.core.context import ExecutionContext
from ghidra_provisioner.core.errors import UnsupportedEnvironment

logger = logging.getLogger(__name__)


def probe_package_managers(ctx: ExecutionContext) -> dict[str, str | None]:
    """Resolve every known package manager.

    Returns::

        {"apt-get": "/usr/bin/apt-get", "dnf": None, "yum": None}
    """
    return {
        name: ctx.which(name)
        for name in ctx.settings.package_manager_priority
    }


def detect_package_manager(ctx: ExecutionContext) -> str:
    """Return the first available package manager by priority.

    Only managers that also have a package set in the settings count.

    Raises:
        UnsupportedEnvironment: None of the known managers is on PATH.
    """
    known = ctx.settings.package_sets
    for name, path in probe_package_managers(ctx).items():
        if path and name in known:
            logger.info("Detected package manager %s at %s", name, path)
            return name

    tried = ", ".join(ctx.settings.package_manager_priority)
    raise UnsupportedEnvironment(
        "Unsupported package manager. Please install dependencies manually.",
        detail=f"looked for: {tried}",
    )
