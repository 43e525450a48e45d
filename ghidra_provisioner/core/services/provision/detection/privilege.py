"""
L3 Detection — Privilege check.
"""

from __future__ import annotations

from ghidra_provisioner.core.context import ExecutionContext
from ghidra_provisioner.core.errors import InsufficientPrivilege


def check_privilege(ctx: ExecutionContext) -> None:
    """Require effective uid 0 for the whole run."""
    if ctx.euid != 0:
        raise InsufficientPrivilege(
            "Please run this installer as root or with sudo "
            f"(effective uid is {ctx.euid})"
        )
