"""
L4 Execution — Entry-point links.

Symlinks the install root's launcher to well-known command names in a
bin directory.  Failing to make the command resolvable is a warning,
never a fatal error.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from ghidra_provisioner.core.context import ExecutionContext
from ghidra_provisioner.core.errors import LinkCreationWarning

logger = logging.getLogger(__name__)


@dataclass
class LinkResult:
    """What the linker did."""

    status: str                     # linked | already_available | warning
    launcher: str
    links: list[str] = field(default_factory=list)
    warning: LinkCreationWarning | None = None
    instruction: str = ""


def path_instruction(install_root: Path, launcher: str) -> str:
    """Shell line the user can add to their profile."""
    support_dir = (install_root / launcher).parent
    return f'export PATH="{support_dir}:$PATH"'


def force_symlink(target: Path, link: Path) -> None:
    """``ln -sf target link``."""
    if link.is_symlink() or link.exists():
        link.unlink()
    os.symlink(target, link)


def create_entry_links(ctx: ExecutionContext) -> LinkResult:
    """Expose the launcher on the search path.

    Extended variant: skip when the primary name already resolves, and
    re-check resolution after linking.  Base variant links unconditionally.
    """
    settings = ctx.settings
    ep = settings.entry_points
    launcher = settings.launcher_path
    check = settings.extended

    if check:
        existing = ctx.which(ep.primary)
        if existing:
            logger.info("%s already resolves to %s", ep.primary, existing)
            return LinkResult(status="already_available", launcher=str(launcher),
                              links=[existing])

    links: list[str] = []
    error: OSError | None = None
    try:
        ep.bin_dir.mkdir(parents=True, exist_ok=True)
        for name in ep.names:
            link = ep.bin_dir / name
            force_symlink(launcher, link)
            links.append(str(link))
            logger.info("Linked %s -> %s", link, launcher)
    except OSError as e:
        error = e
        logger.warning("Link creation failed: %s", e)

    if error is None and (not check or ctx.which(ep.primary)):
        return LinkResult(status="linked", launcher=str(launcher), links=links)

    reason = (
        f"could not create links in {ep.bin_dir}: {error}"
        if error is not None
        else f"{ep.bin_dir} is not on PATH"
    )
    return LinkResult(
        status="warning",
        launcher=str(launcher),
        links=links,
        warning=LinkCreationWarning(
            f"Failed to add {ep.primary} to PATH ({reason})"
        ),
        instruction=path_instruction(settings.install_dir, ep.launcher),
    )
