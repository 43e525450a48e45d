"""
L4 Execution — Release artifact install.

Download → extract → move into the install root → clean up → normalize
ownership and permissions.  On failure, temporary files stay where they
are; there is no rollback.
"""

from __future__ import annotations

import logging
import os
import shutil
import zipfile
from pathlib import Path
from typing import Any

from ghidra_provisioner.core.context import ExecutionContext
from ghidra_provisioner.core.errors import ExtractionFailure
from ghidra_provisioner.core.services.provision.execution.download import download_file

logger = logging.getLogger(__name__)


def extract_archive(archive: Path, dest: Path) -> None:
    """Unpack a zip archive into ``dest``.

    Raises:
        ExtractionFailure: Corrupt archive or write error.
    """
    try:
        with zipfile.ZipFile(archive, "r") as zf:
            zf.extractall(dest)
    except (zipfile.BadZipFile, OSError) as e:
        raise ExtractionFailure(f"Failed to extract {archive}", detail=str(e)) from e


def install_tree(source: Path, install_root: Path) -> list[str]:
    """Move every top-level entry of ``source`` into ``install_root``.

    An existing entry with the same name is replaced, never merged.

    Returns:
        Names of the moved entries, sorted.
    """
    install_root.mkdir(parents=True, exist_ok=True)
    moved: list[str] = []
    for entry in sorted(source.iterdir()):
        target = install_root / entry.name
        if target.is_symlink() or target.is_file():
            target.unlink()
        elif target.is_dir():
            shutil.rmtree(target)
        shutil.move(str(entry), str(target))
        moved.append(entry.name)
    return moved


def normalize_permissions(root: Path, uid: int, gid: int, mode: int) -> int:
    """``chown -R uid:gid root && chmod -R mode root``.

    Symlinks are re-owned but never chmod-ed (that would follow them).

    Returns:
        Number of paths touched.
    """
    count = 0

    def _apply(path: str) -> None:
        nonlocal count
        if os.path.islink(path):
            os.chown(path, uid, gid, follow_symlinks=False)
        else:
            os.chown(path, uid, gid)
            os.chmod(path, mode)
        count += 1

    _apply(str(root))
    for dirpath, dirnames, filenames in os.walk(root):
        for name in dirnames + filenames:
            _apply(os.path.join(dirpath, name))
    return count


def fetch_artifact(ctx: ExecutionContext) -> dict[str, Any]:
    """Download and install the configured release into the install root.

    Raises:
        DownloadFailure: Download error.
        ExtractionFailure: Unpack, move, or permission error.
    """
    settings = ctx.settings
    release = settings.release
    install_root = settings.install_dir
    archive = settings.archive_path
    extracted = settings.extract_path

    try:
        install_root.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ExtractionFailure(
            f"Cannot create install directory {install_root}", detail=str(e),
        ) from e

    logger.info("Downloading %s", release.download_url)
    size = download_file(release.download_url, archive, timeout=settings.command_timeout)

    logger.info("Extracting %s into %s", archive, settings.temp_dir)
    extract_archive(archive, settings.temp_dir)
    if not extracted.is_dir():
        raise ExtractionFailure(
            f"Archive did not contain {release.archive_root}/",
            detail=f"expected directory {extracted}",
        )

    try:
        moved = install_tree(extracted, install_root)
        archive.unlink()
        extracted.rmdir()
        touched = normalize_permissions(
            install_root, settings.owner_uid, settings.owner_gid, settings.mode,
        )
    except OSError as e:
        raise ExtractionFailure(
            f"Failed to install {release.archive_root} into {install_root}",
            detail=str(e),
        ) from e

    logger.info(
        "Installed %d entries into %s (%d paths normalized to %o)",
        len(moved), install_root, touched, settings.mode,
    )
    return {
        "install_dir": str(install_root),
        "version": release.version,
        "size_bytes": size,
        "entries": moved,
    }
