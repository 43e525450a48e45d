"""
Shared test fixtures and configuration.

Every test provisions into ``tmp_path``: the install root, temp dir,
bin dir and secondary package directory are all redirected, and the
search path is a private directory of fake executables.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import pytest

from ghidra_provisioner.core.context import ExecutionContext
from ghidra_provisioner.core.models.settings import (
    EntryPoints,
    ReleaseDescriptor,
    SecondaryPackage,
    Settings,
)
from tests.helpers import RecordingRunner, make_release_zip


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Extended-variant settings rooted in ``tmp_path``."""
    return Settings(
        install_dir=tmp_path / "opt" / "ghidra",
        temp_dir=tmp_path / "tmp",
        owner_uid=os.getuid(),
        owner_gid=os.getgid(),
        secondary=SecondaryPackage(directory=tmp_path / "opt" / "ThingFinder"),
        entry_points=EntryPoints(bin_dir=tmp_path / "bin"),
    )


@pytest.fixture
def release_zip(tmp_path: Path) -> Path:
    return make_release_zip(tmp_path / "mirror" / "ghidra_11.2.1_PUBLIC_20241105.zip")


@pytest.fixture
def local_settings(settings: Settings, release_zip: Path) -> Settings:
    """Settings whose release URL points at a local ``file://`` archive."""
    release = ReleaseDescriptor(url_template=release_zip.as_uri())
    return settings.model_copy(update={"release": release})


@pytest.fixture
def path_dir(tmp_path: Path) -> Path:
    """Private search path directory for fake executables."""
    d = tmp_path / "path"
    d.mkdir()
    return d


@pytest.fixture
def runner() -> RecordingRunner:
    return RecordingRunner()


@pytest.fixture
def make_ctx(settings: Settings, path_dir: Path, runner: RecordingRunner):
    """Factory for ``ExecutionContext`` objects with test defaults."""

    def _make(
        settings: Settings = settings,
        *,
        euid: int = 0,
        search_path: str | None = None,
        runner: Any = runner,
    ) -> ExecutionContext:
        return ExecutionContext(
            settings=settings,
            euid=euid,
            search_path=str(path_dir) if search_path is None else search_path,
            env={},
            runner=runner,
        )

    return _make
