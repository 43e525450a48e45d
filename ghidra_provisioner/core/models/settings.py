"""
Settings model — everything a provisioning run needs to know up front.

Loaded from ``provision.yml`` (or built from defaults when no file
exists).  Immutable for the duration of a run.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ghidra_provisioner.core.services.provision.data import defaults

Variant = Literal["base", "extended"]


class ReleaseDescriptor(BaseModel):
    """The release archive to install.  Fixed at config time."""

    model_config = ConfigDict(frozen=True)

    version: str = defaults.GHIDRA_VERSION
    build_date: str = defaults.GHIDRA_BUILD_DATE
    url_template: str = defaults.GHIDRA_URL_TEMPLATE

    @field_validator("version", "build_date")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("cannot be empty")
        return v

    @property
    def download_url(self) -> str:
        return self.url_template.format(
            version=self.version, build_date=self.build_date,
        )

    @property
    def archive_root(self) -> str:
        """Top-level directory inside the release zip."""
        return f"ghidra_{self.version}_PUBLIC"


class PackageSet(BaseModel):
    """How one package manager updates and installs."""

    model_config = ConfigDict(frozen=True)

    update: list[str]
    install: list[str]
    packages: list[str] = Field(default_factory=list)
    runtime: str = ""               # e.g. "openjdk-{java}-jdk"
    separate_runtime: bool = False  # runtime gets its own install command


class PythonPackages(BaseModel):
    """Optional pip preparation before the secondary install."""

    model_config = ConfigDict(frozen=True)

    enabled: bool = False
    upgrade_pip: bool = True
    packages: list[str] = Field(default_factory=lambda: list(defaults.PYTHON_PACKAGES))


class SecondaryPackage(BaseModel):
    """A git-hosted Python package installed next to the release."""

    model_config = ConfigDict(frozen=True)

    enabled: bool = True
    name: str = "ThingFinder"
    repository: str = defaults.THINGFINDER_REPO
    directory: Path = Path(defaults.THINGFINDER_DIR)
    requirements_file: str = defaults.REQUIREMENTS_FILE


class EntryPoints(BaseModel):
    """Symlinks exposing the launcher on the search path."""

    model_config = ConfigDict(frozen=True)

    bin_dir: Path = Path(defaults.BIN_DIR)
    launcher: str = defaults.LAUNCHER
    names: list[str] = Field(default_factory=lambda: list(defaults.LINK_NAMES))

    @field_validator("names")
    @classmethod
    def _at_least_one(cls, v: list[str]) -> list[str]:
        if not v:
            raise ValueError("at least one link name is required")
        return v

    @property
    def primary(self) -> str:
        return self.names[0]


def _default_package_sets() -> dict[str, PackageSet]:
    return {
        name: PackageSet.model_validate(data)
        for name, data in defaults.PACKAGE_SETS.items()
    }


class Settings(BaseModel):
    """Root settings for one provisioning run."""

    model_config = ConfigDict(frozen=True)

    variant: Variant = "extended"
    release: ReleaseDescriptor = Field(default_factory=ReleaseDescriptor)
    install_dir: Path = Path(defaults.INSTALL_DIR)
    temp_dir: Path = Path(defaults.TEMP_DIR)
    java_min_version: int = defaults.JAVA_MIN_VERSION

    owner_uid: int = 0
    owner_gid: int = 0
    mode: int = 0o755

    python_executable: str = "python3"
    command_timeout: int | None = None

    package_manager_priority: list[str] = Field(
        default_factory=lambda: list(defaults.PACKAGE_MANAGER_PRIORITY),
    )
    package_sets: dict[str, PackageSet] = Field(default_factory=_default_package_sets)
    extended_only_packages: list[str] = Field(
        default_factory=lambda: list(defaults.EXTENDED_ONLY_PACKAGES),
    )

    python_packages: PythonPackages = Field(default_factory=PythonPackages)
    secondary: SecondaryPackage = Field(default_factory=SecondaryPackage)
    entry_points: EntryPoints = Field(default_factory=EntryPoints)

    @field_validator("mode", mode="before")
    @classmethod
    def _octal_mode(cls, v: object) -> object:
        # Strings are octal digits ("755", "0755", "0o755"); ints are the mode itself.
        # The YAML loader hands ``mode`` over as its literal text.
        if isinstance(v, str):
            try:
                return int(v.strip(), 8)
            except ValueError:
                raise ValueError(f"mode {v!r} is not an octal number") from None
        return v

    @field_validator("mode")
    @classmethod
    def _mode_range(cls, v: int) -> int:
        if not 0 <= v <= 0o7777:
            raise ValueError(f"mode {v:#o} is outside 0o0..0o7777")
        return v

    @field_validator("java_min_version")
    @classmethod
    def _positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("java_min_version must be positive")
        return v

    @property
    def extended(self) -> bool:
        return self.variant == "extended"

    @property
    def installs_secondary(self) -> bool:
        return self.extended and self.secondary.enabled

    @property
    def archive_path(self) -> Path:
        return self.temp_dir / defaults.ARCHIVE_NAME

    @property
    def extract_path(self) -> Path:
        return self.temp_dir / self.release.archive_root

    @property
    def launcher_path(self) -> Path:
        return self.install_dir / self.entry_points.launcher
