"""
L1 Domain — Package-manager command plan (pure).

Turns a ``PackageSet`` into the ordered list of commands to run.
No I/O, no subprocess.
"""

from __future__ import annotations

from ghidra_provisioner.core.models.settings import PackageSet


def runtime_package(package_set: PackageSet, java_major: int) -> str:
    """Concrete JDK package name, e.g. ``openjdk-21-jdk``."""
    return package_set.runtime.format(java=java_major)


def select_packages(
    package_set: PackageSet,
    *,
    extended: bool,
    extended_only: list[str],
) -> list[str]:
    """Packages for the variant, in catalog order."""
    if extended:
        return list(package_set.packages)
    skip = set(extended_only)
    return [p for p in package_set.packages if p not in skip]


def package_commands(
    package_set: PackageSet,
    *,
    java_major: int,
    extended: bool = True,
    extended_only: list[str] | None = None,
) -> list[list[str]]:
    """Build the update-and-install sequence for one package manager.

    Returns::

        [["apt-get", "update"],
         ["apt-get", "install", "-y", "wget", "unzip", ...],
         ["apt-get", "install", "-y", "openjdk-21-jdk"]]

    The runtime package either closes the main install command or, when
    ``separate_runtime`` is set, gets a command of its own.
    """
    packages = select_packages(
        package_set, extended=extended, extended_only=extended_only or [],
    )
    runtime = runtime_package(package_set, java_major) if package_set.runtime else ""

    commands: list[list[str]] = [list(package_set.update)]
    if runtime and not package_set.separate_runtime:
        packages = packages + [runtime]
    if packages:
        commands.append(list(package_set.install) + packages)
    if runtime and package_set.separate_runtime:
        commands.append(list(package_set.install) + [runtime])
    return commands
