"""
Domain models — Pydantic types for the provisioner.

    from ghidra_provisioner.core.models import Settings, StepReceipt, Version
"""

from ghidra_provisioner.core.models.receipt import ProvisionReport, StepReceipt
from ghidra_provisioner.core.models.settings import (
    EntryPoints,
    PackageSet,
    PythonPackages,
    ReleaseDescriptor,
    SecondaryPackage,
    Settings,
)
from ghidra_provisioner.core.models.version import Version, parse_java_version

__all__ = [
    # settings.py
    "EntryPoints",
    "PackageSet",
    "PythonPackages",
    "ReleaseDescriptor",
    "SecondaryPackage",
    "Settings",
    # receipt.py
    "ProvisionReport",
    "StepReceipt",
    # version.py
    "Version",
    "parse_java_version",
]
