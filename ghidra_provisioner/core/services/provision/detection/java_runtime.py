"""
L3 Detection — Java runtime version.

Runs ``java -version`` and checks the major version against the
configured minimum.
"""

from __future__ import annotations

import logging

from ghidra_provisioner.core.context import ExecutionContext
from ghidra_provisioner.core.errors import MissingRuntime, VersionTooLow
from ghidra_provisioner.core.models.version import Version, parse_java_version

logger = logging.getLogger(__name__)


def read_java_version_report(ctx: ExecutionContext) -> str:
    """First line of ``java -version`` output.

    Java prints the banner on stderr; stderr is read first, then stdout,
    matching ``java -version 2>&1 | head -n 1``.

    Raises:
        MissingRuntime: No ``java`` on the search path.
    """
    java = ctx.which("java")
    if not java:
        raise MissingRuntime("Java is not installed")

    result = ctx.run([java, "-version"])
    output = (result.get("stderr") or "") + (result.get("stdout") or "")
    if not result.get("ok") and not output.strip():
        raise MissingRuntime(
            f"Java at {java} could not be run: {result.get('error', 'unknown error')}"
        )
    lines = output.strip().splitlines()
    return lines[0] if lines else ""


def check_java_version(version: Version, required: int) -> None:
    """Fail unless ``version.major >= required``."""
    if not version.at_least(required):
        raise VersionTooLow(
            f"Java {required} or higher is required (found version {version.major})",
            found=version.major,
            required=required,
        )


def verify_java_runtime(ctx: ExecutionContext) -> Version:
    """Locate, parse and check the Java runtime.

    Raises:
        MissingRuntime, VersionParseError, VersionTooLow
    """
    report = read_java_version_report(ctx)
    version = parse_java_version(report)
    logger.info("Java version %s (%s)", version, report)
    check_java_version(version, ctx.settings.java_min_version)
    return version
