"""
Runtime version model — structured ``{major, minor, patch}``.

Parses the first line of ``java -version`` output: take the token between
the first pair of double quotes and split it on ``.``.  Malformed input
raises ``VersionParseError``.
"""

from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict

from ghidra_provisioner.core.errors import VersionParseError

_QUOTED = re.compile(r'"([^"]*)"')
_LEADING_DIGITS = re.compile(r"^(\d+)")


class Version(BaseModel):
    """A three-part numeric version."""

    model_config = ConfigDict(frozen=True)

    major: int
    minor: int = 0
    patch: int = 0
    raw: str = ""

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"

    def at_least(self, major: int) -> bool:
        """Whether the major version is >= ``major``."""
        return self.major >= major


def _leading_int(part: str) -> int | None:
    m = _LEADING_DIGITS.match(part)
    return int(m.group(1)) if m else None


def parse_java_version(report: str) -> Version:
    """Parse a ``java -version`` report into a ``Version``.

    Examples::

        openjdk version "21.0.2" 2024-01-16   → 21.0.2
        openjdk version "21" 2023-09-19       → 21.0.0
        java version "1.8.0_292"              → 1.8.0

    Legacy ``1.x`` reports keep major ``1``; they always fail a modern
    minimum.

    Raises:
        VersionParseError: No quoted token, or its first part is not numeric.
    """
    line = report.strip().splitlines()[0] if report.strip() else ""
    m = _QUOTED.search(line)
    if not m:
        raise VersionParseError(
            f"Cannot parse Java version from: {line or '<empty output>'}"
        )

    token = m.group(1)
    parts = token.split(".")
    major = _leading_int(parts[0])
    if major is None:
        raise VersionParseError(f"Java version '{token}' has no numeric major part")

    rest = [_leading_int(p) for p in parts[1:3]]
    minor = rest[0] if len(rest) > 0 and rest[0] is not None else 0
    patch = rest[1] if len(rest) > 1 and rest[1] is not None else 0
    return Version(major=major, minor=minor, patch=patch, raw=token)
