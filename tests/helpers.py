"""
Test helpers — fake executables, release archives, a recording runner.

Imported by test modules as ``tests.helpers``.
"""

from __future__ import annotations

import zipfile
from pathlib import Path
from typing import Any, Callable


def make_executable(directory: Path, name: str, body: str = "exit 0") -> Path:
    """Write a ``/bin/sh`` script named ``name`` into ``directory``."""
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / name
    path.write_text(f"#!/bin/sh\n{body}\n")
    path.chmod(0o755)
    return path


def make_release_zip(path: Path, root: str = "ghidra_11.2.1_PUBLIC") -> Path:
    """Build a tiny release archive with a launcher under ``root/``."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with zipfile.ZipFile(path, "w") as zf:
        zf.writestr(f"{root}/support/analyzeHeadless", "#!/bin/sh\necho headless\n")
        zf.writestr(f"{root}/ghidraRun", "#!/bin/sh\n")
        zf.writestr(f"{root}/docs/README.txt", "docs\n")
    return path


class RecordingRunner:
    """Fake command runner.  Records calls; ``respond`` may override results."""

    def __init__(self, respond: Callable[[list[str]], dict | None] | None = None) -> None:
        self.respond = respond
        self.calls: list[list[str]] = []
        self.kwargs: list[dict[str, Any]] = []

    def __call__(self, cmd: list[str], **kwargs: Any) -> dict[str, Any]:
        self.calls.append(list(cmd))
        self.kwargs.append(kwargs)
        if self.respond is not None:
            result = self.respond(list(cmd))
            if result is not None:
                return result
        return {"ok": True, "stdout": "", "stderr": ""}


JAVA_21 = 'openjdk version "21.0.2" 2024-01-16\n'


def java_responder(report: str = JAVA_21) -> Callable[[list[str]], dict | None]:
    """Answer ``java -version`` on stderr, like the real JVM."""

    def respond(cmd: list[str]) -> dict | None:
        if cmd[-1] == "-version":
            return {"ok": True, "stdout": "", "stderr": report}
        return None

    return respond
