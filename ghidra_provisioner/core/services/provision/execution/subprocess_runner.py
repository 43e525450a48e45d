"""
L4 Execution — Command runner.

The SINGLE PLACE where ``subprocess.run`` is called for provisioning
commands.  Logging and error shaping are centralised here; callers turn
``{"ok": False}`` into the typed error for their step.
"""

from __future__ import annotations

import logging
import subprocess
import time
from typing import Any

logger = logging.getLogger(__name__)

_TAIL = 2000


def run_command(
    cmd: list[str],
    *,
    timeout: int | None = None,
    env: dict[str, str] | None = None,
    cwd: str | None = None,
) -> dict[str, Any]:
    """Run a command to completion and capture its output.

    Provisioning always runs as root, so there is no sudo handling.
    ``timeout=None`` blocks until the command exits.

    Args:
        cmd: Command list for ``subprocess.run()``.
        timeout: Seconds before ``TimeoutExpired``, or None.
        env: Full environment for the child (None = inherit).
        cwd: Working directory for the command.

    Returns:
        ``{"ok": True, "stdout": "...", "stderr": "...", "elapsed_ms": N}``
        on success, ``{"ok": False, "error": "...", ...}`` on failure.
    """
    logger.debug("run: %s", " ".join(cmd))
    started = time.monotonic()
    try:
        proc = subprocess.run(
            cmd, capture_output=True, text=True, timeout=timeout, env=env, cwd=cwd,
        )
    except subprocess.TimeoutExpired:
        return {"ok": False, "error": f"Command timed out ({timeout}s)"}
    except FileNotFoundError:
        return {"ok": False, "error": f"Command not found: {cmd[0]}"}
    except OSError as e:
        logger.warning("Cannot execute %s: %s", cmd[0], e)
        return {"ok": False, "error": str(e)}

    result: dict[str, Any] = {
        "ok": proc.returncode == 0,
        "stdout": (proc.stdout or "")[-_TAIL:],
        "stderr": (proc.stderr or "")[-_TAIL:],
        "elapsed_ms": int((time.monotonic() - started) * 1000),
    }
    if not result["ok"]:
        result["returncode"] = proc.returncode
        result["error"] = f"Command failed (exit {proc.returncode})"
        logger.debug("exit %d: %s", proc.returncode, result["stderr"].strip()[-300:])
    return result


def failure_detail(result: dict[str, Any]) -> str:
    """Best short explanation from a failed run result."""
    tail = (result.get("stderr") or result.get("stdout") or "").strip()
    if tail:
        return tail[-600:]
    return result.get("error", "")
