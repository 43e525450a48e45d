"""
Logging configuration — root logger setup for the CLI entrypoint.

main.py calls ``setup_logging`` once; modules log through
``logging.getLogger(__name__)`` and never configure handlers themselves.

Console level: CLI flag  >  GHP_LOG_LEVEL  >  WARNING.
A second, full-detail file handler is added when GHP_LOG_FILE is set
(its level from GHP_LOG_FILE_LEVEL).

Console progress lines ([INFO]/[WARN]/[ERROR]) are printed by the CLI,
not logged; logging carries diagnostics such as the exact commands run.
"""

from __future__ import annotations

import logging
import sys

# (max level, format, datefmt) — first tier whose max level >= level wins
_CONSOLE_TIERS: tuple[tuple[int, str, str | None], ...] = (
    (logging.DEBUG, "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s", "%H:%M:%S"),
    (logging.INFO, "%(asctime)s [%(name)s] %(message)s", "%H:%M:%S"),
    (logging.CRITICAL, "%(message)s", None),
)

_FILE_FORMAT = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d %(message)s"
_FILE_DATEFMT = "%Y-%m-%dT%H:%M:%S"


def console_format(numeric_level: int) -> tuple[str, str | None]:
    """Pick the console format for a numeric level."""
    for max_level, fmt, datefmt in _CONSOLE_TIERS:
        if numeric_level <= max_level:
            return fmt, datefmt
    return _CONSOLE_TIERS[-1][1], _CONSOLE_TIERS[-1][2]


def _configured(
    handler: logging.Handler, level: int, fmt: str, datefmt: str | None,
) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt, datefmt=datefmt))
    return handler


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> None:
    """Replace the root logger's handlers with console (+ optional file).

    Args:
        level: Console level name, e.g. ``"INFO"``.
        log_file: Path of a full-detail log.  Keeps package-manager
            output from unattended runs.
        log_file_level: Level name for the file (default: ``level``).
    """
    console_level = parse_level(level)
    handlers = [
        _configured(
            logging.StreamHandler(sys.stderr), console_level,
            *console_format(console_level),
        ),
    ]
    if log_file:
        handlers.append(_configured(
            logging.FileHandler(log_file, encoding="utf-8"),
            parse_level(log_file_level or level),
            _FILE_FORMAT, _FILE_DATEFMT,
        ))

    root = logging.getLogger()
    for old in list(root.handlers):
        root.removeHandler(old)
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(min(h.level for h in handlers))
    logging.raiseExceptions = False


def parse_level(level: str | None) -> int:
    """Level name to its numeric value; unknown names mean WARNING."""
    numeric = logging.getLevelName((level or "").upper())
    return numeric if isinstance(numeric, int) else logging.WARNING
