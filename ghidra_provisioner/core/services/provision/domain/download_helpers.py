"""
L1 Domain — Download helpers (pure).

Size formatting and progress bucketing for the archive download.
"""

from __future__ import annotations


def fmt_size(n: int | float) -> str:
    """Format byte count to human-readable string."""
    for unit in ("B", "KB", "MB", "GB"):
        if n < 1024:
            return f"{n:.1f} {unit}"
        n /= 1024
    return f"{n:.1f} TB"


def progress_step(downloaded: int, total: int, last_pct: int, every: int = 5) -> int | None:
    """Return the new percentage if it crossed the next ``every``% mark."""
    if total <= 0:
        return None
    pct = int(downloaded * 100 / total)
    if pct >= last_pct + every:
        return pct
    return None
