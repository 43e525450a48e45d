"""
Step receipts and the run report.

Each pipeline step produces one ``StepReceipt``.  The report collects
them in order and holds the first fatal error, if any.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any, Literal

from pydantic import BaseModel, Field

from ghidra_provisioner.core.errors import ProvisionError

StepStatus = Literal["ok", "skipped", "warning", "failed"]


def now_iso() -> str:
    """Current UTC time as ISO string."""
    return datetime.now(UTC).isoformat()


class StepReceipt(BaseModel):
    """Outcome of a single provisioning step."""

    step: str
    status: StepStatus = "ok"

    started_at: str = Field(default_factory=now_iso)
    ended_at: str = Field(default_factory=now_iso)
    duration_ms: int = 0

    message: str = ""
    error: str | None = None
    error_type: str | None = None

    metadata: dict[str, Any] = Field(default_factory=dict)

    def with_timing(self, started_at: str, duration_ms: int) -> StepReceipt:
        """Copy stamped with the step's start, end (now) and duration."""
        return self.model_copy(update={
            "started_at": started_at,
            "ended_at": now_iso(),
            "duration_ms": duration_ms,
        })

    @property
    def ok(self) -> bool:
        """Whether the step did not fail (warnings and skips count as ok)."""
        return self.status != "failed"

    @classmethod
    def success(cls, step: str, message: str = "", **kwargs: Any) -> StepReceipt:
        return cls(step=step, status="ok", message=message, **kwargs)

    @classmethod
    def skip(cls, step: str, reason: str = "", **kwargs: Any) -> StepReceipt:
        return cls(step=step, status="skipped", message=reason, **kwargs)

    @classmethod
    def warn(cls, step: str, message: str, **kwargs: Any) -> StepReceipt:
        return cls(step=step, status="warning", message=message, **kwargs)

    @classmethod
    def failure(cls, step: str, exc: ProvisionError, **kwargs: Any) -> StepReceipt:
        return cls(
            step=step,
            status="failed",
            error=exc.message,
            error_type=exc.kind,
            **kwargs,
        )


@dataclass
class ProvisionReport:
    """Result of a provisioning run."""

    variant: str = ""
    receipts: list[StepReceipt] = field(default_factory=list)
    error: ProvisionError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def status(self) -> str:
        if self.error is not None:
            return "failed"
        if self.warnings:
            return "warning"
        return "ok"

    @property
    def failed_step(self) -> str | None:
        for r in self.receipts:
            if r.status == "failed":
                return r.step
        return None

    @property
    def warnings(self) -> list[StepReceipt]:
        return [r for r in self.receipts if r.status == "warning"]

    @property
    def exit_code(self) -> int:
        return self.error.exit_code if self.error is not None else 0

    def receipt(self, step: str) -> StepReceipt | None:
        for r in self.receipts:
            if r.step == step:
                return r
        return None

    def to_dict(self) -> dict:
        return {
            "variant": self.variant,
            "status": self.status,
            "failed_step": self.failed_step,
            "error": (
                {"type": self.error.kind, "message": self.error.message}
                if self.error is not None else None
            ),
            "receipts": [r.model_dump(mode="json") for r in self.receipts],
        }
