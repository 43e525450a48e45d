"""
L5 Orchestration — The provisioning pipeline.

A single forward-only sequence:

    check-privilege → detect-package-manager → install-dependencies →
    verify-java → [install-python-packages] → fetch-artifact →
    [install-secondary] → create-links

Bracketed steps belong to the extended variant.  Each step returns a
``StepReceipt``; the first ``ProvisionError`` becomes a ``failed``
receipt, is stored on the report, and halts the run.  No rollback.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable

from ghidra_provisioner.core.context import ExecutionContext
from ghidra_provisioner.core.errors import ProvisionError
from ghidra_provisioner.core.models.receipt import ProvisionReport, StepReceipt, now_iso
from ghidra_provisioner.core.models.settings import Settings
from ghidra_provisioner.core.services.provision.detection.java_runtime import (
    verify_java_runtime,
)
from ghidra_provisioner.core.services.provision.detection.package_manager import (
    detect_package_manager,
)
from ghidra_provisioner.core.services.provision.detection.privilege import check_privilege
from ghidra_provisioner.core.services.provision.execution.artifact import fetch_artifact
from ghidra_provisioner.core.services.provision.execution.links import create_entry_links
from ghidra_provisioner.core.services.provision.execution.packages import (
    install_dependencies,
)
from ghidra_provisioner.core.services.provision.execution.python_packages import (
    install_python_packages,
)
from ghidra_provisioner.core.services.provision.execution.secondary import (
    install_secondary_package,
)

logger = logging.getLogger(__name__)

StepFunc = Callable[[ExecutionContext], StepReceipt]
StepEvent = Callable[[str, "Step", "StepReceipt | None"], None]


@dataclass(frozen=True)
class Step:
    """One named pipeline stage."""

    name: str
    description: str
    run: StepFunc


# ── Step adapters: call the layer function, shape a receipt ─────


def _check_privilege(ctx: ExecutionContext) -> StepReceipt:
    check_privilege(ctx)
    return StepReceipt.success("check-privilege", "Running with root privileges")


def _detect_package_manager(ctx: ExecutionContext) -> StepReceipt:
    manager = detect_package_manager(ctx)
    ctx.package_manager = manager
    return StepReceipt.success(
        "detect-package-manager",
        f"Using {manager}",
        metadata={"package_manager": manager},
    )


def _install_dependencies(ctx: ExecutionContext) -> StepReceipt:
    manager = ctx.package_manager or detect_package_manager(ctx)
    ctx.package_manager = manager
    commands = install_dependencies(ctx, manager)
    return StepReceipt.success(
        "install-dependencies",
        f"Installed system dependencies with {manager}",
        metadata={"commands": [" ".join(c) for c in commands]},
    )


def _verify_java(ctx: ExecutionContext) -> StepReceipt:
    version = verify_java_runtime(ctx)
    return StepReceipt.success(
        "verify-java",
        f"Java {version} satisfies >= {ctx.settings.java_min_version}",
        metadata={"version": str(version), "major": version.major},
    )


def _install_python_packages(ctx: ExecutionContext) -> StepReceipt:
    commands = install_python_packages(ctx)
    if not commands:
        return StepReceipt.skip(
            "install-python-packages", "Python package preparation is disabled",
        )
    return StepReceipt.success(
        "install-python-packages",
        "Installed required Python packages",
        metadata={"commands": [" ".join(c) for c in commands]},
    )


def _fetch_artifact(ctx: ExecutionContext) -> StepReceipt:
    info = fetch_artifact(ctx)
    return StepReceipt.success(
        "fetch-artifact",
        f"Ghidra {info['version']} installed in {info['install_dir']}",
        metadata=info,
    )


def _install_secondary(ctx: ExecutionContext) -> StepReceipt:
    info = install_secondary_package(ctx)
    return StepReceipt.success(
        "install-secondary",
        f"{info['name']} installed in {info['directory']}",
        metadata=info,
    )


def _create_links(ctx: ExecutionContext) -> StepReceipt:
    primary = ctx.settings.entry_points.primary
    result = create_entry_links(ctx)
    meta = {"launcher": result.launcher, "links": result.links}

    if result.status == "already_available":
        return StepReceipt.skip(
            "create-links",
            f"Ghidra headless is already available in PATH as '{primary}'",
            metadata=meta,
        )
    if result.status == "warning":
        meta["instruction"] = result.instruction
        return StepReceipt.warn("create-links", str(result.warning), metadata=meta)
    return StepReceipt.success(
        "create-links",
        f"Successfully created symlink. You can run Ghidra headless using: {primary}",
        metadata=meta,
    )


# ── Plan ────────────────────────────────────────────────────────


def build_steps(settings: Settings) -> list[Step]:
    """Ordered steps for the configured variant."""
    steps = [
        Step("check-privilege", "Checking privileges", _check_privilege),
        Step("detect-package-manager", "Detecting package manager", _detect_package_manager),
        Step("install-dependencies", "Installing system dependencies", _install_dependencies),
        Step("verify-java", "Verifying Java version", _verify_java),
    ]
    if settings.extended:
        steps.append(Step(
            "install-python-packages", "Installing required Python packages",
            _install_python_packages,
        ))
    steps.append(Step("fetch-artifact", "Downloading and installing Ghidra", _fetch_artifact))
    if settings.installs_secondary:
        steps.append(Step(
            "install-secondary", f"Installing {settings.secondary.name}",
            _install_secondary,
        ))
    steps.append(Step("create-links", "Setting up analyzeHeadless in PATH", _create_links))
    return steps


# ── Run ─────────────────────────────────────────────────────────


def run_pipeline(
    ctx: ExecutionContext,
    steps: list[Step] | None = None,
    *,
    on_event: StepEvent | None = None,
) -> ProvisionReport:
    """Run steps in order, halting on the first ``ProvisionError``.

    Args:
        ctx: Execution context shared by every step.
        steps: Explicit step list (default: ``build_steps(ctx.settings)``).
        on_event: Called as ``on_event("start", step, None)`` before and
            ``on_event("finish", step, receipt)`` after each step.

    Returns:
        ``ProvisionReport`` with one receipt per step that ran.
    """
    if steps is None:
        steps = build_steps(ctx.settings)

    report = ProvisionReport(variant=ctx.settings.variant)

    for step in steps:
        if on_event:
            on_event("start", step, None)

        started_at = now_iso()
        start = time.monotonic()
        try:
            receipt = step.run(ctx)
        except ProvisionError as exc:
            exc.step = step.name
            meta = {"detail": exc.detail} if exc.detail else {}
            receipt = StepReceipt.failure(step.name, exc, metadata=meta)
            report.error = exc
            logger.info("Step %s failed: %s", step.name, exc.message)

        receipt = receipt.with_timing(started_at, int((time.monotonic() - start) * 1000))
        report.receipts.append(receipt)

        if on_event:
            on_event("finish", step, receipt)
        if report.error is not None:
            break

    return report
