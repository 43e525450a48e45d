"""
Ghidra headless provisioner — CLI entrypoint.

Usage:
    sudo ghidra-provision
    sudo ghidra-provision --variant base
    sudo ghidra-provision --config provision.yml --json
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from ghidra_provisioner import __version__
from ghidra_provisioner.core.config.loader import ConfigError, load_settings
from ghidra_provisioner.core.context import ExecutionContext
from ghidra_provisioner.core.models.receipt import ProvisionReport, StepReceipt
from ghidra_provisioner.core.models.settings import Settings
from ghidra_provisioner.core.observability.logging_config import setup_logging
from ghidra_provisioner.core.services.provision.orchestration.pipeline import (
    Step,
    run_pipeline,
)

# ── Console lines ───────────────────────────────────────────────

_LEVEL_COLORS = {"INFO": "green", "WARN": "yellow", "ERROR": "red"}


def _say(level: str, message: str) -> None:
    """Print a leveled, colored line: ``[INFO] message``."""
    click.secho(f"[{level}]", fg=_LEVEL_COLORS[level], bold=level == "WARN", nl=False)
    click.echo(f" {message}")


def _build_context(settings: Settings) -> ExecutionContext:
    return ExecutionContext.from_environment(settings)


def _event_printer(quiet: bool):
    def on_event(event: str, step: Step, receipt: StepReceipt | None) -> None:
        if event == "start":
            if not quiet:
                _say("INFO", f"{step.description}...")
            return

        assert receipt is not None
        if receipt.status == "failed":
            _say("ERROR", receipt.error or "step failed")
            detail = receipt.metadata.get("detail")
            if detail:
                click.secho(detail, dim=True)
        elif receipt.status == "warning":
            _say("WARN", receipt.message)
            instruction = receipt.metadata.get("instruction")
            if instruction:
                _say(
                    "WARN",
                    "You can manually add it by adding the following line "
                    "to your shell profile:",
                )
                click.echo(instruction)
        elif receipt.message and not quiet:
            _say("INFO", receipt.message)

    return on_event


def _print_summary(settings: Settings, report: ProvisionReport) -> None:
    primary = settings.entry_points.primary
    _say("INFO", "Installation complete!")
    _say("INFO", f"Ghidra headless is installed in {settings.install_dir}")
    if report.receipt("install-secondary") is not None:
        pkg = settings.secondary
        _say("INFO", f"{pkg.name} is installed in {pkg.directory}")
    _say("INFO", f"You can run Ghidra headless using: {primary}")

    if report.receipt("install-secondary") is not None:
        name = settings.secondary.name
        _say("INFO", "")
        _say("INFO", f"To use {name}:")
        _say("INFO", "For source code analysis:")
        _say("INFO", f"  {name} --code <path-to-code-folder> [--output <output json file>]")
        _say("INFO", "For binary analysis with GhidraBridge:")
        _say(
            "INFO",
            f"  {name} --binary <path-to-binary> "
            "[--reachable_from_function <function-name>] [--output <output json file>]",
        )


@click.command()
@click.version_option(version=__version__, prog_name="ghidra-provision")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging.")
@click.option("--quiet", "-q", is_flag=True, help="Only print warnings, errors and the summary.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False, dir_okay=False),
    default=None,
    help="Path to provision.yml (default: auto-detect, else built-in defaults).",
)
@click.option(
    "--variant",
    type=click.Choice(["base", "extended"]),
    default=None,
    help="Override the configured variant (extended also installs ThingFinder).",
)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output the run report as JSON.")
def cli(
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
    variant: str | None,
    as_json: bool,
) -> None:
    """Ghidra headless provisioner — install Ghidra for headless analysis.

    Must run as root.  Exits 0 on success, 1 on the first failed step.
    """
    if debug:
        level = "DEBUG"
    elif verbose:
        level = "INFO"
    elif quiet:
        level = "ERROR"
    else:
        level = os.environ.get("GHP_LOG_LEVEL", "WARNING")

    setup_logging(
        level=level,
        log_file=os.environ.get("GHP_LOG_FILE"),
        log_file_level=os.environ.get("GHP_LOG_FILE_LEVEL"),
    )

    try:
        settings = load_settings(Path(config_path) if config_path else None)
    except ConfigError as e:
        if as_json:
            click.echo(json.dumps({"status": "failed", "error": {"type": "ConfigError", "message": str(e)}}, indent=2))
        else:
            _say("ERROR", str(e))
        sys.exit(1)

    if variant:
        settings = settings.model_copy(update={"variant": variant})

    ctx = _build_context(settings)

    if as_json:
        report = run_pipeline(ctx)
        click.echo(json.dumps(report.to_dict(), indent=2))
        sys.exit(report.exit_code)

    if not quiet:
        what = "Ghidra"
        if settings.installs_secondary:
            what = f"Ghidra and {settings.secondary.name}"
        _say("INFO", f"Starting {what} installation...")

    report = run_pipeline(ctx, on_event=_event_printer(quiet))

    if report.error is not None:
        sys.exit(report.exit_code)

    _print_summary(settings, report)


if __name__ == "__main__":
    cli()
