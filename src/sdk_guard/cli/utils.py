"""Shared utilities for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING

import typer
from rich.console import Console

from sdk_guard.models.manifest import MutationOutcome
from sdk_guard.models.sdk import Mode

if TYPE_CHECKING:
    from sdk_guard.core.project import GuardProject
    from sdk_guard.models.validation import ValidationReport

# Shared console instance
console = Console()


def load_project() -> "GuardProject":
    """Build the project described by the active configuration."""
    from sdk_guard.core.project import GuardProject
    from sdk_guard.utils.config import get_config

    return GuardProject.from_config(get_config())


def fail(message: str) -> None:
    """Print an error and exit with status 1."""
    console.print(f"[red]Error:[/red] {message}")
    raise typer.Exit(1)


def parse_mode(value: str | None, default: Mode = Mode.UNSET) -> Mode:
    """Parse a mode option, exiting on unknown values."""
    if value is None:
        return default
    try:
        return Mode(value.lower())
    except ValueError:
        fail(f"Invalid mode: {value} (expected prototype or full)")
    return default


def require_mode(mode: Mode) -> None:
    """Exit when no mode has been selected."""
    if not mode.is_configured:
        fail("No SDK mode configured. Run 'sdk-guard mode set <prototype|full>' first.")


def handle_outcome(outcome: MutationOutcome, changed: str, unchanged: str) -> None:
    """Report a manifest mutation outcome, exiting on failure."""
    if outcome.failed:
        fail("Could not update manifest.json (see log for details)")
    if outcome.changed:
        console.print(f"[green]OK[/green] {changed}")
    else:
        console.print(f"[dim]{unchanged}[/dim]")


def exit_for_report(report: "ValidationReport", fail_on_warning: bool = False) -> None:
    """Exit with status 1 when the report should block a build."""
    if report.error_count or (fail_on_warning and report.warning_count):
        raise typer.Exit(1)


def status_icon(success: bool) -> str:
    """Get a colored status icon."""
    return "[green]OK[/green]" if success else "[red]FAIL[/red]"
