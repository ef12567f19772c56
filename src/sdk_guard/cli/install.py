"""CLI commands that install, uninstall and update SDK packages."""

from typing import Optional

import typer
from rich.table import Table

from sdk_guard.cli.utils import console, fail, handle_outcome, load_project, parse_mode, require_mode
from sdk_guard.models.sdk import RequirementLevel
from sdk_guard.utils.errors import SdkGuardError


def _print_plan(transactions: list) -> None:
    table = Table(title="Install Plan")
    table.add_column("#", style="dim")
    table.add_column("Step", style="bold")
    table.add_column("Details")
    for index, steps in enumerate(transactions, start=1):
        for step in steps:
            table.add_row(str(index), step.kind, step.describe())
    console.print(table)


def install_cmd(
    mode: Optional[str] = typer.Option(
        None,
        "--mode",
        "-m",
        help="Install for this mode instead of the selected one (prototype, full)",
    ),
    core: bool = typer.Option(
        False,
        "--core",
        help="Only install SDKs required in every mode",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        "-n",
        help="Show the manifest changes without applying them",
    ),
) -> None:
    """
    Add the SDKs required by the selected mode to manifest.json.

    Existing entries are never overwritten.

    Example:
        sdk-guard install --mode full --dry-run
    """
    try:
        project = load_project()
        installer = project.installer

        if core:
            targets = [sdk for sdk in project.registry if sdk.requirement is RequirementLevel.CORE]
        else:
            selected = parse_mode(mode, default=project.mode)
            require_mode(selected)
            targets = project.registry.required_for(selected)

        if dry_run:
            _print_plan(installer.plan_install(targets))
            return

        if core:
            outcome = installer.install_core()
            label = "core"
        else:
            outcome = installer.install_required(selected)
            label = selected.display_name
    except SdkGuardError as e:
        fail(e.message)

    handle_outcome(outcome, f"Installed {label} SDKs", f"All {label} SDKs already present")


def uninstall_cmd(
    mode: Optional[str] = typer.Option(
        None,
        "--mode",
        "-m",
        help="Uninstall for this mode instead of the selected one (prototype, full)",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        "-n",
        help="List the packages that would be removed",
    ),
) -> None:
    """
    Remove SDKs that only belong to the other mode.

    SDKs required in Full mode and optional SDKs are never removed.
    """
    try:
        project = load_project()
        selected = parse_mode(mode, default=project.mode)
        require_mode(selected)

        if dry_run:
            targets = project.registry.to_uninstall_for(selected)
            if not targets:
                console.print("[dim]Nothing to uninstall[/dim]")
            for sdk in targets:
                console.print(f"  [red]-[/red] {sdk.package_id} ({sdk.name})")
            return

        outcome = project.installer.uninstall_unnecessary(selected)
    except SdkGuardError as e:
        fail(e.message)

    handle_outcome(
        outcome,
        f"Removed SDKs not used in {selected.display_name} mode",
        "Nothing to uninstall",
    )


def sync_versions_cmd(
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        "-n",
        help="List outdated packages without updating them",
    ),
) -> None:
    """
    Raise outdated SDK versions to the versions sdk-guard expects.

    Newer versions are left as they are.
    """
    try:
        project = load_project()

        if dry_run:
            snapshot = project.mutator.require()
            updates = project.installer.outdated(snapshot.dependencies)
            if not updates:
                console.print("[dim]All SDK versions up to date[/dim]")
            for package_id, value in updates.items():
                console.print(
                    f"  {package_id}: {snapshot.dependencies[package_id]} -> [green]{value}[/green]"
                )
            return

        outcome = project.installer.sync_versions()
    except SdkGuardError as e:
        fail(e.message)

    handle_outcome(outcome, "Updated outdated SDK versions", "All SDK versions up to date")
