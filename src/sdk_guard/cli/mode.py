"""CLI commands for showing and switching the SDK mode."""

import typer
from rich.panel import Panel
from rich.table import Table

from sdk_guard.cli.utils import console, exit_for_report, fail, load_project, parse_mode, status_icon
from sdk_guard.utils.errors import SdkGuardError

app = typer.Typer(help="Show or switch the SDK mode (prototype or full).")


@app.command("show")
def show_cmd() -> None:
    """Show the selected mode and the SDKs it requires."""
    try:
        project = load_project()
        mode = project.mode
        snapshot = project.mutator.require()
    except SdkGuardError as e:
        fail(e.message)

    console.print(Panel(f"[bold]Mode:[/bold] {mode.display_name}", title="SDK Mode"))

    if not mode.is_configured:
        console.print("Run [bold]sdk-guard mode set <prototype|full>[/bold] to select a mode.")
        return

    table = Table(title=f"{mode.display_name} mode SDKs")
    table.add_column("SDK", style="bold")
    table.add_column("Package")
    table.add_column("Expected")
    table.add_column("Installed")
    for sdk in project.registry.required_for(mode):
        table.add_row(
            sdk.name,
            sdk.package_id,
            sdk.version_marker or "-",
            status_icon(snapshot.has(sdk.package_id)),
        )
    console.print(table)


@app.command("set")
def set_cmd(
    mode: str = typer.Argument(..., help="Mode to switch to (prototype, full)"),
) -> None:
    """
    Switch the project to a new mode.

    Syncs the runtime config, installs the SDKs the mode requires, removes
    the ones it excludes, cleans the platform manifest, then validates.

    Example:
        sdk-guard mode set full
    """
    from sdk_guard.renderers import RenderContext
    from sdk_guard.renderers.terminal import TerminalRenderer
    from sdk_guard.utils.config import get_config

    selected = parse_mode(mode)
    try:
        project = load_project()
        with console.status(f"Switching to {selected.display_name} mode..."):
            report = project.switcher.set_mode(selected)
    except SdkGuardError as e:
        fail(e.message)

    console.print(f"[green]OK[/green] Mode set to {selected.display_name}")
    TerminalRenderer(console).render(report, RenderContext())
    exit_for_report(report, get_config().validation.fail_on_warning)
