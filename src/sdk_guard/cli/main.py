"""Main CLI entry point for sdk-guard."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from sdk_guard.cli import install, mode, sanitize, validate

app = typer.Typer(
    name="sdk-guard",
    help="Keep a Unity project's SDK dependencies consistent with its build mode.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console()

# Register subcommands
app.command(name="validate")(validate.validate_cmd)
app.command(name="fix-config")(validate.fix_config_cmd)
app.command(name="install")(install.install_cmd)
app.command(name="uninstall")(install.uninstall_cmd)
app.command(name="sync-versions")(install.sync_versions_cmd)
app.add_typer(mode.app, name="mode")
app.command(name="sanitize")(sanitize.sanitize_cmd)


@app.callback()
def main(
    project: Optional[Path] = typer.Option(
        None,
        "--project",
        "-p",
        help="Unity project root (defaults to project.root from config)",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to an sdk-guard config file",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose output"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress non-essential output"),
) -> None:
    """
    sdk-guard: SDK dependency consistency for Unity mobile builds.

    - [bold]validate[/bold]: Run pre-build checks
    - [bold]install[/bold] / [bold]uninstall[/bold]: Apply the mode's SDK set
    - [bold]sync-versions[/bold]: Raise outdated SDK versions
    - [bold]mode[/bold]: Show or switch the SDK mode
    - [bold]sanitize[/bold]: Clean the Android platform manifest
    - [bold]fix-config[/bold]: Sync the runtime config
    """
    from sdk_guard.utils.config import load_config, set_config
    from sdk_guard.utils.errors import ConfigurationError
    from sdk_guard.utils.logging import configure_logging

    level = "DEBUG" if verbose else "WARNING" if quiet else "INFO"
    configure_logging(level=level)

    try:
        loaded = load_config(config)
    except (FileNotFoundError, ConfigurationError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    if loaded.output.structured_logs:
        configure_logging(level=level, structured=True)

    if project is not None:
        loaded = loaded.model_copy(
            update={"project": loaded.project.model_copy(update={"root": str(project)})}
        )
    if verbose:
        loaded = loaded.model_copy(
            update={"output": loaded.output.model_copy(update={"verbose": True})}
        )

    set_config(loaded)


@app.command()
def version() -> None:
    """Show the sdk-guard version."""
    from sdk_guard import __version__

    console.print(f"sdk-guard version {__version__}")


if __name__ == "__main__":
    app()
