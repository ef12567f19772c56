"""CLI commands for build validation and config repair."""

from pathlib import Path
from typing import Optional

import typer

from sdk_guard.cli.utils import console, exit_for_report, fail, load_project
from sdk_guard.utils.errors import SdkGuardError


def validate_cmd(
    format: Optional[str] = typer.Option(
        None,
        "--format",
        "-f",
        help="Output format (terminal, json, markdown)",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output file path",
    ),
    fix: bool = typer.Option(
        False,
        "--fix",
        help="Apply safe automatic fixes before validating",
    ),
    show_all: bool = typer.Option(
        False,
        "--all",
        "-a",
        help="Include passing checks in the output",
    ),
) -> None:
    """
    Validate the project's SDK setup before a build.

    Exits with status 1 when any check reports an error, or a warning
    when validation.fail_on_warning is set.

    Example:
        sdk-guard validate --format json --output report.json
    """
    from sdk_guard.renderers import OutputFormat, RenderContext, get_renderer
    from sdk_guard.renderers.terminal import TerminalRenderer
    from sdk_guard.utils.config import get_config

    config = get_config()
    try:
        output_format = OutputFormat(format or config.output.default_format)
    except ValueError:
        fail(f"Unsupported format: {format}")

    try:
        project = load_project()

        if fix or config.validation.auto_fix:
            for applied in project.validator.run_auto_fixes():
                console.print(f"[green]Fixed:[/green] {applied}")

        with console.status("Running build checks..."):
            report = project.validator.run_all_checks()
    except SdkGuardError as e:
        fail(e.message)

    context = RenderContext(
        format=output_format,
        output_path=output,
        verbose=show_all or config.output.verbose,
        color=config.output.color,
    )

    if output_format is OutputFormat.TERMINAL:
        renderer = TerminalRenderer(console)
    else:
        renderer = get_renderer(output_format)

    if output:
        renderer.render_to_file(report, context)
        console.print(f"Report written to {output}")
    elif output_format is OutputFormat.TERMINAL:
        renderer.render(report, context)
    else:
        typer.echo(renderer.render(report, context))

    exit_for_report(report, config.validation.fail_on_warning)


def fix_config_cmd() -> None:
    """
    Sync the runtime config with installed SDKs and the selected mode.

    Creates the runtime config when it does not exist yet.
    """
    from sdk_guard.models.runtime import RuntimeConfig
    from sdk_guard.models.sdk import Mode

    try:
        project = load_project()
        store = project.runtime_config_store

        if not store.exists():
            store.save(RuntimeConfig(is_prototype_mode=project.mode is not Mode.FULL))
            console.print(f"[green]OK[/green] Created runtime config at {store.path}")

        if project.validator.fix_config_sync():
            console.print("[green]OK[/green] Runtime config updated")
        else:
            console.print("[dim]Runtime config already in sync[/dim]")
    except SdkGuardError as e:
        fail(e.message)
