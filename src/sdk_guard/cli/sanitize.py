"""CLI command for cleaning the Android platform manifest."""

import typer

from sdk_guard.cli.utils import console, fail, load_project
from sdk_guard.utils.errors import SdkGuardError


def sanitize_cmd(
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        "-n",
        help="Report stale entries without modifying the file",
    ),
) -> None:
    """
    Remove platform manifest entries left behind by uninstalled SDKs.

    Duplicate activity declarations are collapsed to one, preferring the
    exported declaration. A timestamped backup is written first.
    """
    try:
        project = load_project()
        sanitizer = project.sanitizer

        if not sanitizer.exists():
            console.print(f"[dim]No platform manifest at {sanitizer.path}[/dim]")
            return

        orphaned = sanitizer.detect_orphaned_entries()
        duplicates = sanitizer.detect_duplicate_activities()
    except SdkGuardError as e:
        fail(e.message)

    if not orphaned and not duplicates:
        console.print("[green]OK[/green] Platform manifest is clean")
        return

    for entry in orphaned:
        sdk = project.registry[entry.sdk_id]
        console.print(f"  [red]![/red] {sdk.name}: {', '.join(entry.patterns)}")
    for name in duplicates:
        console.print(f"  [yellow]![/yellow] Duplicate activity: {name}")

    if dry_run:
        return

    if sanitizer.sanitize():
        console.print("[green]OK[/green] Platform manifest sanitized (backup written)")
    else:
        fail("Could not sanitize the platform manifest (see log for details)")
