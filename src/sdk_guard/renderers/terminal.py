"""Terminal renderer for sdk-guard output."""

from __future__ import annotations

import io
import json
from typing import Any

from pydantic import BaseModel
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from sdk_guard.renderers.base import BaseRenderer, OutputFormat, RenderContext

STATUS_STYLES = {
    "valid": ("OK", "green"),
    "warning": ("WARN", "yellow"),
    "error": ("ERROR", "bold red"),
}


class TerminalRenderer(BaseRenderer):
    """Renderer for rich terminal output.

    Example:
        renderer = TerminalRenderer()
        renderer.render(report, context)
    """

    def __init__(self, console: Console | None = None) -> None:
        """Initialize the terminal renderer.

        Args:
            console: Rich console to use. Creates a new one if None.
        """
        self._console = console or Console()

    @property
    def format(self) -> OutputFormat:
        """The output format this renderer produces."""
        return OutputFormat.TERMINAL

    def render(self, data: Any, context: RenderContext) -> str:
        """Render data to the terminal.

        Prints to the console and returns an empty string. Use
        ``Console.capture()`` to collect the output.
        """
        if data.__class__.__name__ == "ValidationReport":
            self._render_validation_report(data, context)
        else:
            self._render_generic(data, context)
        return ""

    def render_to_file(self, data: Any, context: RenderContext) -> None:
        """Render data to a file, keeping ANSI styles."""
        if context.output_path is None:
            raise ValueError("output_path must be set in context for file rendering")

        file_console = Console(record=True, file=io.StringIO(), force_terminal=True, width=120)
        original_console = self._console
        self._console = file_console

        try:
            self.render(data, context)
            output = file_console.export_text(styles=context.color)
            context.output_path.write_text(output, encoding="utf-8")
        finally:
            self._console = original_console

    def _render_validation_report(self, report: Any, context: RenderContext) -> None:
        """Render a validation report."""
        if report.passed and report.warning_count == 0:
            status = "[bold green]PASSED[/bold green]"
        elif report.passed:
            status = "[bold yellow]PASSED WITH WARNINGS[/bold yellow]"
        else:
            status = "[bold red]FAILED[/bold red]"

        self._console.print()
        self._console.print(
            Panel(
                f"[bold]Mode:[/bold] {report.mode.capitalize()}\n"
                f"[bold]Status:[/bold] {status}",
                title="SDK Build Validation",
            )
        )

        table = Table(show_lines=True)
        table.add_column("Check", style="bold")
        table.add_column("Status")
        table.add_column("Message")

        for result in report.results:
            label, style = STATUS_STYLES[result.status.value]
            if result.status.value == "valid" and not context.verbose:
                continue
            message = Text(result.message)
            if result.fix:
                message.append(f"\nFix: {result.fix}", style="dim")
            table.add_row(result.category.display_name, Text(label, style=style), message)

        if table.row_count:
            self._console.print()
            self._console.print(table)

        self._console.print()
        self._console.print(
            f"[bold]{report.error_count}[/bold] error(s), "
            f"[bold]{report.warning_count}[/bold] warning(s) "
            f"across {len(report.categories)} check(s)"
        )

    def _render_generic(self, data: Any, context: RenderContext) -> None:
        """Render generic data."""
        if isinstance(data, BaseModel):
            dict_data = data.model_dump(mode="json")
        elif isinstance(data, dict):
            dict_data = data
        else:
            self._console.print(str(data))
            return

        self._console.print(json.dumps(dict_data, indent=2, default=str))
