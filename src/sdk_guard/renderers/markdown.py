"""Markdown renderer for sdk-guard output."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel

from sdk_guard.renderers.base import BaseRenderer, OutputFormat, RenderContext

STATUS_ICONS = {
    "valid": "✅",
    "warning": "⚠️",
    "error": "❌",
}


class MarkdownRenderer(BaseRenderer):
    """Renderer for Markdown output, suitable for CI job summaries.

    Example:
        renderer = MarkdownRenderer()
        md_str = renderer.render(report, context)
    """

    @property
    def format(self) -> OutputFormat:
        """The output format this renderer produces."""
        return OutputFormat.MARKDOWN

    def render(self, data: Any, context: RenderContext) -> str:
        """Render data to a Markdown string."""
        if data.__class__.__name__ == "ValidationReport":
            return self._render_validation_report(data, context)
        return self._render_generic(data, context)

    def _render_validation_report(self, report: Any, context: RenderContext) -> str:
        status = "Passed" if report.passed else "Failed"
        lines = [
            "# SDK Build Validation",
            "",
            f"**Mode:** {report.mode.capitalize()}",
            f"**Status:** {status}",
            f"**Errors:** {report.error_count} | **Warnings:** {report.warning_count}",
            "",
            "| Check | Status | Message | Fix |",
            "|-------|--------|---------|-----|",
        ]

        for result in report.results:
            if result.status.value == "valid" and not context.verbose:
                continue
            lines.append(
                f"| {result.category.display_name} "
                f"| {STATUS_ICONS[result.status.value]} "
                f"| {self._escape_md(result.message)} "
                f"| {self._escape_md(result.fix or '')} |"
            )

        lines.append("")
        return "\n".join(lines)

    def _render_generic(self, data: Any, context: RenderContext) -> str:
        """Render generic data to Markdown."""
        if isinstance(data, BaseModel):
            dict_data = data.model_dump(mode="json")
        elif isinstance(data, dict):
            dict_data = data
        else:
            return str(data)

        lines = ["# Report", ""]
        for key, value in dict_data.items():
            lines.append(f"## {key.replace('_', ' ').title()}")
            lines.append("")
            lines.append(f"```\n{value}\n```")
            lines.append("")

        return "\n".join(lines)

    @staticmethod
    def _escape_md(text: str) -> str:
        """Escape characters that break a Markdown table cell."""
        if not text:
            return text
        return text.replace("|", "\\|").replace("\n", "<br>")
