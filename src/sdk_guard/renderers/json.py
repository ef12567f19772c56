"""JSON renderer for sdk-guard output."""

from __future__ import annotations

import json
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel

from sdk_guard.models.validation import ValidationReport
from sdk_guard.renderers.base import BaseRenderer, OutputFormat, RenderContext


class JSONRenderer(BaseRenderer):
    """Renderer for JSON output format.

    Validation reports gain a ``summary`` block with the counts a CI gate
    usually wants without re-counting results.

    Example:
        renderer = JSONRenderer()
        json_str = renderer.render(report, context)
    """

    @property
    def format(self) -> OutputFormat:
        """The output format this renderer produces."""
        return OutputFormat.JSON

    def render(self, data: Any, context: RenderContext) -> str:
        """Render data to a JSON string.

        Args:
            data: The data to render (typically a Pydantic model)
            context: Rendering context with options

        Returns:
            JSON string
        """
        if isinstance(data, BaseModel):
            dict_data = data.model_dump(mode="json")
        elif isinstance(data, list):
            dict_data = [
                item.model_dump(mode="json") if isinstance(item, BaseModel) else item for item in data
            ]
        else:
            dict_data = data

        if isinstance(data, ValidationReport):
            dict_data["summary"] = {
                "passed": data.passed,
                "errors": data.error_count,
                "warnings": data.warning_count,
            }

        return json.dumps(
            dict_data,
            indent=context.indent if context.indent else None,
            default=self._json_serializer,
            ensure_ascii=False,
        )

    @staticmethod
    def _json_serializer(obj: Any) -> Any:
        """Custom JSON serializer for non-standard types."""
        if isinstance(obj, Enum):
            return obj.value
        if isinstance(obj, Path):
            return str(obj)
        if isinstance(obj, set):
            return sorted(obj)
        raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")
