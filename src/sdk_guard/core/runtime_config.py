"""Load and save the runtime configuration file."""

from __future__ import annotations

from pathlib import Path

import yaml

from sdk_guard.models.runtime import RuntimeConfig
from sdk_guard.utils.errors import ConfigurationError
from sdk_guard.utils.logging import get_logger

logger = get_logger("runtime_config")


class RuntimeConfigStore:
    """YAML-backed store for :class:`RuntimeConfig`."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.exists()

    def load(self) -> RuntimeConfig | None:
        """Load the runtime configuration.

        Returns:
            The configuration, or None if the file does not exist

        Raises:
            ConfigurationError: If the file is not valid YAML or has bad fields
        """
        if not self.path.exists():
            return None

        try:
            data = yaml.safe_load(self.path.read_text(encoding="utf-8"))
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in runtime config: {e}") from e

        if data is None:
            return RuntimeConfig()

        try:
            return RuntimeConfig.model_validate(data)
        except Exception as e:
            raise ConfigurationError(f"Invalid runtime config {self.path}: {e}") from e

    def save(self, config: RuntimeConfig) -> None:
        """Write the runtime configuration."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        data = config.model_dump(mode="json", exclude_none=True)
        self.path.write_text(
            yaml.dump(data, default_flow_style=False, sort_keys=False),
            encoding="utf-8",
        )
        logger.debug(f"Saved runtime config to {self.path}")
