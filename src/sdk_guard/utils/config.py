"""Configuration file support for sdk-guard."""

from __future__ import annotations

import os
from pathlib import Path

import yaml
from pydantic import BaseModel, Field

from sdk_guard.utils.errors import ConfigurationError


class ProjectConfig(BaseModel):
    """Locations of the files sdk-guard reads and writes.

    Relative paths are resolved against ``root``.
    """

    root: str = Field(default=".", description="Unity project root directory")
    manifest: str = Field(
        default="Packages/manifest.json",
        description="Package manager manifest",
    )
    platform_manifest: str = Field(
        default="Assets/Plugins/Android/AndroidManifest.xml",
        description="Android platform manifest",
    )
    runtime_config: str = Field(
        default="Assets/Resources/sdk-guard.yaml",
        description="Runtime configuration with SDK feature flags",
    )
    state_file: str = Field(
        default=".sdk-guard/state.yaml",
        description="Persisted mode selection",
    )
    assemblies_dir: str = Field(
        default="Library/ScriptAssemblies",
        description="Compiled script assemblies used for SDK detection",
    )

    def resolve(self, relative: str) -> Path:
        """Resolve a configured path against the project root."""
        path = Path(relative)
        if path.is_absolute():
            return path
        return Path(self.root) / path


class ValidationConfig(BaseModel):
    """Validation configuration."""

    fail_on_warning: bool = Field(default=False, description="Treat warnings as build-breaking")
    auto_fix: bool = Field(default=False, description="Run auto-fixes before validating")


class OutputConfig(BaseModel):
    """Output configuration."""

    default_format: str = Field(default="terminal", description="Default output format")
    color: bool = Field(default=True, description="Enable color output")
    verbose: bool = Field(default=False, description="Verbose output")
    structured_logs: bool = Field(
        default=False, description="Log with timestamps and logger names"
    )


class SdkGuardConfig(BaseModel):
    """Main configuration for sdk-guard."""

    project: ProjectConfig = Field(default_factory=ProjectConfig)
    validation: ValidationConfig = Field(default_factory=ValidationConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)


def get_config_paths() -> list[Path]:
    """Get possible configuration file paths.

    Returns:
        List of paths to check for configuration files
    """
    paths = []

    paths.append(Path.cwd() / ".sdk-guard.yaml")
    paths.append(Path.cwd() / ".sdk-guard.yml")
    paths.append(Path.cwd() / "sdk-guard.yaml")

    home = Path.home()
    paths.append(home / ".sdk-guard.yaml")
    paths.append(home / ".config" / "sdk-guard" / "config.yaml")

    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        paths.append(Path(xdg_config) / "sdk-guard" / "config.yaml")

    return paths


def load_config(config_path: Path | str | None = None) -> SdkGuardConfig:
    """Load configuration from file.

    Args:
        config_path: Explicit path to config file. If None, searches default locations.

    Returns:
        Loaded configuration
    """
    if config_path is not None:
        path = Path(config_path)
        if path.exists():
            return _load_config_file(path)
        raise FileNotFoundError(f"Config file not found: {config_path}")

    for path in get_config_paths():
        if path.exists():
            return _load_config_file(path)

    return SdkGuardConfig()


def _load_config_file(path: Path) -> SdkGuardConfig:
    """Load configuration from a specific file."""
    try:
        data = yaml.safe_load(path.read_text())
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in config file: {e}") from e

    if data is None:
        return SdkGuardConfig()

    try:
        return SdkGuardConfig.model_validate(data)
    except Exception as e:
        raise ConfigurationError(f"Failed to load config file: {e}") from e


def save_config(config: SdkGuardConfig, config_path: Path | str | None = None) -> Path:
    """Save configuration to file.

    Args:
        config: Configuration to save
        config_path: Path to save to. Defaults to ./.sdk-guard.yaml

    Returns:
        Path where config was saved
    """
    if config_path is None:
        config_path = Path.cwd() / ".sdk-guard.yaml"
    else:
        config_path = Path(config_path)

    config_path.parent.mkdir(parents=True, exist_ok=True)

    data = config.model_dump(mode="json", exclude_defaults=True)
    config_path.write_text(yaml.dump(data, default_flow_style=False, sort_keys=False))

    return config_path


def get_default_config() -> SdkGuardConfig:
    """Get the default configuration."""
    return SdkGuardConfig()


_config: SdkGuardConfig | None = None


def get_config() -> SdkGuardConfig:
    """Get the global configuration instance.

    Loads from file on first call.
    """
    global _config
    if _config is None:
        _config = load_config()
    return _config


def set_config(config: SdkGuardConfig | None) -> None:
    """Set (or reset with None) the global configuration instance."""
    global _config
    _config = config
