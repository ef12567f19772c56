"""Utility functions for sdk-guard."""

from sdk_guard.utils.logging import configure_logging, get_logger, get_logger_with_context
from sdk_guard.utils.errors import (
    SdkGuardError,
    ManifestError,
    RegistryError,
    ValidationError,
    ConfigurationError,
    PlatformManifestError,
    validate_package_id,
    safe_get,
)
from sdk_guard.utils.config import (
    SdkGuardConfig,
    ProjectConfig,
    ValidationConfig,
    OutputConfig,
    load_config,
    save_config,
    get_config,
    set_config,
)

__all__ = [
    # Logging
    "configure_logging",
    "get_logger",
    "get_logger_with_context",
    # Errors
    "SdkGuardError",
    "ManifestError",
    "RegistryError",
    "ValidationError",
    "ConfigurationError",
    "PlatformManifestError",
    "validate_package_id",
    "safe_get",
    # Config
    "SdkGuardConfig",
    "ProjectConfig",
    "ValidationConfig",
    "OutputConfig",
    "load_config",
    "save_config",
    "get_config",
    "set_config",
]
