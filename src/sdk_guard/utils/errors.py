"""Error handling utilities for sdk-guard."""

from __future__ import annotations

from typing import Any

from sdk_guard.models.common import GuardError


class SdkGuardError(Exception):
    """Base exception for sdk-guard."""

    def __init__(self, message: str, code: str = "UNKNOWN_ERROR", details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def to_guard_error(self) -> GuardError:
        """Convert to GuardError model."""
        return GuardError(code=self.code, message=self.message, details=self.details)


class ManifestError(SdkGuardError):
    """The package manifest could not be read, parsed or written."""

    def __init__(self, message: str, path: str | None = None):
        details = {"path": path} if path else {}
        super().__init__(message, code="MANIFEST_ERROR", details=details)


class RegistryError(SdkGuardError):
    """The SDK registry is misconfigured."""

    def __init__(self, message: str, sdk_id: str | None = None):
        details = {"sdk_id": sdk_id} if sdk_id else {}
        super().__init__(message, code="REGISTRY_ERROR", details=details)


class ValidationError(SdkGuardError):
    """Validation failed."""

    def __init__(self, message: str, field: str | None = None):
        details = {"field": field} if field else {}
        super().__init__(message, code="VALIDATION_ERROR", details=details)


class ConfigurationError(SdkGuardError):
    """Configuration error."""

    def __init__(self, message: str, config_key: str | None = None):
        details = {"config_key": config_key} if config_key else {}
        super().__init__(message, code="CONFIG_ERROR", details=details)


class PlatformManifestError(SdkGuardError):
    """The platform manifest could not be parsed or rewritten."""

    def __init__(self, message: str, path: str | None = None):
        details = {"path": path} if path else {}
        super().__init__(message, code="PLATFORM_MANIFEST_ERROR", details=details)


def validate_package_id(package_id: str) -> None:
    """Validate a package identifier (reverse-DNS style).

    Args:
        package_id: Package identifier to validate

    Raises:
        ValidationError: If the identifier is invalid
    """
    if not package_id:
        raise ValidationError("Package identifier cannot be empty", field="package_id")

    if package_id != package_id.lower():
        raise ValidationError(
            f"Package identifier must be lowercase: {package_id}",
            field="package_id",
        )

    for char in package_id:
        if not (char.isalnum() or char in ".-_"):
            raise ValidationError(
                f"Package identifier contains invalid character: {char}",
                field="package_id",
            )

    if "." not in package_id:
        raise ValidationError(
            f"Package identifier must contain at least one '.': {package_id}",
            field="package_id",
        )


def safe_get(data: dict[str, Any], *keys: str, default: Any = None) -> Any:
    """Safely get a nested value from a dictionary.

    Args:
        data: Dictionary to get value from
        *keys: Keys to traverse
        default: Default value if key not found

    Returns:
        Value at the nested key path, or default
    """
    current = data
    for key in keys:
        if isinstance(current, dict):
            current = current.get(key)
            if current is None:
                return default
        else:
            return default
    return current
