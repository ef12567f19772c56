"""sdk-guard: SDK dependency consistency for Unity mobile builds.

This package keeps a Unity project's vendor SDK set consistent with the
project's build mode, including:

- **SDK Registry**: Which SDKs exist, where they come from, and when each is required
- **Manifest Mutator**: Single read-modify-write path for Packages/manifest.json
- **Installer**: Adds the SDKs a mode requires and removes the ones it excludes
- **Build Validator**: Pre-build checks producing a report that can gate a pipeline
- **Platform Manifest Sanitizer**: Removes AndroidManifest.xml entries for removed SDKs

Usage:
    # Library API
    from sdk_guard import GuardProject, Mode

    project = GuardProject.from_path("path/to/UnityProject")

    # Switch mode (installs, uninstalls, cleans and validates)
    report = project.switcher.set_mode(Mode.FULL)

    # Validate only
    report = project.validator.run_all_checks()
    for result in report.errors:
        print(result.category.display_name, result.message)

CLI:
    sdk-guard validate [--format json] [--fix]
    sdk-guard mode set <prototype|full>
    sdk-guard install / uninstall / sync-versions
    sdk-guard sanitize [--dry-run]
"""

__version__ = "0.1.0"

# Core classes
from sdk_guard.core.installer import SdkInstaller
from sdk_guard.core.manifest import ManifestMutator
from sdk_guard.core.mode import FileModeStore, MemoryModeStore, ModeSwitcher
from sdk_guard.core.project import GuardProject
from sdk_guard.core.registry import SdkRegistry, get_default_registry
from sdk_guard.core.sanitizer import PlatformManifestSanitizer
from sdk_guard.core.validator import BuildValidator
from sdk_guard.core.version import compare_versions

# Models (commonly used)
from sdk_guard.models.manifest import MutationOutcome, PackageManifest, ScopedRegistry
from sdk_guard.models.sdk import Mode, RequirementLevel, SdkDescriptor, SdkId
from sdk_guard.models.validation import (
    CheckCategory,
    ValidationReport,
    ValidationResult,
    ValidationStatus,
)

# Renderers
from sdk_guard.renderers.base import Renderer, RenderContext, OutputFormat

__all__ = [
    # Version
    "__version__",
    # Core
    "GuardProject",
    "SdkRegistry",
    "get_default_registry",
    "ManifestMutator",
    "SdkInstaller",
    "BuildValidator",
    "PlatformManifestSanitizer",
    "ModeSwitcher",
    "MemoryModeStore",
    "FileModeStore",
    "compare_versions",
    # Models - Manifest
    "MutationOutcome",
    "PackageManifest",
    "ScopedRegistry",
    # Models - SDK
    "Mode",
    "RequirementLevel",
    "SdkDescriptor",
    "SdkId",
    # Models - Validation
    "CheckCategory",
    "ValidationReport",
    "ValidationResult",
    "ValidationStatus",
    # Renderers
    "Renderer",
    "RenderContext",
    "OutputFormat",
]
