"""Core domain logic for sdk-guard.

This module provides the main library API for keeping a Unity project's SDK
dependencies consistent with its selected mode.
"""

from sdk_guard.core.version import VersionOrder, compare, compare_versions, extract_tag, is_at_least
from sdk_guard.core.registry import SdkRegistry, get_default_registry
from sdk_guard.core.manifest import (
    AddDependenciesStep,
    AddRegistryStep,
    ManifestMutator,
    ManifestStep,
    RemoveDependenciesStep,
    RemoveScopeStep,
    SetDependenciesStep,
)
from sdk_guard.core.probe import AssemblyDirectoryProbe, CapabilityProbe, NullProbe, StaticProbe
from sdk_guard.core.runtime_config import RuntimeConfigStore
from sdk_guard.core.installer import SdkInstaller
from sdk_guard.core.sanitizer import OrphanedEntry, PlatformManifestSanitizer
from sdk_guard.core.validator import BuildValidator
from sdk_guard.core.mode import FileModeStore, MemoryModeStore, ModeStore, ModeSwitcher
from sdk_guard.core.project import GuardProject

__all__ = [
    # Versions
    "VersionOrder",
    "compare",
    "compare_versions",
    "extract_tag",
    "is_at_least",
    # Registry
    "SdkRegistry",
    "get_default_registry",
    # Manifest
    "ManifestMutator",
    "ManifestStep",
    "AddRegistryStep",
    "RemoveScopeStep",
    "AddDependenciesStep",
    "SetDependenciesStep",
    "RemoveDependenciesStep",
    # Detection
    "CapabilityProbe",
    "NullProbe",
    "StaticProbe",
    "AssemblyDirectoryProbe",
    # Components
    "RuntimeConfigStore",
    "SdkInstaller",
    "OrphanedEntry",
    "PlatformManifestSanitizer",
    "BuildValidator",
    "ModeStore",
    "MemoryModeStore",
    "FileModeStore",
    "ModeSwitcher",
    "GuardProject",
]
