"""Data models for sdk-guard.

Models are Pydantic BaseModel; records that describe static facts or
findings are frozen.
"""

from sdk_guard.models.common import GuardError
from sdk_guard.models.manifest import (
    ManifestLoadResult,
    MutationOutcome,
    PackageManifest,
    ScopedRegistry,
)
from sdk_guard.models.sdk import (
    Mode,
    RequirementLevel,
    SdkDescriptor,
    SdkId,
)
from sdk_guard.models.validation import (
    CheckCategory,
    ValidationReport,
    ValidationResult,
    ValidationStatus,
)
from sdk_guard.models.runtime import RuntimeConfig

__all__ = [
    # Common
    "GuardError",
    # Manifest
    "ManifestLoadResult",
    "MutationOutcome",
    "PackageManifest",
    "ScopedRegistry",
    # SDK
    "Mode",
    "RequirementLevel",
    "SdkDescriptor",
    "SdkId",
    # Validation
    "CheckCategory",
    "ValidationReport",
    "ValidationResult",
    "ValidationStatus",
    # Runtime
    "RuntimeConfig",
]
