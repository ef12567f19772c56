"""SDK metadata models."""

from enum import Enum

from pydantic import BaseModel, Field, model_validator

from sdk_guard.models.manifest import ScopedRegistry


class Mode(str, Enum):
    """Project operating mode selecting which SDK set is required."""

    UNSET = "unset"
    PROTOTYPE = "prototype"
    FULL = "full"

    @property
    def is_configured(self) -> bool:
        """Whether a mode has been selected."""
        return self is not Mode.UNSET

    @property
    def display_name(self) -> str:
        return self.value.capitalize()


class SdkId(str, Enum):
    """Stable identity of each supported SDK."""

    GAME_ANALYTICS = "GameAnalytics"
    IOS_SUPPORT = "IosSupport"
    EXTERNAL_DEPENDENCY_MANAGER = "ExternalDependencyManager"
    FACEBOOK = "Facebook"
    APPLOVIN_MAX = "AppLovinMAX"
    ADJUST = "Adjust"
    FIREBASE_APP = "FirebaseApp"
    FIREBASE_ANALYTICS = "FirebaseAnalytics"
    FIREBASE_CRASHLYTICS = "FirebaseCrashlytics"
    FIREBASE_REMOTE_CONFIG = "FirebaseRemoteConfig"


class RequirementLevel(str, Enum):
    """When an SDK must be installed or removed, relative to a mode.

    ``PROTOTYPE_ONLY`` and ``FULL_ONLY`` are removed when the other mode is
    selected. ``FULL_REQUIRED`` is required in Full mode and tolerated in
    Prototype mode; it is never removed automatically. ``OPTIONAL`` is never
    installed or removed.
    """

    CORE = "core"
    PROTOTYPE_ONLY = "prototype_only"
    FULL_ONLY = "full_only"
    FULL_REQUIRED = "full_required"
    OPTIONAL = "optional"

    def is_required_for(self, mode: Mode) -> bool:
        """Check whether an SDK at this level must be present in ``mode``."""
        if not mode.is_configured:
            return False
        if self is RequirementLevel.CORE:
            return True
        if self is RequirementLevel.PROTOTYPE_ONLY:
            return mode is Mode.PROTOTYPE
        if self in (RequirementLevel.FULL_ONLY, RequirementLevel.FULL_REQUIRED):
            return mode is Mode.FULL
        return False

    def should_uninstall_for(self, mode: Mode) -> bool:
        """Check whether an SDK at this level must be removed in ``mode``."""
        if self is RequirementLevel.PROTOTYPE_ONLY:
            return mode is Mode.FULL
        if self is RequirementLevel.FULL_ONLY:
            return mode is Mode.PROTOTYPE
        return False


class SdkDescriptor(BaseModel):
    """Static metadata for one vendor SDK integration."""

    model_config = {"frozen": True}

    id: SdkId = Field(description="Stable SDK identity")
    name: str = Field(description="Display name")
    package_id: str = Field(description="Package manager identifier")
    version: str | None = Field(default=None, description="Required semantic version")
    install_url: str | None = Field(
        default=None,
        description="Install URL, optionally suffixed with '#<tag>'",
    )
    scope: str | None = Field(
        default=None,
        description="Scope this package needs on the shared scoped registry",
    )
    dedicated_registry: ScopedRegistry | None = Field(
        default=None,
        description="Vendor registry the package is distributed through",
    )
    detection: list[str] = Field(
        default_factory=list,
        description="Type/assembly name substrings proving the SDK code is loaded",
    )
    platform_patterns: list[str] = Field(
        default_factory=list,
        description="Text patterns the SDK leaves in the platform manifest",
    )
    requirement: RequirementLevel = Field(description="Requirement level")

    @model_validator(mode="after")
    def _check_source(self) -> "SdkDescriptor":
        if bool(self.version) == bool(self.install_url):
            raise ValueError(
                f"{self.id.value}: exactly one of 'version' or 'install_url' must be set"
            )
        return self

    @property
    def dependency_value(self) -> str:
        """Value written into the manifest's dependency map."""
        return self.version or self.install_url or ""

    @property
    def version_marker(self) -> str:
        """Comparable version: the version, or the install URL's tag, or ''."""
        if self.version:
            return self.version
        if self.install_url and "#" in self.install_url:
            return self.install_url.rsplit("#", 1)[1]
        return ""

    @property
    def expected_value(self) -> str:
        """Enforceable dependency value, empty when no version can be checked."""
        return self.dependency_value if self.version_marker else ""

    def is_required_for(self, mode: Mode) -> bool:
        return self.requirement.is_required_for(mode)

    def should_uninstall_for(self, mode: Mode) -> bool:
        return self.requirement.should_uninstall_for(mode)
