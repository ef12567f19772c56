"""Build validation data models."""

from enum import Enum

from pydantic import BaseModel, Field


class ValidationStatus(str, Enum):
    """Outcome of a single validation finding."""

    VALID = "valid"
    WARNING = "warning"
    ERROR = "error"


class CheckCategory(str, Enum):
    """Category each validation finding belongs to."""

    REQUIRED_SDKS = "required_sdks"
    VERSION_MISMATCHES = "version_mismatches"
    MODE_CONSISTENCY = "mode_consistency"
    SCOPED_REGISTRIES = "scoped_registries"
    FIREBASE_COHERENCE = "firebase_coherence"
    CONFIG_SYNC = "config_sync"
    PLATFORM_MANIFEST = "platform_manifest"
    MAX_SETTINGS = "max_settings"
    ADJUST_SETTINGS = "adjust_settings"

    @property
    def display_name(self) -> str:
        return CHECK_TITLES[self]


CHECK_TITLES: dict[CheckCategory, str] = {
    CheckCategory.REQUIRED_SDKS: "Required SDKs",
    CheckCategory.VERSION_MISMATCHES: "SDK Versions",
    CheckCategory.MODE_CONSISTENCY: "Mode Consistency",
    CheckCategory.SCOPED_REGISTRIES: "Scoped Registries",
    CheckCategory.FIREBASE_COHERENCE: "Firebase Coherence",
    CheckCategory.CONFIG_SYNC: "Config Sync",
    CheckCategory.PLATFORM_MANIFEST: "Android Manifest",
    CheckCategory.MAX_SETTINGS: "AppLovin MAX Settings",
    CheckCategory.ADJUST_SETTINGS: "Adjust Settings",
}


class ValidationResult(BaseModel):
    """A single validation finding."""

    model_config = {"frozen": True}

    status: ValidationStatus = Field(description="Finding status")
    message: str = Field(description="Human-readable message")
    fix: str | None = Field(default=None, description="Remediation hint")
    category: CheckCategory = Field(description="Check category")

    @classmethod
    def valid(cls, category: CheckCategory, message: str) -> "ValidationResult":
        return cls(status=ValidationStatus.VALID, message=message, category=category)

    @classmethod
    def warning(
        cls, category: CheckCategory, message: str, fix: str | None = None
    ) -> "ValidationResult":
        return cls(status=ValidationStatus.WARNING, message=message, fix=fix, category=category)

    @classmethod
    def error(
        cls, category: CheckCategory, message: str, fix: str | None = None
    ) -> "ValidationResult":
        return cls(status=ValidationStatus.ERROR, message=message, fix=fix, category=category)


class ValidationReport(BaseModel):
    """Ordered, flat list of findings from one validation run."""

    model_config = {"frozen": True}

    mode: str = Field(default="unset", description="Mode the project was validated against")
    results: list[ValidationResult] = Field(
        default_factory=list,
        description="Findings in check order",
    )

    @property
    def errors(self) -> list[ValidationResult]:
        return [r for r in self.results if r.status == ValidationStatus.ERROR]

    @property
    def warnings(self) -> list[ValidationResult]:
        return [r for r in self.results if r.status == ValidationStatus.WARNING]

    @property
    def error_count(self) -> int:
        """Count error findings."""
        return len(self.errors)

    @property
    def warning_count(self) -> int:
        """Count warning findings."""
        return len(self.warnings)

    @property
    def passed(self) -> bool:
        """Check if the report contains no errors."""
        return self.error_count == 0

    def by_category(self, category: CheckCategory) -> list[ValidationResult]:
        """Get the findings for one category."""
        return [r for r in self.results if r.category == category]

    @property
    def categories(self) -> list[CheckCategory]:
        """Categories present in the report, in first-seen order."""
        seen: list[CheckCategory] = []
        for result in self.results:
            if result.category not in seen:
                seen.append(result.category)
        return seen
