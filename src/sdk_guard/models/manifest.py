"""Package manifest data models."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from sdk_guard.models.common import GuardError


class ScopedRegistry(BaseModel):
    """A named package source restricted to a set of package-name prefixes."""

    model_config = {"frozen": True}

    name: str = Field(description="Registry display name")
    url: str = Field(description="Registry base URL")
    scopes: list[str] = Field(default_factory=list, description="Scope prefixes")

    def to_manifest_entry(self) -> dict[str, Any]:
        """Convert to the JSON shape used in the manifest."""
        return {"name": self.name, "url": self.url, "scopes": list(self.scopes)}

    @classmethod
    def from_manifest_entry(cls, entry: dict[str, Any]) -> "ScopedRegistry":
        """Build from a manifest ``scopedRegistries`` entry."""
        scopes = entry.get("scopes") or []
        return cls(
            name=str(entry.get("name", "")),
            url=str(entry.get("url", "")),
            scopes=[str(s) for s in scopes] if isinstance(scopes, list) else [],
        )


class PackageManifest(BaseModel):
    """Read-only snapshot of the package manager manifest."""

    model_config = {"frozen": True}

    dependencies: dict[str, str] = Field(
        default_factory=dict,
        description="Package identifier to version or install URL",
    )
    scoped_registries: list[ScopedRegistry] = Field(
        default_factory=list,
        description="Scoped registries in document order",
    )

    @property
    def all_scopes(self) -> set[str]:
        """Union of every scope declared across all registries."""
        scopes: set[str] = set()
        for registry in self.scoped_registries:
            scopes.update(registry.scopes)
        return scopes

    def has(self, package_id: str) -> bool:
        """Check whether a package is present in the dependency map."""
        return package_id in self.dependencies

    def get_registry(self, url: str) -> ScopedRegistry | None:
        """Get a scoped registry by URL."""
        for registry in self.scoped_registries:
            if registry.url == url:
                return registry
        return None

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> "PackageManifest":
        """Build a snapshot from a parsed manifest document."""
        raw_deps = document.get("dependencies")
        dependencies = (
            {str(k): "" if v is None else str(v) for k, v in raw_deps.items()}
            if isinstance(raw_deps, dict)
            else {}
        )

        raw_regs = document.get("scopedRegistries")
        registries = (
            [ScopedRegistry.from_manifest_entry(r) for r in raw_regs if isinstance(r, dict)]
            if isinstance(raw_regs, list)
            else []
        )

        return cls(dependencies=dependencies, scoped_registries=registries)


class MutationOutcome(str, Enum):
    """Outcome of a manifest mutation.

    ``UNCHANGED`` and ``FAILED`` are kept apart so callers can tell a no-op
    from an I/O or parse failure.
    """

    CHANGED = "changed"
    UNCHANGED = "unchanged"
    FAILED = "failed"

    @property
    def changed(self) -> bool:
        return self is MutationOutcome.CHANGED

    @property
    def failed(self) -> bool:
        return self is MutationOutcome.FAILED

    @classmethod
    def combine(cls, *outcomes: "MutationOutcome") -> "MutationOutcome":
        """Fold several outcomes: any failure wins, then any change."""
        if any(o is cls.FAILED for o in outcomes):
            return cls.FAILED
        if any(o is cls.CHANGED for o in outcomes):
            return cls.CHANGED
        return cls.UNCHANGED


class ManifestLoadResult(BaseModel):
    """Result of loading the manifest document."""

    model_config = {"frozen": True}

    success: bool = Field(description="Whether the manifest was loaded")
    document: dict[str, Any] | None = Field(default=None, description="Parsed document")
    errors: list[GuardError] = Field(default_factory=list, description="Errors that occurred")

    @property
    def manifest(self) -> PackageManifest | None:
        """Snapshot view of the loaded document."""
        if self.document is None:
            return None
        return PackageManifest.from_document(self.document)

    @classmethod
    def ok(cls, document: dict[str, Any]) -> "ManifestLoadResult":
        """Create a successful result."""
        return cls(success=True, document=document)

    @classmethod
    def fail(cls, errors: list[GuardError]) -> "ManifestLoadResult":
        """Create a failed result."""
        return cls(success=False, errors=errors)
