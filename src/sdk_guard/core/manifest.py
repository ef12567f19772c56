"""Read-modify-write access to the package manager manifest.

Every change to ``Packages/manifest.json`` goes through
:meth:`ManifestMutator.modify`: the file is loaded once, a transformation is
applied to the in-memory dependency map and scoped registry list, and the
document is written back only when the transformation reports a change.
Derived operations (add a registry, add or remove dependencies, drop a
scope) are expressed as :class:`ManifestStep` objects so several of them can
share one load/write cycle.
"""

from __future__ import annotations

import json
from collections.abc import Callable, Iterable, Mapping, Sequence
from pathlib import Path
from typing import Any

from sdk_guard.models.common import GuardError
from sdk_guard.models.manifest import (
    ManifestLoadResult,
    MutationOutcome,
    PackageManifest,
    ScopedRegistry,
)
from sdk_guard.utils.errors import ManifestError
from sdk_guard.utils.logging import get_logger, get_logger_with_context

logger = get_logger("manifest")

Dependencies = dict[str, Any]
Registries = list[Any]
Transformation = Callable[[Dependencies, Registries], bool]
ResolveHook = Callable[[Path], None]


class ManifestStep:
    """A pure transformation of the dependency map and registry list.

    Subclasses set ``kind`` and implement ``__call__``, returning True when
    they changed anything.
    """

    kind = "step"

    def __call__(self, dependencies: Dependencies, registries: Registries) -> bool:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.describe()}>"

    def describe(self) -> str:
        return self.kind


def _find_registry(registries: Registries, url: str) -> dict[str, Any] | None:
    for entry in registries:
        if isinstance(entry, dict) and str(entry.get("url", "")) == url:
            return entry
    return None


class AddRegistryStep(ManifestStep):
    """Add a scoped registry, or union missing scopes into an existing one."""

    kind = "add_registry"

    def __init__(self, name: str, url: str, scopes: Sequence[str]) -> None:
        self.name = name
        self.url = url
        self.scopes = list(dict.fromkeys(scopes))

    @classmethod
    def for_registry(cls, registry: ScopedRegistry) -> "AddRegistryStep":
        return cls(registry.name, registry.url, registry.scopes)

    def describe(self) -> str:
        return f"{self.url} {self.scopes}"

    def __call__(self, dependencies: Dependencies, registries: Registries) -> bool:
        entry = _find_registry(registries, self.url)

        if entry is None:
            registries.append({"name": self.name, "url": self.url, "scopes": list(self.scopes)})
            logger.info(f"Added {self.name} registry to manifest")
            return True

        scopes = entry.get("scopes")
        if not isinstance(scopes, list):
            scopes = []
            entry["scopes"] = scopes

        missing = [scope for scope in self.scopes if scope not in scopes]
        if not missing:
            return False

        scopes.extend(missing)
        logger.info(f"Updated {entry.get('name', self.url)} registry scopes: +{', '.join(missing)}")
        return True


class RemoveScopeStep(ManifestStep):
    """Remove one scope from the registry with the given URL."""

    kind = "remove_scope"

    def __init__(self, url: str, scope: str) -> None:
        self.url = url
        self.scope = scope

    def describe(self) -> str:
        return f"{self.scope} from {self.url}"

    def __call__(self, dependencies: Dependencies, registries: Registries) -> bool:
        entry = _find_registry(registries, self.url)
        if entry is None:
            return False

        scopes = entry.get("scopes")
        if not isinstance(scopes, list) or self.scope not in scopes:
            return False

        while self.scope in scopes:
            scopes.remove(self.scope)
        logger.info(f"Removed scope '{self.scope}' from registry '{self.url}'")
        return True


class AddDependenciesStep(ManifestStep):
    """Add dependencies whose keys are absent. Existing entries are kept."""

    kind = "add_dependencies"

    def __init__(self, packages: Mapping[str, str]) -> None:
        self.packages = dict(packages)

    def describe(self) -> str:
        return ", ".join(self.packages)

    def __call__(self, dependencies: Dependencies, registries: Registries) -> bool:
        modified = False
        for package_id, value in self.packages.items():
            if package_id not in dependencies:
                dependencies[package_id] = value
                modified = True
                logger.info(f"Added {package_id} dependency")
        return modified


class SetDependenciesStep(ManifestStep):
    """Overwrite dependency values for keys that are already present."""

    kind = "set_dependencies"

    def __init__(self, packages: Mapping[str, str]) -> None:
        self.packages = dict(packages)

    def describe(self) -> str:
        return ", ".join(f"{k}={v}" for k, v in self.packages.items())

    def __call__(self, dependencies: Dependencies, registries: Registries) -> bool:
        modified = False
        for package_id, value in self.packages.items():
            if package_id in dependencies and dependencies[package_id] != value:
                logger.info(f"Updating {package_id}: {dependencies[package_id]} -> {value}")
                dependencies[package_id] = value
                modified = True
        return modified


class RemoveDependenciesStep(ManifestStep):
    """Delete dependency keys. Absent keys are ignored."""

    kind = "remove_dependencies"

    def __init__(self, package_ids: Iterable[str]) -> None:
        self.package_ids = list(package_ids)

    def describe(self) -> str:
        return ", ".join(self.package_ids)

    def __call__(self, dependencies: Dependencies, registries: Registries) -> bool:
        modified = False
        for package_id in self.package_ids:
            if package_id in dependencies:
                del dependencies[package_id]
                modified = True
                logger.info(f"Removed {package_id} dependency")
        return modified


class ManifestMutator:
    """Single write path for the package manager manifest.

    Example:
        mutator = ManifestMutator(Path("Packages/manifest.json"))

        outcome = mutator.add_dependencies({"com.adjust.sdk": "5.4.1"})
        if outcome.failed:
            print("manifest could not be updated")
    """

    def __init__(self, path: Path | str, on_resolve: ResolveHook | None = None) -> None:
        """Initialize the mutator.

        Args:
            path: Path to manifest.json
            on_resolve: Called after a successful write so the package
                manager can re-resolve. Failures are logged, never raised.
        """
        self.path = Path(path)
        self._on_resolve = on_resolve
        self._log = get_logger_with_context("manifest", path=self.path)

    def load(self) -> ManifestLoadResult:
        """Load and parse the manifest without raising."""
        if not self.path.exists():
            self._log.error("manifest.json not found")
            return ManifestLoadResult.fail(
                [
                    GuardError(
                        code="MANIFEST_NOT_FOUND",
                        message=f"manifest.json not found: {self.path}",
                        details={"path": str(self.path)},
                    )
                ]
            )

        try:
            document = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            self._log.error(f"Failed to parse manifest.json: {e}")
            return ManifestLoadResult.fail(
                [
                    GuardError(
                        code="MANIFEST_PARSE_ERROR",
                        message=f"Failed to parse manifest.json: {e}",
                        details={"path": str(self.path)},
                    )
                ]
            )

        if not isinstance(document, dict):
            self._log.error("manifest.json does not contain a JSON object")
            return ManifestLoadResult.fail(
                [
                    GuardError(
                        code="MANIFEST_PARSE_ERROR",
                        message="manifest.json root is not an object",
                        details={"path": str(self.path)},
                    )
                ]
            )

        return ManifestLoadResult.ok(document)

    def read(self) -> PackageManifest | None:
        """Read a snapshot of the manifest, or None if it cannot be loaded."""
        return self.load().manifest

    def require(self) -> PackageManifest:
        """Read a snapshot of the manifest.

        Raises:
            ManifestError: If the manifest is missing or cannot be parsed
        """
        result = self.load()
        if not result.success or result.document is None:
            message = result.errors[0].message if result.errors else "manifest.json could not be read"
            raise ManifestError(message, path=str(self.path))
        return PackageManifest.from_document(result.document)

    def modify(self, transformation: Transformation) -> MutationOutcome:
        """Apply ``transformation`` in one load/write cycle.

        The transformation receives the mutable dependency map and scoped
        registry list and returns True if it changed them. The file is only
        rewritten in that case.

        Returns:
            CHANGED, UNCHANGED, or FAILED when the manifest could not be
            loaded, transformed or written
        """
        result = self.load()
        if not result.success or result.document is None:
            return MutationOutcome.FAILED

        document = result.document
        had_dependencies = "dependencies" in document
        had_registries = "scopedRegistries" in document

        dependencies = document.setdefault("dependencies", {})
        registries = document.setdefault("scopedRegistries", [])
        if not isinstance(dependencies, dict) or not isinstance(registries, list):
            self._log.error("manifest.json has malformed dependencies or scopedRegistries")
            return MutationOutcome.FAILED

        try:
            changed = transformation(dependencies, registries)
        except Exception as e:
            self._log.error(f"Error modifying manifest.json: {e}")
            return MutationOutcome.FAILED

        if not changed:
            return MutationOutcome.UNCHANGED

        if not had_dependencies and not dependencies:
            del document["dependencies"]
        if not had_registries and not registries:
            del document["scopedRegistries"]

        try:
            self.path.write_text(
                json.dumps(document, indent=2, ensure_ascii=False) + "\n",
                encoding="utf-8",
            )
        except OSError as e:
            self._log.error(f"Failed to write manifest.json: {e}")
            return MutationOutcome.FAILED

        self._notify_resolve()
        return MutationOutcome.CHANGED

    def apply(self, steps: Sequence[ManifestStep]) -> MutationOutcome:
        """Run ``steps`` in order inside a single transaction."""
        if not steps:
            return MutationOutcome.UNCHANGED

        def run(dependencies: Dependencies, registries: Registries) -> bool:
            changed = False
            for step in steps:
                self._log.debug(f"Applying {step!r}")
                changed |= step(dependencies, registries)
            return changed

        return self.modify(run)

    def add_or_update_registry(self, name: str, url: str, scopes: Sequence[str]) -> MutationOutcome:
        """Add a scoped registry or union in any missing scopes."""
        return self.modify(AddRegistryStep(name, url, scopes))

    def add_dependencies(self, packages: Mapping[str, str]) -> MutationOutcome:
        """Add dependencies that are not already present."""
        return self.modify(AddDependenciesStep(packages))

    def remove_dependencies(self, package_ids: Iterable[str]) -> MutationOutcome:
        """Remove dependencies, ignoring absent keys."""
        return self.modify(RemoveDependenciesStep(package_ids))

    def remove_scope_from_registry(self, url: str, scope: str) -> MutationOutcome:
        """Remove one scope from the registry with ``url``."""
        return self.modify(RemoveScopeStep(url, scope))

    def _notify_resolve(self) -> None:
        if self._on_resolve is None:
            return
        try:
            self._on_resolve(self.path)
        except Exception as e:
            self._log.warning(f"Could not trigger package resolution: {e}")
