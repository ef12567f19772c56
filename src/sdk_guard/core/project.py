"""GuardProject: one Unity project and the collaborators that act on it."""

from __future__ import annotations

from pathlib import Path

from sdk_guard.core.installer import SdkInstaller
from sdk_guard.core.manifest import ManifestMutator, ResolveHook
from sdk_guard.core.mode import FileModeStore, ModeStore, ModeSwitcher
from sdk_guard.core.probe import AssemblyDirectoryProbe, CapabilityProbe
from sdk_guard.core.registry import SdkRegistry, get_default_registry
from sdk_guard.core.runtime_config import RuntimeConfigStore
from sdk_guard.core.sanitizer import PlatformManifestSanitizer
from sdk_guard.core.validator import BuildValidator
from sdk_guard.models.sdk import Mode
from sdk_guard.utils.config import ProjectConfig, SdkGuardConfig


class GuardProject:
    """A Unity project wired to its manifest, mode store and validators.

    Example:
        project = GuardProject.from_path("path/to/UnityProject")

        print(project.mode.display_name)
        report = project.validator.run_all_checks()

        project.switcher.set_mode(Mode.FULL)
    """

    def __init__(
        self,
        mutator: ManifestMutator,
        mode_store: ModeStore,
        runtime_config_store: RuntimeConfigStore,
        platform_manifest: Path,
        registry: SdkRegistry | None = None,
        probe: CapabilityProbe | None = None,
    ) -> None:
        """Initialize the project.

        Args:
            mutator: Write path for the package manifest
            mode_store: Where the selected mode is persisted
            runtime_config_store: Runtime feature-flag configuration
            platform_manifest: Path to the Android platform manifest
            registry: SDK registry (defaults to the built-in catalog)
            probe: Detection probe for compiled SDK code
        """
        self.registry = registry or get_default_registry()
        self.mutator = mutator
        self.mode_store = mode_store
        self.runtime_config_store = runtime_config_store
        self.probe = probe

        self.installer = SdkInstaller(mutator, self.registry)
        self.sanitizer = PlatformManifestSanitizer(platform_manifest, self.registry, mutator, probe)
        self.validator = BuildValidator(
            mutator,
            self.registry,
            mode_store,
            runtime_config_store,
            self.sanitizer,
            probe,
        )
        self.switcher = ModeSwitcher(mode_store, self.installer, self.validator, self.sanitizer)

    @classmethod
    def from_config(
        cls,
        config: SdkGuardConfig,
        on_resolve: ResolveHook | None = None,
    ) -> "GuardProject":
        """Build a project from the paths in ``config.project``."""
        paths: ProjectConfig = config.project
        return cls(
            mutator=ManifestMutator(paths.resolve(paths.manifest), on_resolve=on_resolve),
            mode_store=FileModeStore(paths.resolve(paths.state_file)),
            runtime_config_store=RuntimeConfigStore(paths.resolve(paths.runtime_config)),
            platform_manifest=paths.resolve(paths.platform_manifest),
            probe=AssemblyDirectoryProbe(paths.resolve(paths.assemblies_dir)),
        )

    @classmethod
    def from_path(cls, root: Path | str) -> "GuardProject":
        """Build a project rooted at ``root`` with default relative paths."""
        return cls.from_config(SdkGuardConfig(project=ProjectConfig(root=str(root))))

    @property
    def mode(self) -> Mode:
        """Currently selected mode."""
        return self.mode_store.get()
