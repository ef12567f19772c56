"""Pre-build validation of the SDK setup.

The validator reads the package manifest once and runs every check against
that snapshot. Checks never raise: a check that fails internally contributes
a single error in its own category and the remaining checks still run, so a
report always covers every category.
"""

from __future__ import annotations

from collections.abc import Callable

from sdk_guard.core.manifest import ManifestMutator
from sdk_guard.core.mode import ModeStore
from sdk_guard.core.probe import CapabilityProbe, NullProbe
from sdk_guard.core.registry import SdkRegistry
from sdk_guard.core.runtime_config import RuntimeConfigStore
from sdk_guard.core.sanitizer import PlatformManifestSanitizer
from sdk_guard.core.version import is_at_least
from sdk_guard.knowledge.sdk_catalog import FIREBASE_BASE, FIREBASE_MODULES
from sdk_guard.models.manifest import PackageManifest
from sdk_guard.models.runtime import RuntimeConfig
from sdk_guard.models.sdk import Mode, RequirementLevel, SdkId
from sdk_guard.models.validation import CheckCategory, ValidationReport, ValidationResult
from sdk_guard.utils.errors import SdkGuardError
from sdk_guard.utils.logging import get_logger, get_logger_with_context

logger = get_logger("validator")

Check = Callable[[PackageManifest, Mode], list[ValidationResult]]


class BuildValidator:
    """Runs the build checks and the config auto-fix.

    Example:
        validator = BuildValidator(mutator, registry, mode_store, config_store, sanitizer)
        report = validator.run_all_checks()
        if not report.passed:
            for result in report.errors:
                print(result.message)
    """

    def __init__(
        self,
        mutator: ManifestMutator,
        registry: SdkRegistry,
        mode_store: ModeStore,
        runtime_config_store: RuntimeConfigStore | None = None,
        sanitizer: PlatformManifestSanitizer | None = None,
        probe: CapabilityProbe | None = None,
    ) -> None:
        self._mutator = mutator
        self._registry = registry
        self._mode_store = mode_store
        self._config_store = runtime_config_store
        self._sanitizer = sanitizer
        self._probe = probe or NullProbe()

    def _current_mode(self) -> Mode:
        try:
            return self._mode_store.get()
        except SdkGuardError as e:
            logger.error(f"Could not read mode, validating as unset: {e.message}")
            return Mode.UNSET

    def run_all_checks(self) -> ValidationReport:
        """Validate the project against the current mode.

        Returns:
            Report with at least one result per category, or a single error
            when the package manifest cannot be read
        """
        mode = self._current_mode()
        log = get_logger_with_context("validator", mode=mode.value)
        log.info("Starting validation")

        loaded = self._mutator.load()
        snapshot = loaded.manifest
        if not loaded.success or snapshot is None:
            detail = loaded.errors[0].message if loaded.errors else "unknown error"
            return ValidationReport(
                mode=mode.value,
                results=[
                    ValidationResult.error(
                        CheckCategory.REQUIRED_SDKS,
                        f"Failed to read manifest.json: {detail}",
                        f"Check {self._mutator.path}",
                    )
                ],
            )

        checks: list[tuple[CheckCategory, Check]] = [
            (CheckCategory.REQUIRED_SDKS, self.check_required_sdks),
            (CheckCategory.VERSION_MISMATCHES, self.check_version_mismatches),
            (CheckCategory.MODE_CONSISTENCY, self.check_mode_consistency),
            (CheckCategory.SCOPED_REGISTRIES, self.check_scoped_registries),
            (CheckCategory.FIREBASE_COHERENCE, self.check_firebase_coherence),
            (CheckCategory.CONFIG_SYNC, self.check_config_sync),
            (CheckCategory.PLATFORM_MANIFEST, self.check_platform_manifest),
            (CheckCategory.MAX_SETTINGS, self.check_max_settings),
            (CheckCategory.ADJUST_SETTINGS, self.check_adjust_settings),
        ]

        results: list[ValidationResult] = []
        for category, check in checks:
            results.extend(self._run_check(category, check, snapshot, mode))

        report = ValidationReport(mode=mode.value, results=results)
        log.info(
            f"Validation complete: {report.error_count} error(s), "
            f"{report.warning_count} warning(s)"
        )
        return report

    def _run_check(
        self,
        category: CheckCategory,
        check: Check,
        manifest: PackageManifest,
        mode: Mode,
    ) -> list[ValidationResult]:
        try:
            results = check(manifest, mode)
        except Exception as e:
            logger.error(f"{category.display_name} check failed: {e}")
            return [ValidationResult.error(category, f"Validation failed: {e}")]
        if not results:
            return [ValidationResult.valid(category, f"{category.display_name} OK")]
        return results

    def check_required_sdks(self, manifest: PackageManifest, mode: Mode) -> list[ValidationResult]:
        """Every SDK required in ``mode`` is installed or detected."""
        category = CheckCategory.REQUIRED_SDKS
        if not mode.is_configured:
            return [ValidationResult.valid(category, "Mode not configured")]

        missing = [
            sdk.name
            for sdk in self._registry.required_for(mode)
            if not manifest.has(sdk.package_id) and not self._probe.is_loaded(sdk.detection)
        ]
        if missing:
            return [
                ValidationResult.error(
                    category,
                    f"Missing required SDKs for {mode.display_name} mode:\n  {', '.join(missing)}",
                    "Run 'sdk-guard install' to add missing SDKs",
                )
            ]
        return [ValidationResult.valid(category, f"{mode.display_name} mode SDKs OK")]

    def check_version_mismatches(
        self, manifest: PackageManifest, mode: Mode
    ) -> list[ValidationResult]:
        """Installed SDKs are not older than the versions the registry pins.

        Newer versions are tolerated. Install URLs without a tag have no
        enforceable version and are skipped.
        """
        category = CheckCategory.VERSION_MISMATCHES
        results: list[ValidationResult] = []

        for sdk in self._registry.installed(manifest.dependencies):
            expected = sdk.expected_value
            found = manifest.dependencies[sdk.package_id]
            if not expected or found == expected:
                continue
            if is_at_least(found, expected):
                continue

            minimum = sdk.version_marker
            found_marker = found.rsplit("#", 1)[1] if "#" in found else found
            results.append(
                ValidationResult.warning(
                    category,
                    f"Outdated version - {sdk.package_id}\n  Minimum: {minimum}\n  Found: {found_marker}",
                    "Run 'sdk-guard sync-versions' to update",
                )
            )

        if not results:
            results.append(ValidationResult.valid(category, "All SDK versions OK"))
        return results

    def check_mode_consistency(self, manifest: PackageManifest, mode: Mode) -> list[ValidationResult]:
        """No SDK belonging to the other mode is installed."""
        category = CheckCategory.MODE_CONSISTENCY
        if not mode.is_configured:
            return [
                ValidationResult.warning(
                    category,
                    "No SDK mode configured. Select Prototype or Full mode.",
                    "Run 'sdk-guard mode set prototype' or 'sdk-guard mode set full'",
                )
            ]

        results: list[ValidationResult] = []
        for sdk in self._registry.to_uninstall_for(mode):
            if not manifest.has(sdk.package_id):
                continue
            needed_in = "Prototype" if sdk.requirement is RequirementLevel.PROTOTYPE_ONLY else "Full"
            results.append(
                ValidationResult.warning(
                    category,
                    f"{sdk.name} is installed but only needed in {needed_in} mode "
                    f"(current: {mode.display_name})",
                    "Run 'sdk-guard uninstall' to remove it",
                )
            )

        if not results:
            results.append(ValidationResult.valid(category, f"{mode.display_name} mode SDKs OK"))
        return results

    def check_scoped_registries(
        self, manifest: PackageManifest, mode: Mode
    ) -> list[ValidationResult]:
        """Installed SDKs can be fetched, and no scope is claimed twice."""
        category = CheckCategory.SCOPED_REGISTRIES
        results: list[ValidationResult] = []
        declared = manifest.all_scopes

        for sdk in self._registry.installed(manifest.dependencies):
            if sdk.dedicated_registry is not None:
                required = sdk.dedicated_registry.scopes
            elif sdk.scope:
                required = [sdk.scope]
            else:
                continue

            for scope in required:
                if scope not in declared:
                    results.append(
                        ValidationResult.error(
                            category,
                            f"Missing scoped registry for {sdk.name}\n  Required scope: {scope}",
                            "Run 'sdk-guard install' to add the registry",
                        )
                    )

        claims: dict[str, list[str]] = {}
        for registry in manifest.scoped_registries:
            for scope in dict.fromkeys(registry.scopes):
                claims.setdefault(scope, []).append(registry.name or registry.url)

        for scope, owners in claims.items():
            if len(owners) > 1:
                results.append(
                    ValidationResult.error(
                        category,
                        f"Scope '{scope}' is claimed by multiple registries: {', '.join(owners)}",
                        "Remove the scope from all but one registry",
                    )
                )

        if not results:
            results.append(ValidationResult.valid(category, "All registries configured"))
        return results

    def check_firebase_coherence(
        self, manifest: PackageManifest, mode: Mode
    ) -> list[ValidationResult]:
        """Firebase modules are only installed together with Firebase App."""
        category = CheckCategory.FIREBASE_COHERENCE
        base = self._registry[FIREBASE_BASE]
        modules = [
            self._registry[sdk_id].name
            for sdk_id in FIREBASE_MODULES
            if manifest.has(self._registry[sdk_id].package_id)
        ]

        if modules and not manifest.has(base.package_id):
            return [
                ValidationResult.error(
                    category,
                    f"Firebase modules installed without {base.name}:\n  {', '.join(modules)}",
                    f"Install {base.package_id} or remove Firebase modules",
                )
            ]
        if modules:
            return [ValidationResult.valid(category, "Firebase modules OK")]
        if mode is Mode.FULL:
            return [
                ValidationResult.warning(
                    category,
                    "Firebase not installed (required in Full mode)",
                    "Run 'sdk-guard install' to add Firebase",
                )
            ]
        return [ValidationResult.valid(category, "Firebase not installed")]

    def check_config_sync(self, manifest: PackageManifest, mode: Mode) -> list[ValidationResult]:
        """Runtime config flags match installed SDKs and the selected mode."""
        category = CheckCategory.CONFIG_SYNC
        if self._config_store is None:
            return [ValidationResult.valid(category, "No runtime config configured")]

        config = self._config_store.load()
        if config is None:
            return [
                ValidationResult.warning(
                    category,
                    f"Runtime config not found at {self._config_store.path}",
                    "Run 'sdk-guard fix-config' to create it",
                )
            ]

        results: list[ValidationResult] = []
        for flag, sdk_id in config.enabled_flags().items():
            sdk = self._registry[sdk_id]
            if not manifest.has(sdk.package_id):
                results.append(
                    ValidationResult.error(
                        category,
                        f"{flag} is enabled but {sdk.name} is not installed",
                        f"Install {sdk.name} or run 'sdk-guard fix-config'",
                    )
                )

        if not config.mirrors(mode):
            results.append(
                ValidationResult.warning(
                    category,
                    f"Config mode mismatch - is_prototype_mode={config.is_prototype_mode}, "
                    f"mode={mode.value}",
                    "Run 'sdk-guard fix-config' to sync mode settings",
                )
            )

        if not results:
            results.append(ValidationResult.valid(category, "Config synced"))
        return results

    def check_platform_manifest(
        self, manifest: PackageManifest, mode: Mode
    ) -> list[ValidationResult]:
        """The platform manifest has no entries for uninstalled SDKs."""
        category = CheckCategory.PLATFORM_MANIFEST
        if self._sanitizer is None or not self._sanitizer.exists():
            return [ValidationResult.valid(category, "No platform manifest")]

        results: list[ValidationResult] = []
        name = self._sanitizer.path.name

        for entry in self._sanitizer.detect_orphaned_entries(manifest.dependencies):
            sdk = self._registry[entry.sdk_id]
            results.append(
                ValidationResult.error(
                    category,
                    f"{name} has {sdk.name} entries but the SDK is not installed\n"
                    f"  Found patterns: {', '.join(entry.patterns)}\n"
                    "  This will crash at runtime",
                    "Run 'sdk-guard sanitize' to remove them",
                )
            )

        duplicates = self._sanitizer.detect_duplicate_activities()
        if duplicates:
            results.append(
                ValidationResult.error(
                    category,
                    f"{name} has duplicate activity declarations\n  Duplicates: {', '.join(duplicates)}",
                    "Run 'sdk-guard sanitize' to remove them",
                )
            )

        if not results:
            results.append(ValidationResult.valid(category, "Manifest clean"))
        return results

    def check_max_settings(self, manifest: PackageManifest, mode: Mode) -> list[ValidationResult]:
        """AppLovin MAX has an SDK key whenever it is installed."""
        category = CheckCategory.MAX_SETTINGS
        if not self._is_installed(manifest, SdkId.APPLOVIN_MAX):
            return [ValidationResult.valid(category, "AppLovin MAX not installed")]

        config = self._load_runtime_config(category, "MAX SDK key")
        if isinstance(config, ValidationResult):
            return [config]

        if not config.has_max_sdk_key():
            return [
                ValidationResult.error(
                    category,
                    "AppLovin SDK key is not configured!\n"
                    "  Ads will not work without a valid SDK key.",
                    f"Set max_sdk_key in {self._config_store.path}",
                )
            ]
        return [ValidationResult.valid(category, "AppLovin SDK key OK")]

    def check_adjust_settings(
        self, manifest: PackageManifest, mode: Mode
    ) -> list[ValidationResult]:
        """Adjust has an app token in Full mode.

        A missing Adjust install is reported by the required SDK check, so
        it passes here.
        """
        category = CheckCategory.ADJUST_SETTINGS
        if mode is not Mode.FULL:
            return [ValidationResult.valid(category, "Adjust not required")]
        if not self._is_installed(manifest, SdkId.ADJUST):
            return [ValidationResult.valid(category, "Adjust not installed")]

        config = self._load_runtime_config(category, "Adjust app token")
        if isinstance(config, ValidationResult):
            return [config]

        if not config.has_adjust_app_token():
            return [
                ValidationResult.error(
                    category,
                    "Adjust app token is not configured!\n"
                    "  Attribution tracking will not work without a valid app token.",
                    f"Set adjust_app_token in {self._config_store.path}",
                )
            ]
        return [ValidationResult.valid(category, "Adjust app token OK")]

    def _is_installed(self, manifest: PackageManifest, sdk_id: SdkId) -> bool:
        sdk = self._registry[sdk_id]
        return manifest.has(sdk.package_id) or self._probe.is_loaded(sdk.detection)

    def _load_runtime_config(
        self, category: CheckCategory, setting: str
    ) -> RuntimeConfig | ValidationResult:
        if self._config_store is None:
            return ValidationResult.valid(category, "No runtime config configured")
        config = self._config_store.load()
        if config is None:
            return ValidationResult.warning(
                category,
                f"Runtime config not found - cannot validate {setting}",
                "Run 'sdk-guard fix-config' to create it",
            )
        return config

    def fix_config_sync(self) -> bool:
        """Turn off flags for missing SDKs and align the mode mirror.

        Must run before any manifest mutation in the same operation, since a
        manifest write can trigger a reload.

        Returns:
            True if the runtime config was rewritten
        """
        if self._config_store is None:
            return False

        config = self._config_store.load()
        if config is None:
            return False

        mode = self._current_mode()
        updates: dict[str, bool] = {}

        snapshot = self._mutator.read()
        if snapshot is not None:
            for flag, sdk_id in config.enabled_flags().items():
                if not snapshot.has(self._registry[sdk_id].package_id):
                    updates[flag] = False
                    logger.info(f"Disabled {flag}: {self._registry[sdk_id].name} is not installed")
        else:
            logger.warning("Package manifest unreadable, leaving feature flags untouched")

        if not config.mirrors(mode):
            updates["is_prototype_mode"] = mode is Mode.PROTOTYPE
            logger.info(f"Synced is_prototype_mode to {updates['is_prototype_mode']}")

        if not updates:
            return False

        self._config_store.save(config.model_copy(update=updates))
        return True

    def run_auto_fixes(self) -> list[str]:
        """Apply every safe automatic fix.

        A fix that cannot run is logged and skipped; the problem it would
        have fixed is still reported by :meth:`run_all_checks`.

        Returns:
            Human-readable descriptions of the fixes applied
        """
        fixes: list[str] = []

        try:
            if self.fix_config_sync():
                fixes.append("Synced runtime config with installed SDKs and mode")
        except SdkGuardError as e:
            logger.error(f"Skipping runtime config fix: {e.message}")

        try:
            fixes.extend(self._fix_platform_manifest())
        except SdkGuardError as e:
            logger.error(f"Skipping platform manifest fix: {e.message}")

        for fix in fixes:
            logger.info(f"Auto-fix: {fix}")
        return fixes

    def _fix_platform_manifest(self) -> list[str]:
        if self._sanitizer is None or not self._sanitizer.exists():
            return []

        orphaned = self._sanitizer.detect_orphaned_entries()
        duplicates = self._sanitizer.detect_duplicate_activities()
        if not (orphaned or duplicates) or not self._sanitizer.sanitize():
            return []

        name = self._sanitizer.path.name
        fixes = [f"Removed {self._registry[entry.sdk_id].name} entries from {name}" for entry in orphaned]
        if duplicates:
            fixes.append(f"Removed duplicate declarations of {len(duplicates)} activity(ies)")
        return fixes
