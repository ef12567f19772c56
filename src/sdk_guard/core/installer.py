"""Apply mode requirements to the package manifest."""

from __future__ import annotations

from collections.abc import Iterable

from sdk_guard.core.manifest import (
    AddDependenciesStep,
    AddRegistryStep,
    Dependencies,
    ManifestMutator,
    ManifestStep,
    Registries,
    RemoveScopeStep,
    SetDependenciesStep,
)
from sdk_guard.core.registry import SdkRegistry
from sdk_guard.core.version import is_at_least
from sdk_guard.knowledge.sdk_catalog import OPENUPM_NAME, OPENUPM_URL
from sdk_guard.models.manifest import MutationOutcome, ScopedRegistry
from sdk_guard.models.sdk import Mode, RequirementLevel, SdkDescriptor
from sdk_guard.utils.logging import get_logger

logger = get_logger("installer")

Transaction = list[ManifestStep]


class SdkInstaller:
    """Installs and uninstalls SDKs by editing the package manifest.

    Installation only ever adds what is missing: dependencies are set when
    their key is absent and registry scopes are unioned, so running the same
    install twice leaves the manifest untouched the second time.

    SDKs with a dedicated vendor registry are installed in their own
    transaction, in a fixed order: drop any claim the shared registry holds
    on the vendor's scopes, add the vendor registry, then add the
    dependency. The package manager refuses to resolve when two registries
    claim the same scope, so the order is not interchangeable.

    Example:
        installer = SdkInstaller(ManifestMutator(manifest_path), get_default_registry())
        installer.install_required(Mode.FULL)
        installer.uninstall_unnecessary(Mode.FULL)
    """

    def __init__(
        self,
        mutator: ManifestMutator,
        registry: SdkRegistry,
        shared_registry_name: str = OPENUPM_NAME,
        shared_registry_url: str = OPENUPM_URL,
    ) -> None:
        self._mutator = mutator
        self._registry = registry
        self.shared_registry_name = shared_registry_name
        self.shared_registry_url = shared_registry_url

    def plan_dedicated_install(self, sdk: SdkDescriptor) -> Transaction:
        """Ordered steps installing an SDK from its dedicated registry."""
        dedicated: ScopedRegistry | None = sdk.dedicated_registry
        if dedicated is None:
            raise ValueError(f"{sdk.name} has no dedicated registry")

        steps: Transaction = [
            RemoveScopeStep(self.shared_registry_url, scope) for scope in dedicated.scopes
        ]
        steps.append(AddRegistryStep.for_registry(dedicated))
        steps.append(AddDependenciesStep({sdk.package_id: sdk.dependency_value}))
        return steps

    def plan_install(self, descriptors: Iterable[SdkDescriptor]) -> list[Transaction]:
        """Group the steps needed to install ``descriptors`` into transactions.

        Dedicated-registry SDKs come first, one transaction each. Then one
        transaction unions every shared-registry scope, and a last one adds
        the remaining dependencies.
        """
        transactions: list[Transaction] = []
        shared_scopes: list[str] = []
        packages: dict[str, str] = {}

        for sdk in descriptors:
            if sdk.dedicated_registry is not None:
                transactions.append(self.plan_dedicated_install(sdk))
                continue
            if sdk.scope and sdk.scope not in shared_scopes:
                shared_scopes.append(sdk.scope)
            packages[sdk.package_id] = sdk.dependency_value

        if shared_scopes:
            transactions.append(
                [AddRegistryStep(self.shared_registry_name, self.shared_registry_url, shared_scopes)]
            )
        if packages:
            transactions.append([AddDependenciesStep(packages)])

        return transactions

    def install_required(self, mode: Mode) -> MutationOutcome:
        """Add every SDK required in ``mode`` that the manifest lacks."""
        required = self._registry.required_for(mode)
        logger.info(f"Installing {len(required)} SDK(s) required for {mode.display_name} mode")
        return self._install(required)

    def install_core(self) -> MutationOutcome:
        """Add the SDKs required in every mode."""
        core = [sdk for sdk in self._registry if sdk.requirement is RequirementLevel.CORE]
        return self._install(core)

    def uninstall_unnecessary(self, mode: Mode) -> MutationOutcome:
        """Remove the SDKs ``mode`` excludes.

        FULL_REQUIRED and OPTIONAL SDKs are never removed.
        """
        package_ids = [sdk.package_id for sdk in self._registry.to_uninstall_for(mode)]
        if not package_ids:
            return MutationOutcome.UNCHANGED

        outcome = self._mutator.remove_dependencies(package_ids)
        if outcome.changed:
            logger.info(f"Uninstalled SDKs not needed in {mode.display_name} mode")
        return outcome

    def sync_versions(self) -> MutationOutcome:
        """Raise installed SDKs that are older than the registry expects.

        Entries already at or above the expected version are left alone.
        """

        def bump(dependencies: Dependencies, registries: Registries) -> bool:
            return SetDependenciesStep(self.outdated(dependencies))(dependencies, registries)

        return self._mutator.modify(bump)

    def outdated(self, dependencies: Dependencies) -> dict[str, str]:
        """Map package ids that are older than expected to the expected value."""
        updates: dict[str, str] = {}
        for sdk in self._registry:
            if sdk.package_id not in dependencies:
                continue
            expected = sdk.expected_value
            if not expected:
                continue
            current = str(dependencies[sdk.package_id] or "")
            if current == expected or is_at_least(current, expected):
                continue
            updates[sdk.package_id] = expected
        return updates

    def _install(self, descriptors: list[SdkDescriptor]) -> MutationOutcome:
        outcomes = [self._mutator.apply(steps) for steps in self.plan_install(descriptors)]
        outcome = MutationOutcome.combine(*outcomes)
        if outcome.failed:
            logger.error("One or more install transactions failed")
        return outcome
