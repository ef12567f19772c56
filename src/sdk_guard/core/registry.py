"""SDK registry and mode-based requirement resolution."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping

from sdk_guard.models.sdk import Mode, SdkDescriptor, SdkId
from sdk_guard.utils.errors import RegistryError, ValidationError, validate_package_id


class SdkRegistry:
    """Read-only table of SDK descriptors keyed by identity.

    The table is built once and never mutated. Construction fails fast on
    duplicate identities or package ids, so a misconfigured catalog is caught
    at startup rather than during a build.

    Example:
        registry = get_default_registry()

        for sdk in registry.required_for(Mode.FULL):
            print(sdk.name, sdk.dependency_value)
    """

    def __init__(self, descriptors: Iterable[SdkDescriptor]) -> None:
        by_id: dict[SdkId, SdkDescriptor] = {}
        by_package: dict[str, SdkDescriptor] = {}

        for descriptor in descriptors:
            if descriptor.id in by_id:
                raise RegistryError(
                    f"Duplicate SDK identity in registry: {descriptor.id.value}",
                    sdk_id=descriptor.id.value,
                )
            if descriptor.package_id in by_package:
                raise RegistryError(
                    f"Duplicate package id in registry: {descriptor.package_id}",
                    sdk_id=descriptor.id.value,
                )
            try:
                validate_package_id(descriptor.package_id)
            except ValidationError as e:
                raise RegistryError(e.message, sdk_id=descriptor.id.value) from e

            by_id[descriptor.id] = descriptor
            by_package[descriptor.package_id] = descriptor

        self._by_id = by_id
        self._by_package = by_package

    def __getitem__(self, sdk_id: SdkId) -> SdkDescriptor:
        return self._by_id[sdk_id]

    def __contains__(self, sdk_id: object) -> bool:
        return sdk_id in self._by_id

    def __iter__(self) -> Iterator[SdkDescriptor]:
        return iter(self._by_id.values())

    def __len__(self) -> int:
        return len(self._by_id)

    def get(self, sdk_id: SdkId) -> SdkDescriptor | None:
        """Get a descriptor by identity."""
        return self._by_id.get(sdk_id)

    def by_package(self, package_id: str) -> SdkDescriptor | None:
        """Get a descriptor by package identifier."""
        return self._by_package.get(package_id)

    def required_for(self, mode: Mode) -> list[SdkDescriptor]:
        """Descriptors that must be present in ``mode``."""
        return [sdk for sdk in self if sdk.is_required_for(mode)]

    def to_uninstall_for(self, mode: Mode) -> list[SdkDescriptor]:
        """Descriptors that must be removed in ``mode``.

        Only PROTOTYPE_ONLY (in Full mode) and FULL_ONLY (in Prototype mode)
        ever appear here.
        """
        return [sdk for sdk in self if sdk.should_uninstall_for(mode)]

    def installed(self, dependencies: Mapping[str, object]) -> list[SdkDescriptor]:
        """Descriptors whose package id is a key of ``dependencies``."""
        return [sdk for sdk in self if sdk.package_id in dependencies]


_default_registry: SdkRegistry | None = None


def get_default_registry() -> SdkRegistry:
    """Get the process-wide registry built from the SDK catalog."""
    global _default_registry
    if _default_registry is None:
        from sdk_guard.knowledge.sdk_catalog import get_sdk_catalog

        _default_registry = SdkRegistry(get_sdk_catalog())
    return _default_registry
