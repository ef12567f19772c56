"""Detect and remove stale entries from the Android platform manifest.

SDKs leave activities, providers and meta-data in
``Assets/Plugins/Android/AndroidManifest.xml``. When the SDK is removed from
the package manifest those entries stay behind and the app crashes on start
trying to load classes that are no longer there.
"""

from __future__ import annotations

import re
import shutil
import xml.etree.ElementTree as ET
from collections.abc import Mapping
from datetime import datetime
from pathlib import Path

from pydantic import BaseModel, Field

from sdk_guard.core.manifest import ManifestMutator
from sdk_guard.core.probe import CapabilityProbe, NullProbe
from sdk_guard.core.registry import SdkRegistry
from sdk_guard.models.sdk import SdkId
from sdk_guard.utils.errors import PlatformManifestError
from sdk_guard.utils.logging import get_logger, get_logger_with_context

logger = get_logger("sanitizer")

ANDROID_NS = "http://schemas.android.com/apk/res/android"
TOOLS_NS = "http://schemas.android.com/tools"

# Attributes checked for orphaned patterns
MATCH_ATTRIBUTES = ("name", "authorities", "value")

XML_ENCODING = re.compile(rb"""^\s*<\?xml[^>]*\bencoding\s*=\s*["']([A-Za-z0-9._-]+)["']""")

ET.register_namespace("android", ANDROID_NS)
ET.register_namespace("tools", TOOLS_NS)


def _android(attribute: str) -> str:
    return f"{{{ANDROID_NS}}}{attribute}"


class OrphanedEntry(BaseModel):
    """Platform manifest patterns left behind by an SDK that is not installed."""

    model_config = {"frozen": True}

    sdk_id: SdkId = Field(description="SDK the patterns belong to")
    patterns: list[str] = Field(description="Patterns found in the platform manifest")


class PlatformManifestSanitizer:
    """Finds and removes platform manifest entries for uninstalled SDKs.

    An SDK counts as installed when its package id is in the package
    manifest or when the probe reports its code as loaded. Detection is a
    plain substring scan of the raw file, decoded with the
    encoding its XML declaration names; removal works on the parsed tree
    and only touches direct children of ``<application>``.

    Example:
        sanitizer = PlatformManifestSanitizer(path, registry, mutator, probe)
        for entry in sanitizer.detect_orphaned_entries():
            print(entry.sdk_id, entry.patterns)
        sanitizer.sanitize()
    """

    def __init__(
        self,
        path: Path | str,
        registry: SdkRegistry,
        mutator: ManifestMutator,
        probe: CapabilityProbe | None = None,
    ) -> None:
        self.path = Path(path)
        self._registry = registry
        self._mutator = mutator
        self._probe = probe or NullProbe()

    def exists(self) -> bool:
        return self.path.exists()

    def detect_orphaned_entries(
        self, dependencies: Mapping[str, object] | None = None
    ) -> list[OrphanedEntry]:
        """Find SDK patterns present in the platform manifest for absent SDKs.

        Args:
            dependencies: Dependency map to check installation against. Read
                from the package manifest when not given.

        Returns:
            One entry per SDK with at least one matching pattern

        Raises:
            PlatformManifestError: If the file cannot be read or decoded
        """
        if not self.path.exists():
            return []

        content = self._read_text()
        if dependencies is None:
            snapshot = self._mutator.read()
            dependencies = snapshot.dependencies if snapshot is not None else {}

        orphaned: list[OrphanedEntry] = []
        for sdk in self._registry:
            if not sdk.platform_patterns:
                continue
            if sdk.package_id in dependencies or self._probe.is_loaded(sdk.detection):
                continue

            found = [pattern for pattern in sdk.platform_patterns if pattern in content]
            if found:
                logger.debug(f"Orphaned {sdk.name} entries: {found}")
                orphaned.append(OrphanedEntry(sdk_id=sdk.id, patterns=found))

        return orphaned

    def detect_duplicate_activities(self) -> list[str]:
        """Activity names declared more than once under ``<application>``.

        Raises:
            PlatformManifestError: If the platform manifest cannot be parsed
        """
        if not self.path.exists():
            return []
        application = self._parse().getroot().find("application")
        if application is None:
            return []
        return [name for name, group in self._activity_groups(application).items() if len(group) > 1]

    def sanitize(self) -> bool:
        """Remove orphaned entries and duplicate activities.

        The original file is copied to a timestamped ``.bak`` next to it
        before being overwritten.

        Returns:
            True if the platform manifest was rewritten
        """
        if not self.path.exists():
            logger.debug(f"No platform manifest at {self.path}, nothing to sanitize")
            return False

        try:
            tree = self._parse()
            orphaned = self.detect_orphaned_entries()
        except PlatformManifestError as e:
            logger.error(f"Failed to sanitize platform manifest: {e.message}")
            return False

        application = tree.getroot().find("application")
        if application is None:
            return False

        modified = False
        for entry in orphaned:
            sdk = self._registry[entry.sdk_id]
            logger.info(f"Removing {sdk.name} entries from {self.path.name}")
            modified |= self._remove_matching(application, entry.patterns)

        modified |= self._dedupe_activities(application)

        if not modified:
            logger.debug("Platform manifest is clean")
            return False

        backup = self.backup()
        tree.write(self.path, encoding="utf-8", xml_declaration=True)
        get_logger_with_context("sanitizer", backup=str(backup)).info(
            f"Platform manifest sanitized: {self.path}"
        )
        return True

    def backup(self) -> Path:
        """Copy the platform manifest to ``<name>.<YYYYmmdd-HHMMSS>.bak``."""
        stamp = datetime.now().strftime("%Y%m%d-%H%M%S")
        backup = self.path.with_name(f"{self.path.name}.{stamp}.bak")
        shutil.copy2(self.path, backup)
        return backup

    def _read_text(self) -> str:
        try:
            raw = self.path.read_bytes()
            declared = XML_ENCODING.match(raw)
            encoding = declared.group(1).decode("ascii") if declared else "utf-8-sig"
            return raw.decode(encoding)
        except (OSError, UnicodeDecodeError, LookupError) as e:
            raise PlatformManifestError(
                f"Could not read platform manifest: {e}", path=str(self.path)
            ) from e

    def _parse(self) -> ET.ElementTree:
        parser = ET.XMLParser(target=ET.TreeBuilder(insert_comments=True))
        try:
            return ET.parse(self.path, parser=parser)
        except (ET.ParseError, OSError) as e:
            raise PlatformManifestError(
                f"Could not parse platform manifest: {e}", path=str(self.path)
            ) from e

    @staticmethod
    def _activity_groups(application: ET.Element) -> dict[str, list[ET.Element]]:
        groups: dict[str, list[ET.Element]] = {}
        for element in application.findall("activity"):
            name = element.get(_android("name"))
            if name:
                groups.setdefault(name, []).append(element)
        return groups

    def _remove_matching(self, application: ET.Element, patterns: list[str]) -> bool:
        doomed = []
        for element in application:
            if not isinstance(element.tag, str):
                continue
            values = [element.get(_android(attr), "") for attr in MATCH_ATTRIBUTES]
            if any(pattern in value for pattern in patterns for value in values):
                logger.debug(f"Removing <{element.tag} android:name=\"{values[0]}\">")
                doomed.append(element)

        for element in doomed:
            application.remove(element)
        return bool(doomed)

    def _dedupe_activities(self, application: ET.Element) -> bool:
        modified = False
        for name, group in self._activity_groups(application).items():
            if len(group) < 2:
                continue
            keep = next(
                (el for el in group if el.get(_android("exported")) == "true"),
                group[0],
            )
            for element in group:
                if element is not keep:
                    application.remove(element)
                    modified = True
            logger.info(f"Removed {len(group) - 1} duplicate declaration(s) of activity {name}")
        return modified
