"""Mode persistence and mode switching."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Protocol, runtime_checkable

import yaml

from sdk_guard.models.sdk import Mode
from sdk_guard.utils.errors import ConfigurationError, SdkGuardError, ValidationError, safe_get
from sdk_guard.utils.logging import get_logger

if TYPE_CHECKING:
    from sdk_guard.core.installer import SdkInstaller
    from sdk_guard.core.sanitizer import PlatformManifestSanitizer
    from sdk_guard.core.validator import BuildValidator
    from sdk_guard.models.validation import ValidationReport

logger = get_logger("mode")


@runtime_checkable
class ModeStore(Protocol):
    """Key-value store holding the selected mode outside the manifest."""

    def get(self) -> Mode:
        ...

    def set(self, mode: Mode) -> None:
        ...


class MemoryModeStore:
    """In-process mode store."""

    def __init__(self, mode: Mode = Mode.UNSET) -> None:
        self._mode = mode

    def get(self) -> Mode:
        return self._mode

    def set(self, mode: Mode) -> None:
        self._mode = mode


class FileModeStore:
    """Mode store persisted in a small YAML state file."""

    KEY = "mode"

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def _read(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            data = yaml.safe_load(self.path.read_text(encoding="utf-8"))
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in state file: {e}", config_key=self.KEY) from e
        return data if isinstance(data, dict) else {}

    def get(self) -> Mode:
        value = safe_get(self._read(), self.KEY)
        if value is None:
            return Mode.UNSET
        try:
            return Mode(str(value).lower())
        except ValueError:
            logger.warning(f"Unknown mode '{value}' in {self.path}, treating as unset")
            return Mode.UNSET

    def set(self, mode: Mode) -> None:
        data = self._read()
        data[self.KEY] = mode.value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(yaml.dump(data, default_flow_style=False), encoding="utf-8")


class ModeSwitcher:
    """Apply a mode change across config, manifest and platform manifest.

    The sequence is fixed: persist the mode, fix the runtime config (before
    any manifest write, since a write can trigger a reload), install required
    SDKs, remove SDKs the mode excludes, clean the platform manifest, then
    validate.
    """

    def __init__(
        self,
        store: ModeStore,
        installer: "SdkInstaller",
        validator: "BuildValidator",
        sanitizer: "PlatformManifestSanitizer | None" = None,
    ) -> None:
        self._store = store
        self._installer = installer
        self._validator = validator
        self._sanitizer = sanitizer

    def set_mode(self, mode: Mode) -> "ValidationReport":
        """Switch to ``mode`` and return the post-switch validation report.

        Raises:
            ValidationError: If ``mode`` is UNSET
        """
        if not mode.is_configured:
            raise ValidationError("Cannot set mode to unset", field="mode")

        logger.info(f"Setting mode to: {mode.display_name}")
        self._store.set(mode)

        try:
            if self._validator.fix_config_sync():
                logger.info("Runtime config synced to new mode")
        except SdkGuardError as e:
            logger.error(f"Runtime config not synced: {e.message}")

        self._installer.install_required(mode)
        self._installer.uninstall_unnecessary(mode)

        if self._sanitizer is not None and self._sanitizer.sanitize():
            logger.info("Removed stale entries from the platform manifest")

        report = self._validator.run_all_checks()
        logger.info(
            f"Mode switch complete: {report.error_count} error(s), "
            f"{report.warning_count} warning(s)"
        )
        return report
