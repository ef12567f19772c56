"""Shared test fixtures for sdk-guard tests."""

import json
import logging
from pathlib import Path
from typing import Any

import pytest
import yaml

from sdk_guard.core.installer import SdkInstaller
from sdk_guard.core.manifest import ManifestMutator
from sdk_guard.core.mode import MemoryModeStore
from sdk_guard.core.probe import StaticProbe
from sdk_guard.core.registry import SdkRegistry, get_default_registry
from sdk_guard.core.runtime_config import RuntimeConfigStore
from sdk_guard.core.sanitizer import PlatformManifestSanitizer
from sdk_guard.core.validator import BuildValidator
from sdk_guard.models.runtime import RuntimeConfig
from sdk_guard.models.sdk import Mode
from sdk_guard.utils.config import set_config

CLEAN_ANDROID_MANIFEST = """<?xml version="1.0" encoding="utf-8"?>
<manifest xmlns:android="http://schemas.android.com/apk/res/android" package="com.example.game">
  <application android:label="Game">
    <!-- Unity main activity -->
    <activity android:name="com.unity3d.player.UnityPlayerActivity" android:exported="true">
      <intent-filter>
        <action android:name="android.intent.action.MAIN" />
        <category android:name="android.intent.category.LAUNCHER" />
      </intent-filter>
    </activity>
  </application>
</manifest>
"""

FACEBOOK_ANDROID_MANIFEST = """<?xml version="1.0" encoding="utf-8"?>
<manifest xmlns:android="http://schemas.android.com/apk/res/android" package="com.example.game">
  <application android:label="Game">
    <!-- Unity main activity -->
    <activity android:name="com.unity3d.player.UnityPlayerActivity" android:exported="true" />
    <activity android:name="com.facebook.unity.FBUnityLoginActivity" />
    <provider android:name="com.facebook.FacebookContentProvider"
              android:authorities="com.facebook.app.FacebookContentProvider123"
              android:exported="true" />
    <meta-data android:name="com.facebook.sdk.ApplicationId" android:value="fb123" />
  </application>
</manifest>
"""

DUPLICATE_ACTIVITY_MANIFEST = """<?xml version="1.0" encoding="utf-8"?>
<manifest xmlns:android="http://schemas.android.com/apk/res/android" package="com.example.game">
  <application android:label="Game">
    <activity android:name="com.example.PluginActivity" android:theme="@style/First" />
    <activity android:name="com.unity3d.player.UnityPlayerActivity" />
    <activity android:name="com.example.PluginActivity" android:exported="true" android:theme="@style/Second" />
  </application>
</manifest>
"""


def write_manifest(
    path: Path,
    dependencies: dict[str, str] | None = None,
    registries: list[dict[str, Any]] | None = None,
    **extra: Any,
) -> Path:
    """Write a package manifest document."""
    document: dict[str, Any] = dict(extra)
    if dependencies is not None:
        document["dependencies"] = dependencies
    if registries is not None:
        document["scopedRegistries"] = registries
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(document, indent=2))
    return path


def read_manifest(path: Path) -> dict[str, Any]:
    """Read a package manifest document."""
    return json.loads(path.read_text())


@pytest.fixture(autouse=True)
def reset_global_config():
    """Reset the global configuration and logging between tests."""
    set_config(None)
    yield
    set_config(None)
    logger = logging.getLogger("sdk_guard")
    logger.handlers = []
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """Create an empty Unity project layout."""
    (tmp_path / "Packages").mkdir()
    (tmp_path / "Assets" / "Plugins" / "Android").mkdir(parents=True)
    (tmp_path / "Assets" / "Resources").mkdir(parents=True)
    return tmp_path


@pytest.fixture
def manifest_path(project_root: Path) -> Path:
    """Package manifest with one unrelated dependency and no registries."""
    return write_manifest(
        project_root / "Packages" / "manifest.json",
        {"com.unity.ugui": "1.0.0"},
    )


@pytest.fixture
def platform_manifest_path(project_root: Path) -> Path:
    """Clean Android platform manifest."""
    path = project_root / "Assets" / "Plugins" / "Android" / "AndroidManifest.xml"
    path.write_text(CLEAN_ANDROID_MANIFEST)
    return path


@pytest.fixture
def runtime_config_path(project_root: Path) -> Path:
    """Runtime config path (file not created)."""
    return project_root / "Assets" / "Resources" / "sdk-guard.yaml"


@pytest.fixture
def registry() -> SdkRegistry:
    """The built-in SDK registry."""
    return get_default_registry()


@pytest.fixture
def mutator(manifest_path: Path) -> ManifestMutator:
    """Mutator over the fixture manifest."""
    return ManifestMutator(manifest_path)


@pytest.fixture
def mode_store() -> MemoryModeStore:
    """Mode store with no mode selected."""
    return MemoryModeStore()


@pytest.fixture
def probe() -> StaticProbe:
    """Probe reporting nothing as loaded."""
    return StaticProbe()


@pytest.fixture
def config_store(runtime_config_path: Path) -> RuntimeConfigStore:
    """Runtime config store over the fixture path."""
    return RuntimeConfigStore(runtime_config_path)


@pytest.fixture
def installer(mutator: ManifestMutator, registry: SdkRegistry) -> SdkInstaller:
    """Installer over the fixture manifest."""
    return SdkInstaller(mutator, registry)


@pytest.fixture
def sanitizer(
    platform_manifest_path: Path,
    registry: SdkRegistry,
    mutator: ManifestMutator,
    probe: StaticProbe,
) -> PlatformManifestSanitizer:
    """Sanitizer over the clean fixture platform manifest."""
    return PlatformManifestSanitizer(platform_manifest_path, registry, mutator, probe)


@pytest.fixture
def validator(
    mutator: ManifestMutator,
    registry: SdkRegistry,
    mode_store: MemoryModeStore,
    config_store: RuntimeConfigStore,
    sanitizer: PlatformManifestSanitizer,
    probe: StaticProbe,
) -> BuildValidator:
    """Validator wired to the fixture project."""
    return BuildValidator(mutator, registry, mode_store, config_store, sanitizer, probe)


def write_runtime_config(path: Path, mode: Mode = Mode.PROTOTYPE, **flags: Any) -> Path:
    """Write a runtime config mirroring ``mode``."""
    config = RuntimeConfig(is_prototype_mode=mode is not Mode.FULL, **flags)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(yaml.dump(config.model_dump(exclude_none=True)))
    return path


PLATFORM_MANIFESTS = {
    "clean": CLEAN_ANDROID_MANIFEST,
    "facebook": FACEBOOK_ANDROID_MANIFEST,
    "duplicates": DUPLICATE_ACTIVITY_MANIFEST,
}


@pytest.fixture
def set_manifest(manifest_path: Path):
    """Overwrite the fixture package manifest."""

    def _set(dependencies=None, registries=None, **extra) -> Path:
        return write_manifest(manifest_path, dependencies, registries, **extra)

    return _set


@pytest.fixture
def load_manifest(manifest_path: Path):
    """Read the fixture package manifest back as a dict."""
    return lambda: read_manifest(manifest_path)


@pytest.fixture
def set_platform_manifest(platform_manifest_path: Path):
    """Overwrite the fixture platform manifest with a named sample."""

    def _set(kind: str) -> Path:
        platform_manifest_path.write_text(PLATFORM_MANIFESTS[kind])
        return platform_manifest_path

    return _set


@pytest.fixture
def set_runtime_config(runtime_config_path: Path):
    """Write the fixture runtime config."""

    def _set(mode: Mode = Mode.PROTOTYPE, **flags) -> Path:
        return write_runtime_config(runtime_config_path, mode, **flags)

    return _set
