"""Unit tests for the platform manifest sanitizer."""

import pytest

from sdk_guard.core.probe import StaticProbe
from sdk_guard.core.sanitizer import PlatformManifestSanitizer
from sdk_guard.models.sdk import SdkId
from sdk_guard.utils.errors import PlatformManifestError


LATIN1_FACEBOOK_MANIFEST = """<?xml version="1.0" encoding="ISO-8859-1"?>
<manifest xmlns:android="http://schemas.android.com/apk/res/android" package="com.example.game">
  <application android:label="Caf\xe9">
    <activity android:name="com.unity3d.player.UnityPlayerActivity" android:exported="true" />
    <activity android:name="com.facebook.unity.FBUnityLoginActivity" />
  </application>
</manifest>
"""


def backups(path):
    return sorted(path.parent.glob(f"{path.name}.*.bak"))


class TestDetectOrphanedEntries:
    """Tests for orphaned entry detection."""

    def test_clean_manifest(self, sanitizer):
        """Test that a clean platform manifest has no orphans."""
        assert sanitizer.detect_orphaned_entries() == []

    def test_facebook_orphans(self, sanitizer, set_platform_manifest):
        """Test detecting Facebook entries when the SDK is absent."""
        set_platform_manifest("facebook")
        orphaned = sanitizer.detect_orphaned_entries()

        assert len(orphaned) == 1
        assert orphaned[0].sdk_id == SdkId.FACEBOOK
        assert orphaned[0].patterns == [
            "com.facebook.unity",
            "com.facebook.FacebookContentProvider",
            "com.facebook.sdk",
            "com.facebook.app",
        ]

    def test_installed_sdk_not_orphaned(self, sanitizer, set_platform_manifest, set_manifest):
        """Test that entries of an installed SDK are kept."""
        set_platform_manifest("facebook")
        set_manifest({"com.lacrearthur.facebook-sdk-for-unity": "x"})
        assert sanitizer.detect_orphaned_entries() == []

    def test_dependencies_override(self, sanitizer, set_platform_manifest):
        """Test checking against an explicit dependency map."""
        set_platform_manifest("facebook")
        assert sanitizer.detect_orphaned_entries({"com.lacrearthur.facebook-sdk-for-unity": "x"}) == []

    def test_probe_suppresses(self, platform_manifest_path, registry, mutator, set_platform_manifest):
        """Test that SDK code detected by the probe counts as installed."""
        set_platform_manifest("facebook")
        sanitizer = PlatformManifestSanitizer(
            platform_manifest_path, registry, mutator, StaticProbe(["Facebook.Unity.Settings"])
        )
        assert sanitizer.detect_orphaned_entries() == []

    def test_missing_file(self, sanitizer, platform_manifest_path):
        """Test that a missing platform manifest has no orphans."""
        platform_manifest_path.unlink()
        assert not sanitizer.exists()
        assert sanitizer.detect_orphaned_entries() == []

    def test_declared_encoding(self, sanitizer, platform_manifest_path):
        """Test scanning a manifest saved in the encoding it declares."""
        platform_manifest_path.write_bytes(LATIN1_FACEBOOK_MANIFEST.encode("iso-8859-1"))
        orphaned = sanitizer.detect_orphaned_entries()
        assert [entry.sdk_id for entry in orphaned] == [SdkId.FACEBOOK]

    def test_undecodable_bytes(self, sanitizer, platform_manifest_path):
        """Test that bytes invalid in the declared encoding raise PlatformManifestError."""
        platform_manifest_path.write_bytes(
            b'<?xml version="1.0" encoding="utf-8"?>\n<manifest android:label="Caf\xe9" />'
        )
        with pytest.raises(PlatformManifestError):
            sanitizer.detect_orphaned_entries()


class TestDetectDuplicateActivities:
    """Tests for duplicate activity detection."""

    def test_duplicates(self, sanitizer, set_platform_manifest):
        """Test detecting an activity declared twice."""
        set_platform_manifest("duplicates")
        assert sanitizer.detect_duplicate_activities() == ["com.example.PluginActivity"]

    def test_no_duplicates(self, sanitizer):
        """Test a manifest with unique activities."""
        assert sanitizer.detect_duplicate_activities() == []

    def test_parse_error(self, sanitizer, platform_manifest_path):
        """Test that malformed XML raises PlatformManifestError."""
        platform_manifest_path.write_text("<manifest><application>")
        with pytest.raises(PlatformManifestError) as exc_info:
            sanitizer.detect_duplicate_activities()
        assert exc_info.value.code == "PLATFORM_MANIFEST_ERROR"


class TestSanitize:
    """Tests for rewriting the platform manifest."""

    def test_removes_orphans(self, sanitizer, set_platform_manifest):
        """Test that orphaned entries are removed and a backup is written."""
        path = set_platform_manifest("facebook")
        original = path.read_text()

        assert sanitizer.sanitize() is True

        content = path.read_text()
        assert "com.facebook" not in content
        assert "com.unity3d.player.UnityPlayerActivity" in content
        assert "Unity main activity" in content
        assert 'xmlns:android="http://schemas.android.com/apk/res/android"' in content

        saved = backups(path)
        assert len(saved) == 1
        assert saved[0].read_text() == original

    def test_dedupes_activities(self, sanitizer, set_platform_manifest):
        """Test that the exported declaration of a duplicate is kept."""
        path = set_platform_manifest("duplicates")

        assert sanitizer.sanitize() is True

        content = path.read_text()
        assert content.count("com.example.PluginActivity") == 1
        assert "@style/Second" in content
        assert "@style/First" not in content
        assert sanitizer.detect_duplicate_activities() == []

    def test_clean_is_noop(self, sanitizer, platform_manifest_path):
        """Test that a clean manifest is not rewritten."""
        before = platform_manifest_path.read_text()
        assert sanitizer.sanitize() is False
        assert platform_manifest_path.read_text() == before
        assert backups(platform_manifest_path) == []

    def test_second_run_is_noop(self, sanitizer, set_platform_manifest):
        """Test that sanitizing twice rewrites once."""
        set_platform_manifest("facebook")
        assert sanitizer.sanitize() is True
        assert sanitizer.sanitize() is False

    def test_missing_file(self, sanitizer, platform_manifest_path):
        """Test sanitizing without a platform manifest."""
        platform_manifest_path.unlink()
        assert sanitizer.sanitize() is False

    def test_parse_error_not_raised(self, sanitizer, platform_manifest_path):
        """Test that a malformed manifest is reported as not sanitized."""
        platform_manifest_path.write_text("<manifest><application>")
        assert sanitizer.sanitize() is False
        assert platform_manifest_path.read_text() == "<manifest><application>"

    def test_declared_encoding(self, sanitizer, platform_manifest_path):
        """Test sanitizing a manifest saved as ISO-8859-1."""
        platform_manifest_path.write_bytes(LATIN1_FACEBOOK_MANIFEST.encode("iso-8859-1"))

        assert sanitizer.sanitize() is True

        content = platform_manifest_path.read_text(encoding="utf-8")
        assert "com.facebook" not in content
        assert 'android:label="Caf\xe9"' in content

    def test_undecodable_bytes_not_raised(self, sanitizer, platform_manifest_path):
        """Test that a manifest with invalid bytes is left alone."""
        raw = b'<?xml version="1.0" encoding="utf-8"?>\n<manifest android:label="Caf\xe9" />'
        platform_manifest_path.write_bytes(raw)
        assert sanitizer.sanitize() is False
        assert platform_manifest_path.read_bytes() == raw
