"""Unit tests for the SDK installer."""

import pytest

from sdk_guard.core.installer import SdkInstaller
from sdk_guard.core.manifest import ManifestMutator
from sdk_guard.knowledge.sdk_catalog import APPLOVIN_REGISTRY, OPENUPM_URL
from sdk_guard.models.manifest import MutationOutcome
from sdk_guard.models.sdk import Mode, SdkId

APPLOVIN = "com.applovin.mediation.ads"
ADJUST = "com.adjust.sdk"
FIREBASE_APP = "com.google.firebase.app"
ADJUST_URL = "https://github.com/adjust/unity_sdk.git?path=Assets/Adjust#5.4.1"


def registry_by_url(document, url):
    for entry in document.get("scopedRegistries", []):
        if entry["url"] == url:
            return entry
    return None


class TestPlanInstall:
    """Tests for install planning."""

    def test_dedicated_registry_order(self, installer, registry):
        """Test that shared-scope removal precedes the vendor registry and the dependency."""
        steps = installer.plan_dedicated_install(registry[SdkId.APPLOVIN_MAX])
        kinds = [step.kind for step in steps]

        assert kinds == ["remove_scope"] * 3 + ["add_registry", "add_dependencies"]
        assert [step.scope for step in steps[:3]] == APPLOVIN_REGISTRY.scopes
        assert all(step.url == OPENUPM_URL for step in steps[:3])
        assert steps[3].url == APPLOVIN_REGISTRY.url

    def test_dedicated_requires_registry(self, installer, registry):
        """Test that planning a dedicated install for a shared SDK fails."""
        with pytest.raises(ValueError):
            installer.plan_dedicated_install(registry[SdkId.ADJUST])

    def test_full_mode_transactions(self, installer, registry):
        """Test transaction grouping for Full mode."""
        transactions = installer.plan_install(registry.required_for(Mode.FULL))

        assert len(transactions) == 3
        assert transactions[0][-1].packages == {APPLOVIN: "8.5.0"}
        assert [step.kind for step in transactions[1]] == ["add_registry"]
        assert transactions[1][0].scopes == [
            "com.google.external-dependency-manager",
            "com.gameanalytics",
            "com.google.firebase",
        ]
        assert [step.kind for step in transactions[2]] == ["add_dependencies"]
        assert ADJUST in transactions[2][0].packages
        assert APPLOVIN not in transactions[2][0].packages

    def test_empty_plan(self, installer):
        """Test that nothing to install plans nothing."""
        assert installer.plan_install([]) == []


class TestInstall:
    """Tests for installing SDKs."""

    def test_install_required_full(self, installer, load_manifest):
        """Test installing the Full mode SDK set."""
        assert installer.install_required(Mode.FULL) is MutationOutcome.CHANGED

        document = load_manifest()
        deps = document["dependencies"]
        assert deps[APPLOVIN] == "8.5.0"
        assert deps[ADJUST] == ADJUST_URL
        assert deps[FIREBASE_APP] == "12.10.1"
        assert deps["com.unity.ugui"] == "1.0.0"
        assert "com.lacrearthur.facebook-sdk-for-unity" not in deps

        applovin = registry_by_url(document, APPLOVIN_REGISTRY.url)
        assert applovin["scopes"] == APPLOVIN_REGISTRY.scopes
        openupm = registry_by_url(document, OPENUPM_URL)
        assert "com.google.firebase" in openupm["scopes"]

    def test_install_is_idempotent(self, installer, manifest_path):
        """Test that a second install leaves the manifest untouched."""
        installer.install_required(Mode.FULL)
        before = manifest_path.read_bytes()

        assert installer.install_required(Mode.FULL) is MutationOutcome.UNCHANGED
        assert manifest_path.read_bytes() == before

    def test_existing_values_kept(self, set_manifest, installer, load_manifest):
        """Test that an already-present dependency keeps its value."""
        set_manifest({APPLOVIN: "9.0.0"})
        installer.install_required(Mode.FULL)
        assert load_manifest()["dependencies"][APPLOVIN] == "9.0.0"

    def test_shared_claim_on_vendor_scope_removed(self, set_manifest, installer, load_manifest):
        """Test that the shared registry loses its claim on vendor scopes."""
        set_manifest(
            {},
            [
                {
                    "name": "package.openupm.com",
                    "url": OPENUPM_URL,
                    "scopes": [APPLOVIN, "com.gameanalytics"],
                }
            ],
        )
        installer.install_required(Mode.FULL)

        openupm = registry_by_url(load_manifest(), OPENUPM_URL)
        assert APPLOVIN not in openupm["scopes"]
        assert "com.gameanalytics" in openupm["scopes"]

    def test_install_core(self, installer, load_manifest):
        """Test installing only the SDKs every mode needs."""
        installer.install_core()

        deps = load_manifest()["dependencies"]
        assert "com.google.external-dependency-manager" in deps
        assert "com.unity.ads.ios-support" in deps
        assert "com.gameanalytics.sdk" in deps
        assert ADJUST not in deps
        assert "com.lacrearthur.facebook-sdk-for-unity" not in deps

    def test_install_unset_mode(self, installer, manifest_path):
        """Test that no mode requires nothing."""
        before = manifest_path.read_bytes()
        assert installer.install_required(Mode.UNSET) is MutationOutcome.UNCHANGED
        assert manifest_path.read_bytes() == before

    def test_install_missing_manifest(self, tmp_path, registry):
        """Test that a missing manifest fails the install."""
        installer = SdkInstaller(ManifestMutator(tmp_path / "manifest.json"), registry)
        assert installer.install_required(Mode.FULL) is MutationOutcome.FAILED


class TestUninstall:
    """Tests for removing SDKs."""

    def test_prototype_keeps_firebase(self, set_manifest, installer, load_manifest):
        """Test that Prototype mode removes Full-only SDKs but keeps Firebase."""
        set_manifest({APPLOVIN: "8.5.0", ADJUST: ADJUST_URL, FIREBASE_APP: "12.10.1"})

        assert installer.uninstall_unnecessary(Mode.PROTOTYPE) is MutationOutcome.CHANGED

        deps = load_manifest()["dependencies"]
        assert deps == {FIREBASE_APP: "12.10.1"}

    def test_full_removes_facebook(self, set_manifest, installer, load_manifest):
        """Test that Full mode removes the Facebook SDK."""
        set_manifest({"com.lacrearthur.facebook-sdk-for-unity": "x", "com.gameanalytics.sdk": "7.10.6"})
        installer.uninstall_unnecessary(Mode.FULL)
        assert load_manifest()["dependencies"] == {"com.gameanalytics.sdk": "7.10.6"}

    def test_nothing_to_remove(self, installer):
        """Test that uninstalling absent SDKs is a no-op."""
        assert installer.uninstall_unnecessary(Mode.FULL) is MutationOutcome.UNCHANGED

    def test_unset_removes_nothing(self, set_manifest, installer):
        """Test that no mode removes nothing."""
        set_manifest({ADJUST: ADJUST_URL})
        assert installer.uninstall_unnecessary(Mode.UNSET) is MutationOutcome.UNCHANGED


class TestSyncVersions:
    """Tests for version synchronization."""

    def test_upgrades_outdated(self, set_manifest, installer, load_manifest):
        """Test that older versions are raised to the expected value."""
        set_manifest(
            {
                APPLOVIN: "8.4.0",
                ADJUST: "https://github.com/adjust/unity_sdk.git?path=Assets/Adjust#5.3.0",
            }
        )
        assert installer.sync_versions() is MutationOutcome.CHANGED

        deps = load_manifest()["dependencies"]
        assert deps[APPLOVIN] == "8.5.0"
        assert deps[ADJUST] == ADJUST_URL

    def test_never_downgrades(self, set_manifest, installer, load_manifest):
        """Test that newer versions are left alone."""
        set_manifest({APPLOVIN: "8.6.0"})
        assert installer.sync_versions() is MutationOutcome.UNCHANGED
        assert load_manifest()["dependencies"][APPLOVIN] == "8.6.0"

    def test_does_not_install(self, installer, load_manifest):
        """Test that sync only touches installed SDKs."""
        installer.sync_versions()
        assert load_manifest()["dependencies"] == {"com.unity.ugui": "1.0.0"}

    def test_outdated(self, installer):
        """Test computing the outdated map."""
        outdated = installer.outdated({APPLOVIN: "8.4.0", FIREBASE_APP: "12.10.1", "com.other": "0.1"})
        assert outdated == {APPLOVIN: "8.5.0"}
