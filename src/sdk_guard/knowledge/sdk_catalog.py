"""Catalog of supported vendor SDKs.

Each entry pins the package the project expects, where it is fetched from,
how its code is recognized once compiled, and which platform manifest
fragments it leaves behind.
"""

from sdk_guard.models.manifest import ScopedRegistry
from sdk_guard.models.sdk import RequirementLevel, SdkDescriptor, SdkId

OPENUPM_NAME = "package.openupm.com"
OPENUPM_URL = "https://package.openupm.com"

APPLOVIN_REGISTRY = ScopedRegistry(
    name="AppLovin MAX Unity",
    url="https://unity.packages.applovin.com/",
    scopes=[
        "com.applovin.mediation.ads",
        "com.applovin.mediation.adapters",
        "com.applovin.mediation.dsp",
    ],
)

FIREBASE_SCOPE = "com.google.firebase"
FIREBASE_VERSION = "12.10.1"


def get_sdk_catalog() -> list[SdkDescriptor]:
    """Get the descriptors of every supported SDK.

    Returns:
        List of SDK descriptors, in installation priority order
    """
    return [
        # Core: present in every mode
        SdkDescriptor(
            id=SdkId.EXTERNAL_DEPENDENCY_MANAGER,
            name="External Dependency Manager",
            package_id="com.google.external-dependency-manager",
            version="1.2.186",
            scope="com.google.external-dependency-manager",
            detection=["Google.JarResolver"],
            requirement=RequirementLevel.CORE,
        ),
        SdkDescriptor(
            id=SdkId.IOS_SUPPORT,
            name="iOS Support (ATT)",
            package_id="com.unity.ads.ios-support",
            version="1.2.0",
            detection=["Unity.Advertisement.IosSupport"],
            requirement=RequirementLevel.CORE,
        ),
        SdkDescriptor(
            id=SdkId.GAME_ANALYTICS,
            name="GameAnalytics",
            package_id="com.gameanalytics.sdk",
            version="7.10.6",
            scope="com.gameanalytics",
            detection=["GameAnalyticsSDK"],
            requirement=RequirementLevel.CORE,
        ),
        # Prototype mode
        SdkDescriptor(
            id=SdkId.FACEBOOK,
            name="Facebook SDK",
            package_id="com.lacrearthur.facebook-sdk-for-unity",
            install_url="https://github.com/LaCreArthur/facebook-unity-sdk-upm.git#18.0.0",
            detection=["Facebook.Unity"],
            platform_patterns=[
                "com.facebook.unity",
                "com.facebook.FacebookContentProvider",
                "com.facebook.sdk",
                "com.facebook.app",
            ],
            requirement=RequirementLevel.PROTOTYPE_ONLY,
        ),
        # Full mode
        SdkDescriptor(
            id=SdkId.APPLOVIN_MAX,
            name="AppLovin MAX",
            package_id="com.applovin.mediation.ads",
            version="8.5.0",
            dedicated_registry=APPLOVIN_REGISTRY,
            detection=["MaxSdk.Scripts", "applovin"],
            platform_patterns=["com.applovin.sdk", "applovin.sdk.key"],
            requirement=RequirementLevel.FULL_ONLY,
        ),
        SdkDescriptor(
            id=SdkId.ADJUST,
            name="Adjust SDK",
            package_id="com.adjust.sdk",
            install_url="https://github.com/adjust/unity_sdk.git?path=Assets/Adjust#5.4.1",
            detection=["com.adjust.sdk", "adjustsdk.scripts", "adjust"],
            platform_patterns=["com.adjust.sdk"],
            requirement=RequirementLevel.FULL_ONLY,
        ),
        SdkDescriptor(
            id=SdkId.FIREBASE_APP,
            name="Firebase App",
            package_id="com.google.firebase.app",
            version=FIREBASE_VERSION,
            scope=FIREBASE_SCOPE,
            detection=["Firebase.App"],
            requirement=RequirementLevel.FULL_REQUIRED,
        ),
        SdkDescriptor(
            id=SdkId.FIREBASE_ANALYTICS,
            name="Firebase Analytics",
            package_id="com.google.firebase.analytics",
            version=FIREBASE_VERSION,
            scope=FIREBASE_SCOPE,
            detection=["Firebase.Analytics"],
            requirement=RequirementLevel.FULL_REQUIRED,
        ),
        SdkDescriptor(
            id=SdkId.FIREBASE_CRASHLYTICS,
            name="Firebase Crashlytics",
            package_id="com.google.firebase.crashlytics",
            version=FIREBASE_VERSION,
            scope=FIREBASE_SCOPE,
            detection=["Firebase.Crashlytics"],
            requirement=RequirementLevel.FULL_REQUIRED,
        ),
        SdkDescriptor(
            id=SdkId.FIREBASE_REMOTE_CONFIG,
            name="Firebase Remote Config",
            package_id="com.google.firebase.remote-config",
            version=FIREBASE_VERSION,
            scope=FIREBASE_SCOPE,
            detection=["Firebase.RemoteConfig"],
            requirement=RequirementLevel.FULL_REQUIRED,
        ),
    ]


# Base SDK every Firebase module needs at runtime
FIREBASE_BASE = SdkId.FIREBASE_APP
FIREBASE_MODULES = (
    SdkId.FIREBASE_ANALYTICS,
    SdkId.FIREBASE_CRASHLYTICS,
    SdkId.FIREBASE_REMOTE_CONFIG,
)
