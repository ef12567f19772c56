"""Runtime configuration model.

The runtime configuration ships with the game build. It mirrors the selected
mode and carries one boolean feature flag per optional integration; an enabled
flag requires the matching SDK to be installed. It also holds the AppLovin MAX
SDK key and the Adjust app token, which must be set when those SDKs are in use.
"""

from typing import ClassVar

from pydantic import BaseModel, Field

from sdk_guard.models.sdk import Mode, SdkId


class RuntimeConfig(BaseModel):
    """Runtime feature flags and mode mirror."""

    FLAG_SDKS: ClassVar[dict[str, SdkId]] = {
        "enable_adjust": SdkId.ADJUST,
        "enable_firebase_analytics": SdkId.FIREBASE_ANALYTICS,
        "enable_crashlytics": SdkId.FIREBASE_CRASHLYTICS,
        "enable_remote_config": SdkId.FIREBASE_REMOTE_CONFIG,
    }

    is_prototype_mode: bool = Field(default=True, description="Mirror of the selected mode")
    enable_adjust: bool = Field(default=False, description="Adjust attribution enabled")
    enable_firebase_analytics: bool = Field(default=False, description="Firebase Analytics enabled")
    enable_crashlytics: bool = Field(default=False, description="Firebase Crashlytics enabled")
    enable_remote_config: bool = Field(default=False, description="Firebase Remote Config enabled")

    max_sdk_key: str | None = Field(default=None, description="AppLovin MAX SDK key")
    adjust_app_token: str | None = Field(default=None, description="Adjust app token")

    def enabled_flags(self) -> dict[str, SdkId]:
        """Flags currently set to True, with the SDK each one needs."""
        return {flag: sdk for flag, sdk in self.FLAG_SDKS.items() if getattr(self, flag)}

    def has_max_sdk_key(self) -> bool:
        return bool(self.max_sdk_key and self.max_sdk_key.strip())

    def has_adjust_app_token(self) -> bool:
        return bool(self.adjust_app_token and self.adjust_app_token.strip())

    def mirrors(self, mode: Mode) -> bool:
        """Check whether the mode mirror agrees with ``mode``."""
        if not mode.is_configured:
            return True
        return self.is_prototype_mode == (mode is Mode.PROTOTYPE)
