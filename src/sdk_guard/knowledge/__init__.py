"""SDK knowledge base.

Contains the curated table of supported vendor SDKs and the registries they
are distributed through.
"""

from sdk_guard.knowledge.sdk_catalog import (
    APPLOVIN_REGISTRY,
    FIREBASE_BASE,
    FIREBASE_MODULES,
    OPENUPM_NAME,
    OPENUPM_URL,
    get_sdk_catalog,
)

__all__ = [
    "APPLOVIN_REGISTRY",
    "FIREBASE_BASE",
    "FIREBASE_MODULES",
    "OPENUPM_NAME",
    "OPENUPM_URL",
    "get_sdk_catalog",
]
