"""Version comparison for manifest dependency values.

Handles plain dotted versions ("8.5.0") and install URLs carrying a git ref
tag ("https://host/repo.git#5.4.1"). Comparison is numeric per component, so
"1.10.0" sorts after "1.2.0".
"""

from __future__ import annotations

from enum import Enum

from sdk_guard.utils.logging import get_logger

logger = get_logger("version")


class VersionOrder(int, Enum):
    """Ordering of two version strings."""

    LESS = -1
    EQUAL = 0
    GREATER = 1


def extract_tag(value: str) -> str:
    """Return the part after the last '#', or the value itself."""
    if "#" in value:
        return value.rsplit("#", 1)[1]
    return value


def _parse_component(part: str) -> int:
    try:
        return int(part)
    except ValueError:
        return 0


def compare_versions(v1: str | None, v2: str | None) -> int:
    """Compare two version strings.

    Equal strings are equal without parsing. An empty value sorts below any
    non-empty one. Tagged values compare only their tags. Non-numeric
    components count as 0, and shorter versions are padded with zeros.

    If parsing fails for any other reason the comparison falls back to
    ordinal string ordering, which is only an approximation.

    Returns:
        -1 if v1 < v2, 0 if equal, 1 if v1 > v2
    """
    if v1 == v2:
        return 0
    if not v1:
        return -1
    if not v2:
        return 1

    try:
        left = extract_tag(v1) if "#" in v1 else v1
        right = extract_tag(v2) if "#" in v2 else v2

        parts1 = [_parse_component(p) for p in left.split(".")]
        parts2 = [_parse_component(p) for p in right.split(".")]

        for i in range(max(len(parts1), len(parts2))):
            p1 = parts1[i] if i < len(parts1) else 0
            p2 = parts2[i] if i < len(parts2) else 0
            if p1 < p2:
                return -1
            if p1 > p2:
                return 1
        return 0
    except Exception as e:
        logger.debug(f"Falling back to ordinal comparison for {v1!r} / {v2!r}: {e}")
        return (v1 > v2) - (v1 < v2)


def compare(v1: str | None, v2: str | None) -> VersionOrder:
    """Compare two version strings, returning a VersionOrder."""
    return VersionOrder(compare_versions(v1, v2))


def is_at_least(found: str | None, minimum: str | None) -> bool:
    """Check if ``found`` is equal to or newer than ``minimum``."""
    return compare_versions(found, minimum) >= 0
