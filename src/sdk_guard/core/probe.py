"""Capability probes answering "is this SDK's code currently loaded"."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Protocol, runtime_checkable

from sdk_guard.utils.logging import get_logger

logger = get_logger("probe")


@runtime_checkable
class CapabilityProbe(Protocol):
    """Oracle deciding whether code matching a detection signature is loaded.

    A signature is a list of type or assembly name substrings; the SDK counts
    as loaded when any of them matches.
    """

    def is_loaded(self, signature: Sequence[str]) -> bool:
        ...


def _matches(signature: Sequence[str], names: Iterable[str]) -> bool:
    lowered = [name.lower() for name in names]
    for term in signature:
        needle = term.lower()
        if any(needle in name for name in lowered):
            return True
    return False


class NullProbe:
    """Probe for environments without compiled code: nothing is loaded."""

    def is_loaded(self, signature: Sequence[str]) -> bool:
        return False


class StaticProbe:
    """Probe over a fixed list of loaded type/assembly names."""

    def __init__(self, loaded: Iterable[str] = ()) -> None:
        self.loaded = list(loaded)

    def is_loaded(self, signature: Sequence[str]) -> bool:
        return _matches(signature, self.loaded)


class AssemblyDirectoryProbe:
    """Probe matching signatures against compiled assemblies on disk.

    Looks at the ``*.dll`` file names under a directory such as
    ``Library/ScriptAssemblies``, case-insensitively.
    """

    def __init__(self, directory: Path | str) -> None:
        self.directory = Path(directory)

    def assembly_names(self) -> list[str]:
        if not self.directory.is_dir():
            return []
        return [path.stem for path in self.directory.rglob("*.dll")]

    def is_loaded(self, signature: Sequence[str]) -> bool:
        if not signature:
            return False
        found = _matches(signature, self.assembly_names())
        logger.debug(f"Probe {list(signature)} in {self.directory}: {found}")
        return found
