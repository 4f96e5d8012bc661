"""Data models for component version ranking and pointer resolution."""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Union

import semantic_version


class PointerName(Enum):
    """Symbolic pointer versions served per component."""
    LATEST = "latest"  # latest stable
    DEV = "dev"  # latest prerelease


@dataclass(frozen=True)
class VersionDescriptor:
    """Version as reported by the content index: label plus prerelease flag."""
    version: str
    prerelease: Optional[Union[bool, str]] = None


@dataclass(frozen=True)
class VersionEntry:
    """A rankable version of a component."""
    label: str  # raw label as authored, also the output directory name
    semver: Optional[semantic_version.Version]
    prerelease: bool


@dataclass(frozen=True)
class ComponentResolution:
    """Resolved pointer targets for one component."""
    component: str
    stable: Optional[VersionEntry] = None
    prerelease: Optional[VersionEntry] = None

    def target_for(self, pointer: PointerName) -> Optional[VersionEntry]:
        """Return the entry a pointer resolves to, or None."""
        if pointer is PointerName.LATEST:
            return self.stable
        return self.prerelease

    def label_for(self, pointer: PointerName) -> Optional[str]:
        entry = self.target_for(pointer)
        return entry.label if entry else None


# Resolution table keyed by component name, written once per build.
ResolutionTable = Dict[str, ComponentResolution]


def is_prerelease_flag(value: Optional[Union[bool, str]]) -> bool:
    """Interpret a host prerelease flag.

    The host leaves the flag unset for stable versions and sets it to True
    or to a non-empty string (e.g. "-rc") for prereleases.
    """
    if value is None or value is False:
        return False
    if isinstance(value, str):
        return value.strip() != ""
    return bool(value)
