"""Rank component versions and pick the latest stable and prerelease pointers."""

import logging
import re
from typing import Iterable, List, Optional

import semantic_version

from common.logging_utils import extra_context, is_debug_enabled
from pipeline.interfaces import ComponentLike, VersionLike
from .models import (
    ComponentResolution,
    PointerName,
    ResolutionTable,
    VersionEntry,
    is_prerelease_flag,
)

logger = logging.getLogger(__name__)

# First digit of a label; coercion starts there so "v2.11" ranks as 2.11.0
_FIRST_DIGIT = re.compile(r"\d")
# Numeric base of a label, used when the prerelease or build tail is not valid semver
_NUMERIC_BASE = re.compile(r"\d+(?:\.\d+){0,2}")


def parse_version(label: Optional[str]) -> Optional[semantic_version.Version]:
    """Coerce a version label into a comparable semantic version.

    Args:
        label: Raw version label as authored (e.g. "2.3", "v1.0.0", "1.1.0-rc1")

    Returns:
        Parsed version, or None when the label cannot be ranked
    """
    if not isinstance(label, str):
        return None
    match = _FIRST_DIGIT.search(label)
    if not match:
        return None
    try:
        return semantic_version.Version.coerce(label[match.start():])
    except ValueError:
        pass
    # e.g. "1.0.0-rc.01": leading zero in a numeric prerelease identifier
    base = _NUMERIC_BASE.match(label, match.start())
    try:
        return semantic_version.Version.coerce(base.group(0))
    except ValueError:
        return None


def build_entries(versions: Iterable[VersionLike]) -> List[VersionEntry]:
    """Convert host version descriptors into version entries (unparsed ones included)."""
    entries = []
    for v in versions:
        label = v.version if isinstance(v.version, str) else ""
        entries.append(
            VersionEntry(
                label=label,
                semver=parse_version(label),
                prerelease=is_prerelease_flag(getattr(v, "prerelease", None)),
            )
        )
    return entries


def rank_versions(entries: Iterable[VersionEntry]) -> List[VersionEntry]:
    """Drop unrankable entries and sort the rest, highest version first.

    The sort is stable, so entries with equal versions keep the order in
    which they were encountered.
    """
    rankable = []
    for entry in entries:
        if entry.semver is None:
            logger.debug("Ignoring unrankable version label %r", entry.label)
            continue
        rankable.append(entry)
    return sorted(rankable, key=lambda e: e.semver, reverse=True)


def resolve_component(name: str, versions: Iterable[VersionLike]) -> ComponentResolution:
    """Select the latest stable and latest prerelease versions of a component.

    Either pointer may be missing when the component has no matching version.
    """
    ranked = rank_versions(build_entries(versions))
    stable = next((e for e in ranked if not e.prerelease), None)
    prerelease = next((e for e in ranked if e.prerelease), None)
    return ComponentResolution(component=name, stable=stable, prerelease=prerelease)


def resolve_catalog(components: Iterable[ComponentLike], shared_name: str) -> ResolutionTable:
    """Resolve every versioned component of the content index.

    The shared component is skipped. A component that fails to resolve is
    logged and left out of the table.
    """
    table: ResolutionTable = {}
    for component in components:
        name = getattr(component, "name", None)
        if not name or name == shared_name:
            continue
        try:
            resolution = resolve_component(name, component.versions)
        except Exception as exc:  # pylint: disable=broad-exception-caught
            logger.error("Failed to resolve versions of component %s: %s", name, exc)
            continue
        table[name] = resolution
        if is_debug_enabled(logger):
            logger.debug(
                "Resolved component",
                extra=extra_context(
                    event="decision",
                    component="version_catalog",
                    action="resolve",
                    target=name,
                    latest=resolution.label_for(PointerName.LATEST),
                    dev=resolution.label_for(PointerName.DEV),
                ),
            )
    return table
