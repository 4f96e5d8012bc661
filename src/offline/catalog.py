"""Content index built from ``antora.yml`` component descriptors.

Used when the pipeline is replayed against a site that is already published:
components and their versions come from the descriptors, and there are no
documents left to rewrite.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

import yaml

from constants import Constants
from pipeline.errors import ConfigError
from versioning.models import VersionDescriptor

logger = logging.getLogger(__name__)

_SKIP_DIRS = {".git", "node_modules", "build"}


@dataclass
class StaticComponent:
    """Component assembled from one or more descriptors."""
    name: str
    versions: List[VersionDescriptor] = field(default_factory=list)


@dataclass
class StaticContentCatalog:
    """In-memory content index."""
    components: List[StaticComponent] = field(default_factory=list)
    documents: List[Any] = field(default_factory=list)

    def get_components(self) -> List[StaticComponent]:
        return list(self.components)

    def find_by(self, media_type: str) -> List[Any]:
        return [
            doc for doc in self.documents
            if getattr(getattr(doc, "src", None), "media_type", None) == media_type
        ]


def _prerelease_value(raw: Any) -> Optional[Any]:
    # BaseLoader yields strings only; map YAML booleans back.
    if raw is None:
        return None
    if isinstance(raw, str):
        lowered = raw.strip().lower()
        if lowered in ("", "false", "~", "null"):
            return None
        if lowered == "true":
            return True
    return raw


def read_component_descriptor(path: str) -> Dict[str, Any]:
    """Read name, version and prerelease from an ``antora.yml`` file.

    Scalars are loaded as plain strings so a version such as ``2.10`` keeps
    its trailing zero.

    Raises:
        ConfigError: unreadable file, invalid YAML, or missing name
    """
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = yaml.load(fh, Loader=yaml.BaseLoader)  # nosec B506 - BaseLoader builds no objects
    except OSError as exc:
        raise ConfigError(f"cannot read component descriptor {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"invalid YAML in component descriptor {path}: {exc}") from exc

    if not isinstance(data, dict) or not data.get("name"):
        raise ConfigError(f"component descriptor {path} has no name")
    version = data.get("version")
    return {
        "name": str(data["name"]),
        "version": version if isinstance(version, str) else "",
        "prerelease": _prerelease_value(data.get("prerelease")),
    }


def load_component_descriptors(paths: Iterable[str]) -> StaticContentCatalog:
    """Build a content index from descriptor files.

    Descriptors naming the same component are merged, keeping file order.
    """
    by_name: Dict[str, StaticComponent] = {}
    for path in paths:
        descriptor = read_component_descriptor(path)
        component = by_name.setdefault(descriptor["name"], StaticComponent(name=descriptor["name"]))
        component.versions.append(
            VersionDescriptor(version=descriptor["version"], prerelease=descriptor["prerelease"])
        )
        logger.debug(
            "Descriptor %s: %s@%s%s",
            path,
            descriptor["version"],
            descriptor["name"],
            " (prerelease)" if descriptor["prerelease"] else "",
        )
    return StaticContentCatalog(components=list(by_name.values()))


def discover_component_descriptors(dir_name: str, recursive: bool = False) -> List[str]:
    """Find ``antora.yml`` files in dir_name (and below it when recursive)."""
    found: List[str] = []
    if not os.path.isdir(dir_name):
        logger.warning("Directory not found: %s", dir_name)
        return found
    if not recursive:
        candidate = os.path.join(dir_name, Constants.COMPONENT_DESCRIPTOR_FILE)
        if os.path.isfile(candidate):
            found.append(candidate)
        return found
    for root, dirs, files in os.walk(dir_name):
        dirs[:] = sorted(d for d in dirs if d not in _SKIP_DIRS)
        if Constants.COMPONENT_DESCRIPTOR_FILE in files:
            found.append(os.path.join(root, Constants.COMPONENT_DESCRIPTOR_FILE))
    return found
