"""Read the parts of a site playbook the pipeline needs."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

import yaml

from constants import Constants
from pipeline.errors import ConfigError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlaybookConfig:
    """Output directory and start page taken from a playbook file."""
    output_dir: Optional[str]
    start_page: Optional[str]
    path: Optional[str] = None


def _section(data: Dict[str, Any], key: str) -> Dict[str, Any]:
    value = data.get(key)
    return value if isinstance(value, dict) else {}


def load_playbook(path: str) -> PlaybookConfig:
    """Load a YAML playbook.

    ``output.dir`` is resolved against the playbook's directory, defaulting
    to ``build/site`` there when unset.

    Raises:
        ConfigError: the file cannot be read or is not a YAML mapping
    """
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except OSError as exc:
        raise ConfigError(f"cannot read playbook {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"invalid YAML in playbook {path}: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"playbook {path} must contain a mapping")

    base_dir = os.path.dirname(os.path.abspath(path))
    output_dir = _section(data, "output").get("dir") or Constants.DEFAULT_OUTPUT_DIR
    output_dir = os.path.join(base_dir, os.path.expanduser(str(output_dir)))

    start_page = _section(data, "site").get("start_page")
    if start_page is not None and not isinstance(start_page, str):
        logger.warning("Ignoring non-string site.start_page in %s", path)
        start_page = None

    logger.debug("Loaded playbook %s (output: %s, start page: %s)", path, output_dir, start_page)
    return PlaybookConfig(output_dir=os.path.normpath(output_dir), start_page=start_page, path=path)
