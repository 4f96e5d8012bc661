"""latest_dev.txt: plain-text summary of a component's resolved pointers."""

import logging
import os

from constants import Constants
from versioning.models import ComponentResolution, PointerName

logger = logging.getLogger(__name__)


def render_descriptor(resolution: ComponentResolution) -> str:
    """Component name, then the optional ``latest:`` and ``dev:`` lines."""
    lines = [resolution.component]
    for pointer in (PointerName.LATEST, PointerName.DEV):
        label = resolution.label_for(pointer)
        if label:
            lines.append(f"{pointer.value}: {label}")
    return "\n".join(lines) + "\n"


def write_descriptor(component_dir: str, resolution: ComponentResolution) -> bool:
    """Write the descriptor into component_dir, creating the directory if needed.

    Returns:
        True on success; I/O errors are logged and reported as False.
    """
    content = render_descriptor(resolution)
    logger.debug(
        "%s/%s will contain\n--------\n%s--------",
        resolution.component,
        Constants.LATEST_DEV_FILE,
        content,
    )
    try:
        os.makedirs(component_dir, exist_ok=True)
        with open(os.path.join(component_dir, Constants.LATEST_DEV_FILE), "w", encoding="utf-8") as fh:
            fh.write(content)
    except OSError as exc:
        logger.error("Failed to write %s in %s: %s", Constants.LATEST_DEV_FILE, component_dir, exc)
        return False
    return True
