"""Pointer symlinks ("latest", "dev") inside component output directories.

Links are always relative, always recreated from scratch, and never replace
a real directory found at the link path.
"""
from __future__ import annotations

import logging
import os
from enum import Enum

from common.logging_utils import extra_context, is_debug_enabled

logger = logging.getLogger(__name__)


class LinkOutcome(Enum):
    """Result of a single pointer link operation."""
    CREATED = "created"
    REPLACED = "replaced"
    SKIPPED_UNSAFE = "skipped_unsafe"
    SKIPPED_DIRECTORY = "skipped_directory"
    SKIPPED_MISSING_TARGET = "skipped_missing_target"
    FAILED = "failed"

    @property
    def ok(self) -> bool:
        return self in (LinkOutcome.CREATED, LinkOutcome.REPLACED)


def is_safe_path(base: str, target: str) -> bool:
    """Return True when target lies within base once both are made absolute.

    Symlinks are not followed, so a link path is judged by where it sits,
    not by what it points to.
    """
    base_abs = os.path.abspath(base)
    target_abs = os.path.abspath(target)
    relative = os.path.relpath(target_abs, base_abs)
    if os.path.isabs(relative):
        return False
    return relative != os.pardir and not relative.startswith(os.pardir + os.sep)


def _trace(action: str, outcome: LinkOutcome, link_path: str, target: str) -> None:
    if is_debug_enabled(logger):
        logger.debug(
            "Pointer link %s",
            outcome.value,
            extra=extra_context(
                event="symlink",
                component="symlinks",
                action=action,
                outcome=outcome.value,
                target=target,
                path=link_path,
            ),
        )


def set_pointer(output_root: str, component_dir: str, pointer: str, version: str) -> LinkOutcome:
    """Point ``component_dir/pointer`` at the ``component_dir/version`` directory.

    Args:
        output_root: Root of the published site; nothing is written outside it
        component_dir: Output directory of the component
        pointer: Link name, "latest" or "dev"
        version: Version label, i.e. the name of the target subdirectory

    Returns:
        LinkOutcome describing what happened. Errors are logged, never raised.
    """
    link_path = os.path.join(component_dir, pointer)
    target_dir = os.path.join(component_dir, version)
    try:
        if not (is_safe_path(output_root, link_path) and is_safe_path(output_root, target_dir)):
            logger.warning(
                "Refusing to create link %s -> %s: path escapes output directory %s",
                link_path,
                version,
                output_root,
            )
            _trace("validate", LinkOutcome.SKIPPED_UNSAFE, link_path, version)
            return LinkOutcome.SKIPPED_UNSAFE

        if not os.path.isdir(target_dir):
            logger.warning("Not linking %s: target directory %s does not exist", link_path, target_dir)
            _trace("validate", LinkOutcome.SKIPPED_MISSING_TARGET, link_path, version)
            return LinkOutcome.SKIPPED_MISSING_TARGET

        relative_target = os.path.relpath(os.path.abspath(target_dir), os.path.abspath(component_dir))

        outcome = LinkOutcome.CREATED
        if os.path.lexists(link_path):
            if os.path.isdir(link_path) and not os.path.islink(link_path):
                logger.warning("Not writing %s because it is a directory", link_path)
                _trace("validate", LinkOutcome.SKIPPED_DIRECTORY, link_path, version)
                return LinkOutcome.SKIPPED_DIRECTORY
            os.unlink(link_path)
            outcome = LinkOutcome.REPLACED

        os.symlink(relative_target, link_path)
        _trace("symlink", outcome, link_path, relative_target)
        return outcome
    except OSError as exc:
        logger.error("Failed to create symlink '%s' in %s: %s", pointer, component_dir, exc)
        return LinkOutcome.FAILED
