"""Repoint the site entry page from a pinned version to the "latest" pointer."""
from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from constants import Constants

logger = logging.getLogger(__name__)

_START_PAGE_RE = re.compile(r"^(?P<version>[^@:\s]+)@(?P<component>[^@:\s]+):(?P<path>.*)$")


@dataclass(frozen=True)
class EntryPageBinding:
    """Version and component the entry page was pinned to at configuration time."""
    version: str
    component: str
    path: str = ""


class EntryPageOutcome(Enum):
    """Result of the entry page rewrite."""
    REWRITTEN = "rewritten"
    NO_BINDING = "no_binding"
    NO_POINTER = "no_pointer"
    NO_PAGE = "no_page"
    UNCHANGED = "unchanged"
    FAILED = "failed"


def parse_start_page(value: Optional[str]) -> Optional[EntryPageBinding]:
    """Parse a ``<version>@<component>:<path>`` start page descriptor.

    Returns None when the value is missing or does not pin a version.
    """
    if not value or not isinstance(value, str):
        return None
    match = _START_PAGE_RE.match(value.strip())
    if not match:
        logger.debug("Start page %r does not pin a version; entry page will not be rewritten", value)
        return None
    return EntryPageBinding(
        version=match.group("version"),
        component=match.group("component"),
        path=match.group("path"),
    )


def pinned_segment_pattern(binding: EntryPageBinding) -> "re.Pattern[str]":
    """Pattern matching the ``<component>/<version>`` path segment of a binding.

    The match is bounded on both sides so ``foobar/3.0`` or ``bar/3.0.1`` are
    not taken for ``bar/3.0``.
    """
    segment = re.escape(f"{binding.component}/{binding.version}")
    return re.compile(rf"(?<![\w.\-]){segment}(?![\w.\-])")


def rewrite_entry_text(text: str, binding: EntryPageBinding, pointer: str = Constants.LATEST_SYMLINK) -> str:
    """Return text with every pinned segment replaced by the pointer segment."""
    replacement = f"{binding.component}/{pointer}"
    return pinned_segment_pattern(binding).sub(lambda _m: replacement, text)


def rewrite_entry_page(
    output_root: str,
    binding: Optional[EntryPageBinding],
    page_name: str = Constants.ENTRY_PAGE,
) -> EntryPageOutcome:
    """Rewrite the entry page once the "latest" pointer of its component exists.

    The original page is copied to ``<page>.bak`` before it is modified. Any
    outcome other than FAILED leaves an unchanged page byte-identical.
    """
    if binding is None:
        return EntryPageOutcome.NO_BINDING

    pointer_path = os.path.join(output_root, binding.component, Constants.LATEST_SYMLINK)
    if not os.path.exists(pointer_path):
        logger.info(
            "No '%s' pointer for component %s; entry page left pinned to %s",
            Constants.LATEST_SYMLINK,
            binding.component,
            binding.version,
        )
        return EntryPageOutcome.NO_POINTER

    page_path = os.path.join(output_root, page_name)
    if not os.path.isfile(page_path):
        logger.info("Entry page %s not found; nothing to rewrite", page_path)
        return EntryPageOutcome.NO_PAGE

    try:
        with open(page_path, "rb") as fh:
            raw = fh.read()
        text = raw.decode("utf-8")
        updated = rewrite_entry_text(text, binding)
        if updated == text:
            logger.debug("Entry page %s does not reference %s/%s", page_path, binding.component, binding.version)
            return EntryPageOutcome.UNCHANGED

        with open(page_path + Constants.ENTRY_PAGE_BACKUP_SUFFIX, "wb") as fh:
            fh.write(raw)
        with open(page_path, "w", encoding="utf-8", newline="") as fh:
            fh.write(updated)
    except (OSError, UnicodeDecodeError) as exc:
        logger.error("Failed to rewrite entry page %s: %s", page_path, exc)
        return EntryPageOutcome.FAILED

    logger.info("Entry page now points at %s/%s", binding.component, Constants.LATEST_SYMLINK)
    return EntryPageOutcome.REWRITTEN
