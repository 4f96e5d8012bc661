"""Phase functions and the driver that sequences them.

Each phase reads what earlier phases put into the BuildContext and adds its
own part; nothing written by an earlier phase is modified later. Items
(components, documents, links) are processed independently: a failure is
logged and the rest of the batch continues.
"""
from __future__ import annotations

import logging
import os
from enum import Enum
from typing import Any, Optional

from common.logging_utils import Timer, extra_context, is_debug_enabled
from constants import Constants
from publish.descriptor import write_descriptor
from publish.entry_page import parse_start_page, rewrite_entry_page
from publish.symlinks import LinkOutcome, is_safe_path, set_pointer
from publish.xref import resolve_documents
from versioning.catalog import resolve_catalog
from versioning.models import PointerName
from .context import BuildContext
from .errors import PhaseOrderError
from .interfaces import ContentCatalogLike, PlaybookLike
from .report import LinkRecord

logger = logging.getLogger(__name__)


def configure_phase(ctx: BuildContext, playbook: Optional[PlaybookLike]) -> None:
    """Record the output root and the entry page binding."""
    output_dir = getattr(playbook, "output_dir", None) or Constants.DEFAULT_OUTPUT_DIR
    ctx.output_root = os.path.abspath(output_dir)
    ctx.entry_binding = parse_start_page(getattr(playbook, "start_page", None))
    logger.debug("Output directory: %s", ctx.output_root)
    if ctx.entry_binding:
        logger.debug(
            "Entry page pinned to %s@%s",
            ctx.entry_binding.version,
            ctx.entry_binding.component,
        )


def classify_phase(ctx: BuildContext, content_catalog: ContentCatalogLike) -> None:
    """Resolve pointers, write descriptor files and rewrite pointer references."""
    output_root = ctx.require_output_root()
    ctx.resolutions = resolve_catalog(content_catalog.get_components(), ctx.shared_component)
    ctx.report.resolutions = ctx.resolutions

    for name, resolution in ctx.resolutions.items():
        component_dir = ctx.component_dir(name)
        if not is_safe_path(output_root, component_dir):
            logger.warning("Skipping %s for component %r: path escapes output directory", Constants.LATEST_DEV_FILE, name)
            ctx.report.descriptors_failed.append(name)
            continue
        if write_descriptor(component_dir, resolution):
            ctx.report.descriptors_written.append(name)
        else:
            ctx.report.descriptors_failed.append(name)

    documents = content_catalog.find_by(media_type=Constants.ASCIIDOC_MEDIA_TYPE)
    ctx.report.xrefs = resolve_documents(documents, ctx.resolutions, ctx.shared_component)
    if ctx.report.xrefs.references_rewritten:
        logger.info(
            "Rewrote %d pointer reference(s) in %d document(s)",
            ctx.report.xrefs.references_rewritten,
            ctx.report.xrefs.documents_changed,
        )


def publish_phase(ctx: BuildContext) -> None:
    """Create pointer links, then repoint the entry page."""
    output_root = ctx.require_output_root()
    for name, resolution in ctx.resolutions.items():
        component_dir = ctx.component_dir(name)
        for pointer in (PointerName.LATEST, PointerName.DEV):
            label = resolution.label_for(pointer)
            if not label:
                continue
            logger.debug("For %s going to create symlink %s to %s", name, pointer.value, label)
            try:
                outcome = set_pointer(output_root, component_dir, pointer.value, label)
            except Exception as exc:  # pylint: disable=broad-exception-caught
                logger.error("Failed to create symlink '%s' in %s: %s", pointer.value, component_dir, exc)
                outcome = LinkOutcome.FAILED
            ctx.report.links.append(
                LinkRecord(component=name, pointer=pointer.value, version=label, outcome=outcome)
            )

    ctx.report.entry_page = rewrite_entry_page(output_root, ctx.entry_binding)


class Phase(Enum):
    """Lifecycle position of a Pipeline."""
    NEW = "new"
    CONFIGURED = "configured"
    CLASSIFIED = "classified"
    PUBLISHED = "published"


class Pipeline:
    """Runs the three phases exactly once each, in order.

    The host either calls configure/classify/publish itself or hands an
    event emitter to ``register``.
    """

    def __init__(self, shared_component: str = Constants.SHARED_COMPONENT):
        self.context = BuildContext(shared_component=shared_component)
        self.phase = Phase.NEW

    def _enter(self, expected: Phase, target: Phase) -> None:
        if self.phase is not expected:
            raise PhaseOrderError(
                f"cannot enter phase '{target.value}' from '{self.phase.value}'"
                f" (expected '{expected.value}')"
            )

    def _run(self, expected: Phase, target: Phase, func: Any, *args: Any) -> None:
        self._enter(expected, target)
        with Timer() as t:
            func(self.context, *args)
        self.phase = target
        if is_debug_enabled(logger):
            logger.debug(
                "Phase complete",
                extra=extra_context(
                    event="phase",
                    component="pipeline",
                    action=target.value,
                    outcome="success",
                    duration_ms=t.duration_ms(),
                ),
            )

    def configure(self, playbook: Optional[PlaybookLike]) -> None:
        self._run(Phase.NEW, Phase.CONFIGURED, configure_phase, playbook)

    def classify(self, content_catalog: ContentCatalogLike) -> None:
        self._run(Phase.CONFIGURED, Phase.CLASSIFIED, classify_phase, content_catalog)

    def publish(self) -> None:
        self._run(Phase.CLASSIFIED, Phase.PUBLISHED, publish_phase)

    def run(self, playbook: Optional[PlaybookLike], content_catalog: ContentCatalogLike) -> BuildContext:
        """Run all three phases back to back and return the context."""
        self.configure(playbook)
        self.classify(content_catalog)
        self.publish()
        return self.context

    def register(self, emitter: Any) -> None:
        """Subscribe the phases to a host emitter exposing ``once(event, handler)``.

        Handlers receive the host payload as keyword arguments.
        """
        emitter.once(Constants.EVENT_CONFIGURED, lambda **payload: self.configure(payload.get("playbook")))
        emitter.once(Constants.EVENT_CLASSIFIED, lambda **payload: self.classify(payload["content_catalog"]))
        emitter.once(Constants.EVENT_PUBLISHED, lambda **_payload: self.publish())
