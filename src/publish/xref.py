"""Rewrite pointer-style cross references into literal version references.

A reference such as ``xref:latest@foo:intro.adoc[Intro]`` cannot be resolved
by the generator because no version of ``foo`` is named "latest". Once every
component has been classified the pointer is known and the reference becomes
``xref:2.3.0@foo:intro.adoc[Intro]``.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple, Union

from common.logging_utils import extra_context, is_debug_enabled
from constants import Constants
from pipeline.interfaces import DocumentLike
from versioning.models import PointerName, ResolutionTable

logger = logging.getLogger(__name__)

# xref:<pointer>@<component>:<remainder>[   (the "[" is not consumed)
# Component and remainder never run into the next "xref:" occurrence.
XREF_POINTER_RE = re.compile(
    r"xref:(?P<pointer>latest|dev)@"
    r"(?P<component>(?:(?!xref:)[^:])+):"
    r"(?P<remainder>(?:(?!xref:)[^\[])*)(?=\[)"
)


@dataclass
class XrefRewrite:
    """Outcome of rewriting one text."""
    text: str
    rewritten: int = 0
    unresolved: List[str] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return self.rewritten > 0


@dataclass
class XrefReport:
    """Aggregate outcome of rewriting a batch of documents."""
    documents_scanned: int = 0
    documents_changed: int = 0
    documents_skipped: int = 0
    documents_failed: int = 0
    references_rewritten: int = 0
    unresolved: List[Tuple[str, str]] = field(default_factory=list)  # (document path, reference)

    def to_dict(self) -> dict:
        return {
            "documents_scanned": self.documents_scanned,
            "documents_changed": self.documents_changed,
            "documents_skipped": self.documents_skipped,
            "documents_failed": self.documents_failed,
            "references_rewritten": self.references_rewritten,
            "unresolved": [{"document": doc, "reference": ref} for doc, ref in self.unresolved],
        }


def rewrite_xrefs(text: str, resolutions: ResolutionTable) -> XrefRewrite:
    """Replace the pointer name of every resolvable pointer reference in text.

    All occurrences are handled in a single left-to-right pass, so earlier
    replacements never hide later ones. Occurrences without a resolution are
    kept verbatim and listed in ``unresolved``.
    """
    result = XrefRewrite(text=text)

    def _substitute(match: "re.Match[str]") -> str:
        pointer = PointerName(match.group("pointer"))
        component = match.group("component")
        resolution = resolutions.get(component)
        label = resolution.label_for(pointer) if resolution else None
        if not label:
            result.unresolved.append(match.group(0))
            return match.group(0)
        result.rewritten += 1
        return f"xref:{label}@{component}:{match.group('remainder')}"

    result.text = XREF_POINTER_RE.sub(_substitute, text)
    return result


def _decode(contents: Union[str, bytes, None]) -> Optional[str]:
    if isinstance(contents, str):
        return contents
    if isinstance(contents, (bytes, bytearray)):
        try:
            return bytes(contents).decode("utf-8")
        except UnicodeDecodeError:
            return None
    return None


def _should_skip(doc: DocumentLike, shared_name: str) -> bool:
    src = getattr(doc, "src", None)
    if src is None:
        return True
    if getattr(src, "component", None) == shared_name:
        return True
    return getattr(src, "basename", None) == Constants.NAV_BASENAME


def resolve_document(doc: DocumentLike, resolutions: ResolutionTable) -> Optional[XrefRewrite]:
    """Rewrite one document in place.

    Returns None when the document has no readable text contents.
    """
    original = doc.contents
    text = _decode(original)
    if text is None:
        return None
    result = rewrite_xrefs(text, resolutions)
    if result.changed:
        if isinstance(original, (bytes, bytearray)):
            doc.contents = result.text.encode("utf-8")
        else:
            doc.contents = result.text
    return result


def resolve_documents(
    documents: Iterable[DocumentLike],
    resolutions: ResolutionTable,
    shared_name: str = Constants.SHARED_COMPONENT,
) -> XrefReport:
    """Rewrite pointer references in every eligible document.

    Shared-component documents, navigation files and documents without
    readable text are skipped. A failing document is logged and counted; the
    batch continues.
    """
    report = XrefReport()
    for doc in documents:
        if _should_skip(doc, shared_name):
            report.documents_skipped += 1
            continue
        path = getattr(doc.src, "path", "<unknown>")
        try:
            result = resolve_document(doc, resolutions)
        except Exception as exc:  # pylint: disable=broad-exception-caught
            logger.error("Failed to rewrite references in %s: %s", path, exc)
            report.documents_failed += 1
            continue
        if result is None:
            report.documents_skipped += 1
            continue
        report.documents_scanned += 1
        if result.changed:
            report.documents_changed += 1
            report.references_rewritten += result.rewritten
            if is_debug_enabled(logger):
                logger.debug(
                    "Rewrote pointer references",
                    extra=extra_context(
                        event="xref_rewrite",
                        component="xref",
                        action="rewrite",
                        target=path,
                        count=result.rewritten,
                    ),
                )
        for reference in result.unresolved:
            logger.warning("Unresolved pointer reference %s in %s", reference, path)
            report.unresolved.append((path, reference))
    return report
