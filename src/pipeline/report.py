"""Per-build outcome summary, used for logging and the CLI JSON report."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from publish.entry_page import EntryPageOutcome
from publish.symlinks import LinkOutcome
from publish.xref import XrefReport
from versioning.models import ResolutionTable


@dataclass
class LinkRecord:
    """Outcome of one pointer link."""
    component: str
    pointer: str
    version: str
    outcome: LinkOutcome


@dataclass
class BuildReport:
    """Everything the three phases did, item by item."""
    resolutions: ResolutionTable = field(default_factory=dict)
    descriptors_written: List[str] = field(default_factory=list)
    descriptors_failed: List[str] = field(default_factory=list)
    xrefs: XrefReport = field(default_factory=XrefReport)
    links: List[LinkRecord] = field(default_factory=list)
    entry_page: Optional[EntryPageOutcome] = None

    def links_with(self, outcome: LinkOutcome) -> List[LinkRecord]:
        return [link for link in self.links if link.outcome is outcome]

    def has_warnings(self) -> bool:
        """True when any item was skipped, left unresolved or failed."""
        if self.descriptors_failed or self.xrefs.unresolved or self.xrefs.documents_failed:
            return True
        if any(not link.outcome.ok for link in self.links):
            return True
        return self.entry_page is EntryPageOutcome.FAILED

    def to_dict(self) -> Dict[str, Any]:
        components = {}
        for name, resolution in sorted(self.resolutions.items()):
            components[name] = {
                "latest": resolution.stable.label if resolution.stable else None,
                "dev": resolution.prerelease.label if resolution.prerelease else None,
            }
        return {
            "components": components,
            "descriptors": {
                "written": list(self.descriptors_written),
                "failed": list(self.descriptors_failed),
            },
            "links": [
                {
                    "component": link.component,
                    "pointer": link.pointer,
                    "version": link.version,
                    "outcome": link.outcome.value,
                }
                for link in self.links
            ],
            "xrefs": self.xrefs.to_dict(),
            "entry_page": self.entry_page.value if self.entry_page else None,
        }
