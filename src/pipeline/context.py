"""State shared by the three build phases."""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Optional

from constants import Constants
from publish.entry_page import EntryPageBinding
from versioning.models import ResolutionTable
from .errors import OutputRootError
from .report import BuildReport


@dataclass
class BuildContext:
    """One per build.

    ``output_root`` and ``entry_binding`` are set by the configure phase, the
    resolution table by the classify phase; later phases only read them.
    """
    output_root: Optional[str] = None
    entry_binding: Optional[EntryPageBinding] = None
    resolutions: ResolutionTable = field(default_factory=dict)
    shared_component: str = Constants.SHARED_COMPONENT
    report: BuildReport = field(default_factory=BuildReport)

    def require_output_root(self) -> str:
        if not self.output_root:
            raise OutputRootError("output directory is unknown; was the configure phase run?")
        return self.output_root

    def component_dir(self, component: str) -> str:
        return os.path.join(self.require_output_root(), component)
