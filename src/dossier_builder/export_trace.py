"""
export_trace.py — Per-export outcome log
========================================
The merge orchestrator records one SectionOutcome per processed section.
A section that fails never aborts the export; the trace is how the caller
(Streamlit app, demo script) learns which parts of the dossier are missing.

Data model
----------
  SectionOutcome   One section's contribution: status, pages, timing, message.
  ExportTrace      All outcomes of a single export, in processing order.

Status values
-------------
  included   pages were appended
  folded     intentionally no own pages (radar / grades on the profile sheet)
  skipped    nothing to append (missing payload, no projects selected, …)
  failed     an exception was caught while resolving or loading the section
"""

from __future__ import annotations

import datetime
import uuid
from dataclasses import dataclass, field


INCLUDED = "included"
FOLDED   = "folded"
SKIPPED  = "skipped"
FAILED   = "failed"


@dataclass
class SectionOutcome:
    """One section's contribution to an export."""
    section_id:   str
    label:        str
    section_type: str
    status:       str
    pages:        int = 0
    duration_ms:  float = 0.0
    message:      str = ""


@dataclass
class ExportTrace:
    """Full trace for one dossier export."""
    export_id: str = field(default_factory=lambda: uuid.uuid4().hex[:8].upper())
    timestamp: str = field(
        default_factory=lambda: datetime.datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    )
    outcomes:  list[SectionOutcome] = field(default_factory=list)

    def append(self, outcome: SectionOutcome) -> None:
        self.outcomes.append(outcome)

    @property
    def total_pages(self) -> int:
        return sum(o.pages for o in self.outcomes)

    @property
    def total_ms(self) -> float:
        return sum(o.duration_ms for o in self.outcomes)

    def with_status(self, status: str) -> list[SectionOutcome]:
        return [o for o in self.outcomes if o.status == status]

    @property
    def failed(self) -> list[SectionOutcome]:
        return self.with_status(FAILED)

    @property
    def has_problems(self) -> bool:
        return any(o.status in (FAILED, SKIPPED) for o in self.outcomes)

    def summary(self) -> str:
        if not self.outcomes:
            return "Keine Sektionen verarbeitet."
        icon = {INCLUDED: "✅", FOLDED: "↪️", SKIPPED: "⚪", FAILED: "⚠️"}
        lines = []
        for o in self.outcomes:
            pages = f"{o.pages} S." if o.status == INCLUDED else o.status
            note = f" — {o.message}" if o.message else ""
            lines.append(f"{icon.get(o.status, '•')} {o.label}: {pages}{note}")
        return "\n".join(lines)
