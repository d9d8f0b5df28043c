"""
validation.py – Pre-flight checks for a dossier export
======================================================
Runs over a ``MergeRequest`` before the export and reports problems the UI
can show next to the section list.  The merge itself never depends on these
checks: it skips bad sections on its own.

Check levels
------------
BLOCK   – the export cannot produce anything useful, or the named section
          will be rejected by the orchestrator.
WARN    – the export proceeds; the named section will be missing or differ.
INFO    – advisory.

Checks
------
  no_enabled_sections        nothing to export                          BLOCK
  too_many_sections          more enabled sections than allowed         BLOCK
  duplicate_section_id       two sections share an id                   WARN
  multiple_cover_documents   more than one upload flagged as cover      WARN
  missing_document           uploaded section → unknown document id     WARN
  missing_payload            uploaded section → document without data   WARN
  upload_too_large           payload above the upload limit             BLOCK
  not_a_pdf                  payload does not carry a PDF signature     WARN
  grade_out_of_range         grade value outside 1–6                    WARN
  unknown_project            selected project id not in the bundle      INFO
  radar_without_image        radar enabled, nothing to draw             INFO
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from dossier_builder.codec import decode_payload, decoded_size, is_pdf
from dossier_builder.config import Settings, get_settings
from dossier_builder.models import GRADE_MAX, GRADE_MIN, MergeRequest, SectionType
from dossier_builder.sections import active_sections, has_enabled


class CheckLevel(str, Enum):
    BLOCK = "BLOCK"
    WARN  = "WARN"
    INFO  = "INFO"


@dataclass
class CheckViolation:
    code:       str
    level:      CheckLevel
    message:    str
    section_id: str = ""


@dataclass
class CheckResult:
    violations: list[CheckViolation] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return not self.violations

    @property
    def blocked(self) -> bool:
        return any(v.level == CheckLevel.BLOCK for v in self.violations)

    @property
    def warnings(self) -> list[CheckViolation]:
        return [v for v in self.violations if v.level == CheckLevel.WARN]

    def codes(self) -> set[str]:
        return {v.code for v in self.violations}

    def for_section(self, section_id: str) -> list[CheckViolation]:
        return [v for v in self.violations if v.section_id == section_id]

    def summary(self) -> str:
        if not self.violations:
            return "✅ Alle Prüfungen bestanden."
        icon = {CheckLevel.BLOCK: "🚫", CheckLevel.WARN: "⚠️", CheckLevel.INFO: "ℹ️"}
        return "\n".join(f"{icon[v.level]} [{v.code}] {v.message}" for v in self.violations)


def check_request(request: MergeRequest, settings: Optional[Settings] = None) -> CheckResult:
    settings = settings or get_settings()
    result = CheckResult()
    add = result.violations.append

    enabled = active_sections(request.sections)
    if not enabled:
        add(CheckViolation("no_enabled_sections", CheckLevel.BLOCK, "Keine Sektion ausgewählt."))
    elif len(enabled) > settings.pipeline.max_sections:
        add(CheckViolation(
            "too_many_sections", CheckLevel.BLOCK,
            f"{len(enabled)} Sektionen ausgewählt, erlaubt sind {settings.pipeline.max_sections}.",
        ))

    for section_id, count in Counter(s.id for s in request.sections).items():
        if count > 1:
            add(CheckViolation("duplicate_section_id", CheckLevel.WARN,
                               f"Sektion '{section_id}' ist {count}× vorhanden.", section_id))

    covers = [d for d in request.documents if d.is_cover]
    if len(covers) > 1:
        add(CheckViolation("multiple_cover_documents", CheckLevel.WARN,
                           f"{len(covers)} Dokumente als Deckblatt markiert; nur das erste wird verwendet."))

    for section in enabled:
        if section.kind != "uploaded":
            continue
        doc = request.document_by_id(section.source_id)
        if doc is None:
            add(CheckViolation("missing_document", CheckLevel.WARN,
                               f"'{section.label}': Dokument nicht gefunden.", section.id))
            continue
        if not doc.has_payload:
            add(CheckViolation("missing_payload", CheckLevel.WARN,
                               f"'{section.label}': Dokument enthält keine PDF-Daten.", section.id))
            continue
        if decoded_size(doc.pdf_data) > settings.pipeline.max_upload_bytes:
            add(CheckViolation("upload_too_large", CheckLevel.BLOCK,
                               f"'{section.label}': grösser als {settings.pipeline.max_upload_mb:.0f} MB.",
                               section.id))
            continue
        try:
            data = decode_payload(doc.pdf_data)
        except ValueError:
            add(CheckViolation("not_a_pdf", CheckLevel.WARN,
                               f"'{section.label}': Daten sind nicht lesbar.", section.id))
            continue
        if not is_pdf(data):
            add(CheckViolation("not_a_pdf", CheckLevel.WARN,
                               f"'{section.label}': keine PDF-Datei.", section.id))

    for grade in request.grades:
        if not grade.in_range:
            add(CheckViolation("grade_out_of_range", CheckLevel.WARN,
                               f"Note {grade.value:g} in '{grade.subject}' liegt ausserhalb "
                               f"{GRADE_MIN:g}–{GRADE_MAX:g}."))

    if request.selected_project_ids is not None and has_enabled(request.sections, SectionType.PROJECTS):
        known = {p.id for p in request.projects}
        for pid in request.selected_project_ids:
            if pid not in known:
                add(CheckViolation("unknown_project", CheckLevel.INFO,
                                   f"Projekt '{pid}' ist nicht vorhanden."))

    if (
        has_enabled(request.sections, SectionType.COMPETENCY_RADAR)
        and not request.radar_image
        and not request.competency_categories
    ):
        add(CheckViolation("radar_without_image", CheckLevel.INFO,
                           "Kompetenzradar aktiv, aber keine Daten: Platzhalter wird gezeigt."))

    return result
