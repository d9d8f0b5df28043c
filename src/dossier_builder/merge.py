"""
merge.py — Dossier merge orchestrator
=====================================
Resolves the enabled sections, in order, to PDF byte buffers (uploaded
payloads or freshly generated sheets) and copies every page of every buffer
into one output document.

Per-section failure policy
--------------------------
A malformed upload, a missing document or a generator exception affects only
its own section: the error is logged, recorded in the ExportTrace, and the
loop moves on.  ``DossierBuildError`` is raised only when the result itself
is unusable: no section produced a page, too many sections were requested,
or writing the output fails.

Ordering
--------
Output page order = section order, then each buffer's own page order.
Project sections emit one page per project in the order of the project list.
"""

from __future__ import annotations

import io
import logging
import time
from typing import Optional, Sequence, Union

from pypdf import PdfReader, PdfWriter

from dossier_builder.codec import decode_payload, decoded_size, is_pdf
from dossier_builder.config import Settings, get_settings
from dossier_builder.cover_page import generate_cover_page
from dossier_builder.export_trace import (
    FAILED,
    FOLDED,
    INCLUDED,
    SKIPPED,
    ExportTrace,
    SectionOutcome,
)
from dossier_builder.models import (
    CompetencyCategory,
    DossierDetails,
    DossierDocument,
    DossierSection,
    Grade,
    MergeRequest,
    Project,
    ProjectStatus,
    SectionType,
    Skill,
    StudentProfile,
)
from dossier_builder.profile_page import generate_grades_page, generate_profile_page
from dossier_builder.project_page import generate_project_page
from dossier_builder.radar import render_radar_png
from dossier_builder.sections import active_sections, has_enabled

logger = logging.getLogger(__name__)


class DossierBuildError(RuntimeError):
    """The dossier as a whole could not be produced."""


class _Folded(Exception):
    """Section intentionally contributes no pages of its own."""


class _Skipped(Exception):
    """Section has nothing to contribute."""


# ─── Helpers ─────────────────────────────────────────────────────────────────

def resolve_projects(
    projects: Sequence[Project],
    selected_ids: Optional[Sequence[str]],
) -> list[Project]:
    """
    Projects to render, in the order of *projects*.  Without an explicit
    selection, active and completed projects are included.
    """
    if selected_ids is None:
        return [p for p in projects if p.status in (ProjectStatus.ACTIVE, ProjectStatus.COMPLETED)]
    wanted = set(selected_ids)
    return [p for p in projects if p.id in wanted]


def prepare_radar_image(request: MergeRequest, settings: Settings) -> Optional[Union[bytes, str]]:
    """
    The radar raster for the profile sheet: the caller's image if given,
    otherwise rendered from the competency categories when a radar section
    is enabled.  Rendering problems fall back to the placeholder box.
    """
    if request.radar_image:
        return request.radar_image
    if request.competency_categories and has_enabled(request.sections, SectionType.COMPETENCY_RADAR):
        try:
            return render_radar_png(request.competency_categories, config=settings.radar)
        except Exception as exc:
            logger.warning("Competency radar could not be rendered: %s", exc)
    return None


def _load_pages(buffers: Sequence[bytes]) -> list:
    pages = []
    for data in buffers:
        if not is_pdf(data):
            raise ValueError("keine PDF-Signatur gefunden")
        reader = PdfReader(io.BytesIO(data))
        if reader.is_encrypted:
            raise ValueError("verschlüsselte PDFs werden nicht unterstützt")
        pages.extend(reader.pages)
    return pages


class _Assembly:
    """Resolves sections of one request to byte buffers."""

    def __init__(self, request: MergeRequest, settings: Settings) -> None:
        self.request = request
        self.settings = settings
        self.radar_image = prepare_radar_image(request, settings)

    def buffers(self, section: DossierSection) -> list[bytes]:
        if section.kind == "uploaded":
            return [self._uploaded(section)]

        req = self.request
        kind = section.section_type
        if kind == SectionType.COVER:
            return [generate_cover_page(req.profile, details=req.details)]
        if kind == SectionType.PROFILE:
            return [generate_profile_page(req.profile, req.skills, req.grades,
                                          self.radar_image, req.details)]
        if kind == SectionType.COMPETENCY_RADAR:
            raise _Folded("auf der Profilseite enthalten")
        if kind == SectionType.PROJECTS:
            projects = resolve_projects(req.projects, req.selected_project_ids)
            if not projects:
                raise _Skipped("keine Projekte ausgewählt")
            return [generate_project_page(p) for p in projects]
        if kind == SectionType.GRADES:
            if has_enabled(req.sections, SectionType.PROFILE):
                raise _Folded("auf der Profilseite enthalten")
            return [generate_grades_page(req.grades, req.profile, req.details)]
        raise ValueError(f"no generator for section type {kind.value!r}")

    def _uploaded(self, section: DossierSection) -> bytes:
        doc = self.request.document_by_id(section.source_id)
        if doc is None:
            raise _Skipped(f"Dokument {section.source_id!r} nicht gefunden")
        if not doc.has_payload:
            raise _Skipped("Dokument enthält keine PDF-Daten")
        if decoded_size(doc.pdf_data) > self.settings.pipeline.max_upload_bytes:
            raise _Skipped(f"Dokument grösser als {self.settings.pipeline.max_upload_mb:.0f} MB")
        return decode_payload(doc.pdf_data)


# ─── Public API ──────────────────────────────────────────────────────────────

def merge_dossier_with_trace(
    request: MergeRequest,
    settings: Optional[Settings] = None,
) -> tuple[bytes, ExportTrace]:
    """Build the dossier; returns the PDF bytes and the per-section trace."""
    settings = settings or get_settings()
    trace = ExportTrace()

    sections = active_sections(request.sections)
    if len(sections) > settings.pipeline.max_sections:
        raise DossierBuildError(
            f"could not build document: {len(sections)} sections enabled, "
            f"limit is {settings.pipeline.max_sections}"
        )

    assembly = _Assembly(request, settings)
    writer = PdfWriter()

    for section in sections:
        started = time.perf_counter()
        outcome = SectionOutcome(
            section_id   = section.id,
            label        = section.label,
            section_type = section.section_type.value,
            status       = INCLUDED,
        )
        before = len(writer.pages)
        try:
            pages = _load_pages(assembly.buffers(section))
            for page in pages:
                writer.add_page(page)
            outcome.pages = len(pages)
            if not pages:
                outcome.status, outcome.message = SKIPPED, "keine Seiten"
        except _Folded as info:
            outcome.status, outcome.message = FOLDED, str(info)
            logger.debug("Section '%s' folded: %s", section.label, info)
        except _Skipped as info:
            outcome.status, outcome.message = SKIPPED, str(info)
            logger.info("Section '%s' skipped: %s", section.label, info)
        except Exception as exc:
            _rollback(writer, before)
            outcome.status, outcome.message = FAILED, f"{type(exc).__name__}: {exc}"
            outcome.pages = 0
            logger.warning("Section '%s' failed, continuing without it: %s", section.label, exc)
        outcome.duration_ms = (time.perf_counter() - started) * 1000
        trace.append(outcome)

    if len(writer.pages) == 0:
        raise DossierBuildError("could not build document: no section produced any pages")

    writer.add_metadata({
        "/Title":    f"Bewerbungsdossier {request.profile.name}",
        "/Producer": "Dossier Builder",
    })
    buf = io.BytesIO()
    try:
        writer.write(buf)
    except Exception as exc:
        raise DossierBuildError(f"could not build document: {exc}") from exc

    logger.info("Dossier built: %d pages from %d sections", trace.total_pages, len(sections))
    return buf.getvalue(), trace


def _rollback(writer: PdfWriter, page_count: int) -> None:
    """Drop pages a failed section managed to append before it failed."""
    while len(writer.pages) > page_count:
        del writer.pages[-1]


def merge_dossier(request: MergeRequest, settings: Optional[Settings] = None) -> bytes:
    data, _ = merge_dossier_with_trace(request, settings)
    return data


def merge(
    sections: Sequence[DossierSection],
    documents: Sequence[DossierDocument],
    profile: StudentProfile,
    skills: Sequence[Skill],
    projects: Sequence[Project],
    grades: Sequence[Grade],
    selected_project_ids: Optional[Sequence[str]] = None,
    radar_image: Optional[Union[bytes, str]] = None,
    *,
    competency_categories: Optional[Sequence[CompetencyCategory]] = None,
    details: Optional[DossierDetails] = None,
    settings: Optional[Settings] = None,
) -> bytes:
    """Positional form of ``merge_dossier``."""
    request = MergeRequest(
        sections              = list(sections),
        documents             = list(documents),
        profile               = profile,
        skills                = list(skills),
        projects              = list(projects),
        grades                = list(grades),
        selected_project_ids  = list(selected_project_ids) if selected_project_ids is not None else None,
        radar_image           = radar_image,
        competency_categories = list(competency_categories) if competency_categories is not None else None,
        details               = details,
    )
    return merge_dossier(request, settings)
