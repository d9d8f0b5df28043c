"""
Factory helpers for building test objects.
Imported by conftest.py fixtures AND directly by test modules.
"""
import sys
import os

# Ensure both src/ and tests/ are importable in all test files
_tests_dir = os.path.dirname(__file__)
_src_dir   = os.path.join(_tests_dir, "..", "src")
for _p in (_tests_dir, _src_dir):
    if _p not in sys.path:
        sys.path.insert(0, _p)

import io

from pypdf import PdfReader
from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas

from dossier_builder.codec import encode_payload
from dossier_builder.models import (
    Competency,
    CompetencyCategory,
    DossierDocument,
    DossierSection,
    Grade,
    MergeRequest,
    Milestone,
    Project,
    ProjectStatus,
    SectionType,
    StudentProfile,
)


# ─── PDF helpers ──────────────────────────────────────────────────────────────

def make_pdf(pages: int = 1, label: str = "UPLOAD") -> bytes:
    """A small PDF whose page i carries the text '<label> <i>' (1-based)."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=A4)
    for i in range(1, pages + 1):
        c.setFont("Helvetica", 24)
        c.drawString(72, 720, f"{label} {i}")
        c.showPage()
    c.save()
    return buf.getvalue()


def page_count(data: bytes) -> int:
    return len(PdfReader(io.BytesIO(data)).pages)


def page_texts(data: bytes) -> list[str]:
    return [page.extract_text() or "" for page in PdfReader(io.BytesIO(data)).pages]


# ─── Domain records ───────────────────────────────────────────────────────────

def make_profile(name: str = "Anna Muster", **overrides) -> StudentProfile:
    fields = dict(
        name          = name,
        class_name    = "ZBA 2B",
        zba_profile   = "Integrativ",
        bio           = "Ich arbeite gerne mit Menschen und lerne schnell.",
        strengths     = ["Ausdauer", "Teamgeist"],
        interests     = ["Musik", "Sport"],
        values        = ["Respekt"],
        job_targets   = ["Fachfrau Gesundheit EFZ"],
        current_phase = "Bewerben",
    )
    fields.update(overrides)
    return StudentProfile(**fields)


def make_grades(values=(4.0, 5.0, 6.0)) -> list[Grade]:
    return [
        Grade(subject=f"Fach {i}", value=v, date="2026-01-10", category="Pruefung")
        for i, v in enumerate(values, 1)
    ]


def make_project(
    project_id: str = "p1",
    title: str = "Gartenprojekt",
    status: ProjectStatus = ProjectStatus.ACTIVE,
    milestones: int = 3,
    question: str = "Wie plane ich ein Projekt von Anfang bis Ende?",
) -> Project:
    return Project(
        id               = project_id,
        title            = title,
        status           = status,
        passion_question = question,
        milestones       = [
            Milestone(week=i, text=f"Meilenstein {i}", completed=i % 2 == 0)
            for i in range(1, milestones + 1)
        ],
    )


def make_category(name: str = "Selbst", levels=(4, 4), color: str = "#ff0000") -> CompetencyCategory:
    return CompetencyCategory(
        name         = name,
        full_name    = name,
        color        = color,
        competencies = [Competency(id=f"{name}-{i}", name=f"K{i}", level=lvl) for i, lvl in enumerate(levels)],
    )


# ─── Documents and sections ───────────────────────────────────────────────────

def make_document(
    doc_id: str = "d1",
    pages: int = 1,
    label: str = "UPLOAD",
    is_cover: bool = False,
    data: bytes | None = None,
) -> DossierDocument:
    payload = make_pdf(pages, label) if data is None else data
    return DossierDocument(
        id       = doc_id,
        title    = f"{label}.pdf",
        date     = "01/26",
        pdf_data = encode_payload(payload),
        is_cover = is_cover,
    )


def uploaded(doc_id: str, order: int = 0, enabled: bool = True) -> DossierSection:
    return DossierSection.uploaded(id=f"up-{doc_id}", document_id=doc_id,
                                   label=f"Upload {doc_id}", enabled=enabled, order=order)


def generated(section_type: SectionType, order: int = 0, enabled: bool = True) -> DossierSection:
    return DossierSection.generated(f"gen-{section_type.value}", section_type,
                                    section_type.value, enabled=enabled, order=order)


def make_request(sections, documents=(), **overrides) -> MergeRequest:
    fields = dict(
        sections  = list(sections),
        documents = list(documents),
        profile   = make_profile(),
        grades    = make_grades(),
        projects  = [make_project("p1", "Alpha Projekt"), make_project("p2", "Beta Projekt")],
    )
    fields.update(overrides)
    return MergeRequest(**fields)
