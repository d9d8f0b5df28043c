"""
sections.py — The dossier's table of contents
=============================================
Sections are plain ``DossierSection`` records; every function here returns a
new list and never mutates its input.  Functions that change membership or
position re-derive a dense ``order`` (0 … n-1) from list position.

Rules consumed by the merge orchestrator
----------------------------------------
  * only enabled sections are processed, sorted by ``order`` (stable: ties
    keep list position);
  * a competencyRadar section never contributes pages of its own, it only
    signals that the radar belongs on the profile sheet;
  * a grades section contributes nothing while a profile section is enabled,
    because the profile sheet already carries the grades table.
"""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

from dossier_builder.models import DossierDocument, DossierSection, SectionType

GENERATED_COVER_ID = "gen-cover"
UPLOADED_COVER_PREFIX = "up-cover-"


# ─── Ordering ────────────────────────────────────────────────────────────────

def active_sections(sections: Iterable[DossierSection]) -> list[DossierSection]:
    """Enabled sections, sorted by ``order``; ``sorted`` is stable on ties."""
    return sorted((s for s in sections if s.enabled), key=lambda s: s.order)


def renumber(sections: Sequence[DossierSection]) -> list[DossierSection]:
    return [s if s.order == i else s.model_copy(update={"order": i}) for i, s in enumerate(sections)]


def _index_of(sections: Sequence[DossierSection], section_id: str) -> int:
    for i, s in enumerate(sections):
        if s.id == section_id:
            return i
    raise KeyError(f"unknown section id: {section_id!r}")


def move_section(
    sections: Sequence[DossierSection],
    section_id: str,
    target_index: int,
) -> list[DossierSection]:
    """Move a section to *target_index* (clamped), as a drag-and-drop would."""
    items = list(sections)
    item = items.pop(_index_of(items, section_id))
    target_index = max(0, min(target_index, len(items)))
    items.insert(target_index, item)
    return renumber(items)


def insert_section(
    sections: Sequence[DossierSection],
    section: DossierSection,
    index: Optional[int] = None,
) -> list[DossierSection]:
    items = [s for s in sections if s.id != section.id]
    items.insert(len(items) if index is None else max(0, min(index, len(items))), section)
    return renumber(items)


def remove_section(sections: Sequence[DossierSection], section_id: str) -> list[DossierSection]:
    return renumber([s for s in sections if s.id != section_id])


def toggle_section(sections: Sequence[DossierSection], section_id: str) -> list[DossierSection]:
    _index_of(sections, section_id)
    return [
        s.model_copy(update={"enabled": not s.enabled}) if s.id == section_id else s
        for s in sections
    ]


# ─── Queries ─────────────────────────────────────────────────────────────────

def has_enabled(sections: Iterable[DossierSection], section_type: SectionType) -> bool:
    return any(s.enabled and s.section_type == section_type for s in sections)


def contributes_pages(section: DossierSection, sections: Iterable[DossierSection]) -> bool:
    """
    False for sections folded into the profile sheet.  Uploaded sections
    always contribute (even an uploaded section typed grades).
    """
    if section.kind != "generated":
        return True
    if section.section_type == SectionType.COMPETENCY_RADAR:
        return False
    if section.section_type == SectionType.GRADES:
        return not has_enabled(sections, SectionType.PROFILE)
    return True


# ─── Cover slot ──────────────────────────────────────────────────────────────

def cover_document(documents: Iterable[DossierDocument]) -> Optional[DossierDocument]:
    """The uploaded document flagged as cover replacement (first one wins)."""
    return next((d for d in documents if d.is_cover and d.has_payload), None)


def cover_section(documents: Iterable[DossierDocument]) -> DossierSection:
    doc = cover_document(documents)
    if doc is not None:
        return DossierSection.uploaded(
            id=f"{UPLOADED_COVER_PREFIX}{doc.id}",
            document_id=doc.id,
            label="Deckblatt (eigen)",
            section_type=SectionType.COVER,
        )
    return DossierSection.generated(GENERATED_COVER_ID, SectionType.COVER, "Deckblatt")


def apply_cover(
    sections: Sequence[DossierSection],
    documents: Iterable[DossierDocument],
) -> list[DossierSection]:
    """
    Replace whatever currently fills the cover slot with the right
    representation (uploaded cover if one exists, generated otherwise) and put
    it first.  The two representations never coexist.
    """
    rest = [s for s in sections if s.section_type != SectionType.COVER]
    return renumber([cover_section(documents), *rest])


def default_sections(documents: Sequence[DossierDocument]) -> list[DossierSection]:
    """
    Initial table of contents: cover, the non-cover uploads in list order,
    then the generated sheets.  Grades start disabled because the profile
    sheet already shows them.
    """
    uploads = [d for d in documents if d.has_payload and not d.is_cover]
    candidates = [
        cover_section(documents),
        *(
            DossierSection.uploaded(id=f"up-{d.id}", document_id=d.id, label=d.title, order=1 + i)
            for i, d in enumerate(uploads)
        ),
        DossierSection.generated("gen-profile", SectionType.PROFILE, "Profil & Kompetenzen", order=20),
        DossierSection.generated("gen-competencyRadar", SectionType.COMPETENCY_RADAR, "Kompetenzradar", order=25),
        DossierSection.generated("gen-projects", SectionType.PROJECTS, "Projekte", order=30),
        DossierSection.generated("gen-grades", SectionType.GRADES, "Noten", enabled=False, order=40),
    ]
    seen: set[str] = set()
    unique = []
    for s in candidates:
        if s.id not in seen:
            seen.add(s.id)
            unique.append(s)
    return sorted(unique, key=lambda s: s.order)
