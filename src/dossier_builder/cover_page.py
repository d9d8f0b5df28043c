"""
cover_page.py — Page 1 of the dossier: the CV / cover sheet
===========================================================
Two-column A4 layout:

  sidebar (52 mm)   initials disc, name, contact, skill bars, languages,
                    certificates, soft skills
  main column       heading, name + target job, bio, strengths / interests /
                    values rows, education timeline, job targets, references

Every free-text value is word-wrapped to its column.  Absent optional
profile fields fall back to placeholder strings, so the sheet always renders.
"""

from __future__ import annotations

from typing import Optional, Sequence

from dossier_builder.models import DossierDetails, Skill, StudentProfile
from dossier_builder.pdf_canvas import (
    FOOTER_Y,
    MARGIN,
    PAGE_H,
    PAGE_W,
    SIDEBAR_W,
    PageCanvas,
)
from dossier_builder.sample_data import (
    DEFAULT_BIO,
    DEFAULT_INTERESTS,
    DEFAULT_JOB_TARGETS,
    DEFAULT_STRENGTHS,
    DEFAULT_VALUES,
    default_details,
)

SIDEBAR_X     = MARGIN
SIDEBAR_END_X = MARGIN + SIDEBAR_W
MAIN_X        = SIDEBAR_END_X + 6
MAIN_W        = PAGE_W - MARGIN - MAIN_X       # 128 mm
LABEL_W       = 22                             # info-row label column
BOTTOM_LIMIT  = FOOTER_Y - 4                   # last usable baseline


def generate_cover_page(
    profile: StudentProfile,
    skills: Optional[Sequence[Skill]] = None,
    details: Optional[DossierDetails] = None,
) -> bytes:
    """
    Build the one-page CV sheet and return it as PDF bytes.

    ``skills`` feeds the sidebar skill bars; when empty the bars come from
    ``details.it_skills``.
    """
    details = details or default_details()
    pc = PageCanvas(title=f"Lebenslauf {profile.name}")

    _draw_sidebar(pc, profile, list(skills or details.it_skills), details)
    _draw_main_column(pc, profile, details)

    pc.line(MARGIN, FOOTER_Y, PAGE_W - MARGIN, FOOTER_Y, color="gray400", width=0.2)
    if details.footer_contact:
        pc.text(details.footer_contact, MARGIN, PAGE_H - 6, size=6.5, color="gray600")
    pc.text("Seite 1", PAGE_W - MARGIN, PAGE_H - 6, size=6.5, color="gray600", align="right")
    return pc.finish()


# ─── Sidebar ─────────────────────────────────────────────────────────────────

def _sidebar_heading(pc: PageCanvas, title: str, y: float) -> float:
    pc.text(title, SIDEBAR_X, y, font="Helvetica-Bold", size=7, color="gray700")
    pc.line(SIDEBAR_X, y + 1, SIDEBAR_X + 15, y + 1, color="primary", width=0.4)
    return y + 5


def _draw_sidebar(
    pc: PageCanvas,
    profile: StudentProfile,
    skills: list[Skill],
    details: DossierDetails,
) -> None:
    width = SIDEBAR_W - 2
    pc.rect(0, 0, SIDEBAR_END_X + 2, PAGE_H, fill="gray100")

    y = 15.0
    photo_r = 14
    photo_x = SIDEBAR_X + SIDEBAR_W / 2
    pc.circle(photo_x, y + photo_r, photo_r, fill="primary")
    pc.text(profile.initials(), photo_x, y + photo_r + 1.8,
            font="Helvetica-Bold", size=14, color="white", align="center")
    y += photo_r * 2 + 8

    n = pc.text_block(profile.name or "Name", SIDEBAR_X, y, width,
                      font="Times-Bold", size=10, color="primary", leading=4)
    y += (max(n, 1) - 1) * 4 + 6

    if details.contact_lines:
        y = _sidebar_heading(pc, "KONTAKT", y)
        for entry in details.contact_lines:
            if not entry:
                y += 2
                continue
            n = pc.text_block(entry, SIDEBAR_X, y, width, size=7, leading=3)
            y += n * 3
        y += 4

    if skills and y < BOTTOM_LIMIT:
        y = _sidebar_heading(pc, "EDV-KENNTNISSE", y)
        bar_w, bar_h = width, 2.5
        for skill in skills:
            if y > BOTTOM_LIMIT:
                break
            pc.text((pc.wrap(skill.subject, width, size=7) or [""])[0],
                    SIDEBAR_X, y, size=7)
            pc.rect(SIDEBAR_X, y + 1, bar_w, bar_h, fill="gray200")
            if skill.fraction > 0:
                pc.rect(SIDEBAR_X, y + 1, bar_w * skill.fraction, bar_h, fill="primary")
            y += 7
        y += 2

    if details.languages and y < BOTTOM_LIMIT:
        y = _sidebar_heading(pc, "SPRACHEN", y)
        for lang in details.languages:
            if y > BOTTOM_LIMIT:
                break
            level_w = pc.text_width(lang.level, size=7)
            name = pc.wrap(lang.name, max(width - level_w - 2, 8), size=7)
            pc.text(name[0] if name else "", SIDEBAR_X, y, size=7)
            pc.text(lang.level, SIDEBAR_X + width, y, size=7, color="gray600", align="right")
            y += 4
        y += 4

    for title, items in (("ZERTIFIKATE", details.certificates), ("SOFT SKILLS", details.soft_skills)):
        if not items or y > BOTTOM_LIMIT:
            continue
        y = _sidebar_heading(pc, title, y)
        for item in items:
            if y > BOTTOM_LIMIT:
                break
            n = pc.text_block(f"• {item}", SIDEBAR_X, y, width, size=6.5, leading=3.5)
            y += n * 3.5
        y += 2.5


# ─── Main column ─────────────────────────────────────────────────────────────

def _main_heading(pc: PageCanvas, title: str, y: float) -> float:
    pc.text(title, MAIN_X, y, font="Helvetica-Bold", size=8, color="primary")
    return y + 4


def _draw_main_column(pc: PageCanvas, profile: StudentProfile, details: DossierDetails) -> None:
    y = 15.0
    pc.text("BEWERBUNGSDOSSIER", MAIN_X, y, size=8, color="gray600")
    y += 6

    n = pc.text_block((profile.name or "Name").upper(), MAIN_X, y, MAIN_W,
                      font="Times-Bold", size=18, color="primary", leading=7)
    y += (max(n, 1) - 1) * 7 + 5

    job_targets = profile.job_targets or DEFAULT_JOB_TARGETS
    n = pc.text_block(f"Angehende/r {job_targets[0]}", MAIN_X, y, MAIN_W,
                      size=9, color="gray700", leading=4)
    y += (max(n, 1) - 1) * 4
    pc.line(MAIN_X, y + 2, MAIN_X + 40, y + 2, color="primary", width=0.6)
    y += 10

    y = _main_heading(pc, "PROFIL", y)
    n = pc.text_block(profile.bio or DEFAULT_BIO, MAIN_X, y, MAIN_W, size=8, leading=3.5)
    y += n * 3.5 + 4

    for label, values, fallback in (
        ("Stärken:", profile.strengths, DEFAULT_STRENGTHS),
        ("Interessen:", profile.interests, DEFAULT_INTERESTS),
        ("Werte:", profile.values, DEFAULT_VALUES),
    ):
        pc.text(label, MAIN_X, y, font="Helvetica-Bold", size=7, color="gray700")
        n = pc.text_block(", ".join(values or fallback), MAIN_X + LABEL_W, y,
                          MAIN_W - LABEL_W, size=7, leading=3)
        y += max(n * 3, 3.5) + 1.5
    y += 5

    if details.education and y < BOTTOM_LIMIT:
        y = _draw_timeline(pc, details, _main_heading(pc, "AUSBILDUNG", y) + 1) + 3

    if y < BOTTOM_LIMIT:
        y = _main_heading(pc, "BERUFSZIELE", y)
        for i, goal in enumerate(job_targets, start=1):
            if y > BOTTOM_LIMIT:
                break
            prefix = f"{i}. "
            indent = pc.text_width(prefix, size=7.5)
            pc.text(prefix, MAIN_X + 3, y, size=7.5)
            n = pc.text_block(goal, MAIN_X + 3 + indent, y, MAIN_W - 3 - indent, size=7.5, leading=3.5)
            y += max(n * 3.5, 4)
        y += 5

    if details.references and y < BOTTOM_LIMIT:
        y = _main_heading(pc, "REFERENZEN", y)
        for ref in details.references:
            if y > BOTTOM_LIMIT:
                break
            n = pc.text_block(ref, MAIN_X + 3, y, MAIN_W - 3, size=7, leading=3.5)
            y += n * 3.5


def _draw_timeline(pc: PageCanvas, details: DossierDetails, y: float) -> float:
    """Vertical timeline; the first (most recent) entry gets the accent dot."""
    tl_x = MAIN_X + 1.5
    text_x, text_w = MAIN_X + 6, MAIN_W - 6

    entries = []
    for entry in details.education:
        title = pc.wrap(entry.title, text_w, font="Helvetica-Bold", size=8)
        place = pc.wrap(entry.place, text_w, size=7)
        height = 3.5 + max(len(title), 1) * 3.5 + len(place) * 3 + 3
        entries.append((entry, title, place, height))

    end = y + sum(h for *_, h in entries) - 4
    pc.line(tl_x, y, tl_x, min(end, BOTTOM_LIMIT), color="gray400", width=0.25)

    for i, (entry, title, place, height) in enumerate(entries):
        if y > BOTTOM_LIMIT:
            break
        pc.circle(tl_x, y + 1, 1.2, fill="primary" if i == 0 else "gray400")
        pc.text(entry.period, text_x, y, size=6.5, color="gray600")
        cy = y + 3.5
        for line in title:
            pc.text(line, text_x, cy, font="Helvetica-Bold", size=8)
            cy += 3.5
        for line in place:
            pc.text(line, text_x, cy - 0.5, size=7, color="gray600")
            cy += 3
        y += height
    return y
