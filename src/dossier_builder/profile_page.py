"""
profile_page.py — Page 2 of the dossier: competency radar + grades
==================================================================
Top half: the competency radar raster (78 mm square, centred) flanked by
three legend entries on each side.  Bottom half: the grades table with a
class-average footer row, signature lines and a stamp circle.

``generate_grades_page`` renders the grades half on its own; the merge
orchestrator uses it when no profile section is part of the export.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence, Union

from dossier_builder.codec import decode_payload
from dossier_builder.models import DossierDetails, Grade, LegendEntry, Skill, StudentProfile
from dossier_builder.pdf_canvas import (
    CONTENT_W,
    FOOTER_Y,
    MARGIN,
    PAGE_H,
    PAGE_W,
    PageCanvas,
)
from dossier_builder.sample_data import default_details

logger = logging.getLogger(__name__)

RADAR_SIZE   = 78.0       # mm, square
RADAR_GAP    = 5.0
LEGEND_ROW_H = 10.0
ROW_H        = 6.0
SIGNATURE_W  = 50.0

# grade colour bands (Swiss 1–6 scale)
GOOD_GRADE    = 5.5
GOOD_AVERAGE  = 5.0
PASSING_GRADE = 4.0

_BAND_COLOR = {"success": "success", "danger": "danger", "neutral": "primary"}


# ─── Grade arithmetic ────────────────────────────────────────────────────────

def average_grade(grades: Sequence[Grade]) -> float:
    """Arithmetic mean of the grade values; 0.0 for an empty list."""
    if not grades:
        return 0.0
    return sum(g.value for g in grades) / len(grades)


def format_average(value: float) -> str:
    return f"{value:.2f}"


def grade_band(value: float) -> str:
    if value >= GOOD_GRADE:
        return "success"
    if value < PASSING_GRADE:
        return "danger"
    return "neutral"


def average_band(value: float) -> str:
    if value >= GOOD_AVERAGE:
        return "success"
    if value < PASSING_GRADE:
        return "danger"
    return "neutral"


# ─── Public generators ───────────────────────────────────────────────────────

def generate_profile_page(
    profile: StudentProfile,
    skills: Sequence[Skill],
    grades: Sequence[Grade],
    radar_image: Optional[Union[bytes, str]] = None,
    details: Optional[DossierDetails] = None,
) -> bytes:
    """
    Build the competency + grades sheet and return it as PDF bytes.

    ``radar_image`` may be PNG bytes, base64 text or a data URI.  Without a
    usable image a neutral placeholder box is drawn.  The legend comes from
    ``details``; if it has none, the skill list is used instead.
    """
    details = details or default_details()
    pc = PageCanvas(title=f"Kompetenzen und Noten {profile.name}")

    pc.text(profile.name, PAGE_W - MARGIN, 10, size=6.5, color="gray600", align="right")
    pc.text("Seite 2", PAGE_W - MARGIN, 13, size=6.5, color="gray600", align="right")

    y = 18.0
    _section_title(pc, "Kompetenzraster", y, underline=35)
    y += 8

    _draw_radar_block(pc, radar_image, _legend(details, skills), y)
    y += RADAR_SIZE + 6

    pc.line(MARGIN, y, PAGE_W - MARGIN, y, color="gray200", width=0.3)
    y += 6

    _draw_grades(pc, grades, details, y)
    _draw_footer(pc, details)
    return pc.finish()


def generate_grades_page(
    grades: Sequence[Grade],
    profile: Optional[StudentProfile] = None,
    details: Optional[DossierDetails] = None,
) -> bytes:
    """Standalone grades sheet (no radar block)."""
    details = details or default_details()
    pc = PageCanvas(title="Noten")
    if profile is not None:
        pc.text(profile.name, PAGE_W - MARGIN, 10, size=6.5, color="gray600", align="right")

    _draw_grades(pc, grades, details, 18.0)
    _draw_footer(pc, details)
    return pc.finish()


# ─── Radar block ─────────────────────────────────────────────────────────────

def _legend(details: DossierDetails, skills: Sequence[Skill]) -> tuple[list[LegendEntry], list[LegendEntry]]:
    if details.legend_left or details.legend_right:
        return list(details.legend_left[:3]), list(details.legend_right[:3])
    entries = [
        LegendEntry(name=s.subject, description=f"{s.value:g} / {s.full_mark:g}")
        for s in skills[:6]
    ]
    return entries[:3], entries[3:6]


def _draw_radar_block(
    pc: PageCanvas,
    radar_image: Optional[Union[bytes, str]],
    legend: tuple[list[LegendEntry], list[LegendEntry]],
    y: float,
) -> None:
    radar_x = MARGIN + (CONTENT_W - RADAR_SIZE) / 2
    left_w = radar_x - MARGIN - RADAR_GAP
    right_x = radar_x + RADAR_SIZE + RADAR_GAP
    right_w = PAGE_W - MARGIN - right_x

    placed = False
    if radar_image:
        try:
            data = radar_image if isinstance(radar_image, bytes) else decode_payload(radar_image)
            pc.image(data, radar_x, y, RADAR_SIZE, RADAR_SIZE)
            placed = True
        except Exception as exc:
            logger.warning("Radar image could not be embedded, using placeholder: %s", exc)
    if not placed:
        pc.rect(radar_x, y, RADAR_SIZE, RADAR_SIZE, fill="gray100")
        pc.text("Kompetenzradar", radar_x + RADAR_SIZE / 2, y + RADAR_SIZE / 2,
                size=8, color="gray400", align="center")

    text_start = y + (RADAR_SIZE - 3 * LEGEND_ROW_H) / 2
    for entries, x, width in ((legend[0], MARGIN, left_w), (legend[1], right_x, right_w)):
        for i, entry in enumerate(entries):
            row_y = text_start + i * LEGEND_ROW_H
            pc.text_block(entry.name, x, row_y, width - 1,
                          font="Helvetica-Bold", size=6.5, color="primary", max_lines=1)
            pc.text_block(entry.description, x, row_y + 4, width - 1,
                          size=6, color="gray700", max_lines=1)


# ─── Grades table ────────────────────────────────────────────────────────────

def _section_title(pc: PageCanvas, title: str, y: float, underline: float) -> None:
    pc.text(title, MARGIN, y, font="Times-Bold", size=12, color="primary")
    pc.line(MARGIN, y + 2, MARGIN + underline, y + 2, color="primary", width=0.5)


def _draw_grades(pc: PageCanvas, grades: Sequence[Grade], details: DossierDetails, y: float) -> None:
    _section_title(pc, "Semesterzeugnis", y, underline=32)
    if details.school_year:
        pc.text(details.school_year, MARGIN + 38, y, size=7, color="gray600")
    y += 8

    rows = list(grades) or list(details.fallback_grades)

    pc.text("Fachbereich", MARGIN, y, font="Helvetica-Bold", size=7, color="gray700")
    pc.text("Note", PAGE_W - MARGIN - 12, y, font="Helvetica-Bold", size=7,
            color="gray700", align="right")
    y += 2
    pc.line(MARGIN, y, PAGE_W - MARGIN, y, color="primary", width=0.4)
    y += 5

    if not rows:
        pc.text("Keine Noten erfasst", MARGIN, y, font="Helvetica-Oblique", size=8, color="gray600")
        return

    # footer row, signatures and stamp need ~36 mm below the last row
    max_rows = max(1, int((FOOTER_Y - 36 - y) // ROW_H))
    shown, hidden = rows[:max_rows], len(rows) - max_rows

    value_col = 20
    for i, grade in enumerate(shown):
        if i % 2 == 1:
            pc.rect(MARGIN, y - 4, CONTENT_W, ROW_H, fill="gray100")
        pc.text_block(grade.subject, MARGIN, y, CONTENT_W - value_col, size=8, max_lines=1)
        pc.text(f"{grade.value:.1f}", PAGE_W - MARGIN, y, font="Helvetica-Bold", size=8,
                color=_BAND_COLOR[grade_band(grade.value)], align="right")
        pc.line(MARGIN, y + 2, PAGE_W - MARGIN, y + 2, color="gray200", width=0.15)
        y += ROW_H
    if hidden > 0:
        pc.text(f"… {hidden} weitere Noten im Durchschnitt enthalten", MARGIN, y,
                size=6.5, color="gray600")
        y += ROW_H - 2

    y += 4
    pc.line(MARGIN, y, PAGE_W - MARGIN, y, color="gray700", width=0.4)
    avg = average_grade(rows)
    pc.text("Durchschnitt", MARGIN, y + 5, font="Helvetica-Bold", size=9)
    pc.text(format_average(avg), PAGE_W - MARGIN, y + 5, font="Helvetica-Bold", size=11,
            color=_BAND_COLOR[average_band(avg)], align="right")
    y += 14

    _draw_signatures(pc, y)


def _draw_signatures(pc: PageCanvas, y: float) -> None:
    pc.line(MARGIN, y, MARGIN + SIGNATURE_W, y, color="gray400", width=0.25)
    pc.line(PAGE_W - MARGIN - SIGNATURE_W, y, PAGE_W - MARGIN, y, color="gray400", width=0.25)
    pc.text("Klassenlehrperson", MARGIN, y + 4, size=6.5, color="gray600")
    pc.text("Schulleitung", PAGE_W - MARGIN - SIGNATURE_W, y + 4, size=6.5, color="gray600")
    pc.circle(PAGE_W / 2, y - 6, 7, stroke="gray400", width=0.25)
    pc.text("Stempel", PAGE_W / 2, y - 4, size=5, color="gray400", align="center")


def _draw_footer(pc: PageCanvas, details: DossierDetails) -> None:
    pc.line(MARGIN, FOOTER_Y, PAGE_W - MARGIN, FOOTER_Y, color="gray200", width=0.2)
    stamp = date.today().strftime("%d.%m.%Y")
    pc.text(f"{details.place}, {stamp}" if details.place else stamp,
            MARGIN, PAGE_H - 6, size=6.5, color="gray600")
    if details.school_name:
        pc.text(details.school_name, PAGE_W - MARGIN, PAGE_H - 6, size=6.5,
                color="gray600", align="right")
