"""
project_page.py — One summary sheet per project
===============================================
Title with status tag, the guiding question and the milestone checklist.
A project always yields exactly one page: milestones that no longer fit
are summarised in a closing line instead of spilling onto a second page.
"""

from __future__ import annotations

from dossier_builder.models import Project, ProjectStatus
from dossier_builder.pdf_canvas import (
    CONTENT_W,
    FOOTER_Y,
    MARGIN,
    PAGE_W,
    PageCanvas,
)

STATUS_LABELS = {
    ProjectStatus.COMPLETED: "Abgeschlossen",
    ProjectStatus.ACTIVE:    "In Bearbeitung",
    ProjectStatus.PLANNING:  "Planung",
}

LEADING      = 3.5
BOTTOM_LIMIT = FOOTER_Y - 6


def generate_project_page(project: Project) -> bytes:
    pc = PageCanvas(title=f"Projekt {project.title}")
    pc.text("Projektdokumentation", PAGE_W - MARGIN, 10, size=6.5, color="gray600", align="right")

    y = 18.0
    status = STATUS_LABELS.get(project.status, str(project.status))
    tag = f"[{status}]"
    tag_w = pc.text_width(tag, size=7) + 3
    title_lines = pc.wrap(f"Projekt: {project.title}", CONTENT_W - tag_w, font="Times-Bold", size=11)
    for i, line in enumerate(title_lines):
        pc.text(line, MARGIN, y + i * 5, font="Times-Bold", size=11, color="primary")
    last = title_lines[-1] if title_lines else ""
    pc.text(tag, MARGIN + pc.text_width(last, font="Times-Bold", size=11) + 3,
            y + (len(title_lines) - 1) * 5 if title_lines else y, size=7,
            color="success" if project.status == ProjectStatus.COMPLETED else "gray600")
    y += max(len(title_lines) - 1, 0) * 5 + 3

    pc.line(MARGIN, y, MARGIN + 25, y, color="primary", width=0.4)
    y += 6

    if project.passion_question:
        pc.text("Leitfrage:", MARGIN, y, font="Helvetica-Bold", size=7.5, color="gray700")
        y += LEADING
        lines = pc.wrap(project.passion_question, CONTENT_W, font="Helvetica-Oblique", size=7.5)
        room = max(1, int((BOTTOM_LIMIT - 20 - y) // LEADING))
        n = pc.text_block(lines, MARGIN, y, CONTENT_W, font="Helvetica-Oblique",
                          size=7.5, leading=LEADING, max_lines=room)
        y += n * LEADING + 4

    if project.milestones:
        pc.text("Meilensteine:", MARGIN, y, font="Helvetica-Bold", size=7.5, color="gray700")
        y += 4
        y = _draw_milestones(pc, project, y)

    pc.line(MARGIN, FOOTER_Y, PAGE_W - MARGIN, FOOTER_Y, color="gray400", width=0.2)
    return pc.finish()


def _draw_milestones(pc: PageCanvas, project: Project, y: float) -> float:
    text_x = MARGIN + 2 + 4
    week_w = 14
    text_w = CONTENT_W - (text_x - MARGIN) - week_w

    milestones = project.milestones
    for index, m in enumerate(milestones):
        lines = pc.wrap(m.text, text_w, size=7) or [""]
        remaining = len(milestones) - index
        # keep one line free for the overflow summary
        if y + len(lines) * LEADING > BOTTOM_LIMIT - (LEADING if remaining > 1 else 0):
            pc.text(f"… und {remaining} weitere Meilensteine", MARGIN + 2, y,
                    font="Helvetica-Oblique", size=7, color="gray600")
            return y + 4
        color = "success" if m.completed else "gray600"
        pc.checkbox(MARGIN + 2, y, m.completed, color)
        if m.week:
            pc.text(f"Woche {m.week}", text_x, y, size=6.5, color="gray600")
        for i, line in enumerate(lines):
            pc.text(line, text_x + week_w, y + i * LEADING, size=7, color=color)
        y += max(len(lines) * LEADING, 4)
    return y
