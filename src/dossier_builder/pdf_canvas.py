"""
pdf_canvas.py — Millimetre drawing surface for the generated sheets
===================================================================
Every generated sheet is a single A4 page laid out with fixed millimetre
coordinates measured from the TOP-LEFT corner (y grows downwards, text y is
the baseline).  ``PageCanvas`` maps that system onto reportlab's point-based,
bottom-left canvas and adds word-wrapping, which the layouts rely on:
text is always wrapped to its column before it is placed.
"""

from __future__ import annotations

import io
from typing import Iterable, Optional, Union

from PIL import Image
from reportlab.lib.colors import Color, HexColor
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.lib.utils import ImageReader
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen import canvas

# ═══════════════════════════════════════════════════════════════════════════════
# PALETTE & PAGE GEOMETRY
# ═══════════════════════════════════════════════════════════════════════════════
COLORS: dict[str, Color] = {
    "primary": HexColor("#1E3799"),
    "black":   HexColor("#212529"),
    "gray700": HexColor("#495057"),
    "gray600": HexColor("#6C757D"),
    "gray400": HexColor("#ADB5BD"),
    "gray200": HexColor("#E9ECEF"),
    "gray100": HexColor("#F5F7FA"),
    "white":   HexColor("#FFFFFF"),
    "success": HexColor("#198754"),
    "danger":  HexColor("#DC3545"),
}

PAGE_W    = 210.0
PAGE_H    = 297.0
MARGIN    = 12.0
SIDEBAR_W = 52.0
CONTENT_W = PAGE_W - 2 * MARGIN     # 186 mm
FOOTER_Y  = PAGE_H - 10             # footer rule

_PAGE_W_PT, _PAGE_H_PT = A4

ColorLike = Union[str, Color]


def _colour(value: ColorLike) -> Color:
    if isinstance(value, Color):
        return value
    if value in COLORS:
        return COLORS[value]
    return HexColor(value)


class PageCanvas:
    """One A4 page.  Coordinates and sizes are in mm unless noted."""

    def __init__(self, title: str = "") -> None:
        self._buf = io.BytesIO()
        self.c = canvas.Canvas(self._buf, pagesize=A4)
        if title:
            self.c.setTitle(title)
        self.c.setAuthor("Dossier Builder")

    # ── coordinate mapping ────────────────────────────────────────────────────

    @staticmethod
    def _x(x: float) -> float:
        return x * mm

    @staticmethod
    def _y(y: float) -> float:
        return _PAGE_H_PT - y * mm

    # ── text ──────────────────────────────────────────────────────────────────

    @staticmethod
    def text_width(text: str, font: str = "Helvetica", size: float = 8) -> float:
        return stringWidth(text, font, size) / mm

    def text(
        self,
        text: str,
        x: float,
        y: float,
        font: str = "Helvetica",
        size: float = 8,
        color: ColorLike = "black",
        align: str = "left",
    ) -> None:
        self.c.setFont(font, size)
        self.c.setFillColor(_colour(color))
        if align == "right":
            self.c.drawRightString(self._x(x), self._y(y), text)
        elif align == "center":
            self.c.drawCentredString(self._x(x), self._y(y), text)
        else:
            self.c.drawString(self._x(x), self._y(y), text)

    def wrap(self, text: str, width: float, font: str = "Helvetica", size: float = 8) -> list[str]:
        """
        Word-wrap *text* to *width* mm.  Words wider than the column are broken
        by character so no line ever exceeds the width.
        """
        if not text:
            return []
        max_pt = width * mm

        def fits(s: str) -> bool:
            return stringWidth(s, font, size) <= max_pt

        lines: list[str] = []
        for paragraph in text.splitlines():
            cur = ""
            for word in paragraph.split():
                candidate = f"{cur} {word}" if cur else word
                if fits(candidate):
                    cur = candidate
                    continue
                if cur:
                    lines.append(cur)
                cur = ""
                for ch in word:
                    if cur and not fits(cur + ch):
                        lines.append(cur)
                        cur = ch
                    else:
                        cur += ch
            if cur:
                lines.append(cur)
        return lines

    def text_block(
        self,
        text: Union[str, Iterable[str]],
        x: float,
        y: float,
        width: float,
        font: str = "Helvetica",
        size: float = 8,
        color: ColorLike = "black",
        leading: float = 3.5,
        max_lines: Optional[int] = None,
    ) -> int:
        """Wrap and draw; returns the number of lines placed."""
        if isinstance(text, str):
            lines = self.wrap(text, width, font, size)
        else:
            lines = [ln for part in text for ln in self.wrap(part, width, font, size)]
        if max_lines is not None:
            lines = lines[:max_lines]
        for i, line in enumerate(lines):
            self.text(line, x, y + i * leading, font, size, color)
        return len(lines)

    # ── shapes ────────────────────────────────────────────────────────────────

    def line(
        self,
        x1: float, y1: float, x2: float, y2: float,
        color: ColorLike = "gray400",
        width: float = 0.2,
    ) -> None:
        self.c.setStrokeColor(_colour(color))
        self.c.setLineWidth(width * mm)
        self.c.line(self._x(x1), self._y(y1), self._x(x2), self._y(y2))

    def rect(
        self,
        x: float, y: float, w: float, h: float,
        fill: Optional[ColorLike] = None,
        stroke: Optional[ColorLike] = None,
        width: float = 0.2,
    ) -> None:
        if fill is not None:
            self.c.setFillColor(_colour(fill))
        if stroke is not None:
            self.c.setStrokeColor(_colour(stroke))
            self.c.setLineWidth(width * mm)
        self.c.rect(
            self._x(x), self._y(y + h), w * mm, h * mm,
            stroke=1 if stroke is not None else 0,
            fill=1 if fill is not None else 0,
        )

    def circle(
        self,
        cx: float, cy: float, r: float,
        fill: Optional[ColorLike] = None,
        stroke: Optional[ColorLike] = None,
        width: float = 0.25,
    ) -> None:
        if fill is not None:
            self.c.setFillColor(_colour(fill))
        if stroke is not None:
            self.c.setStrokeColor(_colour(stroke))
            self.c.setLineWidth(width * mm)
        self.c.circle(
            self._x(cx), self._y(cy), r * mm,
            stroke=1 if stroke is not None else 0,
            fill=1 if fill is not None else 0,
        )

    def checkbox(self, x: float, y: float, checked: bool, color: ColorLike, size: float = 2.6) -> None:
        """Box whose bottom edge sits on baseline *y*; ticked when *checked*."""
        top = y - size + 0.3
        self.rect(x, top, size, size, stroke=color, width=0.2)
        if checked:
            self.c.setStrokeColor(_colour(color))
            self.c.setLineWidth(0.35 * mm)
            p = self.c.beginPath()
            p.moveTo(self._x(x + 0.5), self._y(top + size * 0.55))
            p.lineTo(self._x(x + size * 0.42), self._y(top + size - 0.5))
            p.lineTo(self._x(x + size - 0.4), self._y(top + 0.5))
            self.c.drawPath(p, stroke=1, fill=0)

    # ── raster ────────────────────────────────────────────────────────────────

    def image(self, data: bytes, x: float, y: float, w: float, h: float) -> None:
        """
        Place a raster (PNG/JPEG bytes) in the given box.  Raises if the bytes
        are not a decodable image, so callers can fall back to a placeholder.
        """
        img = Image.open(io.BytesIO(data))
        img.load()
        self.c.drawImage(
            ImageReader(img), self._x(x), self._y(y + h), w * mm, h * mm,
            mask="auto", preserveAspectRatio=True, anchor="c",
        )

    # ── output ────────────────────────────────────────────────────────────────

    def finish(self) -> bytes:
        self.c.showPage()
        self.c.save()
        return self._buf.getvalue()
