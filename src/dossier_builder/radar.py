"""
radar.py — Competency radar rasteriser
======================================
Renders the competency wheel's category view to a bitmap so the profile
sheet can embed it, independent of any UI toolkit.

Geometry
--------
  * N categories → N equal wedges, starting at 12 o'clock, clockwise.
  * A wedge reaches from the hub to a radius that scales linearly with the
    category's average level: level 0 → inner radius, level 4 → outer radius.
  * Fill alpha grows with the level (0.15 … 0.80), tinted with the category
    colour; level-0 wedges get a flat neutral fill.
  * Grid rings at every quarter level, spokes at wedge boundaries, a white
    hub disc drawn last, category labels outside the outer radius.

The image is drawn at ``supersample``× resolution and downscaled with
LANCZOS, which gives antialiased arcs without a vector backend.
"""

from __future__ import annotations

import io
import math
import re
from dataclasses import dataclass
from typing import Optional, Sequence

from PIL import Image, ImageDraw, ImageFont

from dossier_builder.config import RadarConfig, get_settings
from dossier_builder.models import CompetencyCategory

MAX_LEVEL = 4

NEUTRAL_FILL = (248, 250, 252, 255)   # #F8FAFC
NEUTRAL_TINT = (148, 163, 184)        # #94A3B8, for unparsable colours
GRID_COLOR   = (226, 232, 240, 255)   # #E2E8F0
HUB_FILL     = (255, 255, 255, 255)
HUB_BORDER   = (203, 213, 225, 255)   # #CBD5E1
LABEL_COLOR  = (51, 65, 85, 255)      # #334155

# reference canvas the label offset / font size were designed for
_REFERENCE_SIZE = 400
_LABEL_OFFSET   = 18
_LABEL_FONT_PX  = 11

_HEX = re.compile(r"^#?([0-9a-f]{6}|[0-9a-f]{3})$", re.I)


@dataclass(frozen=True)
class Wedge:
    name:        str
    start_deg:   float
    end_deg:     float
    avg_level:   float
    radius:      float
    alpha:       float

    @property
    def mid_deg(self) -> float:
        return (self.start_deg + self.end_deg) / 2


# ─── Pure geometry ───────────────────────────────────────────────────────────

def category_average(category: CompetencyCategory) -> float:
    return category.average_level()


def wedge_radius(avg_level: float, inner: float, outer: float) -> float:
    level = max(0.0, min(float(MAX_LEVEL), avg_level))
    return inner + (outer - inner) * (level / MAX_LEVEL)


def wedge_alpha(avg_level: float) -> float:
    level = max(0.0, min(float(MAX_LEVEL), avg_level))
    return 0.15 + (level / MAX_LEVEL) * 0.65


def hex_to_rgb(value: str) -> Optional[tuple[int, int, int]]:
    m = _HEX.match(value.strip())
    if not m:
        return None
    h = m.group(1)
    if len(h) == 3:
        h = "".join(c * 2 for c in h)
    return int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16)


def radar_wedges(
    categories: Sequence[CompetencyCategory],
    size: int,
    config: Optional[RadarConfig] = None,
) -> list[Wedge]:
    """Wedge layout for a *size*×*size* canvas (angles in PIL degrees)."""
    config = config or get_settings().radar
    if not categories:
        return []
    inner, outer = config.inner_radius(size), config.outer_radius(size)
    step = 360.0 / len(categories)
    wedges = []
    for i, cat in enumerate(categories):
        avg = category_average(cat)
        start = -90.0 + i * step
        wedges.append(Wedge(
            name      = cat.name,
            start_deg = start,
            end_deg   = start + step,
            avg_level = avg,
            radius    = wedge_radius(avg, inner, outer),
            alpha     = wedge_alpha(avg),
        ))
    return wedges


# ─── Rendering ───────────────────────────────────────────────────────────────

def _point(cx: float, cy: float, radius: float, deg: float) -> tuple[float, float]:
    rad = math.radians(deg)
    return cx + math.cos(rad) * radius, cy + math.sin(rad) * radius


def _circle_box(cx: float, cy: float, r: float) -> list[float]:
    return [cx - r, cy - r, cx + r, cy + r]


def render_radar(
    categories: Sequence[CompetencyCategory],
    size: Optional[int] = None,
    config: Optional[RadarConfig] = None,
) -> Image.Image:
    """Return the radar as an RGBA image of *size*×*size* pixels."""
    config = config or get_settings().radar
    size = size or config.size_px
    if not categories:
        return Image.new("RGBA", (size, size), (0, 0, 0, 0))

    ss = max(1, config.supersample)
    full = size * ss
    scale = full / _REFERENCE_SIZE
    cx = cy = full / 2
    inner, outer = config.inner_radius(full), config.outer_radius(full)
    wedges = radar_wedges(categories, full, config)

    img = Image.new("RGBA", (full, full), (0, 0, 0, 0))
    for wedge, cat in zip(wedges, categories):
        box = _circle_box(cx, cy, wedge.radius)
        if wedge.avg_level > 0:
            rgb = hex_to_rgb(cat.color) or NEUTRAL_TINT
            layer = Image.new("RGBA", img.size, (0, 0, 0, 0))
            ImageDraw.Draw(layer).pieslice(
                box, wedge.start_deg, wedge.end_deg,
                fill=rgb + (round(255 * wedge.alpha),),
                outline=rgb + (255,),
                width=max(1, round(1.5 * ss)),
            )
            img = Image.alpha_composite(img, layer)
        else:
            ImageDraw.Draw(img).pieslice(box, wedge.start_deg, wedge.end_deg, fill=NEUTRAL_FILL)

    draw = ImageDraw.Draw(img)
    for quarter in range(1, MAX_LEVEL + 1):
        r = wedge_radius(quarter, inner, outer)
        draw.ellipse(_circle_box(cx, cy, r), outline=GRID_COLOR, width=ss)

    for wedge in wedges:
        draw.line(
            [_point(cx, cy, inner, wedge.start_deg), _point(cx, cy, outer, wedge.start_deg)],
            fill=GRID_COLOR, width=ss,
        )

    draw.ellipse(_circle_box(cx, cy, inner), fill=HUB_FILL, outline=HUB_BORDER, width=ss)

    font = ImageFont.load_default(size=max(6, round(_LABEL_FONT_PX * scale)))
    label_r = outer + _LABEL_OFFSET * scale
    for wedge in wedges:
        x, y = _point(cx, cy, label_r, wedge.mid_deg)
        left, top, right, bottom = draw.textbbox((0, 0), wedge.name, font=font)
        draw.text(
            (x - (right - left) / 2 - left, y - (bottom - top) / 2 - top),
            wedge.name, font=font, fill=LABEL_COLOR,
        )

    if ss == 1:
        return img
    return img.resize((size, size), Image.Resampling.LANCZOS)


def render_radar_png(
    categories: Sequence[CompetencyCategory],
    size: Optional[int] = None,
    config: Optional[RadarConfig] = None,
) -> bytes:
    buf = io.BytesIO()
    render_radar(categories, size, config).save(buf, format="PNG")
    return buf.getvalue()
