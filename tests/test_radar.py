"""
Tests for the competency radar rasteriser (radar.py).
Geometry is checked on the wedge layout and by sampling pixels of an
un-supersampled 400 px render (inner radius 40 px, outer radius 140 px).
"""
import io

import pytest
from PIL import Image
from factories import make_category

from dossier_builder import radar as radar_module
from dossier_builder.radar import (
    hex_to_rgb,
    radar_wedges,
    render_radar,
    render_radar_png,
    wedge_alpha,
    wedge_radius,
)

CENTER = 200
INNER  = 40
OUTER  = 140


def _alpha_at_radius(img, radius):
    """Alpha of the pixel *radius* px to the right of the centre (3 o'clock)."""
    return img.getpixel((CENTER + radius, CENTER))[3]


class TestWedgeGeometry:
    def test_level_four_reaches_outer_radius(self, radar_config):
        (wedge,) = radar_wedges([make_category(levels=(4, 4))], 400, radar_config)
        assert wedge.radius == pytest.approx(OUTER)

    def test_level_zero_stays_at_inner_radius(self, radar_config):
        (wedge,) = radar_wedges([make_category(levels=(0, 0))], 400, radar_config)
        assert wedge.radius == pytest.approx(INNER)

    def test_radius_is_linear(self):
        assert wedge_radius(2, 40, 140) == pytest.approx(90)

    def test_radius_clamped(self):
        assert wedge_radius(9, 40, 140) == pytest.approx(140)
        assert wedge_radius(-1, 40, 140) == pytest.approx(40)

    def test_alpha_range(self):
        assert wedge_alpha(0) == pytest.approx(0.15)
        assert wedge_alpha(4) == pytest.approx(0.80)

    def test_wedges_split_circle_from_twelve_oclock(self, radar_config):
        cats = [make_category(f"C{i}") for i in range(4)]
        wedges = radar_wedges(cats, 400, radar_config)
        assert [w.start_deg for w in wedges] == [-90, 0, 90, 180]
        assert all(w.end_deg - w.start_deg == pytest.approx(90) for w in wedges)

    def test_empty_category_counts_as_level_zero(self, radar_config):
        (wedge,) = radar_wedges([make_category(levels=())], 400, radar_config)
        assert wedge.avg_level == 0
        assert wedge.radius == pytest.approx(INNER)


class TestHexToRgb:
    def test_six_digits(self):
        assert hex_to_rgb("#3498db") == (0x34, 0x98, 0xDB)

    def test_three_digits(self):
        assert hex_to_rgb("#f00") == (255, 0, 0)

    def test_invalid_returns_none(self):
        assert hex_to_rgb("blue") is None


class TestRenderRadar:
    def test_size_and_mode(self, radar_config):
        img = render_radar([make_category()], 400, radar_config)
        assert img.size == (400, 400)
        assert img.mode == "RGBA"

    def test_full_level_wedge_filled_to_outer_edge(self, radar_config):
        img = render_radar([make_category(levels=(4, 4), color="#ff0000")], 400, radar_config)
        r, g, b, a = img.getpixel((CENTER + OUTER - 4, CENTER))
        assert a > 0
        assert r > g and r > b
        assert _alpha_at_radius(img, OUTER + 5) == 0

    def test_zero_level_wedge_leaves_ring_empty(self, radar_config):
        img = render_radar([make_category(levels=(0, 0))], 400, radar_config)
        # between the level-1 and level-2 grid rings
        assert _alpha_at_radius(img, INNER + int(0.375 * (OUTER - INNER))) == 0

    def test_hub_drawn_over_wedges(self, radar_config):
        img = render_radar([make_category(levels=(4, 4), color="#ff0000")], 400, radar_config)
        assert img.getpixel((CENTER, CENTER)) == (255, 255, 255, 255)

    def test_unparsable_colour_still_renders(self, radar_config):
        img = render_radar([make_category(color="not-a-colour")], 400, radar_config)
        assert _alpha_at_radius(img, OUTER - 4) > 0

    def test_empty_list_gives_blank_image(self, radar_config):
        img = render_radar([], 400, radar_config)
        assert img.size == (400, 400)
        assert img.getextrema()[3] == (0, 0)

    def test_supersampled_render_keeps_size(self):
        from dossier_builder.config import RadarConfig
        img = render_radar([make_category()], 200, RadarConfig(size_px=200, supersample=3))
        assert img.size == (200, 200)

    def test_labels_use_sized_default_font(self, radar_config, monkeypatch):
        sizes = []
        original = radar_module.ImageFont.load_default

        def spy(*args, **kwargs):
            sizes.append(kwargs.get("size"))
            return original(*args, **kwargs)

        monkeypatch.setattr(radar_module.ImageFont, "load_default", spy)
        render_radar([make_category()], 400, radar_config)
        assert sizes and all(s is not None and s >= 6 for s in sizes)


class TestRenderRadarPng:
    def test_png_signature(self, radar_config):
        data = render_radar_png([make_category()], 100, radar_config)
        assert data[:8] == b"\x89PNG\r\n\x1a\n"

    def test_png_decodes(self, radar_config):
        data = render_radar_png([make_category(), make_category("B")], 100, radar_config)
        assert Image.open(io.BytesIO(data)).size == (100, 100)
