"""
Shared pytest fixtures for the Dossier Builder test suite.
Factory helpers live in tests/factories.py so they can be imported
directly by test modules as well as being used here.
"""
import sys
import os

_tests_dir = os.path.dirname(__file__)
_src_dir   = os.path.join(_tests_dir, "..", "src")
for _p in (_tests_dir, _src_dir):
    if _p not in sys.path:
        sys.path.insert(0, _p)

import dataclasses

import pytest

from factories import make_category, make_grades, make_pdf, make_profile

from dossier_builder.config import PipelineConfig, RadarConfig, get_settings
from dossier_builder.radar import render_radar_png


# ─── pytest fixtures ──────────────────────────────────────────────────────────

@pytest.fixture
def settings():
    return get_settings()


@pytest.fixture
def small_settings(settings):
    """Tight limits: 2 KB uploads, 5 sections."""
    return dataclasses.replace(settings, pipeline=PipelineConfig(max_upload_bytes=2048, max_sections=5))


@pytest.fixture
def radar_config():
    # supersample=1 keeps pixels exact for geometry assertions
    return RadarConfig(size_px=400, supersample=1)


@pytest.fixture
def profile():
    return make_profile()


@pytest.fixture
def grades():
    return make_grades()


@pytest.fixture
def three_page_pdf():
    return make_pdf(3, "ANHANG")


@pytest.fixture
def radar_png(radar_config):
    return render_radar_png([make_category("Selbst"), make_category("Sozial", (2, 3))],
                            size=120, config=radar_config)
