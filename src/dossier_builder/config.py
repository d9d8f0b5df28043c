"""
config.py — Central settings for the Dossier Builder
=====================================================
All configuration is loaded from environment variables / .env file.
Copy .env.example → .env and adjust the values you need; every setting
has a working default so the builder runs without any .env at all.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env into os.environ (no-op if already set, safe to call multiple times)
load_dotenv(override=False)


_MB = 1024 * 1024


# ─── Helpers ────────────────────────────────────────────────────────────────

def _str(key: str, default: str = "") -> str:
    return (os.getenv(key) or default).strip()


def _int(key: str, default: int) -> int:
    """Integer env var; malformed or non-positive values fall back to *default*."""
    raw = os.getenv(key, "").strip()
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value > 0 else default


def _float(key: str, default: float) -> float:
    raw = os.getenv(key, "").strip()
    try:
        value = float(raw)
    except ValueError:
        return default
    return value if value > 0 else default


# ─── Merge pipeline ──────────────────────────────────────────────────────────

@dataclass(frozen=True)
class PipelineConfig:
    max_upload_bytes: int   # uploads above this are rejected / skipped
    max_sections:     int   # enabled sections per export

    @property
    def max_upload_mb(self) -> float:
        return self.max_upload_bytes / _MB


# ─── Competency radar raster ─────────────────────────────────────────────────

@dataclass(frozen=True)
class RadarConfig:
    size_px:     int
    inner_ratio: float = 0.10   # hub radius as a fraction of the canvas size
    outer_ratio: float = 0.35   # level-4 radius as a fraction of the canvas size
    supersample: int   = 2      # render at N× and downscale for antialiasing

    def inner_radius(self, size: int) -> float:
        return size * self.inner_ratio

    def outer_radius(self, size: int) -> float:
        return size * self.outer_ratio


# ─── Output / delivery ───────────────────────────────────────────────────────

@dataclass(frozen=True)
class OutputConfig:
    output_dir:      Path
    filename_prefix: str


# ─── App-level settings ──────────────────────────────────────────────────────

@dataclass(frozen=True)
class AppConfig:
    log_level: str


# ─── Master settings object ──────────────────────────────────────────────────

@dataclass(frozen=True)
class Settings:
    pipeline: PipelineConfig
    radar:    RadarConfig
    output:   OutputConfig
    app:      AppConfig

    def status_summary(self) -> dict[str, str]:
        """Return a dict of setting → display value for the UI."""
        return {
            "Max. Upload":     f"{self.pipeline.max_upload_mb:.0f} MB",
            "Max. Sektionen":  str(self.pipeline.max_sections),
            "Radar-Auflösung": f"{self.radar.size_px} px",
            "Ausgabeordner":   str(self.output.output_dir),
            "Log-Level":       self.app.log_level,
        }


def get_settings() -> Settings:
    """Load all configuration from environment variables."""
    level = _str("DOSSIER_LOG_LEVEL", "INFO").upper()
    if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
        level = "INFO"

    return Settings(
        pipeline=PipelineConfig(
            max_upload_bytes = int(_float("DOSSIER_MAX_UPLOAD_MB", 20.0) * _MB),
            max_sections     = _int("DOSSIER_MAX_SECTIONS", 50),
        ),
        radar=RadarConfig(
            size_px     = _int("DOSSIER_RADAR_SIZE_PX", 400),
            supersample = _int("DOSSIER_RADAR_SUPERSAMPLE", 2),
        ),
        output=OutputConfig(
            output_dir      = Path(_str("DOSSIER_OUTPUT_DIR", "output")),
            filename_prefix = _str("DOSSIER_FILENAME_PREFIX", "Bewerbungsdossier"),
        ),
        app=AppConfig(
            log_level = level,
        ),
    )
