# imagetext/core/config.py
"""
Central configuration for text placement, transforms and the Pillow backend.
All tunable values live here; no magic numbers in other modules.
"""

from __future__ import annotations
import os

# ----- Paths (repo-relative) -----
REPORTS_DIR: str = "reports"
SCHEMA_VERSION: str = "1.0"

# ----- Default style -----
DEFAULT_FONT_NAME: str = "Helvetica"
DEFAULT_FONT_SIZE: float = 24.0

FALLBACK_FONT_FILES: tuple[str, ...] = (
    "DejaVuSans.ttf",
    "arial.ttf",
    "Arial.ttf",
)
"""Tried in order after the requested font; Pillow's default font comes last."""

# ----- Canvas -----
DEFAULT_CANVAS_WIDTH_PX: int = 500
DEFAULT_CANVAS_HEIGHT_PX: int = 500
DEFAULT_EXPORT_FORMAT: str = "PNG"

# ----- Transforms -----
RESAMPLE_FILTER: str = "LANCZOS"
"""Name of the PIL.Image.Resampling member used by resizing()."""

COLOR_EQ_TOLERANCE: float = 0.001
"""Per-channel tolerance for Color equality."""

# ----- Backend resource limits -----
MAX_IMAGE_PIXELS: int = int(os.environ.get("IMAGETEXT_MAX_IMAGE_PIXELS", str(64 * 1024 * 1024)))
"""Applied to PIL.Image.MAX_IMAGE_PIXELS while a Backend is initialized."""

# ----- Debug rendering -----
DEBUG_DPI: int = 100
DEBUG_ANCHOR_COLOR: str = "red"
DEBUG_INK_COLOR: str = "lime"
DEBUG_CROP_COLOR: str = "orange"

# ----- Debug flags -----
IMAGETEXT_DEBUG: bool = os.environ.get("IMAGETEXT_DEBUG", "").lower() in ("1", "true", "yes")
"""Write debug.png next to every CLI run. Set env IMAGETEXT_DEBUG=1 to enable."""
