# imagetext/core/text_metrics.py
"""
Font-metrics provider: measure a string at a font/size with Pillow and return
TextMetrics (ink box relative to the baseline origin, font ascender/descender).
"""

from __future__ import annotations

import logging
import warnings

from imagetext.core.config import FALLBACK_FONT_FILES
from imagetext.core.error_codes import MetricsUnavailable
from imagetext.core.types import TextMetrics

logger = logging.getLogger(__name__)

_font_warning_emitted: set[str] = set()


def load_font(font_name: str, font_size: float):
    """Load PIL ImageFont; fallback with warning if font not found."""
    from PIL import ImageFont

    size = max(1, int(round(font_size)))
    candidates = [
        font_name,
        font_name + ".ttf",
        font_name.replace(" ", "") + ".ttf",
        *FALLBACK_FONT_FILES,
    ]
    for name in candidates:
        try:
            return ImageFont.truetype(name, size=size)
        except (OSError, IOError):
            continue
    if font_name not in _font_warning_emitted:
        _font_warning_emitted.add(font_name)
        warnings.warn(f"Font not found: {font_name!r}; using default.", UserWarning)
    return ImageFont.load_default(size=size)


def _baseline_bbox(font, text: str, ascent: float) -> tuple[float, float, float, float]:
    """Ink box of text relative to its left-baseline origin."""
    try:
        x1, y1, x2, y2 = font.getbbox(text, anchor="ls")
        return float(x1), float(y1), float(x2), float(y2)
    except (ValueError, TypeError):
        # bitmap fonts do not support anchors: box is relative to the top-left
        x1, y1, x2, y2 = font.getbbox(text)
        return float(x1), float(y1) - ascent, float(x2), float(y2) - ascent


def measure_text_metrics(font_name: str, font_size: float, text: str) -> TextMetrics:
    """
    Return TextMetrics for text rendered with font_name at font_size (px).
    Uses Pillow; fallback font with warning if requested font not found.
    Raises MetricsUnavailable if Pillow cannot measure.
    """
    if font_size <= 0:
        raise MetricsUnavailable(f"Font size must be positive, got {font_size}")
    try:
        font = load_font(font_name, font_size)
        if hasattr(font, "getmetrics"):
            ascent, descent = font.getmetrics()
        else:
            _, top, _, bottom = font.getbbox("Ag")
            ascent, descent = bottom - top, 0
        x1, y1, x2, y2 = _baseline_bbox(font, text, float(ascent))
    except (OSError, ValueError, TypeError) as e:
        raise MetricsUnavailable(f"Cannot measure {text!r} with {font_name!r} at {font_size}: {e}") from e

    metrics = TextMetrics(
        width=max(0.0, x2 - x1),
        height=max(0.0, y2 - y1),
        ascender=float(ascent),
        descender=-float(abs(descent)),
        baseline=float(ascent),
        x1=x1,
        y1=y1,
        x2=x2,
        y2=y2,
    )
    logger.debug("metrics %r %s@%s: %s", text, font_name, font_size, metrics)
    return metrics
