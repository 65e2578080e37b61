# imagetext/core/image.py
"""
Immutable raster image backed by Pillow. Every operation returns a new Image:
adding_text (position resolver), resizing (aspect fit), cropping (safe clamp).
Decode/encode and drawing are delegated to Pillow; failures map to BackendError subclasses.
"""

from __future__ import annotations

import io
import logging
from pathlib import Path

import numpy as np
from PIL import Image as PILImage
from PIL import ImageDraw, UnidentifiedImageError

from imagetext.core.color import WHITE, Color
from imagetext.core.config import DEFAULT_EXPORT_FORMAT, RESAMPLE_FILTER
from imagetext.core.error_codes import (
    CropFailed,
    DrawingFailed,
    ExportFailed,
    InitializationFailed,
    InvalidImageData,
    OutOfBoundsCrop,
    ResizeFailed,
    TextRenderingFailed,
)
from imagetext.core.geometry import clamp_crop, fit_size, require_crop_area
from imagetext.core.position import MetricsProvider, calculate_position_and_alignment
from imagetext.core.text_metrics import load_font
from imagetext.core.types import Alignment, Rect, Size, TextConfiguration

logger = logging.getLogger(__name__)

# Pillow anchors: horizontal l/m/r + baseline s
_BASELINE_ANCHORS: dict[str, str] = {"left": "ls", "center": "ms", "right": "rs"}


class Image:
    """Wraps a PIL image; never mutates it after construction."""

    def __init__(self, pil_image: PILImage.Image) -> None:
        self._im = pil_image

    # ----- Construction / decode -----
    @classmethod
    def new(cls, width: int, height: int, background: Color = WHITE) -> Image:
        if width <= 0 or height <= 0:
            raise InitializationFailed(f"Canvas size must be positive, got {width}x{height}")
        try:
            im = PILImage.new("RGBA", (int(width), int(height)), background.to_rgba_bytes())
        except (ValueError, MemoryError) as e:
            raise InitializationFailed(str(e)) from e
        return cls(im)

    @classmethod
    def from_bytes(cls, data: bytes) -> Image:
        try:
            im = PILImage.open(io.BytesIO(data))
            im.load()
        except (UnidentifiedImageError, OSError, ValueError, PILImage.DecompressionBombError) as e:
            raise InvalidImageData(f"Cannot decode image data: {e}") from e
        return cls(im)

    @classmethod
    def open(cls, path: str | Path) -> Image:
        p = Path(path)
        if not p.exists():
            raise FileNotFoundError(f"Image file not found: {p}")
        return cls.from_bytes(p.read_bytes())

    # ----- Encode -----
    def to_bytes(self, format: str = DEFAULT_EXPORT_FORMAT) -> bytes:
        buf = io.BytesIO()
        self._save(buf, format)
        return buf.getvalue()

    def write(self, path: str | Path, format: str | None = None) -> Path:
        p = Path(path)
        if format is None:
            format = PILImage.registered_extensions().get(p.suffix.lower(), DEFAULT_EXPORT_FORMAT)
        self._save(p, format)
        return p

    def _save(self, fp, format: str) -> None:
        im = self._im
        if format.upper() in ("JPEG", "JPG", "BMP") and im.mode not in ("RGB", "L"):
            im = im.convert("RGB")
        try:
            im.save(fp, format=format)
        except (OSError, ValueError, KeyError) as e:
            raise ExportFailed(f"Cannot encode as {format}: {e}") from e

    # ----- Accessors -----
    @property
    def size(self) -> Size:
        w, h = self._im.size
        if w <= 0 or h <= 0:
            raise InvalidImageData(f"Image has no pixels: {w}x{h}")
        return Size(float(w), float(h))

    @property
    def mode(self) -> str:
        return self._im.mode

    def to_pil(self) -> PILImage.Image:
        """Copy of the underlying PIL image."""
        return self._im.copy()

    def to_array(self) -> np.ndarray:
        """RGBA pixel array of shape (H, W, 4)."""
        return np.asarray(self._im.convert("RGBA"))

    # ----- Operations -----
    def adding_text(self, config: TextConfiguration, measure: MetricsProvider | None = None) -> Image:
        """
        Draw config.text at its resolved baseline anchor with the derived alignment.
        MetricsUnavailable from the provider propagates; DrawingFailed if no drawing surface
        can be made, TextRenderingFailed if the text itself cannot be drawn.
        """
        size = self.size
        x, y, alignment = calculate_position_and_alignment(config, size, measure=measure)
        style = config.style
        try:
            im = self._im.copy()
            if im.mode not in ("RGBA", "RGB"):
                im = im.convert("RGBA")
            draw = ImageDraw.Draw(im)
        except (OSError, ValueError) as e:
            raise DrawingFailed(f"{type(e).__name__}: {e}") from e
        try:
            font = load_font(style.font_name, style.font_size)
            _draw_at_baseline(draw, (x, y), config.text, font, style.color.to_rgba_bytes(), alignment)
        except (OSError, ValueError, TypeError) as e:
            raise TextRenderingFailed(f"{type(e).__name__}: {e}") from e
        logger.debug("drew %r at (%d, %d) align=%s", config.text, x, y, alignment)
        return Image(im)

    def resizing(self, new_size: Size, maintain_aspect_ratio: bool = True) -> Image:
        """Resize to fit_size(current, new_size); dimensions truncated to ints, Lanczos resample."""
        final = fit_size(self.size, new_size, maintain_aspect_ratio)
        w, h = int(final.width), int(final.height)
        if w <= 0 or h <= 0:
            raise ResizeFailed(f"Resize target truncates to {w}x{h}")
        resample = getattr(PILImage.Resampling, RESAMPLE_FILTER)
        try:
            im = self._im.resize((w, h), resample)
        except (OSError, ValueError) as e:
            raise ResizeFailed(str(e)) from e
        logger.debug("resized %s -> %dx%d", self._im.size, w, h)
        return Image(im)

    def cropping(self, rect: Rect) -> Image:
        """
        Crop to clamp_crop(rect), clipped to the image edges.
        OutOfBoundsCrop if no whole pixel of rect lies inside the image.
        """
        safe = require_crop_area(clamp_crop(rect, self.size))
        img_w, img_h = self._im.size
        left, top = int(safe.x), int(safe.y)
        # clamp_crop sizes against the unclamped origin, so a negative origin can overhang
        right = min(left + int(safe.width), img_w)
        bottom = min(top + int(safe.height), img_h)
        if right <= left or bottom <= top:
            raise OutOfBoundsCrop(f"Crop box {(left, top, right, bottom)} has no pixels")
        box = (left, top, right, bottom)
        try:
            im = self._im.crop(box)
        except (OSError, ValueError) as e:
            raise CropFailed(str(e)) from e
        logger.debug("cropped %s -> box %s", self._im.size, box)
        return Image(im)


def _draw_at_baseline(
    draw: ImageDraw.ImageDraw,
    xy: tuple[int, int],
    text: str,
    font,
    fill: tuple[int, int, int, int],
    alignment: Alignment,
) -> None:
    """Draw text whose baseline origin is xy, justified by alignment."""
    try:
        draw.text(xy, text, font=font, fill=fill, anchor=_BASELINE_ANCHORS[alignment], align=alignment)
        return
    except ValueError:
        # bitmap fonts and multiline text reject baseline anchors
        pass
    x, y = xy
    ascent = font.getmetrics()[0] if hasattr(font, "getmetrics") else 0
    left, _, right, _ = draw.multiline_textbbox((0, 0), text, font=font, align=alignment)
    width = right - left
    if alignment == "center":
        x -= width / 2
    elif alignment == "right":
        x -= width
    draw.multiline_text((x, y - ascent), text, font=font, fill=fill, align=alignment)
