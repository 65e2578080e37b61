# imagetext/core/geometry.py
"""
Geometry helpers: aspect-fit resize, safe crop clamp, rectangle polygons and
containment, ink box placement, size/rect parsing.
"""

from __future__ import annotations

from shapely.geometry import Polygon, box

from imagetext.core.error_codes import InvalidGeometry, OutOfBoundsCrop
from imagetext.core.types import Alignment, Point, Rect, Size, TextMetrics


def fit_size(current: Size, target: Size, preserve_aspect: bool = True) -> Size:
    """
    Output size for resizing current to target.
    Without preserve_aspect the target is returned as-is (stretch). Otherwise the
    relatively wider side keeps the target width, the other keeps the target height.
    Raises InvalidGeometry on a zero height (ratio undefined).
    """
    if not preserve_aspect:
        return target
    if current.height == 0 or target.height == 0:
        raise InvalidGeometry(
            f"Cannot preserve aspect ratio: current={current.width}x{current.height}, "
            f"target={target.width}x{target.height}"
        )
    current_ratio = current.width / current.height
    target_ratio = target.width / target.height
    if current_ratio > target_ratio:
        return Size(target.width, target.width / current_ratio)
    return Size(target.height * current_ratio, target.height)


def clamp_crop(requested: Rect, current_size: Size) -> Rect:
    """
    Clamp requested to the image. Width/height are computed against the
    unclamped origin; only then is the origin clamped to >= 0.
    A request outside the image yields width or height <= 0 (see require_crop_area).
    """
    rx, ry = requested.origin.x, requested.origin.y
    width = min(requested.size.width, current_size.width - rx)
    height = min(requested.size.height, current_size.height - ry)
    return Rect.from_xywh(max(0.0, rx), max(0.0, ry), width, height)


def require_crop_area(rect: Rect) -> Rect:
    """Return rect unchanged, or raise OutOfBoundsCrop if it has no area."""
    if rect.is_empty:
        raise OutOfBoundsCrop(
            f"Crop has no area after clamping: origin=({rect.x}, {rect.y}) size={rect.width}x{rect.height}"
        )
    return rect


def rect_to_polygon(rect: Rect) -> Polygon:
    """Axis-aligned rect as a shapely box; empty Polygon if the rect has no area."""
    if rect.is_empty:
        return Polygon()
    return box(rect.x, rect.y, rect.right, rect.bottom)


def rect_within_bounds(rect: Rect, size: Size, tolerance: float = 1e-9) -> bool:
    """True if rect lies fully inside the (0, 0, width, height) image bounds."""
    poly = rect_to_polygon(rect)
    if poly.is_empty or size.width <= 0 or size.height <= 0:
        return False
    bounds = box(-tolerance, -tolerance, size.width + tolerance, size.height + tolerance)
    return bounds.covers(poly)


def ink_box_at(anchor: Point, metrics: TextMetrics, alignment: Alignment) -> Rect:
    """
    Ink box of a string drawn at the baseline anchor with the given alignment.
    Left grows right from the anchor, right ends at it, center straddles it.
    Horizontal extent ignores side bearings outside the left case.
    """
    ink_w = metrics.x2 - metrics.x1
    if alignment == "left":
        left = anchor.x + metrics.x1
    elif alignment == "right":
        left = anchor.x - ink_w
    else:
        left = anchor.x - ink_w / 2
    return Rect.from_xywh(left, anchor.y + metrics.y1, ink_w, metrics.y2 - metrics.y1)


# ----- Parsing (CLI / UI) -----

def parse_size(s: str) -> Size:
    """Parse 'WxH' (e.g. '800x600')."""
    parts = (s or "").lower().replace(" ", "").split("x")
    if len(parts) != 2:
        raise ValueError(f"Expected WxH, got {s!r}")
    try:
        return Size(float(parts[0]), float(parts[1]))
    except ValueError as e:
        raise ValueError(f"Expected WxH, got {s!r}") from e


def parse_rect(s: str) -> Rect:
    """Parse 'X,Y,W,H' (e.g. '10,10,200,100'); negative origins allowed."""
    parts = [p.strip() for p in (s or "").split(",")]
    if len(parts) != 4:
        raise ValueError(f"Expected X,Y,W,H, got {s!r}")
    try:
        x, y, w, h = (float(p) for p in parts)
    except ValueError as e:
        raise ValueError(f"Expected X,Y,W,H, got {s!r}") from e
    return Rect.from_xywh(x, y, w, h)
