# imagetext/core/position.py
"""
Text position resolution: symbolic Position + image size + text metrics
-> baseline anchor point and final alignment.

The anchor is the baseline origin handed to the drawing backend; the alignment
decides whether text grows right (left), both ways (center) or left (right) of it.
Pure functions only; no backend state.
"""

from __future__ import annotations

import logging
from typing import Callable

from imagetext.core.types import (
    ALIGNMENTS,
    Alignment,
    Bottom,
    BottomLeft,
    BottomRight,
    Center,
    CenterHorizontally,
    CenterVertically,
    Custom,
    Left,
    MiddleLeft,
    MiddleRight,
    Point,
    Position,
    Right,
    Size,
    Style,
    TextConfiguration,
    TextMetrics,
    Top,
    TopLeft,
    TopRight,
)

logger = logging.getLogger(__name__)

MetricsProvider = Callable[[str, float, str], TextMetrics]

_LEFT_FAMILY = (TopLeft, Left, BottomLeft, MiddleLeft)
_RIGHT_FAMILY = (TopRight, Right, BottomRight, MiddleRight)
_CENTER_FAMILY = (Center, CenterHorizontally, CenterVertically, Top, Bottom)


def derive_alignment(position: Position, style: Style) -> Alignment:
    """Alignment implied by the position family; Custom keeps style.alignment."""
    if isinstance(position, _LEFT_FAMILY):
        return "left"
    if isinstance(position, _RIGHT_FAMILY):
        return "right"
    if isinstance(position, _CENTER_FAMILY):
        return "center"
    if isinstance(position, Custom):
        return style.alignment
    raise TypeError(f"Unknown position type: {type(position).__name__}")


# ----- Anchor primitives -----

def baseline_for_top(metrics: TextMetrics, offset: float) -> float:
    """Baseline y that puts the top of the ink box `offset` below the top edge."""
    return offset - metrics.y1


def baseline_for_bottom(image_size: Size, metrics: TextMetrics, offset: float) -> float:
    """Baseline y that puts the bottom of the ink box `offset` above the bottom edge."""
    return (image_size.height - offset) - metrics.y2


def baseline_for_vertical_center(image_size: Size, metrics: TextMetrics, offset: float = 0.0) -> float:
    """
    Baseline y that visually centers the glyphs around the vertical midpoint:
    H/2 + offset + ascender - height/2. Kept exactly; rendered output depends on it.
    """
    return image_size.height / 2 + offset + metrics.ascender - metrics.height / 2


def horizontal_center(image_size: Size, offset: float = 0.0) -> float:
    return image_size.width / 2 + offset


def x_for_left(offset: float) -> float:
    return offset


def x_for_right(image_size: Size, offset: float) -> float:
    return image_size.width - offset


def resolve_anchor(position: Position, image_size: Size, metrics: TextMetrics) -> Point:
    """Baseline anchor point for position. Custom bypasses all formulas."""
    if isinstance(position, Center):
        return Point(
            horizontal_center(image_size, position.offset.x),
            baseline_for_vertical_center(image_size, metrics, position.offset.y),
        )
    if isinstance(position, CenterHorizontally):
        return Point(horizontal_center(image_size, position.x_offset), position.y)
    if isinstance(position, CenterVertically):
        return Point(position.x, baseline_for_vertical_center(image_size, metrics, position.y_offset))
    if isinstance(position, Top):
        return Point(horizontal_center(image_size), baseline_for_top(metrics, position.offset))
    if isinstance(position, Bottom):
        return Point(horizontal_center(image_size), baseline_for_bottom(image_size, metrics, position.offset))
    if isinstance(position, (Left, MiddleLeft)):
        return Point(x_for_left(position.offset), baseline_for_vertical_center(image_size, metrics))
    if isinstance(position, (Right, MiddleRight)):
        return Point(x_for_right(image_size, position.offset), baseline_for_vertical_center(image_size, metrics))
    if isinstance(position, TopLeft):
        return Point(x_for_left(position.offset.x), baseline_for_top(metrics, position.offset.y))
    if isinstance(position, TopRight):
        return Point(x_for_right(image_size, position.offset.x), baseline_for_top(metrics, position.offset.y))
    if isinstance(position, BottomLeft):
        return Point(x_for_left(position.offset.x), baseline_for_bottom(image_size, metrics, position.offset.y))
    if isinstance(position, BottomRight):
        return Point(
            x_for_right(image_size, position.offset.x),
            baseline_for_bottom(image_size, metrics, position.offset.y),
        )
    if isinstance(position, Custom):
        return Point(position.x, position.y)
    raise TypeError(f"Unknown position type: {type(position).__name__}")


def resolve(
    position: Position,
    image_size: Size,
    metrics: TextMetrics,
    style: Style,
) -> tuple[Point, Alignment]:
    """Return (anchor, alignment). Inputs are not modified."""
    alignment = derive_alignment(position, style)
    anchor = resolve_anchor(position, image_size, metrics)
    return anchor, alignment


def calculate_position_and_alignment(
    config: TextConfiguration,
    image_size: Size,
    measure: MetricsProvider | None = None,
) -> tuple[int, int, Alignment]:
    """
    Measure config.text, resolve its position, truncate the anchor to ints.
    measure defaults to the Pillow metrics provider; MetricsUnavailable propagates.
    """
    if measure is None:
        from imagetext.core.text_metrics import measure_text_metrics
        measure = measure_text_metrics
    style = config.style
    metrics = measure(style.font_name, style.font_size, config.text)
    anchor, alignment = resolve(config.position, image_size, metrics, style)
    logger.debug(
        "resolved %s in %sx%s -> (%.2f, %.2f) %s",
        type(config.position).__name__, image_size.width, image_size.height,
        anchor.x, anchor.y, alignment,
    )
    return int(anchor.x), int(anchor.y), alignment


# ----- Parsing (CLI / UI) -----

_POSITION_NAMES: dict[str, type] = {
    "center": Center,
    "center-horizontally": CenterHorizontally,
    "center-vertically": CenterVertically,
    "top": Top,
    "bottom": Bottom,
    "left": Left,
    "right": Right,
    "top-left": TopLeft,
    "top-right": TopRight,
    "bottom-left": BottomLeft,
    "bottom-right": BottomRight,
    "middle-left": MiddleLeft,
    "middle-right": MiddleRight,
    "custom": Custom,
}
POSITION_NAMES: tuple[str, ...] = tuple(_POSITION_NAMES)


def _parse_numbers(s: str) -> list[float]:
    out: list[float] = []
    for part in s.split(","):
        part = part.strip()
        if part:
            out.append(float(part))
    return out


def make_position(name: str, a: float = 0.0, b: float = 0.0) -> Position:
    """
    Build a Position from a name and up to two numbers.
    Point-offset variants use (a, b) as (x, y); CenterHorizontally is (y=a, x_offset=b),
    CenterVertically is (x=a, y_offset=b), Custom is (x=a, y=b); edge variants use a.
    """
    cls = _POSITION_NAMES.get(name.strip().lower().replace("_", "-"))
    if cls is None:
        raise ValueError(f"Unknown position {name!r}; expected one of {', '.join(POSITION_NAMES)}")
    if cls in (Center, TopLeft, TopRight, BottomLeft, BottomRight):
        return cls(Point(a, b))
    if cls in (CenterHorizontally, CenterVertically, Custom):
        return cls(a, b)
    return cls(a)


def parse_position(s: str) -> Position:
    """
    Parse 'name' or 'name:a,b', e.g. 'center', 'top:12', 'bottom-right:10,20', 'custom:40,80'.
    Missing numbers default to 0; custom needs both.
    """
    name, _, rest = (s or "center").partition(":")
    try:
        nums = _parse_numbers(rest)
    except ValueError as e:
        raise ValueError(f"Bad position numbers in {s!r}") from e
    if len(nums) > 2:
        raise ValueError(f"Too many numbers in position {s!r}")
    if name.strip().lower() == "custom" and len(nums) != 2:
        raise ValueError("custom position needs x,y")
    nums += [0.0] * (2 - len(nums))
    return make_position(name, nums[0], nums[1])


def parse_alignment(s: str) -> Alignment:
    a = (s or "").strip().lower()
    if a not in ALIGNMENTS:
        raise ValueError(f"Unknown alignment {s!r}; expected left, center or right")
    return a  # type: ignore[return-value]
