# imagetext/core/types.py
"""
Value types shared by the position resolver, resize fit and crop clamp:
Size, Point, Rect, TextMetrics, Alignment, Position variants, Style, TextConfiguration.
All are immutable; coordinates are image space (origin top-left, y down).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Union

from imagetext.core.color import BLACK, Color
from imagetext.core.config import DEFAULT_FONT_NAME, DEFAULT_FONT_SIZE


Alignment = Literal["left", "center", "right"]
ALIGNMENTS: tuple[str, ...] = ("left", "center", "right")


@dataclass(frozen=True)
class Size:
    width: float
    height: float


@dataclass(frozen=True)
class Point:
    x: float
    y: float

    @classmethod
    def zero(cls) -> Point:
        return ORIGIN


ORIGIN = Point(0.0, 0.0)


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle: origin + size."""
    origin: Point
    size: Size

    @classmethod
    def from_xywh(cls, x: float, y: float, width: float, height: float) -> Rect:
        return cls(Point(x, y), Size(width, height))

    @property
    def x(self) -> float:
        return self.origin.x

    @property
    def y(self) -> float:
        return self.origin.y

    @property
    def width(self) -> float:
        return self.size.width

    @property
    def height(self) -> float:
        return self.size.height

    @property
    def right(self) -> float:
        return self.origin.x + self.size.width

    @property
    def bottom(self) -> float:
        return self.origin.y + self.size.height

    @property
    def is_empty(self) -> bool:
        return self.size.width <= 0 or self.size.height <= 0


@dataclass(frozen=True)
class TextMetrics:
    """
    Measurement of one string at one font/size.
    width/height: ink box of the whole string.
    ascender/descender/baseline: font-level (ascender >= 0, descender <= 0).
    x1, y1, x2, y2: ink box relative to the baseline origin (y1 usually negative).
    """
    width: float
    height: float
    ascender: float
    descender: float
    baseline: float
    x1: float
    y1: float
    x2: float
    y2: float

    @property
    def size(self) -> Size:
        return Size(self.width, self.height)


# ----- Position: closed union of anchor descriptors -----

@dataclass(frozen=True)
class Center:
    offset: Point = ORIGIN


@dataclass(frozen=True)
class CenterHorizontally:
    y: float
    x_offset: float = 0.0


@dataclass(frozen=True)
class CenterVertically:
    x: float
    y_offset: float = 0.0


@dataclass(frozen=True)
class Top:
    offset: float = 0.0


@dataclass(frozen=True)
class Bottom:
    offset: float = 0.0


@dataclass(frozen=True)
class Left:
    offset: float = 0.0


@dataclass(frozen=True)
class Right:
    offset: float = 0.0


@dataclass(frozen=True)
class TopLeft:
    offset: Point = ORIGIN


@dataclass(frozen=True)
class TopRight:
    offset: Point = ORIGIN


@dataclass(frozen=True)
class BottomLeft:
    offset: Point = ORIGIN


@dataclass(frozen=True)
class BottomRight:
    offset: Point = ORIGIN


@dataclass(frozen=True)
class MiddleLeft:
    offset: float = 0.0


@dataclass(frozen=True)
class MiddleRight:
    offset: float = 0.0


@dataclass(frozen=True)
class Custom:
    """Anchor (x, y) used verbatim; keeps the style's alignment."""
    x: float
    y: float


Position = Union[
    Center,
    CenterHorizontally,
    CenterVertically,
    Top,
    Bottom,
    Left,
    Right,
    TopLeft,
    TopRight,
    BottomLeft,
    BottomRight,
    MiddleLeft,
    MiddleRight,
    Custom,
]

POSITION_TYPES: tuple[type, ...] = (
    Center,
    CenterHorizontally,
    CenterVertically,
    Top,
    Bottom,
    Left,
    Right,
    TopLeft,
    TopRight,
    BottomLeft,
    BottomRight,
    MiddleLeft,
    MiddleRight,
    Custom,
)


@dataclass(frozen=True)
class Style:
    """Font and fill. alignment only survives resolution for Custom positions."""
    font_name: str = DEFAULT_FONT_NAME
    font_size: float = DEFAULT_FONT_SIZE
    color: Color = BLACK
    alignment: Alignment = "center"


@dataclass(frozen=True)
class TextConfiguration:
    """Text to draw, where to anchor it, and how to style it."""
    text: str
    position: Position = field(default_factory=Center)
    style: Style = field(default_factory=Style)

    def calculate_position_and_alignment(self, image_size: Size, measure=None) -> tuple[int, int, Alignment]:
        """Integer anchor (x, y) and final alignment for drawing in an image of image_size."""
        from imagetext.core.position import calculate_position_and_alignment

        return calculate_position_and_alignment(self, image_size, measure=measure)
