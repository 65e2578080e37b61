# imagetext/core/color.py
"""
RGBA color with channels in [0, 1]. Used by Style (text fill) and canvas backgrounds.
"""

from __future__ import annotations

from dataclasses import dataclass

from imagetext.core.config import COLOR_EQ_TOLERANCE


def _clamp(value: float, lo: float = 0.0, hi: float = 1.0) -> float:
    return min(max(float(value), lo), hi)


@dataclass(frozen=True, eq=False)
class Color:
    """Channels are clamped to [0, 1] on construction."""
    red: float
    green: float
    blue: float
    alpha: float = 1.0

    def __post_init__(self) -> None:
        # frozen: write clamped values through object.__setattr__
        for name in ("red", "green", "blue", "alpha"):
            object.__setattr__(self, name, _clamp(getattr(self, name)))

    @classmethod
    def rgb(cls, red: int, green: int, blue: int, alpha: float = 1.0) -> Color:
        """8-bit channels, each clamped to 0..255."""
        return cls(
            min(max(red, 0), 255) / 255.0,
            min(max(green, 0), 255) / 255.0,
            min(max(blue, 0), 255) / 255.0,
            alpha,
        )

    @classmethod
    def hex(cls, s: str) -> Color | None:
        """Parse '#RRGGBB' or 'RRGGBB'. Returns None when malformed."""
        h = s.strip()
        if h.startswith("#"):
            h = h[1:]
        if len(h) != 6:
            return None
        try:
            value = int(h, 16)
        except ValueError:
            return None
        return cls.rgb((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF)

    @classmethod
    def grayscale(cls, value: float, alpha: float = 1.0) -> Color:
        v = _clamp(value)
        return cls(v, v, v, alpha)

    @classmethod
    def named(cls, name: str) -> Color | None:
        """Look up a named color ('white', 'red', ...) or a hex string."""
        key = name.strip().lower()
        if key in NAMED_COLORS:
            return NAMED_COLORS[key]
        return cls.hex(name)

    def with_alpha(self, alpha: float) -> Color:
        return Color(self.red, self.green, self.blue, alpha)

    def adjusting_brightness(self, factor: float) -> Color:
        """factor in [-1, 1]: positive blends toward white, negative toward black."""
        f = _clamp(factor, -1.0, 1.0)
        if f > 0:
            return Color(
                self.red + (1 - self.red) * f,
                self.green + (1 - self.green) * f,
                self.blue + (1 - self.blue) * f,
                self.alpha,
            )
        return Color(
            self.red * (1 + f),
            self.green * (1 + f),
            self.blue * (1 + f),
            self.alpha,
        )

    @property
    def inverted(self) -> Color:
        return Color(1 - self.red, 1 - self.green, 1 - self.blue, self.alpha)

    @property
    def hex_string(self) -> str:
        return "#%02X%02X%02X" % (int(self.red * 255), int(self.green * 255), int(self.blue * 255))

    def to_rgba_bytes(self) -> tuple[int, int, int, int]:
        """8-bit RGBA tuple for Pillow."""
        return (
            int(round(self.red * 255)),
            int(round(self.green * 255)),
            int(round(self.blue * 255)),
            int(round(self.alpha * 255)),
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Color):
            return NotImplemented
        return (
            abs(self.red - other.red) < COLOR_EQ_TOLERANCE
            and abs(self.green - other.green) < COLOR_EQ_TOLERANCE
            and abs(self.blue - other.blue) < COLOR_EQ_TOLERANCE
            and abs(self.alpha - other.alpha) < COLOR_EQ_TOLERANCE
        )

    def __hash__(self) -> int:
        return hash((self.red, self.green, self.blue, self.alpha))


BLACK = Color(0, 0, 0)
WHITE = Color(1, 1, 1)
RED = Color(1, 0, 0)
GREEN = Color(0, 1, 0)
BLUE = Color(0, 0, 1)
YELLOW = Color(1, 1, 0)
CYAN = Color(0, 1, 1)
MAGENTA = Color(1, 0, 1)
GRAY = Color(0.5, 0.5, 0.5)
TRANSPARENT = Color(0, 0, 0, 0)

NAMED_COLORS: dict[str, Color] = {
    "black": BLACK,
    "white": WHITE,
    "red": RED,
    "green": GREEN,
    "blue": BLUE,
    "yellow": YELLOW,
    "cyan": CYAN,
    "magenta": MAGENTA,
    "gray": GRAY,
    "grey": GRAY,
    "transparent": TRANSPARENT,
}
