"""
Color: clamping, 8-bit and hex constructors, brightness, inversion, tolerant equality.
"""

from __future__ import annotations

import pytest

from imagetext.core.color import BLACK, GRAY, RED, WHITE, Color


def test_channels_clamped() -> None:
    c = Color(1.5, -0.2, 0.5, 3)
    assert (c.red, c.green, c.blue, c.alpha) == (1.0, 0.0, 0.5, 1.0)


def test_rgb_clamps_and_scales() -> None:
    c = Color.rgb(255, 300, -5)
    assert c == Color(1, 1, 0)
    assert Color.rgb(255, 0, 255).hex_string == "#FF00FF"


def test_hex_parsing() -> None:
    assert Color.hex("#FF0000") == RED
    assert Color.hex("00ff00") == Color(0, 1, 0)
    assert Color.hex("#FFF") is None
    assert Color.hex("zzzzzz") is None


def test_named_lookup() -> None:
    assert Color.named("White") == WHITE
    assert Color.named("grey") == GRAY
    assert Color.named("#000000") == BLACK
    assert Color.named("no-such-color") is None


def test_grayscale_and_alpha() -> None:
    g = Color.grayscale(2.0, alpha=0.5)
    assert g == Color(1, 1, 1, 0.5)
    assert RED.with_alpha(0.25).alpha == pytest.approx(0.25)


def test_adjusting_brightness() -> None:
    c = Color(0.5, 0.2, 0.0)
    lighter = c.adjusting_brightness(0.5)
    assert lighter == Color(0.75, 0.6, 0.5)
    darker = c.adjusting_brightness(-0.5)
    assert darker == Color(0.25, 0.1, 0.0)
    assert c.adjusting_brightness(5) == WHITE
    assert c.adjusting_brightness(-5) == BLACK


def test_inverted_keeps_alpha() -> None:
    c = Color(0.2, 0.4, 1.0, 0.3)
    assert c.inverted == Color(0.8, 0.6, 0.0, 0.3)


def test_equality_tolerance() -> None:
    assert Color(0.5, 0.5, 0.5) == Color(0.5004, 0.5, 0.5)
    assert Color(0.5, 0.5, 0.5) != Color(0.502, 0.5, 0.5)


def test_rgba_bytes() -> None:
    assert WHITE.to_rgba_bytes() == (255, 255, 255, 255)
    assert Color(0, 0, 0, 0).to_rgba_bytes() == (0, 0, 0, 0)
