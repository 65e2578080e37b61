"""
Deterministic tests for geometry: fit_size, clamp_crop ordering, require_crop_area,
rect containment, ink box placement, parsing.
"""

from __future__ import annotations

import pytest

from imagetext.core.error_codes import InvalidGeometry, OutOfBoundsCrop
from imagetext.core.geometry import (
    clamp_crop,
    fit_size,
    ink_box_at,
    parse_rect,
    parse_size,
    rect_to_polygon,
    rect_within_bounds,
    require_crop_area,
)
from imagetext.core.types import Point, Rect, Size, TextMetrics


def test_fit_size_wider_source_keeps_target_width() -> None:
    assert fit_size(Size(400, 200), Size(100, 100), True) == Size(100, 50)


def test_fit_size_taller_source_keeps_target_height() -> None:
    assert fit_size(Size(200, 400), Size(100, 100), True) == Size(50, 100)


def test_fit_size_equal_ratio_keeps_target_height() -> None:
    out = fit_size(Size(300, 300), Size(120, 120), True)
    assert out.width == pytest.approx(120) and out.height == pytest.approx(120)


def test_fit_size_preserves_ratio() -> None:
    current = Size(1920, 1080)
    out = fit_size(current, Size(500, 500), True)
    assert out.width / out.height == pytest.approx(current.width / current.height)
    assert out.width <= 500 + 1e-9 and out.height <= 500 + 1e-9


def test_fit_size_stretch_returns_target() -> None:
    target = Size(123, 45)
    assert fit_size(Size(400, 200), target, False) is target


def test_fit_size_stretch_allows_zero_height() -> None:
    assert fit_size(Size(400, 0), Size(10, 0), False) == Size(10, 0)


@pytest.mark.parametrize("current, target", [(Size(400, 0), Size(100, 100)), (Size(400, 200), Size(100, 0))])
def test_fit_size_zero_height_invalid(current: Size, target: Size) -> None:
    with pytest.raises(InvalidGeometry) as exc:
        fit_size(current, target, True)
    assert isinstance(exc.value, ValueError)
    assert exc.value.code == "invalid_geometry"


def test_clamp_crop_overhanging_right_bottom() -> None:
    out = clamp_crop(Rect.from_xywh(450, 450, 200, 200), Size(500, 500))
    assert out == Rect.from_xywh(450, 450, 50, 50)


def test_clamp_crop_negative_origin_uses_unclamped_origin_for_size() -> None:
    out = clamp_crop(Rect.from_xywh(-20, 10, 50, 50), Size(500, 500))
    assert out.origin == Point(0, 10)
    # min(50, 500 - (-20)) = 50, not min(50, 500 - 0)
    assert out.size == Size(50, 50)


def test_clamp_crop_negative_origin_near_far_edge() -> None:
    out = clamp_crop(Rect.from_xywh(-20, -30, 600, 600), Size(500, 400))
    assert out.origin == Point(0, 0)
    assert out.size == Size(520, 430)


def test_clamp_crop_idempotent_in_bounds() -> None:
    rect = Rect.from_xywh(10, 20, 100, 50)
    assert clamp_crop(rect, Size(500, 500)) == rect
    assert clamp_crop(clamp_crop(rect, Size(500, 500)), Size(500, 500)) == rect


def test_clamp_crop_outside_has_no_area() -> None:
    out = clamp_crop(Rect.from_xywh(600, 10, 50, 50), Size(500, 500))
    assert out.width <= 0
    assert out.is_empty
    with pytest.raises(OutOfBoundsCrop):
        require_crop_area(out)


def test_require_crop_area_passes_through() -> None:
    rect = Rect.from_xywh(0, 0, 1, 1)
    assert require_crop_area(rect) is rect


def test_rect_within_bounds() -> None:
    size = Size(100, 80)
    assert rect_within_bounds(Rect.from_xywh(0, 0, 100, 80), size) is True
    assert rect_within_bounds(Rect.from_xywh(10, 10, 20, 20), size) is True
    assert rect_within_bounds(Rect.from_xywh(90, 10, 20, 20), size) is False
    assert rect_within_bounds(Rect.from_xywh(10, 10, 0, 20), size) is False


def test_clamped_crop_stays_within_bounds() -> None:
    size = Size(500, 500)
    for rect in (Rect.from_xywh(450, 450, 200, 200), Rect.from_xywh(0, 490, 500, 100), Rect.from_xywh(5, 5, 10, 10)):
        assert rect_within_bounds(clamp_crop(rect, size), size)


def test_rect_to_polygon_area() -> None:
    poly = rect_to_polygon(Rect.from_xywh(1, 2, 3, 4))
    assert poly.area == pytest.approx(12)
    assert rect_to_polygon(Rect.from_xywh(0, 0, -1, 4)).is_empty


def test_ink_box_at_alignment() -> None:
    m = TextMetrics(width=100, height=40, ascender=30, descender=-10, baseline=30, x1=0, y1=-30, x2=100, y2=10)
    anchor = Point(200, 100)
    left = ink_box_at(anchor, m, "left")
    center = ink_box_at(anchor, m, "center")
    right = ink_box_at(anchor, m, "right")
    assert (left.x, left.y, left.width, left.height) == (200, 70, 100, 40)
    assert center.x == pytest.approx(150)
    assert right.right == pytest.approx(200)


def test_parse_size_and_rect() -> None:
    assert parse_size("800x600") == Size(800, 600)
    assert parse_size(" 10 X 20 ") == Size(10, 20)
    assert parse_rect("-20,10,50,50") == Rect.from_xywh(-20, 10, 50, 50)
    with pytest.raises(ValueError):
        parse_size("800")
    with pytest.raises(ValueError):
        parse_rect("1,2,3")
