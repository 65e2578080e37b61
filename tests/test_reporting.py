"""
Value types serialize field-wise; render.json carries the required keys; report files are written.
"""

from __future__ import annotations

import json

import pytest

from imagetext.core.color import WHITE
from imagetext.core.reporting import (
    ensure_report_dir,
    position_from_dict,
    render_result_dict,
    to_dict,
    write_report_json,
    write_run_metadata_json,
)
from imagetext.core.types import (
    POSITION_TYPES,
    BottomRight,
    Center,
    CenterHorizontally,
    CenterVertically,
    Custom,
    Point,
    Rect,
    Size,
    Style,
    TextConfiguration,
    TextMetrics,
    Top,
)

METRICS = TextMetrics(width=10, height=5, ascender=4, descender=-1, baseline=4, x1=0, y1=-4, x2=10, y2=1)

REQUIRED_KEYS = [
    "schema_version",
    ("image", "width"),
    ("image", "height"),
    "text",
    ("style", "font_name"),
    ("style", "font_size"),
    ("style", "color", "hex"),
    ("style", "alignment"),
    ("position", "kind"),
    ("result", "anchor", "x"),
    ("result", "anchor", "y"),
    ("result", "alignment"),
    ("metrics", "ascender"),
    ("metrics", "y1"),
    "transforms",
    "warnings",
]


def test_position_kind_tags() -> None:
    assert to_dict(Center())["kind"] == "center"
    assert to_dict(BottomRight(Point(1, 2))) == {"kind": "bottom_right", "offset": {"x": 1, "y": 2}}
    assert to_dict(CenterHorizontally(5, 1)) == {"kind": "center_horizontally", "y": 5, "x_offset": 1}
    assert to_dict(Top(3)) == {"kind": "top", "offset": 3}


def test_every_position_kind_restores() -> None:
    kinds = set()
    for cls in POSITION_TYPES:
        if cls in (CenterHorizontally, CenterVertically, Custom):
            pos = cls(3.0, 4.0)
        else:
            pos = cls()
        data = to_dict(pos)
        kinds.add(data["kind"])
        assert position_from_dict(json.loads(json.dumps(data))) == pos
    assert len(kinds) == len(POSITION_TYPES)


def test_position_from_dict_unknown_kind() -> None:
    with pytest.raises(ValueError):
        position_from_dict({"kind": "diagonal"})


def test_rect_and_style_dicts() -> None:
    assert to_dict(Rect.from_xywh(1, 2, 3, 4)) == {
        "origin": {"x": 1, "y": 2},
        "size": {"width": 3, "height": 4},
    }
    style = to_dict(Style(color=WHITE, alignment="right"))
    assert style["color"]["hex"] == "#FFFFFF"
    assert style["alignment"] == "right"


def test_to_dict_rejects_non_value() -> None:
    with pytest.raises(TypeError):
        to_dict(object())


def test_render_result_required_keys() -> None:
    config = TextConfiguration(text="X", position=Center())
    data = render_result_dict(config, Size(100, 80), Point(50, 42), "center", METRICS, crop=Rect.from_xywh(0, 0, 10, 10))
    data = json.loads(json.dumps(data))
    for key in REQUIRED_KEYS:
        if isinstance(key, tuple):
            obj = data
            for k in key:
                assert k in obj, f"Missing key: {key}"
                obj = obj[k]
        else:
            assert key in data, f"Missing key: {key}"
    assert data["transforms"]["crop"]["size"]["width"] == 10
    assert "resize" not in data["transforms"]


def test_write_reports(tmp_path) -> None:
    report_dir = ensure_report_dir(tmp_path, "unit")
    assert report_dir == (tmp_path / "reports" / "unit").resolve()
    path = write_report_json(report_dir, {"a": 1})
    assert json.loads(path.read_text(encoding="utf-8")) == {"a": 1}
    meta = write_run_metadata_json(report_dir, "unit", "canvas:1x1", "X", Style(), Center())
    loaded = json.loads(meta.read_text(encoding="utf-8"))
    assert loaded["run_name"] == "unit"
    assert loaded["position"]["kind"] == "center"
    assert "config" in loaded
