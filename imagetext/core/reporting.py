# imagetext/core/reporting.py
"""
Field-wise serialization of value types, and reports/<run_name>/ output:
render.json (placement report) and run_metadata.json (inputs + config snapshot).
"""

from __future__ import annotations

import json
import re
from dataclasses import fields, is_dataclass
from datetime import datetime, timezone
from pathlib import Path

from imagetext.core.color import Color
from imagetext.core.config import (
    DEFAULT_FONT_NAME,
    DEFAULT_FONT_SIZE,
    MAX_IMAGE_PIXELS,
    REPORTS_DIR,
    RESAMPLE_FILTER,
    SCHEMA_VERSION,
)
from imagetext.core.types import (
    POSITION_TYPES,
    Alignment,
    Point,
    Position,
    Rect,
    Size,
    Style,
    TextConfiguration,
    TextMetrics,
)


def _kind(cls: type) -> str:
    """CamelCase class name -> snake_case kind tag (BottomRight -> bottom_right)."""
    return re.sub(r"(?<!^)(?=[A-Z])", "_", cls.__name__).lower()


_KIND_TO_POSITION: dict[str, type] = {_kind(c): c for c in POSITION_TYPES}


def color_to_dict(color: Color) -> dict:
    return {
        "red": color.red,
        "green": color.green,
        "blue": color.blue,
        "alpha": color.alpha,
        "hex": color.hex_string,
    }


def to_dict(value) -> dict:
    """
    Plain-dict form of any value type. Positions carry a 'kind' tag;
    nested Points/Sizes become dicts.
    """
    if isinstance(value, Color):
        return color_to_dict(value)
    if isinstance(value, POSITION_TYPES):
        out: dict = {"kind": _kind(type(value))}
        for f in fields(value):
            v = getattr(value, f.name)
            out[f.name] = to_dict(v) if isinstance(v, Point) else v
        return out
    if isinstance(value, Rect):
        return {"origin": to_dict(value.origin), "size": to_dict(value.size)}
    if is_dataclass(value) and not isinstance(value, type):
        out = {}
        for f in fields(value):
            v = getattr(value, f.name)
            out[f.name] = to_dict(v) if is_dataclass(v) and not isinstance(v, type) else v
        return out
    raise TypeError(f"Not a value type: {type(value).__name__}")


def position_from_dict(data: dict) -> Position:
    """Inverse of to_dict for positions."""
    cls = _KIND_TO_POSITION.get(data.get("kind", ""))
    if cls is None:
        raise ValueError(f"Unknown position kind: {data.get('kind')!r}")
    kwargs = {}
    for f in fields(cls):
        if f.name not in data:
            continue
        v = data[f.name]
        kwargs[f.name] = Point(float(v["x"]), float(v["y"])) if isinstance(v, dict) else float(v)
    return cls(**kwargs)


def render_result_dict(
    config: TextConfiguration,
    image_size: Size,
    anchor: Point,
    alignment: Alignment,
    metrics: TextMetrics,
    resize: Size | None = None,
    crop: Rect | None = None,
    output_size: Size | None = None,
    warnings: list[str] | None = None,
) -> dict:
    """Exact structure for render.json."""
    out = {
        "schema_version": SCHEMA_VERSION,
        "image": to_dict(image_size),
        "text": config.text,
        "style": to_dict(config.style),
        "position": to_dict(config.position),
        "result": {
            "anchor": to_dict(anchor),
            "alignment": alignment,
        },
        "metrics": to_dict(metrics),
        "transforms": {},
        "warnings": list(warnings or []),
    }
    if resize is not None:
        out["transforms"]["resize"] = to_dict(resize)
    if crop is not None:
        out["transforms"]["crop"] = to_dict(crop)
    if output_size is not None:
        out["output"] = to_dict(output_size)
    return out


def run_metadata_dict(
    run_name: str,
    input_source: str,
    text: str,
    style: Style,
    position: Position,
) -> dict:
    """Timestamp and config snapshot for run_metadata.json."""
    return {
        "run_name": run_name,
        "timestamp_utc": datetime.now(timezone.utc).isoformat(),
        "input_source": input_source,
        "text": text,
        "style": to_dict(style),
        "position": to_dict(position),
        "config": {
            "DEFAULT_FONT_NAME": DEFAULT_FONT_NAME,
            "DEFAULT_FONT_SIZE": DEFAULT_FONT_SIZE,
            "RESAMPLE_FILTER": RESAMPLE_FILTER,
            "MAX_IMAGE_PIXELS": MAX_IMAGE_PIXELS,
        },
    }


def ensure_report_dir(
    repo_root: Path,
    run_name: str,
    output_dir: str | None = None,
) -> Path:
    """Create output_dir/<run_name>/ under repo_root; return path. Default output_dir from config."""
    base = output_dir if output_dir is not None else REPORTS_DIR
    out = (repo_root / base).resolve() / run_name
    out.mkdir(parents=True, exist_ok=True)
    return out


def write_report_json(report_dir: Path, data: dict, name: str = "render.json") -> Path:
    """Write data as JSON to report_dir/name. Returns path to file."""
    path = report_dir / name
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")
    return path


def write_run_metadata_json(
    report_dir: Path,
    run_name: str,
    input_source: str,
    text: str,
    style: Style,
    position: Position,
) -> Path:
    """Write run_metadata.json to report_dir."""
    data = run_metadata_dict(run_name, input_source, text, style, position)
    return write_report_json(report_dir, data, name="run_metadata.json")
