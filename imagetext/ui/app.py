# imagetext/ui/app.py
"""
Streamlit preview: sidebar (source, text, position, style, transforms), live preview,
render report JSON and PNG download. Run: streamlit run imagetext/ui/app.py
"""

from __future__ import annotations

import json
import logging
import os
import sys
from pathlib import Path

# Configure logging from env (e.g. LOG_LEVEL=DEBUG for development)
_log_level_name = os.environ.get("LOG_LEVEL", "INFO").upper()
logging.basicConfig(level=getattr(logging, _log_level_name, logging.INFO))

# Ensure repo root is on path when Streamlit loads this file
_repo_root = Path(__file__).resolve().parent.parent.parent
if not (_repo_root / "imagetext" / "__init__.py").exists():
    _repo_root = Path.cwd().resolve()
    if not (_repo_root / "imagetext" / "__init__.py").exists():
        raise RuntimeError(
            f"Cannot find repo root. Run from repo root directory.\n"
            f"Expected 'imagetext/__init__.py' in: {_repo_root}"
        )
if str(_repo_root) not in sys.path:
    sys.path.insert(0, str(_repo_root))

import streamlit as st

from imagetext.core.backend import Backend
from imagetext.core.color import Color
from imagetext.core.config import (
    DEFAULT_CANVAS_HEIGHT_PX,
    DEFAULT_CANVAS_WIDTH_PX,
    DEFAULT_FONT_NAME,
    DEFAULT_FONT_SIZE,
)
from imagetext.core.error_codes import ImageTextError, user_message
from imagetext.core.geometry import clamp_crop
from imagetext.core.image import Image
from imagetext.core.position import POSITION_NAMES, make_position, resolve
from imagetext.core.reporting import render_result_dict
from imagetext.core.text_metrics import measure_text_metrics
from imagetext.core.types import ALIGNMENTS, Rect, Size, Style, TextConfiguration

logger = logging.getLogger(__name__)

_BACKEND = Backend()


def _sidebar() -> dict:
    """Collect inputs from the sidebar."""
    sb = st.sidebar
    sb.header("Source")
    upload = sb.file_uploader("Image", type=["png", "jpg", "jpeg", "webp", "bmp"])
    width = sb.number_input("Canvas width", min_value=1, value=DEFAULT_CANVAS_WIDTH_PX)
    height = sb.number_input("Canvas height", min_value=1, value=DEFAULT_CANVAS_HEIGHT_PX)
    background = sb.color_picker("Canvas color", "#FF0000")

    sb.header("Text")
    text = sb.text_input("Text", "imagetext")
    position = sb.selectbox("Position", POSITION_NAMES, index=0)
    a = sb.number_input("Offset / x", value=0.0, help="First number: x offset, edge offset, or x for custom")
    b = sb.number_input("Offset / y", value=0.0, help="Second number: y offset, or y for custom")

    sb.header("Style")
    font = sb.text_input("Font", DEFAULT_FONT_NAME)
    font_size = sb.number_input("Font size (px)", min_value=1.0, value=float(DEFAULT_FONT_SIZE) * 3)
    color = sb.color_picker("Text color", "#FFFFFF")
    alignment = sb.selectbox("Alignment (custom only)", ALIGNMENTS, index=1)

    sb.header("Transforms")
    do_resize = sb.checkbox("Resize", value=False)
    resize_w = sb.number_input("Resize width", min_value=1, value=250, disabled=not do_resize)
    resize_h = sb.number_input("Resize height", min_value=1, value=250, disabled=not do_resize)
    keep_aspect = sb.checkbox("Keep aspect ratio", value=True, disabled=not do_resize)
    do_crop = sb.checkbox("Crop", value=False)
    crop = [sb.number_input(k, value=v, disabled=not do_crop) for k, v in
            (("Crop x", 0.0), ("Crop y", 0.0), ("Crop width", 200.0), ("Crop height", 200.0))]

    return {
        "upload": upload,
        "canvas": (int(width), int(height), Color.hex(background)),
        "config": TextConfiguration(
            text=text,
            position=make_position(position, a, b),
            style=Style(font_name=font, font_size=font_size, color=Color.hex(color), alignment=alignment),
        ),
        "resize": (Size(resize_w, resize_h), keep_aspect) if do_resize else None,
        "crop": Rect.from_xywh(*crop) if do_crop else None,
    }


def _run(inputs: dict) -> tuple[Image, dict]:
    """Apply resize -> text -> crop; return final image and report dict."""
    if inputs["upload"] is not None:
        image = Image.from_bytes(inputs["upload"].getvalue())
    else:
        w, h, bg = inputs["canvas"]
        image = Image.new(w, h, bg)
    if inputs["resize"] is not None:
        target, keep = inputs["resize"]
        image = image.resizing(target, maintain_aspect_ratio=keep)
    config: TextConfiguration = inputs["config"]
    style = config.style
    metrics = measure_text_metrics(style.font_name, style.font_size, config.text)
    anchor, alignment = resolve(config.position, image.size, metrics, style)
    image = image.adding_text(config, measure=lambda _f, _s, _t: metrics)
    annotated_size = image.size
    crop = inputs["crop"]
    if crop is not None:
        image = image.cropping(crop)
    report = render_result_dict(
        config,
        annotated_size,
        anchor,
        alignment,
        metrics,
        resize=inputs["resize"][0] if inputs["resize"] else None,
        crop=clamp_crop(crop, annotated_size) if crop is not None else None,
        output_size=image.size,
    )
    return image, report


def main() -> None:
    st.set_page_config(page_title="imagetext", layout="wide")
    st.title("imagetext preview")
    inputs = _sidebar()
    _BACKEND.initialize()
    try:
        image, report = _run(inputs)
    except ImageTextError as e:
        logger.warning("render failed: %s", e)
        st.error(user_message(e.code))
        return
    finally:
        _BACKEND.terminate()

    left, right = st.columns([2, 1])
    with left:
        st.image(image.to_bytes("PNG"), caption="Result")
        st.download_button("Download PNG", data=image.to_bytes("PNG"), file_name="imagetext.png", mime="image/png")
    with right:
        st.subheader("Report")
        st.json(report)
        st.download_button(
            "Download render.json",
            data=json.dumps(report, indent=2).encode("utf-8"),
            file_name="render.json",
            mime="application/json",
        )


main()
