# imagetext/core/runner.py
"""
CLI entrypoint: load (or create) an image, optionally resize, draw text, optionally crop, export.
Writes the output image plus reports/<run_name>/render.json and run_metadata.json.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from imagetext.core.backend import Backend
from imagetext.core.color import Color
from imagetext.core.config import (
    DEFAULT_CANVAS_HEIGHT_PX,
    DEFAULT_CANVAS_WIDTH_PX,
    DEFAULT_FONT_NAME,
    DEFAULT_FONT_SIZE,
    IMAGETEXT_DEBUG,
    REPORTS_DIR,
)
from imagetext.core.error_codes import ImageTextError
from imagetext.core.geometry import clamp_crop, parse_rect, parse_size
from imagetext.core.image import Image
from imagetext.core.position import parse_alignment, parse_position, resolve
from imagetext.core.reporting import (
    ensure_report_dir,
    render_result_dict,
    write_report_json,
    write_run_metadata_json,
)
from imagetext.core.text_metrics import measure_text_metrics
from imagetext.core.types import Style, TextConfiguration

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Place styled text on an image; optional resize and crop.")
    p.add_argument("--input", type=str, default=None, help="Input image path (default: blank canvas)")
    p.add_argument("--width", type=int, default=DEFAULT_CANVAS_WIDTH_PX, help="Canvas width when no input")
    p.add_argument("--height", type=int, default=DEFAULT_CANVAS_HEIGHT_PX, help="Canvas height when no input")
    p.add_argument("--background", type=str, default="white", help="Canvas color name or #RRGGBB")
    p.add_argument("--text", type=str, default="imagetext", help="Text to draw ('' to skip)")
    p.add_argument("--position", type=str, default="center",
                   help="Position, e.g. 'center', 'top:12', 'bottom-right:10,20', 'custom:40,80'")
    p.add_argument("--font", type=str, default=DEFAULT_FONT_NAME, help="Font name or .ttf path")
    p.add_argument("--font-size", type=float, default=DEFAULT_FONT_SIZE, dest="font_size", help="Font size (px)")
    p.add_argument("--color", type=str, default="black", help="Text color name or #RRGGBB")
    p.add_argument("--align", type=str, default="center", help="Alignment for custom positions")
    p.add_argument("--resize", type=str, default=None, help="Resize target WxH (applied before text)")
    p.add_argument("--stretch", action="store_true", help="Resize without preserving aspect ratio")
    p.add_argument("--crop", type=str, default=None, help="Crop X,Y,W,H (applied after text)")
    p.add_argument("--output", type=str, default="output.png", help="Output image path")
    p.add_argument("--run-name", type=str, default="run", dest="run_name", help="Reports subdir name")
    p.add_argument("--output-dir", type=str, default=REPORTS_DIR, dest="output_dir", help="Reports directory")
    p.add_argument("--repo-root", type=str, default=None, dest="repo_root", help="Repo root (default: cwd)")
    p.add_argument("--debug", action="store_true", default=IMAGETEXT_DEBUG, help="Also write debug.png")
    return p


def _parse_color(s: str) -> Color:
    color = Color.named(s)
    if color is None:
        raise ValueError(f"Unknown color {s!r}")
    return color


def run(args: argparse.Namespace) -> list[Path]:
    """Execute one CLI run; returns written paths."""
    repo_root = Path(args.repo_root).resolve() if args.repo_root else Path.cwd().resolve()
    style = Style(
        font_name=args.font,
        font_size=args.font_size,
        color=_parse_color(args.color),
        alignment=parse_alignment(args.align),
    )
    config = TextConfiguration(text=args.text, position=parse_position(args.position), style=style)
    resize = parse_size(args.resize) if args.resize else None
    crop = parse_rect(args.crop) if args.crop else None

    with Backend():
        if args.input:
            image = Image.open(repo_root / args.input if not Path(args.input).is_absolute() else args.input)
            source = args.input
        else:
            image = Image.new(args.width, args.height, _parse_color(args.background))
            source = f"canvas:{args.width}x{args.height}"
        input_size = image.size

        if resize is not None:
            image = image.resizing(resize, maintain_aspect_ratio=not args.stretch)

        metrics = measure_text_metrics(style.font_name, style.font_size, config.text)
        anchor, alignment = resolve(config.position, image.size, metrics, style)
        if config.text:
            image = image.adding_text(config, measure=lambda _font, _size, _text: metrics)
        annotated = image

        if crop is not None:
            image = image.cropping(crop)

        output_path = Path(args.output)
        if not output_path.is_absolute():
            output_path = repo_root / output_path
        output_path.parent.mkdir(parents=True, exist_ok=True)
        image.write(output_path)

        report_dir = ensure_report_dir(repo_root, args.run_name, output_dir=args.output_dir)
        data = render_result_dict(
            config,
            annotated.size,
            anchor,
            alignment,
            metrics,
            resize=resize,
            crop=clamp_crop(crop, annotated.size) if crop is not None else None,
            output_size=image.size,
        )
        data["input"] = {"source": source, "size": {"width": input_size.width, "height": input_size.height}}
        written = [
            output_path,
            write_report_json(report_dir, data),
            write_run_metadata_json(report_dir, args.run_name, source, config.text, style, config.position),
        ]
        if args.debug:
            from imagetext.core.render import render_debug
            crop_rect = clamp_crop(crop, annotated.size) if crop is not None else None
            written.append(render_debug(annotated, anchor, metrics, alignment, report_dir / "debug.png", crop=crop_rect))
    return written


def main(argv: list[str] | None = None) -> None:
    level_name = os.environ.get("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(level=getattr(logging, level_name, logging.INFO))
    parser = _build_parser()
    args = parser.parse_args(argv)
    try:
        paths = run(args)
    except ImageTextError as e:
        logger.error("%s: %s", e.code, e)
        sys.exit(2)
    except ValueError as e:
        # malformed --position/--resize/--crop/--color/--align values
        parser.error(str(e))
    for p in paths:
        print(p)


if __name__ == "__main__":
    main()
