# imagetext/core/render.py
"""
Matplotlib debug overlay: the image with anchor point, baseline, ink box and optional crop rect.
"""

from __future__ import annotations

import warnings
from pathlib import Path

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import numpy as np

from imagetext.core.config import (
    DEBUG_ANCHOR_COLOR,
    DEBUG_CROP_COLOR,
    DEBUG_DPI,
    DEBUG_INK_COLOR,
)
from imagetext.core.geometry import ink_box_at, rect_to_polygon
from imagetext.core.image import Image
from imagetext.core.types import Alignment, Point, Rect, TextMetrics


def _new_fig(width_px: int, height_px: int) -> tuple[plt.Figure, plt.Axes]:
    fig = plt.figure(
        figsize=(width_px / DEBUG_DPI, height_px / DEBUG_DPI),
        dpi=DEBUG_DPI,
        constrained_layout=False,
    )
    ax = fig.add_axes([0, 0, 1, 1])  # full-canvas axes
    ax.axis("off")
    return fig, ax


def _draw_rect(ax: plt.Axes, rect: Rect, color: str, label: str, linestyle: str = "-") -> None:
    poly = rect_to_polygon(rect)
    if poly.is_empty:
        return
    xy = np.array(poly.exterior.coords)
    ax.plot(xy[:, 0], xy[:, 1], color=color, linewidth=1, linestyle=linestyle, label=label)


def render_debug(
    image: Image,
    anchor: Point,
    metrics: TextMetrics,
    alignment: Alignment,
    output_path: str | Path,
    crop: Rect | None = None,
) -> Path:
    """Write debug PNG at the image's pixel size. Image y axis points down."""
    size = image.size
    w, h = int(size.width), int(size.height)
    fig, ax = _new_fig(w, h)
    ax.imshow(image.to_array(), extent=(0, w, h, 0), interpolation="nearest")

    ax.axhline(anchor.y, color=DEBUG_ANCHOR_COLOR, linewidth=0.8, linestyle=":", label="baseline")
    ax.scatter([anchor.x], [anchor.y], s=24, color=DEBUG_ANCHOR_COLOR, zorder=5, label="anchor")
    _draw_rect(ax, ink_box_at(anchor, metrics, alignment), DEBUG_INK_COLOR, "ink")
    if crop is not None:
        _draw_rect(ax, crop, DEBUG_CROP_COLOR, "crop", linestyle="--")

    ax.set_xlim(0, w)
    ax.set_ylim(h, 0)
    out = Path(output_path)
    with warnings.catch_warnings():
        warnings.filterwarnings("ignore", message=".*constrained_layout.*", category=UserWarning)
        fig.savefig(out, dpi=DEBUG_DPI, facecolor="white")
    plt.close(fig)
    return out
