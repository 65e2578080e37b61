"""
Structured error codes and exceptions for geometry, metrics and backend failures.
Use the keys in reports; map to user-facing messages in the UI.
"""

from __future__ import annotations

# Known error keys
INVALID_GEOMETRY = "invalid_geometry"
METRICS_UNAVAILABLE = "metrics_unavailable"
OUT_OF_BOUNDS_CROP = "out_of_bounds_crop"
INITIALIZATION_FAILED = "initialization_failed"
INVALID_IMAGE_DATA = "invalid_image_data"
DRAWING_FAILED = "drawing_failed"
EXPORT_FAILED = "export_failed"
RESIZE_FAILED = "resize_failed"
CROP_FAILED = "crop_failed"
TEXT_RENDERING_FAILED = "text_rendering_failed"

# User-facing messages (short, actionable)
USER_MESSAGES: dict[str, str] = {
    INVALID_GEOMETRY: "Image or target size has a zero dimension. Use a positive width and height.",
    METRICS_UNAVAILABLE: "Could not measure the text with this font. Try another font or size.",
    OUT_OF_BOUNDS_CROP: "Crop rectangle lies outside the image. Move it inside the image bounds.",
    INITIALIZATION_FAILED: "Could not create the image. Check the canvas size.",
    INVALID_IMAGE_DATA: "Input is not a readable image.",
    DRAWING_FAILED: "Drawing on the image failed.",
    EXPORT_FAILED: "Could not encode or write the image.",
    RESIZE_FAILED: "Resize failed. Check the target size.",
    CROP_FAILED: "Crop failed. Check the crop rectangle.",
    TEXT_RENDERING_FAILED: "Text could not be drawn. Check font and text.",
}


def user_message(error_key: str | None, fallback: str = "Something went wrong.") -> str:
    """Return a user-facing message for the given error key."""
    if not error_key:
        return fallback
    return USER_MESSAGES.get(error_key, fallback)


class ImageTextError(Exception):
    """Base error; `code` is one of the keys above."""
    code: str = ""

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or user_message(self.code))


class InvalidGeometry(ImageTextError, ValueError):
    code = INVALID_GEOMETRY


class MetricsUnavailable(ImageTextError):
    code = METRICS_UNAVAILABLE


class OutOfBoundsCrop(ImageTextError, ValueError):
    code = OUT_OF_BOUNDS_CROP


class BackendError(ImageTextError):
    """Failure reported by the Pillow backend while mutating pixel data."""


class InitializationFailed(BackendError):
    code = INITIALIZATION_FAILED


class InvalidImageData(BackendError):
    code = INVALID_IMAGE_DATA


class DrawingFailed(BackendError):
    code = DRAWING_FAILED


class ExportFailed(BackendError):
    code = EXPORT_FAILED


class ResizeFailed(BackendError):
    code = RESIZE_FAILED


class CropFailed(BackendError):
    code = CROP_FAILED


class TextRenderingFailed(BackendError):
    code = TEXT_RENDERING_FAILED

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        msg = user_message(self.code)
        super().__init__(f"{msg} ({detail})" if detail else msg)
