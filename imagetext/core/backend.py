# imagetext/core/backend.py
"""
Pillow backend handle: reference-counted, process-wide setup and teardown.
Passed explicitly to whoever decodes large images; the geometry engine never uses it.
"""

from __future__ import annotations

import logging
import threading

from imagetext.core.config import MAX_IMAGE_PIXELS
from imagetext.core.error_codes import InitializationFailed

logger = logging.getLogger(__name__)


class Backend:
    """
    initialize() applies resource limits on the first call and counts nested calls;
    terminate() restores the previous limits when the count returns to zero.
    Extra terminate() calls are no-ops. Safe to share between threads.
    """

    def __init__(self, max_image_pixels: int | None = MAX_IMAGE_PIXELS) -> None:
        self.max_image_pixels = max_image_pixels
        self._lock = threading.Lock()
        self._refcount = 0
        self._saved_max_pixels: int | None = None

    @property
    def initialized(self) -> bool:
        with self._lock:
            return self._refcount > 0

    def initialize(self) -> None:
        with self._lock:
            if self._refcount == 0:
                try:
                    from PIL import Image, features
                except ImportError as e:
                    raise InitializationFailed(f"Pillow is not available: {e}") from e
                self._saved_max_pixels = Image.MAX_IMAGE_PIXELS
                Image.MAX_IMAGE_PIXELS = self.max_image_pixels
                logger.debug(
                    "backend up: max_image_pixels=%s freetype=%s",
                    self.max_image_pixels, features.check("freetype2"),
                )
            self._refcount += 1

    def terminate(self) -> None:
        with self._lock:
            if self._refcount == 0:
                return
            self._refcount -= 1
            if self._refcount == 0:
                from PIL import Image

                Image.MAX_IMAGE_PIXELS = self._saved_max_pixels
                self._saved_max_pixels = None
                logger.debug("backend down")

    def __enter__(self) -> Backend:
        self.initialize()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.terminate()
