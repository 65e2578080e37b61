"""
Backend handle: reference-counted initialize/terminate, limit apply/restore, idempotent teardown.
"""

from __future__ import annotations

import threading

from PIL import Image as PILImage

from imagetext.core.backend import Backend


def test_initialize_applies_and_terminate_restores_limit() -> None:
    before = PILImage.MAX_IMAGE_PIXELS
    backend = Backend(max_image_pixels=12345)
    backend.initialize()
    try:
        assert backend.initialized is True
        assert PILImage.MAX_IMAGE_PIXELS == 12345
    finally:
        backend.terminate()
    assert backend.initialized is False
    assert PILImage.MAX_IMAGE_PIXELS == before


def test_nested_initialize_is_reference_counted() -> None:
    before = PILImage.MAX_IMAGE_PIXELS
    backend = Backend(max_image_pixels=999)
    backend.initialize()
    backend.initialize()
    backend.terminate()
    assert backend.initialized is True
    assert PILImage.MAX_IMAGE_PIXELS == 999
    backend.terminate()
    assert backend.initialized is False
    assert PILImage.MAX_IMAGE_PIXELS == before


def test_extra_terminate_is_noop() -> None:
    before = PILImage.MAX_IMAGE_PIXELS
    backend = Backend()
    backend.terminate()
    backend.terminate()
    assert backend.initialized is False
    assert PILImage.MAX_IMAGE_PIXELS == before


def test_context_manager() -> None:
    before = PILImage.MAX_IMAGE_PIXELS
    with Backend(max_image_pixels=4242) as backend:
        assert backend.initialized
        assert PILImage.MAX_IMAGE_PIXELS == 4242
    assert PILImage.MAX_IMAGE_PIXELS == before


def test_concurrent_initialize_terminate_balances() -> None:
    before = PILImage.MAX_IMAGE_PIXELS
    backend = Backend(max_image_pixels=777)

    def worker() -> None:
        for _ in range(50):
            backend.initialize()
            backend.terminate()

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert backend.initialized is False
    assert PILImage.MAX_IMAGE_PIXELS == before
