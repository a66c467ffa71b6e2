"""Test configuration and fixtures for cl_image_pipeline.

This module provides:
- Synthetic image factories (encoded bytes and decoded buffers)
- Pipelines bound to the real Pillow codec and to restricted/recording codecs
- A loguru capture fixture
"""

from collections.abc import Callable

import numpy as np
import pytest
from loguru import logger
from PIL import Image

from cl_image_pipeline import ImagePipeline, PillowCodec, PipelineSettings
from cl_image_pipeline.algorithms import reset_default_pipeline

from .helpers import RecordingCodec, encode, gradient_image

ImageFactory = Callable[..., Image.Image]
BytesFactory = Callable[..., bytes]


# ============================================================================
# Image Fixtures
# ============================================================================


@pytest.fixture
def make_image() -> ImageFactory:
    """Factory for decoded gradient images: ``make_image(w, h, mode="RGB")``."""
    return gradient_image


@pytest.fixture
def make_image_bytes() -> BytesFactory:
    """Factory for encoded gradient images: ``make_image_bytes(w, h, mode, format)``."""

    def _make(width: int, height: int, mode: str = "RGB", format: str = "PNG") -> bytes:
        return encode(gradient_image(width, height, mode), format)

    return _make


@pytest.fixture
def noisy_image_bytes() -> bytes:
    """PNG of seeded RGB noise; compresses poorly so JPEG quality shows in size."""
    rng = np.random.default_rng(42)
    arr = rng.integers(0, 256, size=(120, 160, 3), dtype=np.uint8)
    return encode(Image.fromarray(arr), "PNG")


@pytest.fixture
def malformed_bytes() -> bytes:
    return b"this is definitely not an image \x00\x01\x02"


# ============================================================================
# Pipeline Fixtures
# ============================================================================


@pytest.fixture
def pipeline() -> ImagePipeline:
    """Pipeline with the real Pillow codec and default settings."""
    return ImagePipeline(PillowCodec(), PipelineSettings())


@pytest.fixture
def bmp_only_pipeline() -> ImagePipeline:
    """Pipeline whose codec only registers a BMP encoder."""
    return ImagePipeline(PillowCodec(encoders={"BMP"}))


@pytest.fixture(autouse=True)
def fresh_default_pipeline():
    """Rebuild the module-level default pipeline for every test."""
    reset_default_pipeline()
    yield
    reset_default_pipeline()


# ============================================================================
# Mock Service Fixtures
# ============================================================================


@pytest.fixture
def recording_codec() -> RecordingCodec:
    return RecordingCodec()


@pytest.fixture
def log_messages():
    """Collect loguru messages emitted during the test."""
    messages: list[str] = []
    handler_id = logger.add(lambda m: messages.append(m.record["message"]), level="DEBUG")
    yield messages
    logger.remove(handler_id)
