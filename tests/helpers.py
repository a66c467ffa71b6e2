"""Shared image helpers for the test suite."""

from io import BytesIO

import numpy as np
from PIL import Image

from cl_image_pipeline import Dimensions, PillowCodec
from cl_image_pipeline.common.geometry import PixelBuffer


def gradient_image(width: int, height: int, mode: str = "RGB") -> PixelBuffer:
    """Build an image whose red channel is ``x % 256`` and green ``y % 256``.

    Pixel positions can be recovered from colours, so tests can tell which part
    of the source a crop came from.
    """
    xs = np.arange(width) % 256
    ys = np.arange(height) % 256
    arr = np.zeros((height, width, 3), dtype=np.uint8)
    arr[..., 0] = xs[np.newaxis, :]
    arr[..., 1] = ys[:, np.newaxis]
    arr[..., 2] = 128

    img = Image.fromarray(arr)
    if mode == "RGBA":
        img.putalpha(255)
        return img
    if mode != "RGB":
        return img.convert(mode)
    return img


def encode(img: PixelBuffer, format: str = "PNG") -> bytes:
    output = BytesIO()
    img.save(output, format=format)
    return output.getvalue()


def decode(data: bytes) -> PixelBuffer:
    with Image.open(BytesIO(data)) as img:
        img.load()
        return img.copy()


def decoded_format(data: bytes) -> str | None:
    with Image.open(BytesIO(data)) as img:
        return img.format


def decoded_size(data: bytes) -> Dimensions:
    with Image.open(BytesIO(data)) as img:
        return Dimensions(img.width, img.height)


class RecordingCodec:
    """Pillow codec that records every decode and encode call."""

    def __init__(self) -> None:
        self.inner: PillowCodec = PillowCodec()
        self.decoded: int = 0
        self.encoded: list[tuple[str, int, tuple[int, int]]] = []

    def available_encoders(self) -> frozenset[str]:
        return self.inner.available_encoders()

    def decode(self, data: bytes) -> PixelBuffer:
        self.decoded += 1
        return self.inner.decode(data)

    def encode(self, image: PixelBuffer, format: str, quality: int) -> bytes:
        self.encoded.append((format, quality, image.size))
        return self.inner.encode(image, format, quality)
