"""Codec capability: bytes <-> PixelBuffer, backed by Pillow."""

from collections.abc import Iterable
from io import BytesIO
from typing import Protocol

from loguru import logger
from PIL import Image

from .errors import CodecNotFoundError, DecodeError, EncodeError
from .formats import is_lossy
from .geometry import PixelBuffer

# Exceptions Pillow raises for bytes it cannot parse.
_DECODE_FAILURES = (
    OSError,
    SyntaxError,
    ValueError,
    EOFError,
    Image.DecompressionBombError,
)

# Modes each writer stores natively; anything else is converted first.
_NATIVE_MODES: dict[str, frozenset[str]] = {
    "JPEG": frozenset({"1", "L", "RGB", "CMYK"}),
    "BMP": frozenset({"1", "L", "P", "RGB", "RGBA"}),
    "PNG": frozenset({"1", "L", "LA", "I", "I;16", "I;16B", "P", "RGB", "RGBA"}),
    "WEBP": frozenset({"RGB", "RGBA"}),
}

# Single-channel modes deeper than 8 bits.
_DEEP_GREY_MODES = frozenset({"F", "I", "I;16", "I;16B", "I;16L", "I;16N"})


class ImageCodec(Protocol):
    def decode(self, data: bytes) -> PixelBuffer: ...

    def encode(self, image: PixelBuffer, format: str, quality: int) -> bytes: ...

    def available_encoders(self) -> frozenset[str]: ...


class PillowCodec:
    """Pillow-backed codec.

    Args:
        encoders: Restrict the formats this codec will write. Defaults to every
            writer Pillow has registered, enumerated on first use.
    """

    def __init__(self, encoders: Iterable[str] | None = None):
        self._encoders: frozenset[str] | None = (
            frozenset(e.upper() for e in encoders) if encoders is not None else None
        )

    def available_encoders(self) -> frozenset[str]:
        if self._encoders is None:
            _ = Image.init()
            self._encoders = frozenset(Image.SAVE)
        return self._encoders

    def decode(self, data: bytes) -> PixelBuffer:
        """Decode ``data`` fully into memory.

        Raises:
            DecodeError: If ``data`` is empty or Pillow cannot parse it
        """
        if not data:
            raise DecodeError("Cannot decode empty input")
        try:
            with Image.open(BytesIO(data)) as img:
                img.load()
                return img.copy()
        except _DECODE_FAILURES as exc:
            raise DecodeError(f"Cannot decode image: {exc}") from exc

    def encode(self, image: PixelBuffer, format: str, quality: int) -> bytes:
        """Encode ``image`` as ``format``.

        ``quality`` reaches the writer only for lossy formats.

        Raises:
            CodecNotFoundError: If no encoder is registered for ``format``
            EncodeError: If the writer fails
        """
        if format not in self.available_encoders():
            raise CodecNotFoundError(format)

        save_kwargs: dict[str, object] = {}
        if is_lossy(format):
            save_kwargs["quality"] = quality

        output = BytesIO()
        try:
            prepared = _convert_for_format(image, format)
            prepared.save(output, format=format, **save_kwargs)
        except (OSError, ValueError, KeyError) as exc:
            raise EncodeError(f"Cannot encode {image.mode} image as {format}: {exc}") from exc
        return output.getvalue()


def _convert_for_format(image: PixelBuffer, format: str) -> PixelBuffer:
    native = _NATIVE_MODES.get(format)
    if native is None or image.mode in native:
        return image

    if image.mode in _DEEP_GREY_MODES:
        mode = "L"
    elif format == "JPEG":
        mode = "L" if image.mode == "LA" else "RGB"
    elif image.mode in ("LA", "PA") or image.has_transparency_data:
        mode = "RGBA"
    else:
        mode = "RGB"

    logger.debug(f"Converting {image.mode} to {mode} for {format}")
    return image.convert(mode)
