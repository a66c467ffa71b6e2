"""Output format identifiers and name resolution."""

from enum import StrEnum


class ImageFormat(StrEnum):
    BMP = "BMP"
    PNG = "PNG"
    JPEG = "JPEG"
    WEBP = "WEBP"
    GIF = "GIF"
    TIFF = "TIFF"


DEFAULT_FORMAT = ImageFormat.BMP

_ALIASES = {
    "jpg": "JPEG",
    "jpeg": "JPEG",
    "png": "PNG",
    "webp": "WEBP",
    "gif": "GIF",
    "bmp": "BMP",
    "tif": "TIFF",
    "tiff": "TIFF",
}


def get_pil_format(format_str: str) -> str:
    """Convert a format string to the Pillow writer name."""
    return _ALIASES.get(format_str.lower(), format_str.upper())


def resolve_format(
    format: ImageFormat | str | None, default: ImageFormat | str = DEFAULT_FORMAT
) -> str:
    """Pillow format name for ``format``; ``None`` means ``default``.

    Unknown names pass through upper-cased so the codec can report them as
    missing instead of this function guessing.
    """
    if format is None:
        format = default
    return get_pil_format(str(format))


def is_lossy(format_name: str) -> bool:
    return format_name in (ImageFormat.JPEG.value, ImageFormat.WEBP.value)
