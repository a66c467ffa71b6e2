"""Common module - value objects, codec, settings and errors."""

from .codec import ImageCodec, PillowCodec
from .config import PipelineSettings
from .errors import (
    CodecNotFoundError,
    DecodeError,
    EncodeError,
    ImagePipelineError,
    InternalInvariantError,
    InvalidArgumentError,
)
from .formats import DEFAULT_FORMAT, ImageFormat, get_pil_format, resolve_format
from .geometry import Dimensions, PixelBuffer, Rectangle

__all__ = [
    "CodecNotFoundError",
    "DecodeError",
    "DEFAULT_FORMAT",
    "Dimensions",
    "EncodeError",
    "ImageCodec",
    "ImageFormat",
    "ImagePipelineError",
    "InternalInvariantError",
    "InvalidArgumentError",
    "PillowCodec",
    "PipelineSettings",
    "PixelBuffer",
    "Rectangle",
    "get_pil_format",
    "resolve_format",
]
