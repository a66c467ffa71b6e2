"""cl_image_pipeline - deterministic exact-size image post-processing."""

from .algorithms import (
    correct_to_exact,
    crop_to_aspect,
    process,
    reduce_quality,
    scale_to_fit,
)
from .common.codec import ImageCodec, PillowCodec
from .common.config import PipelineSettings
from .common.errors import (
    CodecNotFoundError,
    DecodeError,
    EncodeError,
    ImagePipelineError,
    InternalInvariantError,
    InvalidArgumentError,
)
from .common.formats import ImageFormat
from .common.geometry import Dimensions, Rectangle
from .pipeline import ImagePipeline

__version__ = "0.1.0"

__all__ = [
    "CodecNotFoundError",
    "DecodeError",
    "Dimensions",
    "EncodeError",
    "ImageCodec",
    "ImageFormat",
    "ImagePipeline",
    "ImagePipelineError",
    "InternalInvariantError",
    "InvalidArgumentError",
    "PillowCodec",
    "PipelineSettings",
    "Rectangle",
    "__version__",
    "correct_to_exact",
    "crop_to_aspect",
    "process",
    "reduce_quality",
    "scale_to_fit",
]
