"""Public function API for cl_image_pipeline.

These functions run on a shared default ``ImagePipeline`` built from
``PipelineSettings.from_env()``. Host applications that need a different codec
or settings should create their own ``ImagePipeline`` instead.

Example:
    Exact-size avatar from arbitrary upload bytes::

        from cl_image_pipeline.algorithms import process
        from cl_image_pipeline import Dimensions, ImageFormat

        avatar = process(upload_bytes, Dimensions(128, 128), ImageFormat.PNG)
        if avatar is None:
            ...  # upload was not a decodable image

    Individual stages::

        from cl_image_pipeline.algorithms import crop_to_aspect, scale_to_fit

        square = crop_to_aspect(data, Dimensions(1, 1))
        small = scale_to_fit(square, Dimensions(64, 64))
"""

from .common.config import PipelineSettings
from .common.geometry import Dimensions
from .pipeline import FormatArg, ImagePipeline

_default_pipeline: ImagePipeline | None = None


def get_default_pipeline() -> ImagePipeline:
    """Get the default pipeline instance.

    Returns:
        ImagePipeline with a PillowCodec and environment settings
    """
    global _default_pipeline
    if _default_pipeline is None:
        _default_pipeline = ImagePipeline(settings=PipelineSettings.from_env())
    return _default_pipeline


def reset_default_pipeline() -> None:
    """Drop the default pipeline so the next call rebuilds it."""
    global _default_pipeline
    _default_pipeline = None


def crop_to_aspect(image: bytes, target: Dimensions, format: FormatArg = None) -> bytes | None:
    return get_default_pipeline().crop_to_aspect(image, target, format)


def scale_to_fit(image: bytes, bounds: Dimensions, format: FormatArg = None) -> bytes:
    return get_default_pipeline().scale_to_fit(image, bounds, format)


def correct_to_exact(image: bytes, target: Dimensions, format: FormatArg = None) -> bytes:
    return get_default_pipeline().correct_to_exact(image, target, format)


def reduce_quality(image: bytes, quality: int, format: FormatArg = None) -> bytes:
    return get_default_pipeline().reduce_quality(image, quality, format)


def process(image: bytes, target: Dimensions, format: FormatArg = None) -> bytes | None:
    return get_default_pipeline().process(image, target, format)
