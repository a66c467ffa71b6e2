"""Aspect-preserving resample to fit target bounds."""

from loguru import logger
from PIL import Image

from ..common.geometry import Dimensions, PixelBuffer, scaled_size
from ..utils.profiling import timed


@timed
def proportional_scale(
    image: PixelBuffer,
    bounds: Dimensions,
    resample: Image.Resampling = Image.Resampling.BICUBIC,
) -> PixelBuffer:
    """Resample ``image`` to the size ``scaled_size`` computes for ``bounds``.

    Output pixels are written directly, never blended over a background.

    Raises:
        InvalidArgumentError: If ``bounds`` has a non-positive side
    """
    size = scaled_size(Dimensions.of(image), bounds)
    logger.debug(f"Scale {image.width}x{image.height} -> {size} (bounds {bounds})")
    return image.resize(size.as_tuple(), resample)
