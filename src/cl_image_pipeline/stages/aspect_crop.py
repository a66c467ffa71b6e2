"""Centred crop to a target aspect ratio."""

from loguru import logger

from ..common.geometry import Dimensions, PixelBuffer, aspect_crop_rect, extract_region
from ..utils.profiling import timed


@timed
def aspect_crop(image: PixelBuffer, target: Dimensions) -> PixelBuffer:
    """Crop ``image`` to ``target``'s aspect ratio, keeping the centre.

    Args:
        image: Decoded source image
        target: Size whose aspect ratio the crop must match

    Returns:
        New buffer in the source's pixel mode with the crop dimensions

    Raises:
        InvalidArgumentError: If ``target`` has a non-positive side
    """
    rect = aspect_crop_rect(Dimensions.of(image), target)
    logger.debug(
        f"Aspect crop {image.width}x{image.height} -> {rect.size} at ({rect.x}, {rect.y})"
    )
    return extract_region(image, rect)
