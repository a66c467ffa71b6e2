"""Trim rounding excess by anchoring to the bottom-right corner."""

from loguru import logger

from ..common.geometry import Dimensions, PixelBuffer, corner_rect, extract_region
from ..utils.profiling import timed


@timed
def corner_correct(image: PixelBuffer, target: Dimensions) -> PixelBuffer:
    """Cut exactly ``target`` out of ``image``, keeping the bottom-right corner.

    Excess is dropped from the top and left. When ``image`` is smaller than
    ``target`` the missing rows and columns at the top-left stay transparent.

    Raises:
        InvalidArgumentError: If ``target`` has a non-positive side
    """
    rect = corner_rect(Dimensions.of(image), target)
    if rect.x == 0 and rect.y == 0:
        logger.debug(f"Corner correction is a no-op at {target}")
    else:
        logger.debug(
            f"Corner correct {image.width}x{image.height} -> {target} at ({rect.x}, {rect.y})"
        )
    return extract_region(image, rect)
