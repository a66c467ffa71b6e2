"""Pixel-level pipeline stages.

Each stage takes a decoded PixelBuffer and returns a new one; the caller owns
both and nothing is shared between stages.
"""

from .aspect_crop import aspect_crop
from .corner_correct import corner_correct
from .proportional_scale import proportional_scale
from .quality_encode import quality_encode, require_quality

__all__ = [
    "aspect_crop",
    "corner_correct",
    "proportional_scale",
    "quality_encode",
    "require_quality",
]
