"""Dimension arithmetic shared by the pipeline stages.

All functions here are pure: they take and return immutable value objects and
never touch pixel data. Each stage computes its rectangle with one of these
functions and then hands the rectangle to ``extract_region``.
"""

import math
from fractions import Fraction
from typing import ClassVar

from PIL import Image
from pydantic import BaseModel, ConfigDict, ValidationError

from .errors import InternalInvariantError, InvalidArgumentError

PixelBuffer = Image.Image


class Dimensions(BaseModel):
    """Width and height of an image or a requested output, in pixels."""

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    width: int
    height: int

    def __init__(self, width: int, height: int):
        try:
            super().__init__(width=width, height=height)
        except ValidationError as exc:
            raise InvalidArgumentError(
                f"Dimensions must be whole pixels, got {width!r}x{height!r}"
            ) from exc

    @classmethod
    def of(cls, image: PixelBuffer) -> "Dimensions":
        return cls(image.width, image.height)

    @property
    def ratio(self) -> Fraction:
        """Exact width/height ratio."""
        if self.height == 0:
            raise InternalInvariantError(f"Zero height in {self.width}x{self.height}")
        return Fraction(self.width, self.height)

    def as_tuple(self) -> tuple[int, int]:
        return (self.width, self.height)

    def __str__(self) -> str:
        return f"{self.width}x{self.height}"


class Rectangle(BaseModel):
    """Region of a pixel buffer: top-left origin plus size.

    The origin may be negative or the far edge may lie past the buffer when a
    region is larger than the buffer it is taken from.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    x: int
    y: int
    size: Dimensions

    @property
    def right(self) -> int:
        return self.x + self.size.width

    @property
    def bottom(self) -> int:
        return self.y + self.size.height

    @property
    def box(self) -> tuple[int, int, int, int]:
        """(left, upper, right, lower) as Pillow expects it."""
        return (self.x, self.y, self.right, self.bottom)

    def contained_in(self, bounds: Dimensions) -> bool:
        return (
            self.x >= 0
            and self.y >= 0
            and self.right <= bounds.width
            and self.bottom <= bounds.height
        )

    def intersection(self, bounds: Dimensions) -> "Rectangle | None":
        """Part of this rectangle that lies inside ``(0, 0, bounds)``."""
        left = max(self.x, 0)
        top = max(self.y, 0)
        right = min(self.right, bounds.width)
        bottom = min(self.bottom, bounds.height)
        if right <= left or bottom <= top:
            return None
        return Rectangle(x=left, y=top, size=Dimensions(right - left, bottom - top))


def require_positive(dimensions: Dimensions, name: str = "target") -> Dimensions:
    """Reject requested dimensions that cannot describe an image."""
    if dimensions.width <= 0 or dimensions.height <= 0:
        raise InvalidArgumentError(
            f"{name} dimensions must be positive, got {dimensions}"
        )
    return dimensions


def aspect_crop_rect(source: Dimensions, target: Dimensions) -> Rectangle:
    """Largest centred rectangle of ``source`` with ``target``'s aspect ratio.

    Ratios are compared as exact fractions. The crop size is rounded up and the
    origin truncated, then the origin is clamped so the whole rectangle stays
    inside ``source``.
    """
    _ = require_positive(target)
    target_ratio = target.ratio
    source_ratio = source.ratio

    if source_ratio < target_ratio:
        crop_width = Fraction(source.width)
        crop_height = source.width / target_ratio
    else:
        crop_width = source.height * target_ratio
        crop_height = Fraction(source.height)

    size = Dimensions(math.ceil(crop_width), math.ceil(crop_height))
    x = int(Fraction(source.width, 2) - crop_width / 2)
    y = int(Fraction(source.height, 2) - crop_height / 2)

    # Ceiling-rounding can push the far edge one pixel out.
    x = max(0, min(x, source.width - size.width))
    y = max(0, min(y, source.height - size.height))
    return Rectangle(x=x, y=y, size=size)


def scaled_size(source: Dimensions, bounds: Dimensions) -> Dimensions:
    """Size of ``source`` scaled to ``bounds`` with its aspect ratio preserved.

    The side that constrains the fit equals the bound exactly; the other side
    is rounded up, so it can exceed the bound by a pixel after an aspect crop.
    """
    _ = require_positive(bounds, "bounds")
    if source.height == 0:
        raise InternalInvariantError(f"Cannot scale zero-height source {source}")

    bounds_scale = bounds.width / bounds.height
    current_scale = source.width / source.height

    if current_scale > bounds_scale:
        return Dimensions(bounds.width, math.ceil(bounds.width / current_scale))
    return Dimensions(math.ceil(bounds.height * current_scale), bounds.height)


def corner_rect(source: Dimensions, target: Dimensions) -> Rectangle:
    """``target``-sized rectangle anchored to the bottom-right of ``source``."""
    _ = require_positive(target)
    return Rectangle(
        x=source.width - target.width,
        y=source.height - target.height,
        size=target,
    )


def extract_region(image: PixelBuffer, rect: Rectangle) -> PixelBuffer:
    """Copy ``rect`` out of ``image`` into a new buffer of the same mode.

    The new buffer starts zeroed (transparent where the mode has alpha) and the
    overlapping source pixels replace it 1:1. Nothing is alpha-blended. A
    palette image keeps its palette and transparent index, and is padded with
    that index.
    """
    transparency = image.info.get("transparency")
    target = Image.new(image.mode, rect.size.as_tuple(), _background(image.mode, transparency))
    if image.mode == "P":
        palette = image.getpalette()
        if palette is not None:
            target.putpalette(palette)
    if transparency is not None:
        target.info["transparency"] = transparency

    overlap = rect.intersection(Dimensions.of(image))
    if overlap is not None:
        region = image.crop(overlap.box)
        target.paste(region, (overlap.x - rect.x, overlap.y - rect.y))
    return target


def _background(mode: str, transparency: int | bytes | tuple[int, ...] | None) -> int:
    if mode != "P" or transparency is None:
        return 0
    if isinstance(transparency, int):
        return transparency
    if isinstance(transparency, bytes):
        # Per-index alpha table, as palette PNGs store it.
        index = transparency.find(0)
        return index if index >= 0 else 0
    return 0
