"""Byte-level image pipeline: decode, transform, re-encode.

Every public method takes encoded bytes and returns encoded bytes. Decoded
buffers live only inside the method that decoded them and are closed before it
returns.
"""

from collections.abc import Callable

from loguru import logger

from .common.codec import ImageCodec, PillowCodec
from .common.config import PipelineSettings
from .common.errors import CodecNotFoundError, DecodeError
from .common.formats import ImageFormat, resolve_format
from .common.geometry import Dimensions, PixelBuffer, require_positive
from .stages import (
    aspect_crop,
    corner_correct,
    proportional_scale,
    quality_encode,
    require_quality,
)
from .stages.quality_encode import MAX_QUALITY

FormatArg = ImageFormat | str | None

# Intermediate re-encodes must not lose detail when a lossy format is requested.
_INTERMEDIATE_QUALITY = MAX_QUALITY


class ImagePipeline:
    """Crop, scale, correct and re-encode images to exact target sizes.

    Args:
        codec: Decoder/encoder capability. Defaults to ``PillowCodec()``.
        settings: Pipeline settings. Defaults to ``PipelineSettings()``.

    Example::

        pipeline = ImagePipeline()
        thumb = pipeline.process(data, Dimensions(128, 128), ImageFormat.PNG)
    """

    def __init__(
        self,
        codec: ImageCodec | None = None,
        settings: PipelineSettings | None = None,
    ) -> None:
        self.codec: ImageCodec = codec if codec is not None else PillowCodec()
        self.settings: PipelineSettings = settings if settings is not None else PipelineSettings()

    def resolve_format(self, format: FormatArg) -> str:
        """Pillow format name for ``format``, falling back to the default."""
        return resolve_format(format, self.settings.default_format)

    def _transform(
        self,
        image: bytes,
        transform: Callable[[PixelBuffer], PixelBuffer],
        format: FormatArg,
    ) -> bytes:
        with self.codec.decode(image) as source:
            with transform(source) as result:
                return quality_encode(
                    result, self.resolve_format(format), _INTERMEDIATE_QUALITY, self.codec
                )

    def crop_to_aspect(
        self, image: bytes, target: Dimensions, format: FormatArg = None
    ) -> bytes | None:
        """Centre-crop ``image`` to ``target``'s aspect ratio.

        Returns:
            Encoded crop, or None if ``image`` cannot be decoded

        Raises:
            InvalidArgumentError: If ``target`` has a non-positive side
            CodecNotFoundError: If no encoder exists for ``format``
        """
        _ = require_positive(target)
        try:
            return self._transform(image, lambda src: aspect_crop(src, target), format)
        except DecodeError as exc:
            logger.warning(f"crop_to_aspect produced no result: {exc}")
            return None

    def scale_to_fit(self, image: bytes, bounds: Dimensions, format: FormatArg = None) -> bytes:
        """Resample ``image`` to fit ``bounds``, preserving its aspect ratio.

        Raises:
            InvalidArgumentError: If ``bounds`` has a non-positive side
            DecodeError: If ``image`` cannot be decoded
            CodecNotFoundError: If no encoder exists for ``format``
        """
        _ = require_positive(bounds, "bounds")
        resample = self.settings.resample_filter
        return self._transform(
            image, lambda src: proportional_scale(src, bounds, resample), format
        )

    def correct_to_exact(self, image: bytes, target: Dimensions, format: FormatArg = None) -> bytes:
        """Cut ``target`` out of ``image`` anchored at the bottom-right corner.

        Raises:
            InvalidArgumentError: If ``target`` has a non-positive side
            DecodeError: If ``image`` cannot be decoded
            CodecNotFoundError: If no encoder exists for ``format``
        """
        _ = require_positive(target)
        return self._transform(image, lambda src: corner_correct(src, target), format)

    def reduce_quality(self, image: bytes, quality: int, format: FormatArg = None) -> bytes:
        """Re-encode ``image`` at ``quality`` (0-100).

        Quality only changes the output of lossy formats such as JPEG.

        Raises:
            InvalidArgumentError: If ``quality`` is outside [0, 100]
            DecodeError: If ``image`` cannot be decoded
            CodecNotFoundError: If no encoder exists for ``format``
        """
        _ = require_quality(quality)
        format_name = self.resolve_format(format)
        with self.codec.decode(image) as source:
            return quality_encode(source, format_name, quality, self.codec)

    def process(self, image: bytes, target: Dimensions, format: FormatArg = None) -> bytes | None:
        """Produce an image of exactly ``target`` size from ``image``.

        Runs crop_to_aspect, scale_to_fit and correct_to_exact, then encodes at
        ``settings.final_quality``. ``format`` is used for every encode.

        Returns:
            Encoded image of size ``target``, or None if any stage could not
            decode its input

        Raises:
            InvalidArgumentError: If ``target`` has a non-positive side
            CodecNotFoundError: If no encoder exists for ``format``
        """
        _ = require_positive(target)
        format_name = self.resolve_format(format)
        if format_name not in self.codec.available_encoders():
            raise CodecNotFoundError(format_name)

        logger.debug(f"Processing {len(image)} bytes to {target} as {format_name}")
        if self.settings.single_pass:
            return self._process_single_pass(image, target, format_name)

        cropped = self.crop_to_aspect(image, target, format_name)
        if cropped is None:
            return None

        try:
            resized = self.scale_to_fit(cropped, target, format_name)
            corrected = self.correct_to_exact(resized, target, format_name)
            return self.reduce_quality(corrected, self.settings.final_quality, format_name)
        except DecodeError as exc:
            logger.warning(f"process produced no result: {exc}")
            return None

    def _process_single_pass(self, image: bytes, target: Dimensions, format_name: str) -> bytes | None:
        try:
            source = self.codec.decode(image)
        except DecodeError as exc:
            logger.warning(f"process produced no result: {exc}")
            return None

        with source:
            with aspect_crop(source, target) as cropped:
                with proportional_scale(cropped, target, self.settings.resample_filter) as resized:
                    with corner_correct(resized, target) as corrected:
                        return quality_encode(
                            corrected, format_name, self.settings.final_quality, self.codec
                        )
