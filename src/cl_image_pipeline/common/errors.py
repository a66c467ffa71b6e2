"""Exception taxonomy for the image pipeline."""

from typing import override


class ImagePipelineError(Exception):
    """Base class for every error raised by cl_image_pipeline."""

    def __init__(self, message: str = "Image pipeline failed."):
        self.message: str = message
        super().__init__(self.message)


class InvalidArgumentError(ImagePipelineError, ValueError):
    """A caller supplied non-positive dimensions or an out-of-range quality."""


class DecodeError(ImagePipelineError):
    """Input bytes are malformed or in a format no decoder understands."""


class EncodeError(ImagePipelineError):
    """The encoder for a known format failed to write the pixel buffer."""


class CodecNotFoundError(ImagePipelineError, LookupError):
    """No encoder is registered for the requested output format."""

    def __init__(self, format: str):
        self.format: str = format
        super().__init__(f"No encoder registered for format '{format}'")

    @override
    def __str__(self):
        return self.message


class InternalInvariantError(ImagePipelineError, RuntimeError):
    """A stage received geometry a previous stage should never have produced."""
