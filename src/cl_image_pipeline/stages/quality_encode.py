"""Final lossy re-encode."""

from ..common.codec import ImageCodec
from ..common.errors import InvalidArgumentError
from ..common.geometry import PixelBuffer
from ..utils.profiling import timed

MIN_QUALITY = 0
MAX_QUALITY = 100


def require_quality(quality: int) -> int:
    if isinstance(quality, bool) or not isinstance(quality, int):
        raise InvalidArgumentError(f"quality must be an integer, got {quality!r}")
    if not MIN_QUALITY <= quality <= MAX_QUALITY:
        raise InvalidArgumentError(
            f"quality must be in [{MIN_QUALITY}, {MAX_QUALITY}], got {quality}"
        )
    return quality


@timed
def quality_encode(
    image: PixelBuffer, format: str, quality: int, codec: ImageCodec
) -> bytes:
    """Encode ``image`` as ``format`` at ``quality``.

    Raises:
        InvalidArgumentError: If ``quality`` is outside [0, 100]
        CodecNotFoundError: If ``codec`` has no encoder for ``format``
        EncodeError: If the encoder fails
    """
    return codec.encode(image, format, require_quality(quality))
