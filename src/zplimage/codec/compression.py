"""zlib compression for Z64 payloads."""

import zlib

from zplimage.codec.errors import GraphicFieldError


def compress(data: bytes) -> bytes:
    """Compress bytes into a zlib stream at maximum compression."""
    return zlib.compress(data, level=zlib.Z_BEST_COMPRESSION)


def decompress(data: bytes) -> bytes:
    """Inflate a zlib stream.

    Raises:
        GraphicFieldError: If the stream is not valid zlib data.
    """
    try:
        return zlib.decompress(data)
    except zlib.error as e:
        raise GraphicFieldError(f"Invalid Z64 payload: {e}") from e
