"""Pydantic models for zplimage."""

from zplimage.models.graphic import EncodedPayload, EncodingTag, MonochromeRaster, PackedBitmap

__all__ = [
    "EncodedPayload",
    "EncodingTag",
    "MonochromeRaster",
    "PackedBitmap",
]
