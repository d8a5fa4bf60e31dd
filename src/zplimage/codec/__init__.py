"""ZPL graphic field codec."""

from zplimage.codec.assembler import (
    DecodedGraphicField,
    assemble,
    assemble_payload,
    encode_graphic_field,
    parse_graphic_field,
)
from zplimage.codec.crc import crc16_ccitt
from zplimage.codec.errors import GraphicFieldError, InvalidGeometry
from zplimage.codec.packing import PixelMatrix, pack, unpack

__all__ = [
    "DecodedGraphicField",
    "GraphicFieldError",
    "InvalidGeometry",
    "PixelMatrix",
    "assemble",
    "assemble_payload",
    "crc16_ccitt",
    "encode_graphic_field",
    "pack",
    "parse_graphic_field",
    "unpack",
]
