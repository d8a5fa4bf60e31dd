"""Build and parse ZPL ^GFA graphic field commands.

ZPL ^GFA format with a Z64/B64 payload:
^GFA,<binary_bytes>,<graphic_bytes>,<bytes_per_row>,:<TAG>:<base64>:<crc>

Both byte counts describe the *uncompressed* bitmap and are equal for a
single, non-chunked field. The CRC is CRC-16/CCITT over the ASCII bytes of
the base64 text, written as unpadded uppercase hex. Checksumming the raw or
compressed bitmap instead produces a field the printer rejects.
"""

import logging
import re

from pydantic import BaseModel, ConfigDict, Field

from zplimage.codec import compression, encoding
from zplimage.codec.crc import crc16_ccitt
from zplimage.codec.errors import GraphicFieldError
from zplimage.models import EncodedPayload, EncodingTag, PackedBitmap

logger = logging.getLogger(__name__)

_GFA_PATTERN = re.compile(
    r"\^GFA,(?P<binary>\d+),(?P<graphic>\d+),(?P<row>\d+),"
    r":(?P<tag>Z64|B64):(?P<text>[A-Za-z0-9+/=]*):(?P<crc>[0-9A-Fa-f]{1,4})(?![0-9A-Fa-f])"
)
_FO_PATTERN = re.compile(r"\^FO(?P<x>\d+),(?P<y>\d+)")


class DecodedGraphicField(BaseModel):
    """A ^GFA field read back from a command."""

    model_config = ConfigDict(frozen=True)

    origin_x: int = 0
    origin_y: int = 0
    encoding: EncodingTag
    checksum: int = Field(ge=0, le=0xFFFF)
    bitmap: PackedBitmap


def encode_graphic_field(bitmap: PackedBitmap, use_compression: bool = True) -> EncodedPayload:
    """Turn a packed bitmap into the text payload of a ^GFA field.

    Order matters: compress (Z64 only), base64-encode, then checksum the
    encoded text.

    Args:
        bitmap: Packed 1bpp bitmap.
        use_compression: True for Z64, False for B64.

    Returns:
        EncodedPayload carrying the uncompressed geometry.
    """
    data = bitmap.data
    if use_compression:
        data = compression.compress(data)
        tag = EncodingTag.Z64
    else:
        tag = EncodingTag.B64

    text = encoding.encode(data)
    # Checksum covers the base64 text, not the bitmap bytes
    checksum = crc16_ccitt(text.encode("ascii"))

    logger.debug(
        f"Encoded {bitmap.total_bytes} bitmap bytes as {tag} "
        f"({len(data)} payload bytes, {len(text)} chars, crc {checksum:X})"
    )
    return EncodedPayload(
        total_bytes=bitmap.total_bytes,
        bytes_per_row=bitmap.bytes_per_row,
        encoding=tag,
        text=text,
        checksum=checksum,
    )


def assemble(
    total_bytes: int,
    bytes_per_row: int,
    encoding_tag: EncodingTag | str,
    text: str,
    checksum: int,
    origin_x: int = 0,
    origin_y: int = 0,
) -> str:
    """Format a complete label containing one graphic field.

    Args:
        total_bytes: Uncompressed bitmap size in bytes.
        bytes_per_row: Bytes per bitmap row.
        encoding_tag: "Z64" or "B64".
        text: Base64 payload.
        checksum: CRC-16 of ``text``.
        origin_x: Field origin in dots.
        origin_y: Field origin in dots.

    Returns:
        Four newline-terminated ZPL lines.
    """
    zpl_parts = [
        "^XA",
        f"^FO{origin_x},{origin_y}",
        f"^GFA,{total_bytes},{total_bytes},{bytes_per_row},:{encoding_tag}:{text}:{checksum:X}",
        "^XZ",
    ]
    return "\n".join(zpl_parts) + "\n"


def assemble_payload(payload: EncodedPayload, origin_x: int = 0, origin_y: int = 0) -> str:
    """Format a label from an encoded payload."""
    return assemble(
        payload.total_bytes,
        payload.bytes_per_row,
        payload.encoding,
        payload.text,
        payload.checksum,
        origin_x=origin_x,
        origin_y=origin_y,
    )


def parse_graphic_field(command: str) -> DecodedGraphicField:
    """Read the first Z64/B64 ^GFA field of a ZPL command back into a bitmap.

    Args:
        command: ZPL text, e.g. the output of ``assemble``.

    Returns:
        DecodedGraphicField with the restored bitmap.

    Raises:
        GraphicFieldError: If no field is found, the checksum does not match
            the text, the payload cannot be decoded, or its size disagrees
            with the declared byte count.
    """
    match = _GFA_PATTERN.search(command)
    if match is None:
        raise GraphicFieldError("No Z64/B64 ^GFA field found")

    total_bytes = int(match["binary"])
    if int(match["graphic"]) != total_bytes:
        raise GraphicFieldError(f"Byte counts differ: {match['binary']} != {match['graphic']}")
    bytes_per_row = int(match["row"])
    tag = EncodingTag(match["tag"])
    text = match["text"]

    expected = int(match["crc"], 16)
    actual = crc16_ccitt(text.encode("ascii"))
    if actual != expected:
        raise GraphicFieldError(f"Checksum mismatch: field says {expected:X}, text gives {actual:X}")

    data = encoding.decode(text)
    if tag == EncodingTag.Z64:
        data = compression.decompress(data)

    if len(data) != total_bytes:
        raise GraphicFieldError(f"Payload holds {len(data)} bytes, field declares {total_bytes}")
    if total_bytes and (bytes_per_row == 0 or total_bytes % bytes_per_row):
        raise GraphicFieldError(f"{total_bytes} bytes do not divide into rows of {bytes_per_row}")

    origin_x = origin_y = 0
    fo_match = _FO_PATTERN.search(command, 0, match.start())
    if fo_match is not None:
        origin_x, origin_y = int(fo_match["x"]), int(fo_match["y"])

    return DecodedGraphicField(
        origin_x=origin_x,
        origin_y=origin_y,
        encoding=tag,
        checksum=expected,
        bitmap=PackedBitmap(bytes_per_row=bytes_per_row, total_bytes=total_bytes, data=data),
    )
