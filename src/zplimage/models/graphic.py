"""Graphic field data models."""

from enum import StrEnum
from typing import Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field, model_validator


class EncodingTag(StrEnum):
    """Payload encodings understood by the ^GFA command."""

    Z64 = "Z64"  # zlib-compressed, then base64
    B64 = "B64"  # raw, then base64


@runtime_checkable
class MonochromeRaster(Protocol):
    """Read-only black/white pixel source consumed by the bit packer.

    ``is_black`` must return True for pixels that should print. Sources
    whose native representation is inverted have to normalize polarity
    before handing pixels over.
    """

    @property
    def width(self) -> int: ...

    @property
    def height(self) -> int: ...

    def is_black(self, x: int, y: int) -> bool: ...


class PackedBitmap(BaseModel):
    """Row-padded, MSB-first 1bpp bitmap."""

    model_config = ConfigDict(frozen=True)

    bytes_per_row: int = Field(ge=0)
    total_bytes: int = Field(ge=0)
    data: bytes

    @model_validator(mode="after")
    def _check_length(self) -> "PackedBitmap":
        if len(self.data) != self.total_bytes:
            raise ValueError(f"data holds {len(self.data)} bytes, expected {self.total_bytes}")
        return self

    @property
    def height(self) -> int:
        """Number of rows in the bitmap."""
        if self.bytes_per_row == 0:
            return 0
        return self.total_bytes // self.bytes_per_row

    def row(self, y: int) -> bytes:
        """Get the packed bytes of a single row."""
        start = y * self.bytes_per_row
        return self.data[start : start + self.bytes_per_row]


class EncodedPayload(BaseModel):
    """Text payload of a ^GFA command plus the metadata needed to emit it.

    ``total_bytes`` and ``bytes_per_row`` always describe the uncompressed
    bitmap, even for Z64 payloads.
    """

    model_config = ConfigDict(frozen=True)

    total_bytes: int = Field(ge=0)
    bytes_per_row: int = Field(ge=0)
    encoding: EncodingTag
    text: str
    checksum: int = Field(ge=0, le=0xFFFF)
