"""Pack monochrome rasters into 1bpp bitmaps."""

import logging
from collections.abc import Sequence

from zplimage.codec.errors import InvalidGeometry
from zplimage.models import MonochromeRaster, PackedBitmap

logger = logging.getLogger(__name__)


class PixelMatrix:
    """In-memory monochrome raster backed by rows of booleans.

    True means black (print), False means white.
    """

    def __init__(self, rows: Sequence[Sequence[bool]], width: int | None = None) -> None:
        self._rows = [list(row) for row in rows]
        if width is None:
            width = len(self._rows[0]) if self._rows else 0
        for y, row in enumerate(self._rows):
            if len(row) != width:
                raise InvalidGeometry(f"Row {y} has {len(row)} pixels, expected {width}")
        self._width = width

    @classmethod
    def filled(cls, width: int, height: int, black: bool = False) -> "PixelMatrix":
        """Create a raster with every pixel set to the same colour."""
        if width < 0 or height < 0:
            raise InvalidGeometry(f"Invalid raster size {width}x{height}")
        return cls([[black] * width for _ in range(height)], width=width)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return len(self._rows)

    def is_black(self, x: int, y: int) -> bool:
        return bool(self._rows[y][x])


def bytes_per_row_for(width: int) -> int:
    """Bytes needed for one byte-aligned row of ``width`` pixels."""
    return (width + 7) // 8


def pack(raster: MonochromeRaster) -> PackedBitmap:
    """Pack a raster into MSB-first bytes, one byte-aligned run per row.

    The leftmost pixel of each group of eight lands in bit 7. Bits past the
    last column of a row stay zero.

    Precondition: ``raster.is_black`` already reports print polarity
    (True = black = set bit). A source that stores black as 0 must be
    normalized before packing, or the printed image comes out inverted.

    Args:
        raster: Pixel source to pack.

    Returns:
        PackedBitmap holding ``ceil(width / 8) * height`` bytes.

    Raises:
        InvalidGeometry: If width or height is negative.
    """
    width, height = raster.width, raster.height
    if width < 0 or height < 0:
        raise InvalidGeometry(f"Invalid raster size {width}x{height}")

    bytes_per_row = bytes_per_row_for(width)
    total_bytes = bytes_per_row * height
    data = bytearray(total_bytes)

    for y in range(height):
        row_start = y * bytes_per_row
        for x in range(width):
            if raster.is_black(x, y):
                data[row_start + x // 8] |= 1 << (7 - x % 8)

    logger.debug(f"Packed {width}x{height} raster into {total_bytes} bytes ({bytes_per_row} per row)")
    return PackedBitmap(bytes_per_row=bytes_per_row, total_bytes=total_bytes, data=bytes(data))


def unpack(bitmap: PackedBitmap, width: int, height: int | None = None) -> list[list[bool]]:
    """Expand a packed bitmap back into rows of booleans.

    An empty buffer cannot tell how many zero-width rows it held, so pass
    ``height`` to get them back; otherwise the row count is read from the
    bitmap itself.

    Args:
        bitmap: Bitmap produced by ``pack``.
        width: Pixel width of the original raster.
        height: Row count of the original raster, if known.

    Returns:
        Rows of ``width`` booleans, True for black.

    Raises:
        InvalidGeometry: If ``width`` or ``height`` does not fit the bitmap.
    """
    if width < 0 or bytes_per_row_for(width) != bitmap.bytes_per_row:
        raise InvalidGeometry(f"Width {width} does not match {bitmap.bytes_per_row} bytes per row")

    if height is None:
        height = bitmap.height
    elif height < 0 or (bitmap.bytes_per_row and height != bitmap.height):
        raise InvalidGeometry(f"Height {height} does not match {bitmap.total_bytes} bytes")

    rows = []
    for y in range(height):
        row = bitmap.row(y)
        rows.append([bool(row[x // 8] & (1 << (7 - x % 8))) for x in range(width)])
    return rows
