"""CRC-16/CCITT checksum for ^GFA payloads.

Polynomial 0x1021, register starts at 0x0000, no reflection and no final
XOR. The check value for ``b"123456789"`` is 0x31C3.

The printer expects this checksum over the base64 *text* of the field,
not over the bitmap bytes. See ``zplimage.codec.assembler``.
"""

from functools import cache
from typing import Final

CRC_POLYNOMIAL: Final[int] = 0x1021
CRC_MASK: Final[int] = 0xFFFF


@cache
def crc_table() -> tuple[int, ...]:
    """Build the 256-entry lookup table, once per process.

    Returns:
        Immutable tuple of 16-bit table values indexed by byte value.
    """
    table = []
    for i in range(256):
        temp = 0
        a = i << 8
        for _ in range(8):
            if (temp ^ a) & 0x8000:
                temp = ((temp << 1) ^ CRC_POLYNOMIAL) & CRC_MASK
            else:
                temp = (temp << 1) & CRC_MASK
            a = (a << 1) & CRC_MASK
        table.append(temp)
    return tuple(table)


def crc16_ccitt(data: bytes) -> int:
    """Compute the CRC-16/CCITT of ``data``.

    Bytes are folded strictly in input order.

    Args:
        data: Bytes to checksum.

    Returns:
        16-bit checksum (0x0000 for empty input).
    """
    table = crc_table()
    crc = 0
    for b in data:
        crc = ((crc << 8) ^ table[(crc >> 8) ^ (b & 0xFF)]) & CRC_MASK
    return crc
