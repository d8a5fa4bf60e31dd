"""Tests for compression, text encoding and ^GFA assembly."""

import base64
import random
import zlib

import pytest

from zplimage.codec import (
    GraphicFieldError,
    PixelMatrix,
    assemble,
    crc16_ccitt,
    encode_graphic_field,
    pack,
    parse_graphic_field,
    unpack,
)
from zplimage.codec import compression, encoding
from zplimage.models import EncodingTag


class TestCompression:
    def test_round_trip_empty(self):
        assert zlib.decompress(compression.compress(b"")) == b""

    def test_round_trip_large_random(self):
        """More than 1MB of random data survives a standard zlib decoder."""
        data = random.Random(42).randbytes(1_100_000)
        assert zlib.decompress(compression.compress(data)) == data

    def test_compresses_repetitive_data(self):
        data = b"\x00" * 10_000
        assert len(compression.compress(data)) < 100

    def test_invalid_stream(self):
        with pytest.raises(GraphicFieldError):
            compression.decompress(b"not zlib")


class TestEncoding:
    @pytest.mark.parametrize("data", [b"", b"\x00", b"\xff\xfe", b"\x01\x02\x03", bytes(range(256))])
    def test_round_trip(self, data):
        assert encoding.decode(encoding.encode(data)) == data

    def test_padding_and_no_wrapping(self):
        text = encoding.encode(b"\xff" * 100)
        assert "\n" not in text
        assert len(text) == 136
        assert encoding.encode(b"\xff") == "/w=="

    def test_invalid_text(self):
        with pytest.raises(GraphicFieldError):
            encoding.decode("not base64!")


class TestEncodeGraphicField:
    def test_b64_payload(self):
        """B64 keeps the raw bytes and checksums the text."""
        bitmap = pack(PixelMatrix.filled(8, 8, black=True))
        payload = encode_graphic_field(bitmap, use_compression=False)

        assert payload.encoding == EncodingTag.B64
        assert payload.text == "//////////8="
        assert payload.total_bytes == 8
        assert payload.bytes_per_row == 1
        assert payload.checksum == crc16_ccitt(b"//////////8=")

    def test_z64_keeps_uncompressed_geometry(self):
        """Z64 payload carries the uncompressed byte counts."""
        bitmap = pack(PixelMatrix.filled(100, 50))
        payload = encode_graphic_field(bitmap, use_compression=True)

        assert payload.encoding == EncodingTag.Z64
        assert payload.total_bytes == 13 * 50
        assert payload.bytes_per_row == 13
        assert zlib.decompress(base64.b64decode(payload.text)) == bitmap.data

    def test_checksum_covers_text_not_bitmap(self):
        """The checksum is taken over the base64 text."""
        bitmap = pack(PixelMatrix.filled(16, 4, black=True))
        for use_compression in (True, False):
            payload = encode_graphic_field(bitmap, use_compression=use_compression)
            assert payload.checksum == crc16_ccitt(payload.text.encode("ascii"))
        raw_payload = encode_graphic_field(bitmap, use_compression=False)
        assert raw_payload.checksum != crc16_ccitt(bitmap.data)


class TestAssemble:
    def test_command_layout(self):
        command = assemble(8, 1, "B64", "//////////8=", 0x1A2B)

        assert command == ("^XA\n^FO0,0\n^GFA,8,8,1,:B64://////////8=:1A2B\n^XZ\n")

    def test_checksum_unpadded_uppercase(self):
        command = assemble(1, 1, EncodingTag.B64, "AA==", 0x00AB)
        assert ":AA==:AB\n" in command

    def test_origin(self):
        command = assemble(1, 1, EncodingTag.Z64, "eJwDAAAAAAE=", 0, origin_x=30, origin_y=45)
        lines = command.splitlines()
        assert lines[1] == "^FO30,45"
        assert lines[2].endswith(":0")

    def test_zero_bytes(self):
        command = assemble(0, 0, EncodingTag.B64, "", 0)
        assert "^GFA,0,0,0,:B64::0\n" in command


class TestParseGraphicField:
    def _command(self, raster, use_compression, origin=(0, 0)):
        payload = encode_graphic_field(pack(raster), use_compression=use_compression)
        return assemble(
            payload.total_bytes,
            payload.bytes_per_row,
            payload.encoding,
            payload.text,
            payload.checksum,
            origin_x=origin[0],
            origin_y=origin[1],
        )

    @pytest.mark.parametrize("use_compression", [True, False])
    def test_round_trip(self, checkerboard, use_compression):
        command = self._command(checkerboard, use_compression, origin=(12, 7))
        field = parse_graphic_field(command)

        assert field.origin_x == 12
        assert field.origin_y == 7
        assert field.encoding == (EncodingTag.Z64 if use_compression else EncodingTag.B64)
        assert unpack(field.bitmap, 10) == [[(x + y) % 2 == 0 for x in range(10)] for y in range(3)]

    def test_empty_field(self):
        command = self._command(PixelMatrix.filled(0, 0), use_compression=False)
        field = parse_graphic_field(command)
        assert field.bitmap.total_bytes == 0

    def test_corrupted_text_detected(self):
        command = self._command(PixelMatrix.filled(8, 8, black=True), use_compression=False)
        corrupted = command.replace("//////////8=", "/////////+8=")
        with pytest.raises(GraphicFieldError, match="Checksum"):
            parse_graphic_field(corrupted)

    def test_missing_field(self):
        with pytest.raises(GraphicFieldError):
            parse_graphic_field("^XA\n^XZ\n")

    def test_size_mismatch(self):
        text = encoding.encode(b"\xff" * 4)
        command = assemble(8, 1, EncodingTag.B64, text, crc16_ccitt(text.encode("ascii")))
        with pytest.raises(GraphicFieldError, match="declares"):
            parse_graphic_field(command)

    def test_trailing_checksum_digit(self):
        """A checksum field longer than four hex digits is rejected."""
        crc = crc16_ccitt(b"AA==")
        command = assemble(1, 1, EncodingTag.B64, "AA==", crc).replace(f":{crc:X}\n", f":{crc:X}F\n")

        with pytest.raises(GraphicFieldError):
            parse_graphic_field(command)
