"""zplimage - convert images to ZPL graphic field commands."""

from zplimage.converter import convert_file, convert_file_async, image_to_zpl, raster_to_zpl

__version__ = "0.1.0"

__all__ = [
    "convert_file",
    "convert_file_async",
    "image_to_zpl",
    "raster_to_zpl",
]
