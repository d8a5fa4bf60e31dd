"""Convert images to ZPL ^GFA commands."""

import asyncio
import logging
from pathlib import Path

from PIL import Image

from zplimage.codec import assemble_payload, encode_graphic_field, pack
from zplimage.config import ConversionOptions
from zplimage.image import PILRaster, load_image, prepare_image
from zplimage.models import MonochromeRaster

logger = logging.getLogger(__name__)


def raster_to_zpl(
    raster: MonochromeRaster,
    use_compression: bool = True,
    origin_x: int = 0,
    origin_y: int = 0,
) -> str:
    """Convert a monochrome raster to a ZPL label with one graphic field.

    Stages run strictly in order: pack, compress (Z64 only), base64-encode,
    checksum the encoded text, assemble.

    Args:
        raster: Pixel source with print polarity (True = black).
        use_compression: Emit Z64 when True, B64 when False.
        origin_x: Field origin in dots.
        origin_y: Field origin in dots.

    Returns:
        ZPL command text.

    Raises:
        InvalidGeometry: If the raster reports a negative size.
    """
    bitmap = pack(raster)
    payload = encode_graphic_field(bitmap, use_compression=use_compression)
    return assemble_payload(payload, origin_x=origin_x, origin_y=origin_y)


def image_to_zpl(image: Image.Image, options: ConversionOptions | None = None) -> str:
    """Convert a Pillow image to a ZPL label.

    The image is resized and binarized per ``options`` before packing.
    """
    if options is None:
        options = ConversionOptions()

    monochrome = prepare_image(image, options)
    raster = PILRaster(monochrome, invert=options.invert)
    return raster_to_zpl(
        raster,
        use_compression=options.use_compression,
        origin_x=options.origin_x,
        origin_y=options.origin_y,
    )


def convert_file(path: Path, options: ConversionOptions | None = None) -> str:
    """Load an image file and convert it to a ZPL label.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
    """
    image = load_image(path)
    zpl = image_to_zpl(image, options)
    logger.info(f"Converted {path} ({image.width}x{image.height}) to {len(zpl)} characters of ZPL")
    return zpl


async def convert_file_async(path: Path, options: ConversionOptions | None = None) -> str:
    """Convert an image file in a worker thread to keep the event loop free."""
    return await asyncio.to_thread(convert_file, path, options)
