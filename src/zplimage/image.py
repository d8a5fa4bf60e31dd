"""Load and binarize images with Pillow."""

import logging
from pathlib import Path

from PIL import Image

from zplimage.config import ConversionOptions

logger = logging.getLogger(__name__)


class PILRaster:
    """Monochrome raster view of a Pillow mode "1" image.

    Pillow stores black as 0 and white as 255 in mode "1", while the bit
    packer sets a bit for black. ``is_black`` therefore reports
    ``pixel == 0``; pass ``invert=True`` for sources whose black and white
    come out swapped.
    """

    def __init__(self, image: Image.Image, invert: bool = False) -> None:
        if image.mode != "1":
            image = image.convert("1")
        self._image = image
        self._pixels = image.load() if image.width and image.height else None
        self._invert = invert

    @property
    def width(self) -> int:
        return self._image.width

    @property
    def height(self) -> int:
        return self._image.height

    def is_black(self, x: int, y: int) -> bool:
        black = self._pixels[x, y] == 0
        return black != self._invert


def load_image(path: Path) -> Image.Image:
    """Open an image file and read its pixels.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        PIL.UnidentifiedImageError: If the format is not recognised.
    """
    if not path.exists():
        raise FileNotFoundError(f"Input file not found: {path}")

    with Image.open(path) as image:
        image.load()
        logger.debug(f"Loaded {path} ({image.format}, {image.mode}, {image.width}x{image.height})")
        return image.copy()


def _flatten_alpha(image: Image.Image) -> Image.Image:
    """Composite transparent pixels onto a white background."""
    if image.mode in ("RGBA", "LA") or (image.mode == "P" and "transparency" in image.info):
        rgba = image.convert("RGBA")
        background = Image.new("RGBA", rgba.size, (255, 255, 255, 255))
        return Image.alpha_composite(background, rgba)
    return image


def _to_grayscale(image: Image.Image) -> Image.Image:
    """Convert to 8-bit luminance.

    Integer modes (16-bit PNGs load as "I;16" or "I") are rescaled from
    0..65535 first; a plain convert("L") would clip them to white.
    """
    if image.mode == "I" or image.mode.startswith("I;16"):
        return image.convert("I").point(lambda value: value * (1 / 257)).convert("L")
    return _flatten_alpha(image).convert("L")


def _target_size(image: Image.Image, width: int | None, height: int | None) -> tuple[int, int]:
    """Work out the resize target, keeping aspect ratio when one side is given."""
    # Nothing to scale in an empty image
    if not (image.width and image.height):
        return image.size
    if width and height:
        return width, height
    if width:
        return width, max(1, round(image.height * width / image.width))
    if height:
        return max(1, round(image.width * height / image.height)), height
    return image.size


def prepare_image(image: Image.Image, options: ConversionOptions) -> Image.Image:
    """Convert an image to a mode "1" image ready for packing.

    Args:
        image: Any Pillow image.
        options: Resize and binarization options.

    Returns:
        Black and white image in mode "1".
    """
    # Already binary and no resize requested: keep the pixels as they are
    if image.mode == "1" and not (options.width or options.height):
        return image

    grayscale = _to_grayscale(image)

    size = _target_size(grayscale, options.width, options.height)
    if size != grayscale.size:
        logger.debug(f"Resizing {grayscale.size} to {size}")
        grayscale = grayscale.resize(size, Image.Resampling.LANCZOS)

    if options.dither:
        return grayscale.convert("1", dither=Image.Dither.FLOYDSTEINBERG)

    threshold = options.threshold
    return grayscale.point(lambda value: 0 if value < threshold else 255, mode="1")
