"""CLI tool for converting images to ZPL graphic field commands."""

import argparse
import logging
import sys
from pathlib import Path

import yaml
from PIL import UnidentifiedImageError
from pydantic import ValidationError

from zplimage.config import ConversionOptions, load_config, settings


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Convert an image to a ZPL ^GFA graphic field command.",
        prog="zplimage",
    )
    parser.add_argument(
        "-i",
        "--input",
        type=Path,
        required=True,
        help="Input image file (any format Pillow can read)",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=Path("output.zpl"),
        help="Output file path (default: output.zpl)",
    )
    parser.add_argument(
        "-z",
        "--z64",
        action=argparse.BooleanOptionalAction,
        default=None,
        dest="use_compression",
        help="Compress the image data using Z64 encoding (default: on, --no-z64 for B64)",
    )
    parser.add_argument("--origin-x", type=int, default=None, help="Field origin X in dots (default: 0)")
    parser.add_argument("--origin-y", type=int, default=None, help="Field origin Y in dots (default: 0)")
    parser.add_argument("--width", type=int, default=None, help="Resize to this width in dots")
    parser.add_argument("--height", type=int, default=None, help="Resize to this height in dots")
    parser.add_argument(
        "--threshold",
        type=int,
        default=None,
        help="Luminance below this value prints black, 0-255 (default: 128)",
    )
    parser.add_argument(
        "--dither",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Use Floyd-Steinberg dithering instead of a fixed threshold",
    )
    parser.add_argument(
        "--invert",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Swap black and white before encoding",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        default=None,
        help=f"YAML file with conversion options (default: {settings.config_file})",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def _resolve_options(args: argparse.Namespace, config_path: Path) -> ConversionOptions:
    """Merge config file values with command line overrides."""
    options = load_config(config_path).model_dump()
    for key in ("use_compression", "origin_x", "origin_y", "width", "height", "threshold", "dither", "invert"):
        value = getattr(args, key)
        if value is not None:
            options[key] = value
    return ConversionOptions.model_validate(options)


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the zplimage CLI."""
    args = _build_parser().parse_args(argv)

    # Configure logging
    log_level = logging.DEBUG if args.verbose or settings.debug else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    config_path = args.config or settings.config_file
    if args.config and not args.config.exists():
        print(f"Error: Config file not found: {args.config}", file=sys.stderr)
        return 1

    try:
        options = _resolve_options(args, config_path)
    except yaml.YAMLError as e:
        print(f"Error parsing config YAML: {e}", file=sys.stderr)
        return 1
    except ValidationError as e:
        print(f"Error: Invalid conversion options: {e}", file=sys.stderr)
        return 1

    from zplimage.converter import convert_file

    try:
        zpl = convert_file(args.input, options)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except (UnidentifiedImageError, OSError) as e:
        print(f"Error reading image: {e}", file=sys.stderr)
        return 1

    # Write output
    try:
        args.output.write_text(zpl, encoding="ascii")
        print(f"Converted to {args.output}")
    except OSError as e:
        print(f"Error writing output: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
