import argparse
import logging
import sys
from pathlib import Path

from asciiart.charsets import parse_charset
from asciiart.config import (
    DEFAULT_CHARSET,
    DEFAULT_FONT,
    DEFAULT_RESOLUTION,
    HTML_FILENAME,
    HTML_FONT,
    configure_logging,
)
from asciiart.converter import RESOLUTION_DOWN, RESOLUTION_UP, check_resolution, run, step_resolution
from asciiart.errors import AsciiArtError
from asciiart.glyph_atlas import FontRasterizer
from asciiart.image import load_image
from asciiart.model import CharBrightnessIndex
from asciiart.output import format_console, write_html

logger = logging.getLogger(__name__)

OUTPUTS = ("console", "html")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Render an image as ASCII art")
    parser.add_argument("image", help="Path to input image")
    parser.add_argument(
        "-r",
        "--resolution",
        type=int,
        default=DEFAULT_RESOLUTION,
        help=f"Characters per row, a power of two (default: {DEFAULT_RESOLUTION})",
    )
    parser.add_argument(
        "--res",
        dest="step",
        choices=(RESOLUTION_UP, RESOLUTION_DOWN),
        default=None,
        help="Double (up) or halve (down) the --resolution value before converting",
    )
    parser.add_argument(
        "-c", "--chars", default=DEFAULT_CHARSET, help=f"Initial character set (default: {DEFAULT_CHARSET})"
    )
    parser.add_argument(
        "-a",
        "--add",
        action="append",
        default=[],
        metavar="EXPR",
        help="Add characters: 'all', 'space', a single character or a range like 'a-z'. Repeatable.",
    )
    parser.add_argument(
        "-x", "--remove", action="append", default=[], metavar="EXPR", help="Remove characters, same syntax as --add"
    )
    parser.add_argument(
        "-l",
        "--list-chars",
        action="store_true",
        default=False,
        help="Print the character set after --add/--remove and exit without converting",
    )
    parser.add_argument("-o", "--output", default="console", choices=OUTPUTS, help="Output method (default: console)")
    parser.add_argument("--html-file", default=HTML_FILENAME, help=f"HTML output path (default: {HTML_FILENAME})")
    parser.add_argument("--font", default=DEFAULT_FONT, help=f"Font used to measure characters (default: {DEFAULT_FONT})")
    parser.add_argument("-v", "--verbose", action="store_true", default=False, help="Enable debug logging")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    image_path = Path(args.image)
    if not image_path.exists():
        print(f"File not found: {image_path}", file=sys.stderr)
        sys.exit(1)

    try:
        image = load_image(image_path)
        if args.step is not None:
            resolution = step_resolution(args.resolution, args.step, image)
            logger.info("Resolution set to %d.", resolution)
        else:
            resolution = check_resolution(image, args.resolution)

        index = CharBrightnessIndex(args.chars, FontRasterizer(args.font))
        for expr in args.add:
            index.add_chars(parse_charset(expr))
        for expr in args.remove:
            index.remove_chars(parse_charset(expr))

        if args.list_chars:
            print(" ".join(index.chars))
            return

        grid = run(image, resolution, index)
        if args.output == "html":
            write_html(grid, args.html_file, HTML_FONT)
        else:
            print(format_console(grid))
    except (AsciiArtError, OSError) as e:
        logger.error("%s", e)
        sys.exit(1)
