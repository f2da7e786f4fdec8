"""
==============================================================================
Barcode Reader Command Line
==============================================================================

Decode one barcode per image file from the shell.

Usage:
------
    barcode-reader --format QR_CODE,EAN_13 --crop-width 400 photo.jpg
    barcode-reader -1 *.png
    barcode-reader --list-formats

Exit codes:
-----------
    0  every image decoded
    1  at least one image had no barcode or could not be read
    2  usage error or decode engine unavailable

==============================================================================
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from barcode_reader import __version__
from barcode_reader.config import SUPPORTED_BACKENDS
from barcode_reader.core.exceptions import InvalidImageError, ResourceAllocationError
from barcode_reader.formats import BarcodeFormat, FormatSet
from barcode_reader.scanner import ImageView, Reader


EXIT_OK = 0
EXIT_NOT_FOUND = 1
EXIT_USAGE = 2


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="barcode-reader",
        description="Decode a single barcode inside a centered scan window of each image.",
    )
    p.add_argument("images", nargs="*", metavar="IMAGE", help="Image files to decode.")
    p.add_argument(
        "--format",
        dest="formats",
        default="",
        help="Comma-separated formats to enable, e.g. QR_CODE,EAN_13 (default: all).",
    )
    p.add_argument(
        "--crop-width",
        type=int,
        default=0,
        help="Scan window width in pixels (0 = full width).",
    )
    p.add_argument(
        "--crop-height",
        type=int,
        default=0,
        help="Scan window height in pixels (0 = full height).",
    )
    p.add_argument(
        "--backend",
        choices=SUPPORTED_BACKENDS,
        default=None,
        help="Decode engine (default: ENGINE_BACKEND setting).",
    )
    p.add_argument(
        "-1",
        dest="text_only",
        action="store_true",
        help="Print only the decoded text, one line per image.",
    )
    p.add_argument(
        "--list-formats",
        action="store_true",
        help="Print the known format names and exit.",
    )
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return p


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    )

    if args.list_formats:
        for fmt in BarcodeFormat:
            print(f"{fmt.name}\t{fmt}")
        return EXIT_OK

    if not args.images:
        parser.print_usage(sys.stderr)
        print("barcode-reader: error: at least one IMAGE is required", file=sys.stderr)
        return EXIT_USAGE

    try:
        formats = FormatSet.parse(args.formats)
    except ValueError as e:
        print(f"barcode-reader: error: {e}", file=sys.stderr)
        return EXIT_USAGE

    try:
        reader = Reader(formats, args.backend)
    except ResourceAllocationError as e:
        print(f"barcode-reader: error: {e.message}", file=sys.stderr)
        return EXIT_USAGE

    missed = 0
    with reader:
        for path in args.images:
            try:
                image = ImageView.from_path(path)
            except InvalidImageError as e:
                print(f"{path}: {e.message}", file=sys.stderr)
                missed += 1
                continue

            result = reader.decode(image, args.crop_width, args.crop_height)
            if result is None:
                print(f"{path}: no barcode found", file=sys.stderr)
                missed += 1
            elif args.text_only:
                print(result.text)
            else:
                print(f"{path}: {result.format.name} {result.text}")

    return EXIT_NOT_FOUND if missed else EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
