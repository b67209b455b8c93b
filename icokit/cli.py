"""
Command line front end.

Usage:
    icokit convert SOURCE [-o OUT.ico] [-s SIZE ...]
    icokit info FILE.ico
    icokit extract FILE.ico [-d DIR]
"""

import argparse
import logging
import os
import sys
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from .config import AVAILABLE_SIZES, MAX_ICON_SIZE, IcoConfig
from .document import decode_ico, encode_ico
from .errors import IcoError
from .formatting import export_filename, format_bytes, ico_filename
from .raster import PillowBackend, load_image

logger = logging.getLogger(__name__)


class CommandError(Exception):
    """A user-facing problem with the command line input."""


def _require_ico(path):
    if Path(path).suffix.lower() != '.ico':
        raise CommandError(f"Not an .ico file: {path}")
    if not os.path.exists(path):
        raise CommandError(f"Input file not found: {path}")


def cmd_convert(args, config):
    if not os.path.exists(args.source):
        raise CommandError(f"Input file not found: {args.source}")

    try:
        src = load_image(args.source)
    except UnidentifiedImageError:
        raise CommandError(f"Not an image file: {args.source}") from None
    except Image.DecompressionBombError as e:
        raise CommandError(f"Image too large: {args.source} ({e})") from None
    print(f"Source: {args.source} ({src.size[0]}x{src.size[1]})")

    sizes = args.sizes or list(config.default_sizes)
    backend = PillowBackend(resample=config.resample, optimize=config.optimize_png)
    data = encode_ico(src, sizes, backend=backend, workers=args.workers)

    output = args.output or os.path.join(
        os.path.dirname(args.source), ico_filename(Path(args.source).stem)
    )
    with open(output, 'wb') as f:
        f.write(data)

    sizes = sorted(set(sizes))
    print(f"\nCreated: {output}")
    print(f"  {len(sizes)} sizes embedded: {', '.join(f'{s}x{s}' for s in sizes)}")
    print(f"  File size: {format_bytes(len(data))}")
    return 0


def _read_document(path, workers):
    _require_ico(path)
    with open(path, 'rb') as f:
        data = f.read()
    return decode_ico(data, workers=workers)


def _print_warnings(document):
    for warning in document.warnings:
        print(f"Warning: {warning}", file=sys.stderr)


def cmd_info(args, config):
    document = _read_document(args.file, args.workers)

    print(f"ICO Structure: {args.file}")
    print(f"  Image count: {len(document)}")
    for i, img in enumerate(document, 1):
        print(
            f"  [{i}] {img.width}x{img.height}, {img.bit_depth}-bit, "
            f"{format_bytes(img.size)}, {img.payload_format.upper()} format"
        )
    _print_warnings(document)
    return 0


def cmd_extract(args, config):
    document = _read_document(args.file, args.workers)

    out_dir = args.directory or os.path.dirname(os.path.abspath(args.file))
    os.makedirs(out_dir, exist_ok=True)
    stem = Path(args.file).stem

    for img in document:
        path = os.path.join(out_dir, export_filename(stem, img))
        with open(path, 'wb') as f:
            f.write(img.payload_bytes)
        print(f"Wrote {path} ({format_bytes(len(img.payload_bytes))})")

    _print_warnings(document)
    return 0


def _icon_size(value):
    try:
        size = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid size: {value}") from None
    if size < 1 or size > MAX_ICON_SIZE:
        raise argparse.ArgumentTypeError(f"size must be between 1 and {MAX_ICON_SIZE}: {value}")
    return size


def build_parser():
    parser = argparse.ArgumentParser(
        prog='icokit',
        description='Create and inspect Windows .ico files',
    )
    parser.add_argument('-v', '--verbose', action='store_true', help='Debug logging')
    parser.add_argument('-j', '--workers', type=int, default=None,
                        help='Process icon images on this many threads')
    sub = parser.add_subparsers(dest='command', required=True)

    convert = sub.add_parser('convert', help='Convert an image to a multi-size ICO')
    convert.add_argument('source', help='Source image (PNG, JPEG, ...)')
    convert.add_argument('-o', '--output', help='Output .ico path (default: next to source)')
    convert.add_argument(
        '-s', '--size', dest='sizes', type=_icon_size, action='append',
        help=f"Icon size to embed, repeatable (common: {', '.join(map(str, AVAILABLE_SIZES))})",
    )
    convert.set_defaults(func=cmd_convert)

    info = sub.add_parser('info', help='List the images inside an ICO file')
    info.add_argument('file')
    info.set_defaults(func=cmd_info)

    extract = sub.add_parser('extract', help='Write every image of an ICO file to disk')
    extract.add_argument('file')
    extract.add_argument('-d', '--directory', help='Output directory (default: next to file)')
    extract.set_defaults(func=cmd_extract)

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    config = IcoConfig.from_env()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else config.log_level,
        format='%(levelname)s %(name)s: %(message)s',
    )

    try:
        return args.func(args, config)
    except (IcoError, CommandError, OSError) as e:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
