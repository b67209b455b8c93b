"""
Decode and encode whole ICO files.

decode_ico() turns an ICO buffer into an IconDocument of independently
renderable images; encode_ico() resamples a source image to each requested
size and packs the PNGs into one ICO buffer.
"""

import io
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Optional, Tuple

from PIL import Image

from . import dib
from .config import MAX_ICON_SIZE
from .cursor import ByteCursor
from .directory import read_directory, write_entry, write_header
from .entry import ENCODED_BIT_COUNT, EntryEncoder
from .errors import (
    EmptyResultError,
    InvalidSizeError,
    NoSizesRequestedError,
    TruncatedDataError,
)
from .raster import PillowBackend, load_image
from .sniff import DIB, PNG, sniff_payload

logger = logging.getLogger(__name__)

_MIME_TYPES = {PNG: 'image/png', DIB: 'image/bmp'}
_EXTENSIONS = {PNG: 'png', DIB: 'bmp'}


@dataclass(frozen=True)
class IconImage:
    """One embedded image.

    ``payload_bytes`` is ready for a generic decoder: the PNG as stored, or
    the DIB with a synthesized BITMAPFILEHEADER in front. ``size`` and
    ``bit_count`` are the payload length and bit count declared in the
    directory.
    """
    width: int
    height: int
    bit_depth: int
    payload_format: str
    payload_bytes: bytes
    size: int
    bit_count: Optional[int] = None

    @property
    def raw_bytes(self):
        """The payload exactly as embedded in the ICO file."""
        if self.payload_format == DIB:
            return self.payload_bytes[dib.FILE_HEADER_SIZE:]
        return self.payload_bytes

    @property
    def mime_type(self):
        return _MIME_TYPES[self.payload_format]

    @property
    def extension(self):
        return _EXTENSIONS[self.payload_format]

    def to_pil(self):
        img = Image.open(io.BytesIO(self.payload_bytes))
        img.load()
        return img


@dataclass(frozen=True)
class IconDocument:
    """Images in directory order plus any per-entry warnings from decoding."""
    images: Tuple[IconImage, ...]
    warnings: Tuple[str, ...] = ()

    def __len__(self):
        return len(self.images)

    def __iter__(self):
        return iter(self.images)

    def __getitem__(self, index):
        return self.images[index]

    def to_bytes(self):
        """Re-pack the images, unchanged, into a new ICO buffer."""
        return pack_icon(
            [
                (
                    img.width,
                    img.height,
                    img.bit_depth if img.bit_count is None else img.bit_count,
                    img.raw_bytes,
                )
                for img in self.images
            ]
        )


def _map_ordered(func, items, workers):
    if workers and workers > 1 and len(items) > 1:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            return list(pool.map(func, items))
    return [func(item) for item in items]


def decode_image(data, entry):
    """Build the IconImage for one directory entry of ``data``."""
    payload = ByteCursor(data, entry.offset).read_bytes(entry.size)
    payload_format = sniff_payload(payload)

    if payload_format == PNG:
        # PNGs store their own depth; the directory value may be 0
        bit_depth = entry.bit_count or 32
        payload_bytes = payload
    else:
        payload_bytes, bit_depth = dib.reconstruct_bmp(payload, entry.bit_count)

    return IconImage(
        width=entry.width,
        height=entry.height,
        bit_depth=bit_depth,
        payload_format=payload_format,
        payload_bytes=payload_bytes,
        size=entry.size,
        bit_count=entry.bit_count,
    )


def decode_ico(data, workers: Optional[int] = None) -> IconDocument:
    """Decode an ICO buffer.

    Header problems are fatal (FormatError, TruncatedDataError). Damaged
    entries are skipped and described in ``IconDocument.warnings``; if none
    survive, EmptyResultError is raised.
    """
    data = bytes(data)
    header, entries, warnings = read_directory(data)

    def decode_one(item):
        index, entry = item
        try:
            return decode_image(data, entry), None
        except TruncatedDataError as e:
            message = f"Image {index} has a damaged bitmap header, skipping: {e}"
            logger.warning(message)
            return None, message

    images = []
    for image, warning in _map_ordered(decode_one, entries, workers):
        if warning is not None:
            warnings.append(warning)
        else:
            images.append(image)

    if not images:
        if header.count == 0:
            raise EmptyResultError("ICO file contains no images")
        raise EmptyResultError(
            f"None of the {header.count} images in the ICO file could be read"
        )

    logger.debug(f"Decoded {len(images)} of {header.count} images")
    return IconDocument(tuple(images), tuple(warnings))


def validate_sizes(sizes):
    """Check requested sizes and return them deduplicated, ascending."""
    sizes = list(sizes or ())
    if not sizes:
        raise NoSizesRequestedError()
    for size in sizes:
        if isinstance(size, bool) or not isinstance(size, int):
            raise InvalidSizeError(size)
        if size < 1 or size > MAX_ICON_SIZE:
            raise InvalidSizeError(size)
    return sorted(set(sizes))


def pack_icon(images):
    """Pack ``(width, height, bit_count, payload)`` tuples into ICO bytes."""
    encoder = EntryEncoder(len(images))
    for width, height, bit_count, payload in images:
        encoder.add_image(width, height, bit_count, payload)

    cursor = ByteCursor()
    write_header(cursor, len(images))
    for entry in encoder.entries:
        write_entry(cursor, entry)
    for _, _, _, payload in images:
        cursor.write_bytes(payload)
    return cursor.getvalue()


def encode_ico(source, sizes, backend=None, workers: Optional[int] = None) -> bytes:
    """Encode ``source`` as an ICO holding one 32-bit PNG per size.

    ``backend`` must provide ``render(source, size) -> png bytes``; the
    default resamples with Pillow.
    """
    sizes = validate_sizes(sizes)

    if backend is None:
        backend = PillowBackend()
        source = load_image(source)

    png_list = _map_ordered(lambda size: backend.render(source, size), sizes, workers)
    for size, png_bytes in zip(sizes, png_list):
        logger.debug(f"Rendered {size}x{size} PNG ({len(png_bytes)} bytes)")

    return pack_icon(
        [(size, size, ENCODED_BIT_COUNT, png_bytes) for size, png_bytes in zip(sizes, png_list)]
    )
