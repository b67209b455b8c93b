"""
icokit - read and write Windows .ico files.

    from icokit import decode_ico, encode_ico

    document = decode_ico(open('app.ico', 'rb').read())
    for image in document:
        print(image.width, image.height, image.payload_format)

    data = encode_ico('logo.png', [16, 32, 48, 256])
"""

from .config import AVAILABLE_SIZES, DEFAULT_SIZES, IcoConfig
from .cursor import ByteCursor
from .directory import DirectoryEntry
from .document import IconDocument, IconImage, decode_ico, encode_ico
from .errors import (
    EmptyResultError,
    FormatError,
    IcoError,
    InvalidSizeError,
    NoSizesRequestedError,
    TruncatedDataError,
)
from .formatting import export_filename, format_bytes, toggle_size
from .sniff import sniff_payload

__version__ = '0.1.0'

__all__ = [
    'AVAILABLE_SIZES',
    'DEFAULT_SIZES',
    'ByteCursor',
    'DirectoryEntry',
    'EmptyResultError',
    'FormatError',
    'IcoConfig',
    'IcoError',
    'IconDocument',
    'IconImage',
    'InvalidSizeError',
    'NoSizesRequestedError',
    'TruncatedDataError',
    'decode_ico',
    'encode_ico',
    'export_filename',
    'format_bytes',
    'sniff_payload',
    'toggle_size',
]
