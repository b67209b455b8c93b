"""
ICONDIR / ICONDIRENTRY codec.

Layout (all little-endian):

    ICONDIR       reserved(2) type(2) count(2)
    ICONDIRENTRY  width(1) height(1) colors(1) reserved(1)
                  planes(2) bitcount(2) size(4) offset(4)

A stored width or height of 0 means 256.
"""

import logging
from dataclasses import dataclass

from .cursor import ByteCursor
from .errors import FormatError, TruncatedDataError

logger = logging.getLogger(__name__)

HEADER_SIZE = 6
ENTRY_SIZE = 16
ICON_TYPE = 1
CURSOR_TYPE = 2
MAX_DIMENSION = 256


@dataclass(frozen=True)
class IconHeader:
    reserved: int
    type: int
    count: int


@dataclass(frozen=True)
class DirectoryEntry:
    """One directory record with logical (1..256) width and height."""
    width: int
    height: int
    bit_count: int
    size: int
    offset: int
    color_planes: int = 1
    color_count: int = 0

    @property
    def end(self):
        return self.offset + self.size


def to_stored_dimension(value):
    # 0 means 256 in ICO format
    return 0 if value >= MAX_DIMENSION else value


def from_stored_dimension(value):
    return MAX_DIMENSION if value == 0 else value


def read_header(cursor):
    """Read and validate the 6-byte ICONDIR header.

    Raises TruncatedDataError if the buffer is shorter than the header and
    FormatError if reserved/type are not 0/1.
    """
    reserved = cursor.read_u16le()
    ico_type = cursor.read_u16le()
    count = cursor.read_u16le()

    if reserved != 0:
        raise FormatError(f"Not an ICO file: reserved field is {reserved}, expected 0")
    if ico_type == CURSOR_TYPE:
        raise FormatError("Cursor (.cur) files are not supported")
    if ico_type != ICON_TYPE:
        raise FormatError(f"Not an ICO file: type field is {ico_type}, expected 1")

    return IconHeader(reserved, ico_type, count)


def read_entry(cursor):
    """Read one 16-byte directory entry at the cursor position."""
    width = cursor.read_u8()
    height = cursor.read_u8()
    color_count = cursor.read_u8()
    cursor.read_u8()  # reserved
    planes = cursor.read_u16le()
    bit_count = cursor.read_u16le()
    size = cursor.read_u32le()
    offset = cursor.read_u32le()

    if planes not in (0, 1):
        logger.debug(f"Directory entry declares {planes} color planes")

    return DirectoryEntry(
        width=from_stored_dimension(width),
        height=from_stored_dimension(height),
        bit_count=bit_count,
        size=size,
        offset=offset,
        color_planes=planes,
        color_count=color_count,
    )


def read_directory(data):
    """Decode the header and every directory entry of an ICO buffer.

    Returns (header, entries, warnings). Entries that cannot be read, or whose
    payload runs past the end of the buffer, are dropped and reported in
    warnings. Entries keep the index they had in the directory, so each item
    of ``entries`` is an ``(index, DirectoryEntry)`` pair.
    """
    cursor = ByteCursor(data)
    header = read_header(cursor)

    entries = []
    warnings = []
    for i in range(header.count):
        cursor.seek(HEADER_SIZE + i * ENTRY_SIZE)
        try:
            entry = read_entry(cursor)
        except TruncatedDataError as e:
            message = f"Image {i} directory entry is truncated, skipping: {e}"
            logger.warning(message)
            warnings.append(message)
            continue

        # Safety check
        if entry.end > len(data):
            message = f"Image {i} data exceeds file size, skipping."
            logger.warning(message)
            warnings.append(message)
            continue

        logger.debug(
            f"Entry {i}: {entry.width}x{entry.height}, {entry.bit_count}-bit, "
            f"{entry.size} bytes at {entry.offset}"
        )
        entries.append((i, entry))

    return header, entries, warnings


def write_header(cursor, count):
    cursor.write_u16le(0)           # Reserved
    cursor.write_u16le(ICON_TYPE)   # Type (1 = ICO)
    cursor.write_u16le(count)       # Number of images
    return cursor


def write_entry(cursor, entry):
    cursor.write_u8(to_stored_dimension(entry.width))
    cursor.write_u8(to_stored_dimension(entry.height))
    cursor.write_u8(entry.color_count)
    cursor.write_u8(0)
    cursor.write_u16le(entry.color_planes)
    cursor.write_u16le(entry.bit_count)
    cursor.write_u32le(entry.size)
    cursor.write_u32le(entry.offset)
    return cursor
