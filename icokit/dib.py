"""
Rebuild a standalone .bmp from a headerless DIB payload.

Icons store bitmaps without the 14-byte BITMAPFILEHEADER, so the payload
cannot be handed to a generic bitmap decoder as-is. We read just enough of
the BITMAPINFOHEADER to find where the pixel data starts and prepend a
synthesized file header.
"""

import logging

from .cursor import ByteCursor

logger = logging.getLogger(__name__)

FILE_HEADER_SIZE = 14
BMP_SIGNATURE = b'BM'

# BITMAPINFOHEADER field offsets
_BI_BITCOUNT = 14
_BI_CLRUSED = 32

_U32_MASK = 0xFFFFFFFF


def palette_entries(bit_count, clr_used):
    """Number of RGBQUAD palette entries that follow the info header."""
    if clr_used == 0 and bit_count <= 8:
        return 1 << bit_count
    return clr_used


def dib_bit_count(payload, fallback=0):
    """biBitCount from the DIB header, or ``fallback`` when it is zero."""
    cursor = ByteCursor(payload, _BI_BITCOUNT)
    bit_count = cursor.read_u16le()
    return bit_count or fallback


def build_file_header(payload_size, pixel_offset):
    # u32 fields wrap like the on-disk format; damaged headers can overflow them
    cursor = ByteCursor()
    cursor.write_bytes(BMP_SIGNATURE)
    cursor.write_u32le((FILE_HEADER_SIZE + payload_size) & _U32_MASK)  # Total file size
    cursor.write_u16le(0)                                # Reserved
    cursor.write_u16le(0)                                # Reserved
    cursor.write_u32le(pixel_offset & _U32_MASK)
    return cursor.getvalue()


def reconstruct_bmp(payload, bit_count=0):
    """Return (bmp_bytes, bit_count) for a raw DIB payload.

    ``bit_count`` is the directory entry's value; the DIB header's own
    biBitCount wins when it is non-zero. Raises TruncatedDataError if the
    payload is too short to hold the fields we need.
    """
    cursor = ByteCursor(payload)
    header_size = cursor.read_u32le()

    bit_count = dib_bit_count(payload, bit_count)

    cursor.seek(_BI_CLRUSED)
    clr_used = cursor.read_u32le()

    palette_size = palette_entries(bit_count, clr_used) * 4
    pixel_offset = FILE_HEADER_SIZE + header_size + palette_size

    logger.debug(
        f"DIB header {header_size} bytes, {bit_count}-bit, "
        f"palette {palette_size} bytes, pixels at {pixel_offset}"
    )

    file_header = build_file_header(len(payload), pixel_offset)
    return file_header + bytes(payload), bit_count
