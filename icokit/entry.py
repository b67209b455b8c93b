"""
Directory bookkeeping for the encoder.

Each embedded image is a 32-bit PNG. The encoder only needs the PNG byte
length to lay out the directory: payloads start right after the header and
all directory entries, and follow each other without gaps.
"""

from .directory import HEADER_SIZE, ENTRY_SIZE, DirectoryEntry

ENCODED_BIT_COUNT = 32


def first_payload_offset(count):
    return HEADER_SIZE + ENTRY_SIZE * count


class EntryEncoder:
    """Hands out directory entries with running payload offsets."""

    def __init__(self, count):
        self.count = count
        self.current_offset = first_payload_offset(count)
        self.entries = []

    def add_image(self, width, height, bit_count, payload):
        entry = DirectoryEntry(
            width=width,
            height=height,
            bit_count=bit_count,
            size=len(payload),
            offset=self.current_offset,
        )
        self.entries.append(entry)
        self.current_offset += len(payload)
        return entry

    def add(self, size, png_bytes):
        """Record one ``size`` x ``size`` PNG and return its directory entry."""
        return self.add_image(size, size, ENCODED_BIT_COUNT, png_bytes)
