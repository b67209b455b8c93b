"""
Little-endian byte cursor used by every part of the ICO codec.

Reads advance over a fixed input buffer and are bounds checked; writes
append to a growing output buffer.
"""

import struct

from .errors import TruncatedDataError

_U8 = struct.Struct('<B')
_U16 = struct.Struct('<H')
_U32 = struct.Struct('<I')


class ByteCursor:
    """Position over a byte buffer with fixed-width little-endian access."""

    def __init__(self, data=b'', position=0):
        self.buffer = bytearray(data)
        self.position = position

    def __len__(self):
        return len(self.buffer)

    @property
    def remaining(self):
        return max(len(self.buffer) - self.position, 0)

    def seek(self, position):
        self.position = position
        return self

    def _take(self, count):
        if count < 0 or self.position < 0 or self.position + count > len(self.buffer):
            raise TruncatedDataError(count, self.remaining, self.position)
        start = self.position
        self.position += count
        return start

    def _read(self, fmt):
        start = self._take(fmt.size)
        return fmt.unpack_from(self.buffer, start)[0]

    def read_u8(self):
        return self._read(_U8)

    def read_u16le(self):
        return self._read(_U16)

    def read_u32le(self):
        return self._read(_U32)

    def read_bytes(self, count):
        start = self._take(count)
        return bytes(self.buffer[start:start + count])

    def write_u8(self, value):
        self.buffer += _U8.pack(value)
        return self

    def write_u16le(self, value):
        self.buffer += _U16.pack(value)
        return self

    def write_u32le(self, value):
        self.buffer += _U32.pack(value)
        return self

    def write_bytes(self, data):
        self.buffer += data
        return self

    def getvalue(self):
        return bytes(self.buffer)
