import struct

import pytest

from icokit.cursor import ByteCursor
from icokit.errors import TruncatedDataError


def test_reads_little_endian():
    cursor = ByteCursor(b'\x01\x02\x03\x04\x05\x06\x07')
    assert cursor.read_u8() == 0x01
    assert cursor.read_u16le() == 0x0302
    assert cursor.read_u32le() == 0x07060504
    assert cursor.position == 7
    assert cursor.remaining == 0


def test_read_past_end_raises():
    cursor = ByteCursor(b'\x01\x02\x03', 2)
    with pytest.raises(TruncatedDataError) as exc:
        cursor.read_u16le()
    assert exc.value.needed == 2
    assert exc.value.available == 1
    assert exc.value.position == 2
    # position is left untouched on failure
    assert cursor.position == 2


def test_read_bytes_bounds():
    cursor = ByteCursor(b'abcdef', 1)
    assert cursor.read_bytes(3) == b'bcd'
    with pytest.raises(TruncatedDataError):
        cursor.read_bytes(10)


def test_seek_beyond_buffer_then_read():
    cursor = ByteCursor(b'\x00' * 4).seek(100)
    assert cursor.remaining == 0
    with pytest.raises(TruncatedDataError):
        cursor.read_u8()


def test_writes_append():
    cursor = ByteCursor()
    cursor.write_u8(0xAB).write_u16le(0x0102).write_u32le(22).write_bytes(b'xy')
    assert cursor.getvalue() == b'\xab\x02\x01\x16\x00\x00\x00xy'
    assert len(cursor) == 9


def test_write_out_of_range_value():
    with pytest.raises(struct.error):
        ByteCursor().write_u8(256)
