import io
import struct

import pytest
from PIL import Image


def make_png(size=16, color=(255, 0, 0, 255)):
    img = Image.new('RGBA', (size, size), color)
    buf = io.BytesIO()
    img.save(buf, 'PNG')
    return buf.getvalue()


def make_dib(width=2, height=2, bit_count=1, clr_used=0, ico_height=True, pixels=None):
    """BITMAPINFOHEADER + palette + pixel rows, without a file header."""
    stored_height = height * 2 if ico_height else height
    header = struct.pack(
        '<IiiHHIIiiII',
        40, width, stored_height, 1, bit_count, 0, 0, 0, 0, clr_used, 0,
    )
    entries = clr_used or (1 << bit_count if bit_count <= 8 else 0)
    palette = b''
    for i in range(entries):
        shade = 255 if i else 0
        palette += bytes((shade, shade, shade, 0))
    stride = ((width * bit_count + 31) // 32) * 4
    if pixels is None:
        pixels = b'\x00' * (stride * height)
    return header + palette + pixels


def build_ico(payloads, dims=None, bit_counts=None, count=None, sizes=None, offsets=None):
    """Assemble an ICO by hand; overrides allow corrupt directories."""
    n = len(payloads)
    header = struct.pack('<HHH', 0, 1, n if count is None else count)
    offset = 6 + 16 * n
    entries = b''
    for i, payload in enumerate(payloads):
        w, h = dims[i] if dims else (16, 16)
        bits = bit_counts[i] if bit_counts else 32
        size = sizes[i] if sizes else len(payload)
        off = offsets[i] if offsets else offset
        entries += struct.pack('<BBBBHHII', w, h, 0, 0, 1, bits, size, off)
        offset += len(payload)
    return header + entries + b''.join(payloads)


class FakeBackend:
    """Deterministic stand-in for the Pillow rasterizer/PNG encoder."""

    def __init__(self):
        self.calls = []

    def render(self, source, size):
        self.calls.append(size)
        return b'\x89PNG' + bytes([size % 256]) * size


@pytest.fixture
def source_image():
    img = Image.new('RGBA', (64, 64), (0, 128, 255, 255))
    for x in range(32):
        img.putpixel((x, x), (255, 255, 0, 128))
    return img


@pytest.fixture
def png_bytes():
    return make_png()


@pytest.fixture
def fake_backend():
    return FakeBackend()
