"""
Pillow-backed rasterizer and PNG codec used by the encoder.
"""

import io

from PIL import Image

DEFAULT_RESAMPLE = 'LANCZOS'


def resample_filter(name):
    """Map a filter name like 'LANCZOS' to Image.Resampling."""
    try:
        return Image.Resampling[name.upper()]
    except KeyError:
        raise ValueError(f"Unknown resampling filter: {name}") from None


def load_image(source):
    """Open a path, file object or bytes buffer as an RGBA image."""
    if isinstance(source, Image.Image):
        img = source
    else:
        if isinstance(source, (bytes, bytearray)):
            source = io.BytesIO(source)
        img = Image.open(source)
        img.load()

    # Convert to RGBA for proper transparency
    if img.mode != 'RGBA':
        img = img.convert('RGBA')
    return img


def rasterize(source, size, resample=DEFAULT_RESAMPLE):
    """Resample ``source`` to exactly ``size`` x ``size`` RGBA."""
    img = load_image(source)
    if img.size == (size, size):
        return img.copy()
    return img.resize((size, size), resample_filter(resample))


def encode_png(img, optimize=True):
    png_output = io.BytesIO()
    img.save(png_output, 'PNG', optimize=optimize)
    return png_output.getvalue()


def decode_png(data):
    return load_image(bytes(data))


class PillowBackend:
    """Rasterizer + PNG encoder pair handed to encode_ico."""

    def __init__(self, resample=DEFAULT_RESAMPLE, optimize=True):
        self.resample = resample
        self.optimize = optimize

    def render(self, source, size):
        resized = rasterize(source, size, self.resample)
        return encode_png(resized, optimize=self.optimize)
