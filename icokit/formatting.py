"""Small presentation helpers shared by the command line and callers."""

_UNITS = ('B', 'KB', 'MB')


def format_bytes(count):
    """Human readable byte count: '0 B', '512 B', '1.5 KB', '2 MB'."""
    if count <= 0:
        return '0 B'
    value = float(count)
    unit = 0
    while value >= 1024 and unit < len(_UNITS) - 1:
        value /= 1024
        unit += 1
    text = f"{value:.1f}"
    if text.endswith('.0'):
        text = text[:-2]
    return f"{text} {_UNITS[unit]}"


def export_filename(stem, image):
    """File name for one extracted image, e.g. 'app-32x32.png'."""
    return f"{stem}-{image.width}x{image.height}.{image.extension}"


def ico_filename(stem=None):
    return f"{stem or 'icon'}.ico"


def toggle_size(selected, size):
    """Add ``size`` to the selection, or remove it if already present."""
    if size in selected:
        return sorted(s for s in selected if s != size)
    return sorted([*selected, size])
