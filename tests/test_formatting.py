import pytest

from icokit.document import IconImage
from icokit.formatting import export_filename, format_bytes, ico_filename, toggle_size
from icokit.raster import resample_filter


@pytest.mark.parametrize('count, expected', [
    (0, '0 B'),
    (512, '512 B'),
    (1024, '1 KB'),
    (1536, '1.5 KB'),
    (2 * 1024 * 1024, '2 MB'),
    (5 * 1024 ** 3, '5120 MB'),
])
def test_format_bytes(count, expected):
    assert format_bytes(count) == expected


def test_export_filename():
    png = IconImage(32, 32, 32, 'png', b'\x89PNG', 4)
    dib = IconImage(256, 256, 8, 'dib', b'BM', 2)
    assert export_filename('app', png) == 'app-32x32.png'
    assert export_filename('app', dib) == 'app-256x256.bmp'


def test_ico_filename():
    assert ico_filename('logo') == 'logo.ico'
    assert ico_filename('') == 'icon.ico'
    assert ico_filename() == 'icon.ico'


def test_toggle_size():
    assert toggle_size([16, 32, 48], 32) == [16, 48]
    assert toggle_size([16, 48], 24) == [16, 24, 48]
    assert toggle_size([], 256) == [256]


def test_resample_filter():
    assert resample_filter('lanczos') is not None
    with pytest.raises(ValueError):
        resample_filter('nope')
