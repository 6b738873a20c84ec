import pytest

from fractal_explorer.coords import (
    complex_to_pixel,
    pixel_to_complex,
    validate_size,
    validate_zoom,
)
from fractal_explorer.errors import InvalidConfigurationError


def test_image_center_maps_to_viewport_center():
    assert pixel_to_complex((800, 700), 0j, 1.0, 400, 350) == 0j
    assert pixel_to_complex((800, 700), complex(-0.75, 0.25), 1.3, 400, 350) == complex(-0.75, 0.25)


def test_horizontal_span_is_four_over_zoom():
    left = pixel_to_complex((800, 700), 0j, 2.0, 0, 350)
    right = pixel_to_complex((800, 700), 0j, 2.0, 800, 350)
    assert right.real - left.real == pytest.approx(2.0)


def test_both_axes_scale_by_width():
    # Vertical span is 4 / zoom * height / width
    top = pixel_to_complex((800, 700), 0j, 1.0, 400, 0)
    bottom = pixel_to_complex((800, 700), 0j, 1.0, 400, 700)
    assert top == complex(0, -1.75)
    assert bottom.imag - top.imag == pytest.approx(4 * 700 / 800)


def test_corner_pixel():
    assert pixel_to_complex((10, 10), 0j, 1.0, 0, 0) == complex(-2, -2)


def test_complex_to_pixel_inverts_mapping():
    size = (800, 700)
    center = complex(-0.75, 0.1)
    for px, py in ((0, 0), (123, 456), (799, 699), (400, 350)):
        point = pixel_to_complex(size, center, 1.3, px, py)
        x, y = complex_to_pixel(size, center, 1.3, point)
        assert x == pytest.approx(px)
        assert y == pytest.approx(py)


def test_validate_size():
    assert validate_size((800, 700)) == (800, 700)
    for bad in ((0, 700), (800, 0), (-1, 5), (1,), None):
        with pytest.raises(InvalidConfigurationError):
            validate_size(bad)


def test_validate_zoom():
    assert validate_zoom(2) == 2.0
    for bad in (0, -1.0, float('nan')):
        with pytest.raises(InvalidConfigurationError):
            validate_zoom(bad)
