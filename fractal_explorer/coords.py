"""
Mapping between pixel coordinates and the complex plane.

The horizontal span of the image is always 4 / zoom complex units. Both axes
are scaled by the image width, so the vertical span is 4 / zoom * height / width
and pixels stay square.
"""

from numba import jit

from .errors import InvalidConfigurationError


@jit(nopython=True, cache=True)
def map_pixel(width, height, center_re, center_im, zoom, px, py):
    """Compiled pixel -> complex mapping returning (re, im)."""
    re = (px - width / 2.0) / width * 4 / zoom + center_re
    im = (py - height / 2.0) / width * 4 / zoom + center_im
    return re, im


def pixel_to_complex(size, center, zoom, px, py):
    """
    Find the complex number corresponding to a pixel.

    Args:
        size: (width, height) of the image in pixels
        center: Complex coordinate at the middle of the image
        zoom: Zoom multiplier
        px, py: Pixel coordinates

    Returns:
        complex
    """
    width, height = size
    center = complex(center)
    re, im = map_pixel(width, height, center.real, center.imag,
                       float(zoom), px, py)
    return complex(re, im)


def complex_to_pixel(size, center, zoom, point):
    """
    Inverse of pixel_to_complex.

    Returns:
        (x, y) as floats; round them to address a pixel
    """
    width, height = size
    center = complex(center)
    point = complex(point)
    x = (point.real - center.real) * zoom / 4 * width + width / 2.0
    y = (point.imag - center.imag) * zoom / 4 * width + height / 2.0
    return x, y


def validate_size(size):
    """
    Check an image size before anything is rendered at it.

    Returns:
        (width, height) as ints

    Raises:
        InvalidConfigurationError for non-positive dimensions
    """
    try:
        width, height = (int(v) for v in size)
    except (TypeError, ValueError):
        raise InvalidConfigurationError(f"Invalid image size {size!r}") from None
    if width <= 0 or height <= 0:
        raise InvalidConfigurationError(
            f"Image size must be positive, got {width}x{height}"
        )
    return width, height


def validate_zoom(zoom):
    """Return zoom as a float, rejecting non-positive values."""
    zoom = float(zoom)
    if not zoom > 0:
        raise InvalidConfigurationError(f"Zoom must be positive, got {zoom}")
    return zoom
