"""
Parallel fractal renderer.

The FractalRenderer class handles:
- Mapping every pixel to the complex plane
- Evaluating the fractal function per pixel
- Coloring the result through a gradient
- Running all of it in one JIT-compiled, prange-parallel loop

Every pixel is a pure function of (px, py, fractal, size, center, zoom), so
the output is identical whatever the number of threads.
"""

import logging
import time

import numpy as np
import numba
from numba import jit, prange

from .coords import map_pixel, validate_size, validate_zoom
from .errors import EmptyGradientError, InvalidConfigurationError
from .fractals import MANDELBROT, MAX_ITERATIONS, evaluate
from .gradient import get_default_gradient, lookup_color

logger = logging.getLogger(__name__)


@jit(nopython=True, cache=True)
def to_channel(value):
    """Round a float channel to the nearest uint8 value."""
    rounded = int(value + 0.5)
    if rounded < 0:
        return np.uint8(0)
    if rounded > 255:
        return np.uint8(255)
    return np.uint8(rounded)


@jit(nopython=True, parallel=True, cache=True)
def render_pixels(width, height, center_re, center_im, zoom,
                  kind, seed_re, seed_im, positions, colors, out):
    """
    Render a fractal into an RGB image.

    The pixel grid is processed as one flat index space so the scheduler
    can split it evenly regardless of the image shape.

    Args:
        width, height: Image dimensions in pixels
        center_re, center_im: Complex coordinate of the image center
        zoom: Zoom multiplier
        kind, seed_re, seed_im: Fractal selection (see fractals.evaluate)
        positions, colors: Gradient snapshot (see Gradient.positions/colors)
        out: (height, width, 3) uint8 array, modified in place
    """
    for index in prange(width * height):
        py = index // width
        px = index - py * width

        re, im = map_pixel(width, height, center_re, center_im, zoom, px, py)
        value = evaluate(kind, re, im, seed_re, seed_im) / MAX_ITERATIONS
        r, g, b = lookup_color(positions, colors, value)

        out[py, px, 0] = to_channel(r)
        out[py, px, 1] = to_channel(g)
        out[py, px, 2] = to_channel(b)


def validate_threads(threads):
    """
    Check a requested thread count against what Numba was started with.

    Returns:
        The thread count, or None to use Numba's current setting
    """
    if threads is None:
        return None
    threads = int(threads)
    limit = numba.config.NUMBA_NUM_THREADS
    if threads < 1 or threads > limit:
        raise InvalidConfigurationError(
            f"Thread count must be between 1 and {limit}, got {threads}"
        )
    return threads


class FractalRenderer:
    """
    Renders fractal images with a fixed gradient and thread count.

    Usage:
        renderer = FractalRenderer(threads=4)
        image = renderer.render(MANDELBROT, (800, 700), complex(-0.75, 0), 1.3)
        # image is a (700, 800, 3) uint8 RGB array

    Rendering blocks until the whole image is ready. The gradient is
    snapshotted on every call, so changing it later affects later renders only.

    Attributes:
        gradient: Gradient used for coloring
        threads: Numba thread count, or None for Numba's default
    """

    def __init__(self, gradient=None, threads=None):
        self.gradient = gradient if gradient is not None else get_default_gradient()
        self.threads = validate_threads(threads)

    def render(self, fractal, size, center=0j, zoom=1.0):
        """
        Render one image.

        Args:
            fractal: FractalFunction to evaluate
            size: (width, height) in pixels
            center: Complex coordinate at the image center
            zoom: Zoom multiplier

        Returns:
            New (height, width, 3) uint8 RGB array
        """
        width, height = validate_size(size)
        zoom = validate_zoom(zoom)
        center = complex(center)
        if len(self.gradient) == 0:
            raise EmptyGradientError("The gradient has no colors.")

        positions = self.gradient.positions
        colors = self.gradient.colors
        image = np.zeros((height, width, 3), dtype=np.uint8)

        start = time.perf_counter()
        previous_threads = numba.get_num_threads()
        if self.threads is not None:
            numba.set_num_threads(self.threads)
        try:
            render_pixels(width, height, center.real, center.imag, zoom,
                          fractal.kind, fractal.seed.real, fractal.seed.imag,
                          positions, colors, image)
        finally:
            numba.set_num_threads(previous_threads)

        logger.debug("Rendered %s %dx%d at center=%s zoom=%g in %.3fs",
                     fractal.name, width, height, center, zoom,
                     time.perf_counter() - start)
        return image


def render(fractal, size, center=0j, zoom=1.0, gradient=None, threads=None):
    """Render one image with a throwaway FractalRenderer."""
    return FractalRenderer(gradient, threads).render(fractal, size, center, zoom)


def translate_image(image, dx, dy):
    """
    Shift an image by whole pixels, filling the exposed area with black.

    Used as a cheap preview while dragging; the fractal is not recomputed.

    Args:
        image: (height, width, 3) array
        dx, dy: Shift in pixels (positive moves content right / down)

    Returns:
        New array of the same shape; the input is left untouched
    """
    shifted = np.zeros_like(image)
    height, width = image.shape[:2]
    dx = int(dx)
    dy = int(dy)
    if abs(dx) >= width or abs(dy) >= height:
        return shifted

    src_x = slice(max(0, -dx), width - max(0, dx))
    dst_x = slice(max(0, dx), width - max(0, -dx))
    src_y = slice(max(0, -dy), height - max(0, dy))
    dst_y = slice(max(0, dy), height - max(0, -dy))
    shifted[dst_y, dst_x] = image[src_y, src_x]
    return shifted


def warmup_jit():
    """
    Warm up JIT compilation with a tiny render.

    Call this once at startup to compile the Numba functions, avoiding a
    delay on the first real render.
    """
    start = time.perf_counter()
    render(MANDELBROT, (4, 4))
    logger.debug("JIT warm-up took %.3fs", time.perf_counter() - start)
