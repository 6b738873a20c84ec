"""
Escape-time fractal functions using Numba JIT compilation.

Both supported fractals iterate z = z² + c until |z| exceeds MAX_MAGNITUDE
or MAX_ITERATIONS is reached:
- Mandelbrot: z starts at 0, c is the queried point
- Julia: z starts at the queried point, c is a fixed seed

Escaping points get a smooth (fractional) iteration count so the colors do
not band. Points that never escape return exactly MAX_ITERATIONS.

The compiled functions take real and imaginary parts as separate floats so
they can be called from the parallel render kernel. FractalFunction wraps
them for Python callers.
"""

import math
from dataclasses import dataclass

from numba import jit


MAX_ITERATIONS = 256
MAX_MAGNITUDE = 65536

# Loop test compares squared magnitudes; the smoothing uses the true one.
MAX_MAGNITUDE_SQUARED = float(MAX_MAGNITUDE) * float(MAX_MAGNITUDE)
LOG2 = math.log(2.0)

# Fractal kinds
FRACTAL_MANDELBROT = 0
FRACTAL_JULIA = 1


@jit(nopython=True, cache=True)
def escape_time(zr, zi, cr, ci):
    """
    Iterate z = z² + c from the given start and return the smoothed count.

    Args:
        zr, zi: Real and imaginary parts of the starting z
        cr, ci: Real and imaginary parts of c

    Returns:
        MAX_ITERATIONS for points that never escape, otherwise
        iterations + 1 - log(log(|z|) / 2 / log(2)) / log(2)
    """
    iterations = 0
    while zr * zr + zi * zi <= MAX_MAGNITUDE_SQUARED and iterations < MAX_ITERATIONS:
        zr, zi = zr * zr - zi * zi + cr, 2.0 * zr * zi + ci
        iterations += 1

    if iterations >= MAX_ITERATIONS:
        return float(MAX_ITERATIONS)

    magnitude = math.sqrt(zr * zr + zi * zi)
    return iterations + 1 - math.log(math.log(magnitude) / 2 / LOG2) / LOG2


@jit(nopython=True, cache=True)
def evaluate(kind, re, im, seed_re, seed_im):
    """
    Evaluate a fractal of the given kind at one point.

    Args:
        kind: FRACTAL_MANDELBROT or FRACTAL_JULIA
        re, im: The queried point
        seed_re, seed_im: Julia seed (ignored for Mandelbrot)
    """
    if kind == FRACTAL_JULIA:
        return escape_time(re, im, seed_re, seed_im)
    return escape_time(0.0, 0.0, re, im)


def mandelbrot(c):
    """Smoothed escape count of the Mandelbrot set at point c."""
    c = complex(c)
    return evaluate(FRACTAL_MANDELBROT, c.real, c.imag, 0.0, 0.0)


def julia(z, seed):
    """Smoothed escape count of the Julia set for `seed` at point z."""
    z = complex(z)
    seed = complex(seed)
    return evaluate(FRACTAL_JULIA, z.real, z.imag, seed.real, seed.imag)


@dataclass(frozen=True)
class FractalFunction:
    """
    A fractal as a pure function of one complex point.

    Instances are immutable and can be shared between sessions. Use the
    mandelbrot() and julia(seed) constructors rather than building one by hand.
    """

    name: str
    kind: int
    seed: complex = 0j

    @classmethod
    def mandelbrot(cls):
        return cls("Mandelbrot set", FRACTAL_MANDELBROT)

    @classmethod
    def julia(cls, seed):
        return cls("Julia set", FRACTAL_JULIA, complex(seed))

    @property
    def is_mandelbrot(self):
        return self.kind == FRACTAL_MANDELBROT

    def __call__(self, point):
        point = complex(point)
        return evaluate(self.kind, point.real, point.imag,
                        self.seed.real, self.seed.imag)


MANDELBROT = FractalFunction.mandelbrot()
