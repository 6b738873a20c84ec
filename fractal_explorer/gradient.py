"""
Gradient definitions for fractal coloring.

A gradient maps a normalized value in [0, 1] to an RGB color by linear
interpolation between sorted color stops. Values outside the range covered
by the stops clamp to the color of the nearest end stop.

Colors are returned in RGB order, which is what pygame surfaces expect.

To add a new gradient:
1. Define a create_gradient_xxx() function that returns a Gradient
2. Add it to the GRADIENTS dictionary at the bottom of this file
"""

import bisect

import numpy as np
from numba import jit

from .errors import EmptyGradientError, InvalidConfigurationError


class Gradient:
    """
    Piecewise-linear color ramp over a set of (position, color) stops.

    Stops may be added in any order; adding a stop at an existing position
    replaces its color.

    Usage:
        gradient = Gradient()
        gradient.add_color(0.0, (0, 0, 0))
        gradient.add_color(1.0, (255, 255, 255))
        gradient.get_color(0.5)  # (127.5, 127.5, 127.5)
    """

    def __init__(self, stops=None):
        self._positions = []
        self._colors = {}
        for position, color in (stops or ()):
            self.add_color(position, color)

    def __len__(self):
        return len(self._positions)

    def __iter__(self):
        for position in self._positions:
            yield position, self._colors[position]

    def __repr__(self):
        return f"Gradient({list(self)!r})"

    def add_color(self, position, color):
        """
        Insert or overwrite the stop at the given position.

        Args:
            position: Stop position, normally within [0, 1]
            color: (r, g, b) channels in [0, 255]
        """
        position = float(position)
        r, g, b = color
        if position not in self._colors:
            bisect.insort(self._positions, position)
        self._colors[position] = (float(r), float(g), float(b))

    def get_color(self, value):
        """
        Get the color for a value by interpolating between the closest stops.

        Args:
            value: Normalized value, usually iterations / MAX_ITERATIONS

        Returns:
            (r, g, b) tuple of floats in [0, 255]

        Raises:
            EmptyGradientError if the gradient has no stops
        """
        if not self._positions:
            raise EmptyGradientError("The gradient has no colors.")
        if value >= self._positions[-1]:
            return self._colors[self._positions[-1]]
        if value <= self._positions[0]:
            return self._colors[self._positions[0]]

        # First stop at or above the value, and the one just below it
        index = bisect.bisect_left(self._positions, value)
        lower_pos = self._positions[index - 1]
        upper_pos = self._positions[index]
        lower = self._colors[lower_pos]
        upper = self._colors[upper_pos]

        alpha = (value - lower_pos) / (upper_pos - lower_pos)
        return (
            (1.0 - alpha) * lower[0] + alpha * upper[0],
            (1.0 - alpha) * lower[1] + alpha * upper[1],
            (1.0 - alpha) * lower[2] + alpha * upper[2],
        )

    @property
    def positions(self):
        """Sorted stop positions as a float64 array."""
        return np.array(self._positions, dtype=np.float64)

    @property
    def colors(self):
        """Stop colors as an (N, 3) float64 array, ordered like positions."""
        colors = np.zeros((len(self._positions), 3), dtype=np.float64)
        for i, position in enumerate(self._positions):
            colors[i] = self._colors[position]
        return colors


@jit(nopython=True, cache=True)
def lookup_color(positions, colors, value):
    """
    Compiled twin of Gradient.get_color for use inside render kernels.

    Args:
        positions: Sorted stop positions (non-empty float64 array)
        colors: (N, 3) float64 stop colors
        value: Normalized value to look up

    Returns:
        (r, g, b) tuple of floats
    """
    last = positions.shape[0] - 1
    if value >= positions[last]:
        return colors[last, 0], colors[last, 1], colors[last, 2]
    if value <= positions[0]:
        return colors[0, 0], colors[0, 1], colors[0, 2]

    upper = 1
    while positions[upper] < value:
        upper += 1
    lower = upper - 1

    alpha = (value - positions[lower]) / (positions[upper] - positions[lower])
    return (
        (1.0 - alpha) * colors[lower, 0] + alpha * colors[upper, 0],
        (1.0 - alpha) * colors[lower, 1] + alpha * colors[upper, 1],
        (1.0 - alpha) * colors[lower, 2] + alpha * colors[upper, 2],
    )


# Canonical stops: black -> blue -> light blue -> white -> yellow -> orange -> red -> black
DEFAULT_STOPS = (
    (0.0, (0, 0, 0)),
    (0.03, (0, 48, 160)),
    (0.06, (0, 128, 255)),
    (0.09, (255, 255, 255)),
    (0.14, (255, 255, 0)),
    (0.19, (255, 128, 0)),
    (0.5, (255, 0, 0)),
    (1.0, (0, 0, 0)),
)


def create_gradient_default():
    """
    Default gradient: black -> blue -> white -> yellow -> orange -> red -> black.

    Most escaping points land below 0.2, so the bright part of the ramp is
    packed near the start. The set itself (value 1.0) is black.
    """
    return Gradient(DEFAULT_STOPS)


def create_gradient_grayscale():
    """Grayscale gradient: black -> white -> black, peaking early."""
    return Gradient([
        (0.0, (0, 0, 0)),
        (0.1, (255, 255, 255)),
        (1.0, (0, 0, 0)),
    ])


def create_gradient_ocean():
    """
    Ocean gradient: deep blue -> cyan -> white -> navy.

    Cool variant of the default ramp with the same stop spacing.
    """
    return Gradient([
        (0.0, (0, 0, 0)),
        (0.03, (0, 20, 80)),
        (0.06, (0, 90, 170)),
        (0.09, (0, 200, 220)),
        (0.14, (220, 255, 255)),
        (0.5, (0, 40, 120)),
        (1.0, (0, 0, 0)),
    ])


# Registry of all available gradients.
# Keys are display names, values are factory functions.
GRADIENTS = {
    'Default': create_gradient_default,
    'Grayscale': create_gradient_grayscale,
    'Ocean': create_gradient_ocean,
}


def get_gradient(name):
    """
    Get a fresh gradient by name.

    Args:
        name: Key from GRADIENTS dictionary

    Returns:
        New Gradient instance

    Raises:
        InvalidConfigurationError if name not found
    """
    try:
        factory = GRADIENTS[name]
    except KeyError:
        raise InvalidConfigurationError(
            f"Unknown gradient {name!r}, expected one of {list_gradient_names()}"
        ) from None
    return factory()


def get_default_gradient():
    """Get the default gradient."""
    return create_gradient_default()


def list_gradient_names():
    """Get list of available gradient names."""
    return list(GRADIENTS.keys())
