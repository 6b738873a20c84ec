import numpy as np
import pytest

from fractal_explorer.errors import EmptyGradientError, InvalidConfigurationError
from fractal_explorer.gradient import (
    DEFAULT_STOPS,
    Gradient,
    get_default_gradient,
    get_gradient,
    list_gradient_names,
    lookup_color,
)

BLACK = (0.0, 0.0, 0.0)


def test_default_gradient_stops():
    gradient = get_default_gradient()
    assert list(gradient) == [
        (0.0, (0.0, 0.0, 0.0)),
        (0.03, (0.0, 48.0, 160.0)),
        (0.06, (0.0, 128.0, 255.0)),
        (0.09, (255.0, 255.0, 255.0)),
        (0.14, (255.0, 255.0, 0.0)),
        (0.19, (255.0, 128.0, 0.0)),
        (0.5, (255.0, 0.0, 0.0)),
        (1.0, (0.0, 0.0, 0.0)),
    ]


def test_default_gradient_ends_are_black():
    gradient = get_default_gradient()
    assert gradient.get_color(0.0) == BLACK
    assert gradient.get_color(1.0) == BLACK


def test_values_outside_stops_clamp():
    gradient = Gradient([(0.2, (10, 20, 30)), (0.8, (200, 100, 50))])
    assert gradient.get_color(-5.0) == (10.0, 20.0, 30.0)
    assert gradient.get_color(0.1) == (10.0, 20.0, 30.0)
    assert gradient.get_color(0.9) == (200.0, 100.0, 50.0)
    assert gradient.get_color(42.0) == (200.0, 100.0, 50.0)


def test_interpolation_midpoint():
    gradient = Gradient([(0.0, (0, 0, 0)), (1.0, (255, 100, 50))])
    assert gradient.get_color(0.5) == pytest.approx((127.5, 50.0, 25.0))


def test_interpolation_stays_between_adjacent_stops():
    gradient = get_default_gradient()
    stops = list(gradient)
    for (lo_pos, lo), (hi_pos, hi) in zip(stops, stops[1:]):
        for value in np.linspace(lo_pos, hi_pos, 7)[1:-1]:
            color = gradient.get_color(value)
            for channel in range(3):
                low = min(lo[channel], hi[channel])
                high = max(lo[channel], hi[channel])
                assert low - 1e-9 <= color[channel] <= high + 1e-9


def test_value_on_interior_stop_returns_its_color():
    gradient = get_default_gradient()
    assert gradient.get_color(0.09) == pytest.approx((255.0, 255.0, 255.0))
    assert gradient.get_color(0.5) == pytest.approx((255.0, 0.0, 0.0))


def test_add_color_any_order_and_overwrite():
    gradient = Gradient()
    gradient.add_color(1.0, (255, 255, 255))
    gradient.add_color(0.0, (0, 0, 0))
    gradient.add_color(0.5, (1, 2, 3))
    gradient.add_color(0.5, (100, 100, 100))
    assert len(gradient) == 3
    assert [position for position, _ in gradient] == [0.0, 0.5, 1.0]
    assert gradient.get_color(0.5) == (100.0, 100.0, 100.0)


def test_single_stop_gradient():
    gradient = Gradient([(0.3, (1, 2, 3))])
    assert gradient.get_color(0.0) == (1.0, 2.0, 3.0)
    assert gradient.get_color(0.3) == (1.0, 2.0, 3.0)
    assert gradient.get_color(1.0) == (1.0, 2.0, 3.0)


def test_empty_gradient_fails():
    with pytest.raises(EmptyGradientError):
        Gradient().get_color(0.5)


def test_snapshot_arrays():
    gradient = get_default_gradient()
    assert gradient.positions.tolist() == [position for position, _ in DEFAULT_STOPS]
    assert gradient.colors.shape == (8, 3)
    assert gradient.colors[2].tolist() == [0.0, 128.0, 255.0]


@pytest.mark.parametrize("value", [-1.0, 0.0, 0.01, 0.03, 0.045, 0.1, 0.3, 0.75, 1.0, 2.0])
def test_compiled_lookup_matches_python(value):
    gradient = get_default_gradient()
    compiled = lookup_color(gradient.positions, gradient.colors, value)
    assert compiled == pytest.approx(gradient.get_color(value))


def test_named_gradients():
    assert list_gradient_names() == ['Default', 'Grayscale', 'Ocean']
    first = get_gradient('Default')
    first.add_color(0.5, (1, 1, 1))
    # Every call returns a fresh gradient
    assert len(get_gradient('Default')) == 8


def test_unknown_gradient_name():
    with pytest.raises(InvalidConfigurationError):
        get_gradient('Nope')
