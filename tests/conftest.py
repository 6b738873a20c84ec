import numpy as np
import pytest

from fractal_explorer.session import FractalSession


class StubRenderer:
    """Records render calls and returns a distinct image per call."""

    def __init__(self):
        self.calls = []

    def render(self, fractal, size, center=0j, zoom=1.0):
        self.calls.append((fractal, tuple(size), complex(center), zoom))
        width, height = size
        image = np.zeros((height, width, 3), dtype=np.uint8)
        image[..., 0] = len(self.calls) % 256
        image[..., 1] = 200
        return image


@pytest.fixture
def renderer():
    return StubRenderer()


@pytest.fixture
def make_session(renderer):
    """Build a FractalSession wired to recording callbacks."""

    def factory(fractal, size=(800, 700), center=complex(-0.75, 0.0), zoom=1.3):
        events = {'images': [], 'spawned': [], 'closed': []}
        session = FractalSession(
            "Test", fractal, size, center, zoom,
            renderer=renderer,
            on_image=lambda s, image: events['images'].append(image),
            on_spawn=lambda *args: events['spawned'].append(args),
            on_close=lambda s: events['closed'].append(s),
        )
        return session, events

    return factory
