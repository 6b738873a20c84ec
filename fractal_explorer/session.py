"""
Interactive fractal sessions.

A FractalSession is the state machine behind one fractal view. It owns the
viewport (center and zoom), the drag state and the last rendered image, and
turns abstract input events into viewport updates and re-renders.

The session knows nothing about windows. Whatever displays it (see app.py)
translates its own events into InputEvent / Key values and passes callbacks
for showing images, opening new sessions and closing.

Controls:
    - Left drag: Move the image (re-rendered on release)
    - Ctrl + left click: Open the Julia set seeded at the clicked point
    - Ctrl + scroll: Zoom in/out at the mouse position
    - F5: Reset to the initial view
    - + / -: Zoom in/out at the center
    - ESC: Close the view
"""

import enum
import logging
from dataclasses import dataclass

from .coords import pixel_to_complex, validate_size, validate_zoom
from .fractals import FractalFunction
from .renderer import FractalRenderer, translate_image

logger = logging.getLogger(__name__)


ZOOM_IN_FACTOR = 1.25
ZOOM_OUT_FACTOR = 0.8


class MouseEvent(enum.IntEnum):
    LBUTTON_DOWN = 1
    LBUTTON_UP = 2
    MOUSE_MOVE = 3
    MOUSE_WHEEL = 4


class MouseFlags(enum.IntFlag):
    NONE = 0
    LBUTTON = 1
    CTRL = 8


class Key(enum.IntEnum):
    """Key codes understood by FractalSession.handle_key."""

    ESCAPE = 27
    PLUS = 43
    MINUS = 45
    F5 = 7602176


@dataclass(frozen=True)
class InputEvent:
    """
    A pointer event in window pixel coordinates.

    Attributes:
        kind: MouseEvent value
        x, y: Pointer position
        flags: MouseFlags held during the event
        delta: Wheel movement; positive means scrolling forward
    """

    kind: int
    x: int
    y: int
    flags: int = MouseFlags.NONE
    delta: int = 0


@dataclass
class Viewport:
    """Visible region of the complex plane."""

    center: complex = 0j
    zoom: float = 1.0

    def __post_init__(self):
        self.center = complex(self.center)
        self.zoom = validate_zoom(self.zoom)


class FractalSession:
    """
    State machine for one interactive fractal view.

    Usage:
        session = FractalSession("Mandelbrot set", MANDELBROT, (800, 700),
                                 complex(-0.75, 0), 1.3, on_image=show)
        session.handle_input(InputEvent(MouseEvent.LBUTTON_DOWN, 10, 10))
        session.handle_input(InputEvent(MouseEvent.LBUTTON_UP, 60, 10))
        session.handle_key(Key.F5)

    The session renders once when it is created.

    Attributes:
        title: Display title
        fractal: FractalFunction rendered by this session
        size: (width, height) in pixels
        viewport: Current Viewport
        drag_start: (x, y) where the current drag began, or None
        last_render: Most recent full render
        image: Image currently shown (a render or a drag preview)
        closed: Whether close() has been called
    """

    def __init__(self, title, fractal, size, center=0j, zoom=1.0,
                 renderer=None, on_image=None, on_spawn=None, on_close=None):
        """
        Create the session and render the initial view.

        Args:
            title: Display title
            fractal: FractalFunction to render
            size: (width, height) in pixels
            center, zoom: Initial viewport, also used by reset()
            renderer: FractalRenderer to use (default: a new one)
            on_image: Called with (session, image) whenever the shown image changes
            on_spawn: Called with (title, fractal, size, center, zoom) to open
                a new independent session
            on_close: Called with (session) once the session is closed

        Raises:
            InvalidConfigurationError for a degenerate size or zoom
        """
        self.title = title
        self.fractal = fractal
        self.size = validate_size(size)
        self.viewport = Viewport(center, zoom)
        self.default_center = self.viewport.center
        self.default_zoom = self.viewport.zoom

        self.renderer = renderer if renderer is not None else FractalRenderer()
        self._on_image = on_image
        self._on_spawn = on_spawn
        self._on_close = on_close

        self.drag_start = None
        self.last_render = None
        self.image = None
        self.closed = False

        logger.debug("Opened session %r at center=%s zoom=%g",
                     title, self.viewport.center, self.viewport.zoom)
        self.render()

    @property
    def width(self):
        return self.size[0]

    @property
    def height(self):
        return self.size[1]

    def render(self):
        """Render the current viewport and show it."""
        self.last_render = self.renderer.render(
            self.fractal, self.size, self.viewport.center, self.viewport.zoom
        )
        self.show_image(self.last_render)

    def show_image(self, image):
        """Present an image, replacing the one shown before."""
        self.image = image
        if self._on_image is not None:
            self._on_image(self, image)

    def handle_input(self, event):
        """Apply a pointer event. Unknown kinds are ignored."""
        if self.closed:
            return

        if event.kind == MouseEvent.MOUSE_MOVE:
            # Drag preview: shift the last render, the viewport is untouched
            if event.flags & MouseFlags.LBUTTON and self.drag_start is not None:
                self._preview_drag(event.x, event.y)
        elif event.kind == MouseEvent.LBUTTON_DOWN:
            self.drag_start = (event.x, event.y)
        elif event.kind == MouseEvent.LBUTTON_UP:
            self._release(event)
        elif event.kind == MouseEvent.MOUSE_WHEEL:
            if event.flags & MouseFlags.CTRL and event.delta != 0:
                self.zoom_at(event.x, event.y, event.delta > 0)

    def handle_key(self, key):
        """Apply a key press. Unknown key codes are ignored."""
        if self.closed:
            return

        if key == Key.ESCAPE:
            self.close()
        elif key == Key.F5:
            self.reset()
        elif key == Key.PLUS:
            self.zoom_in()
        elif key == Key.MINUS:
            self.zoom_out()

    def _preview_drag(self, x, y):
        sx, sy = self.drag_start
        self.show_image(translate_image(self.last_render, x - sx, y - sy))

    def _release(self, event):
        if event.flags & MouseFlags.CTRL and self.fractal.is_mandelbrot:
            self.drag_start = None
            self.open_julia(event.x, event.y)
            return

        if self.drag_start is None:
            return
        sx, sy = self.drag_start
        self.drag_start = None
        self.pan(sx - event.x, sy - event.y)

    def pan(self, dx, dy):
        """
        Move the center by a pixel displacement and re-render.

        Both axes are divided by the width, matching pixel_to_complex.
        """
        center = self.viewport.center
        zoom = self.viewport.zoom
        self.viewport.center = complex(
            center.real + dx / self.width * 4 / zoom,
            center.imag + dy / self.width * 4 / zoom,
        )
        logger.debug("Pan by (%d, %d) to %s", dx, dy, self.viewport.center)
        self.render()

    def zoom_at(self, x, y, forward):
        """Zoom in (forward) or out and shift the center toward (x, y)."""
        zoom = self.viewport.zoom * (ZOOM_IN_FACTOR if forward else ZOOM_OUT_FACTOR)
        center = self.viewport.center
        self.viewport.zoom = zoom
        self.viewport.center = complex(
            center.real + (x / self.width - 0.5) / zoom,
            center.imag + (y / self.height - 0.5) / zoom,
        )
        logger.debug("Zoom to %g at (%d, %d)", zoom, x, y)
        self.render()

    def zoom_in(self):
        self.viewport.zoom *= ZOOM_IN_FACTOR
        self.render()

    def zoom_out(self):
        self.viewport.zoom *= ZOOM_OUT_FACTOR
        self.render()

    def reset(self):
        """Return to the viewport the session was created with."""
        self.viewport.center = self.default_center
        self.viewport.zoom = self.default_zoom
        self.render()

    def open_julia(self, x, y):
        """Request a new session for the Julia set seeded at pixel (x, y)."""
        seed = pixel_to_complex(self.size, self.viewport.center,
                                self.viewport.zoom, x, y)
        logger.debug("Opening Julia set for seed %s", seed)
        if self._on_spawn is not None:
            self._on_spawn("Julia set", FractalFunction.julia(seed), self.size, 0j, 1.0)

    def close(self):
        """Close the session and release its images."""
        if self.closed:
            return
        self.closed = True
        self.last_render = None
        self.image = None
        self.drag_start = None
        logger.debug("Closed session %r", self.title)
        if self._on_close is not None:
            self._on_close(self)
