"""
Fractal Explorer Package

An interactive Mandelbrot and Julia set explorer using Pygame for display
and Numba for JIT-compiled, parallel rendering.

Quick Start:
    from fractal_explorer import main
    main()

Or from command line:
    python -m fractal_explorer

Package Structure:
    - gradient.py: Color gradients (default, grayscale, ocean)
    - fractals.py: JIT-compiled Mandelbrot and Julia functions
    - coords.py: Pixel <-> complex plane mapping
    - renderer.py: Parallel rendering of full images
    - session.py: Interaction state machine for one view
    - settings.py: settings.json loading
    - app.py: Pygame window, event loop and command line

Controls:
    - Left drag: Pan (re-rendered on release)
    - Ctrl + left click: Open the Julia set for the clicked point
    - Ctrl + scroll: Zoom in/out at mouse position
    - F5: Reset to default view
    - + / -: Zoom in/out
    - ESC: Close the view
"""

from .app import FractalExplorerApp, main
from .coords import complex_to_pixel, pixel_to_complex
from .errors import EmptyGradientError, FractalExplorerError, InvalidConfigurationError
from .fractals import MANDELBROT, MAX_ITERATIONS, MAX_MAGNITUDE, FractalFunction, julia, mandelbrot
from .gradient import GRADIENTS, Gradient, get_default_gradient, get_gradient, list_gradient_names
from .renderer import FractalRenderer, render, translate_image
from .session import FractalSession, InputEvent, Key, MouseEvent, MouseFlags, Viewport

__version__ = "1.0.0"
__all__ = [
    "main",
    "FractalExplorerApp",
    "FractalSession",
    "FractalRenderer",
    "FractalFunction",
    "Gradient",
    "GRADIENTS",
    "InputEvent",
    "Key",
    "MouseEvent",
    "MouseFlags",
    "Viewport",
    "MANDELBROT",
    "MAX_ITERATIONS",
    "MAX_MAGNITUDE",
    "EmptyGradientError",
    "FractalExplorerError",
    "InvalidConfigurationError",
    "complex_to_pixel",
    "get_default_gradient",
    "get_gradient",
    "julia",
    "list_gradient_names",
    "mandelbrot",
    "pixel_to_complex",
    "render",
    "translate_image",
]
