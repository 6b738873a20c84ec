"""
Exception types raised by the fractal explorer.

Rendering itself never fails for valid input; everything here signals a
configuration or programming mistake and is raised immediately.
"""


class FractalExplorerError(Exception):
    """Base class for all fractal explorer errors."""


class InvalidConfigurationError(FractalExplorerError, ValueError):
    """Raised for degenerate geometry, bad zoom values or malformed settings."""


class EmptyGradientError(FractalExplorerError, RuntimeError):
    """Raised when a color is requested from a gradient without stops."""
