"""
errors.py — Exception hierarchy.

Only ConfigurationError ever reaches callers; the other two are raised
and recovered inside the store and the renderer.
"""


class SnakeWidgetError(Exception):
    """Base class for every error raised by the widget."""


class ConfigurationError(SnakeWidgetError, ValueError):
    """Invalid grid or cell size, or an unusable seeded snake."""


class PersistenceReadFailure(SnakeWidgetError):
    """The score store is unavailable or holds a corrupt value."""


class RenderSurfaceUnavailable(SnakeWidgetError):
    """The drawing surface is gone; the frame should be skipped."""
