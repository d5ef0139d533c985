"""Exception types raised by the zoom renderer."""


class FractalZoomError(Exception):
    """Base class for renderer errors."""


class InvalidArgumentError(FractalZoomError, ValueError):
    """Raised when the grid dimensions or frame count are out of range."""


class AllocationError(FractalZoomError, MemoryError):
    """Raised when the multi-frame depth buffer cannot be allocated."""
