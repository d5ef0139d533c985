"""Immutable configuration and limits for a zoom animation."""

from __future__ import annotations

from dataclasses import dataclass

from .errors import InvalidArgumentError

MIN_WIDTH = 10
MIN_HEIGHT = 10
MIN_FRAMES = 1

# Files are only produced for runs inside this envelope.
MAX_OUTPUT_WIDTH = 4096
MAX_OUTPUT_FRAMES = 120

DEFAULT_TILE_SIZE = 64


@dataclass(frozen=True)
class ZoomConfig:
    """Zoom centre, starting half extent and per-frame shrink of the window."""

    x_mid: float = 0.23701
    y_mid: float = 0.521
    delta: float = 1.3
    decay: float = 0.98


DEFAULT_ZOOM = ZoomConfig()


def validate_dimensions(width: int, height: int, num_frames: int) -> None:
    """Raise :class:`InvalidArgumentError` naming the first violated bound."""

    if width < MIN_WIDTH:
        raise InvalidArgumentError(f"width must be at least {MIN_WIDTH} (got {width})")
    if height < MIN_HEIGHT:
        raise InvalidArgumentError(f"height must be at least {MIN_HEIGHT} (got {height})")
    if num_frames < MIN_FRAMES:
        raise InvalidArgumentError(f"num_frames must be at least {MIN_FRAMES} (got {num_frames})")
