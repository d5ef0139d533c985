"""Per-frame zoom windows over the complex plane."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .config import DEFAULT_ZOOM, ZoomConfig


@dataclass(frozen=True)
class ViewportWindow:
    """Plane rectangle mapped onto one frame's pixel grid."""

    frame: int
    origin_x: float
    origin_y: float
    pixel_delta_x: float
    pixel_delta_y: float
    delta: float


def zoom_delta(frame: int, config: ZoomConfig = DEFAULT_ZOOM) -> float:
    """Half extent of the window for ``frame``; shrinks geometrically."""

    return float(np.float64(config.delta) * np.float64(config.decay) ** frame)


@dataclass(frozen=True)
class ViewportGenerator:
    """Derive the window of any frame from the grid shape and zoom constants."""

    width: int
    height: int
    config: ZoomConfig = DEFAULT_ZOOM

    def window(self, frame: int) -> ViewportWindow:
        delta = np.float64(zoom_delta(frame, self.config))
        aspect = np.float64(self.width) / np.float64(self.height)
        return ViewportWindow(
            frame=frame,
            origin_x=float(np.float64(self.config.x_mid) - delta * aspect),
            origin_y=float(np.float64(self.config.y_mid) - delta),
            pixel_delta_x=float(2.0 * delta * aspect / np.float64(self.width)),
            pixel_delta_y=float(2.0 * delta / np.float64(self.height)),
            delta=float(delta),
        )


def pixel_to_plane(window: ViewportWindow, row: int, col: int) -> tuple[float, float]:
    x = np.float64(window.origin_x) + np.float64(col) * np.float64(window.pixel_delta_x)
    y = np.float64(window.origin_y) + np.float64(row) * np.float64(window.pixel_delta_y)
    return float(x), float(y)


def plane_grid(window: ViewportWindow, row_start: int, row_end: int, col_start: int, col_end: int) -> tuple[np.ndarray, np.ndarray]:
    """Plane coordinates of a pixel block as two ``(rows, cols)`` float64 arrays."""

    cols = np.arange(col_start, col_end, dtype=np.float64)
    rows = np.arange(row_start, row_end, dtype=np.float64)
    xs = np.float64(window.origin_x) + cols * np.float64(window.pixel_delta_x)
    ys = np.float64(window.origin_y) + rows * np.float64(window.pixel_delta_y)
    cx, cy = np.meshgrid(xs, ys)
    return cx, cy
