"""Data-parallel evaluation of one frame's pixel grid."""

from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, Optional

import numpy as np
import tensorflow as tf

from .config import DEFAULT_TILE_SIZE
from .evaluator import escape_depth_grid, to_depth_bytes
from .viewport import ViewportWindow, plane_grid

# Written over every cell of a frame whose dispatch faulted.
FAULT_SENTINEL = 0


@dataclass(frozen=True)
class Tile:
    """Rectangular block of pixels evaluated as one work item."""

    row: int
    col: int
    height: int
    width: int


def plan_tiles(width: int, height: int, tile_width: int, tile_height: int) -> list[Tile]:
    """Cover a ``height x width`` grid exactly once, row-major, clipping edge tiles."""

    if tile_width <= 0 or tile_height <= 0:
        raise ValueError("tile dimensions must be positive")

    tiles = []
    for row in range(0, height, tile_height):
        for col in range(0, width, tile_width):
            tiles.append(
                Tile(
                    row=row,
                    col=col,
                    height=min(tile_height, height - row),
                    width=min(tile_width, width - col),
                )
            )
    return tiles


def frame_view(buffer: np.ndarray, frame: int, width: int, height: int) -> np.ndarray:
    """Writable ``(height, width)`` view of one frame inside the flat buffer."""

    size = width * height
    start = frame * size
    return buffer[start:start + size].reshape(height, width)


class FrameGridExecutor:
    """Fill a frame of the depth buffer by mapping tiles over a thread pool."""

    def __init__(
        self,
        tile_shape: tuple[int, int] = (DEFAULT_TILE_SIZE, DEFAULT_TILE_SIZE),
        max_workers: Optional[int] = None,
        device: Optional[str] = None,
        evaluate: Callable[[tf.Tensor, tf.Tensor], tf.Tensor] = escape_depth_grid,
    ) -> None:
        self.tile_shape = tile_shape
        self.max_workers = max_workers
        self.device = device if device is not None else '/CPU:0'
        self.evaluate = evaluate

    def fill_frame(
        self,
        buffer: np.ndarray,
        frame: int,
        window: ViewportWindow,
        width: int,
        height: int,
    ) -> bool:
        """Evaluate every pixel of ``frame`` into ``buffer``.

        Returns ``False`` when the runtime reported a fault for the frame. The
        frame's region is then overwritten with :data:`FAULT_SENTINEL` instead
        of being left partially written.
        """

        view = frame_view(buffer, frame, width, height)
        tile_width, tile_height = self.tile_shape
        tiles = plan_tiles(width, height, tile_width, tile_height)

        # Leaving the pool waits for every tile of the frame.
        with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
            futures = [pool.submit(self._fill_tile, view, window, tile) for tile in tiles]

        fault = _first_fault(futures)
        if fault is not None:
            tf.get_logger().error("frame %d: compute fault: %s", frame, fault.message)
            view.fill(FAULT_SENTINEL)
            return False
        return True

    def _fill_tile(self, view: np.ndarray, window: ViewportWindow, tile: Tile) -> None:
        row_end = tile.row + tile.height
        col_end = tile.col + tile.width
        cx, cy = plane_grid(window, tile.row, row_end, tile.col, col_end)
        with tf.device(self.device):
            depth = self.evaluate(
                tf.convert_to_tensor(cx, dtype=tf.float64),
                tf.convert_to_tensor(cy, dtype=tf.float64),
            )
        view[tile.row:row_end, tile.col:col_end] = to_depth_bytes(depth.numpy())


def _first_fault(futures: list[Future]) -> Optional[tf.errors.OpError]:
    """Return the first runtime fault among finished tiles; re-raise anything else."""

    fault = None
    for future in futures:
        exc = future.exception()
        if exc is None:
            continue
        if not isinstance(exc, tf.errors.OpError):
            raise exc
        if fault is None:
            fault = exc
    return fault
