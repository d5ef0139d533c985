"""Escape-time depth of points in the complex plane."""

from __future__ import annotations

import numpy as np
import tensorflow as tf

MAX_DEPTH = 256
ESCAPE_RADIUS_SQUARED = 5.0
DEPTH_BYTE_MAX = 255


def escape_depth(cx: float, cy: float) -> int:
    """Return the iteration budget left when ``(cx, cy)`` escapes.

    The budget starts at :data:`MAX_DEPTH` and is only spent while the orbit
    is inside the escape radius, so a start point already outside it keeps the
    full budget and a point that never escapes ends at 0.
    """

    cx = float(cx)
    cy = float(cy)
    x = cx
    y = cy
    depth = MAX_DEPTH
    while depth > 0 and x * x + y * y < ESCAPE_RADIUS_SQUARED:
        x2 = x * x
        y2 = y * y
        y = 2.0 * x * y + cy
        x = x2 - y2 + cx
        depth -= 1
    return depth


def _escape_step(
    x: tf.Tensor,
    y: tf.Tensor,
    cx: tf.Tensor,
    cy: tf.Tensor,
    depth: tf.Tensor,
    active: tf.Tensor,
) -> tuple[tf.Tensor, tf.Tensor, tf.Tensor, tf.Tensor]:
    """Advance the orbit of every point that is still active."""

    x2 = x * x
    y2 = y * y
    y_new = 2.0 * x * y + cy
    x_new = x2 - y2 + cx
    x = tf.where(active, x_new, x)
    y = tf.where(active, y_new, y)
    depth = depth - tf.cast(active, tf.int32)
    radius = tf.cast(ESCAPE_RADIUS_SQUARED, x.dtype)
    still_inside = tf.less(x * x + y * y, radius)
    active = tf.logical_and(active, tf.logical_and(depth > 0, still_inside))
    return x, y, depth, active


_GRID_SIGNATURE = [
    tf.TensorSpec(shape=[None, None], dtype=tf.float64),
    tf.TensorSpec(shape=[None, None], dtype=tf.float64),
]


@tf.function(input_signature=_GRID_SIGNATURE)
def escape_depth_grid(cx: tf.Tensor, cy: tf.Tensor) -> tf.Tensor:
    """Element-wise :func:`escape_depth` over two float64 coordinate grids."""

    depth = tf.fill(tf.shape(cx), tf.constant(MAX_DEPTH, dtype=tf.int32))
    radius = tf.constant(ESCAPE_RADIUS_SQUARED, dtype=tf.float64)
    active = tf.less(cx * cx + cy * cy, radius)

    def cond(x: tf.Tensor, y: tf.Tensor, depth: tf.Tensor, active: tf.Tensor) -> tf.Tensor:
        return tf.reduce_any(active)

    def body(x: tf.Tensor, y: tf.Tensor, depth: tf.Tensor, active: tf.Tensor) -> tuple[tf.Tensor, tf.Tensor, tf.Tensor, tf.Tensor]:
        return _escape_step(x, y, cx, cy, depth, active)

    _, _, depth, _ = tf.while_loop(
        cond,
        body,
        (cx, cy, depth, active),
        maximum_iterations=MAX_DEPTH,
    )
    return depth


def to_depth_bytes(depth: np.ndarray) -> np.ndarray:
    """Fit depths into buffer cells; the untouched budget saturates at 255."""

    return np.minimum(np.asarray(depth), DEPTH_BYTE_MAX).astype(np.uint8)
