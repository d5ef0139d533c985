import numpy as np
import tensorflow as tf

from fractalzoom import ViewportGenerator, escape_depth, escape_depth_grid, plane_grid, to_depth_bytes
from fractalzoom.evaluator import MAX_DEPTH


def test_start_outside_radius_keeps_full_budget():
    # 3**2 + 3**2 >= 5, so the recurrence never runs.
    assert escape_depth(3.0, 3.0) == MAX_DEPTH
    assert escape_depth(10.0, 10.0) == MAX_DEPTH


def test_point_that_never_escapes_spends_whole_budget():
    assert escape_depth(0.0, 0.0) == 0
    assert escape_depth(-1.0, 0.0) == 0
    # -2 is a fixed point of the recurrence with |z|^2 = 4 < 5.
    assert escape_depth(-2.0, 0.0) == 0


def test_point_escaping_after_one_step():
    assert escape_depth(1.5, 0.0) == 255
    assert escape_depth(1.0, 1.0) == 255


def test_depth_is_within_range_over_a_window():
    window = ViewportGenerator(width=30, height=20).window(0)
    cx, cy = plane_grid(window, 0, 20, 0, 30)
    depths = [escape_depth(x, y) for x, y in zip(cx.ravel(), cy.ravel())]
    assert all(0 <= depth <= MAX_DEPTH for depth in depths)


def test_grid_matches_scalar_evaluation():
    window = ViewportGenerator(width=24, height=16).window(3)
    cx, cy = plane_grid(window, 0, 16, 0, 24)
    expected = np.array(
        [[escape_depth(x, y) for x, y in zip(row_x, row_y)] for row_x, row_y in zip(cx, cy)],
        dtype=np.int32,
    )

    result = escape_depth_grid(tf.constant(cx, dtype=tf.float64), tf.constant(cy, dtype=tf.float64))

    assert result.dtype == tf.int32
    np.testing.assert_array_equal(result.numpy(), expected)


def test_grid_handles_points_outside_radius():
    cx = tf.constant([[3.0, 0.0], [-2.0, 1.5]], dtype=tf.float64)
    cy = tf.constant([[3.0, 0.0], [0.0, 0.0]], dtype=tf.float64)
    np.testing.assert_array_equal(escape_depth_grid(cx, cy).numpy(), [[256, 0], [0, 255]])


def test_depth_bytes_saturate_full_budget():
    out = to_depth_bytes(np.array([0, 17, 255, 256], dtype=np.int32))
    assert out.dtype == np.uint8
    np.testing.assert_array_equal(out, [0, 17, 255, 255])
