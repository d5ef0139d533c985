import pytest

from fractalzoom import DEFAULT_ZOOM, ViewportGenerator, ZoomConfig, pixel_to_plane, plane_grid, zoom_delta


def test_zoom_delta_positive_and_strictly_decreasing():
    deltas = [zoom_delta(frame) for frame in range(200)]
    assert all(delta > 0 for delta in deltas)
    assert all(a > b for a, b in zip(deltas, deltas[1:]))


def test_zoom_delta_first_frames():
    assert zoom_delta(0) == pytest.approx(DEFAULT_ZOOM.delta)
    assert zoom_delta(1) == pytest.approx(DEFAULT_ZOOM.delta * 0.98)
    assert zoom_delta(10) == pytest.approx(DEFAULT_ZOOM.delta * 0.98 ** 10)


def test_window_of_first_frame():
    generator = ViewportGenerator(width=20, height=10)
    window = generator.window(0)

    assert window.frame == 0
    assert window.delta == pytest.approx(1.3)
    assert window.origin_x == pytest.approx(0.23701 - 1.3 * 2.0)
    assert window.origin_y == pytest.approx(0.521 - 1.3)
    assert window.pixel_delta_x == pytest.approx(2 * 1.3 * 2.0 / 20)
    assert window.pixel_delta_y == pytest.approx(2 * 1.3 / 10)


def test_window_uses_explicit_config():
    config = ZoomConfig(x_mid=-0.5, y_mid=0.25, delta=2.0, decay=0.5)
    window = ViewportGenerator(width=10, height=10, config=config).window(2)

    assert window.delta == pytest.approx(0.5)
    assert window.origin_x == pytest.approx(-1.0)
    assert window.origin_y == pytest.approx(-0.25)
    assert window.pixel_delta_x == pytest.approx(0.1)


def test_window_is_deterministic_and_independent_of_order():
    generator = ViewportGenerator(width=32, height=18)
    later_first = [generator.window(frame) for frame in (5, 0, 3)]
    assert later_first == [generator.window(5), generator.window(0), generator.window(3)]


def test_window_spans_symmetric_extent_around_centre():
    width, height = 40, 16
    window = ViewportGenerator(width=width, height=height).window(7)
    x_end = window.origin_x + width * window.pixel_delta_x
    y_end = window.origin_y + height * window.pixel_delta_y

    assert (window.origin_x + x_end) / 2 == pytest.approx(DEFAULT_ZOOM.x_mid)
    assert (window.origin_y + y_end) / 2 == pytest.approx(DEFAULT_ZOOM.y_mid)


def test_plane_grid_matches_pixel_to_plane():
    window = ViewportGenerator(width=12, height=10).window(4)
    cx, cy = plane_grid(window, 2, 5, 3, 7)

    assert cx.shape == (3, 4)
    for i, row in enumerate(range(2, 5)):
        for j, col in enumerate(range(3, 7)):
            assert (cx[i, j], cy[i, j]) == pixel_to_plane(window, row, col)
