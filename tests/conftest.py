import numpy as np
import pytest
import tensorflow as tf

from fractalzoom import FrameGridExecutor, RenderRun
from fractalzoom.evaluator import escape_depth_grid


@pytest.fixture
def executor():
    """Small tiles so even 10x10 frames are split over several workers."""
    return FrameGridExecutor(tile_shape=(4, 3), max_workers=4, device='/CPU:0')


@pytest.fixture
def faulting_evaluate():
    """Evaluator that fails like a lost device on its second tile."""
    calls = {"count": 0}

    def evaluate(cx, cy):
        calls["count"] += 1
        if calls["count"] == 2:
            raise tf.errors.InternalError(None, None, "device lost")
        return escape_depth_grid(cx, cy)

    return evaluate


@pytest.fixture
def gradient_run():
    """Three 12x10 frames with distinct, row-dependent contents."""
    width, height, num_frames = 12, 10, 3
    frames = []
    for frame in range(num_frames):
        rows = np.arange(height, dtype=np.uint8)[:, None] * 10 + frame
        frames.append(np.broadcast_to(rows, (height, width)))
    buffer = np.concatenate([f.reshape(-1) for f in frames]).astype(np.uint8)
    return RenderRun(
        buffer=buffer,
        width=width,
        height=height,
        num_frames=num_frames,
        faulted_frames=(),
        elapsed=0.0,
    )
