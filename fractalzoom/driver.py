"""Drive a whole zoom animation into one multi-frame depth buffer."""

from __future__ import annotations

import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, Optional

import numpy as np

from .config import DEFAULT_ZOOM, ZoomConfig, validate_dimensions
from .errors import AllocationError
from .executor import FrameGridExecutor, frame_view
from .viewport import ViewportGenerator


@dataclass(frozen=True)
class RenderRun:
    """Numerical result of a run: the filled buffer and the frames that faulted."""

    buffer: np.ndarray
    width: int
    height: int
    num_frames: int
    faulted_frames: tuple[int, ...]
    elapsed: float

    def frame(self, index: int) -> np.ndarray:
        view = frame_view(self.buffer, index, self.width, self.height)
        view.flags.writeable = False
        return view


def allocate_frame_buffer(num_frames: int, height: int, width: int) -> np.ndarray:
    size = num_frames * height * width
    try:
        return np.zeros(size, dtype=np.uint8)
    except (MemoryError, ValueError) as exc:
        raise AllocationError(
            f"cannot allocate a {num_frames}x{height}x{width} depth buffer ({size} bytes)"
        ) from exc


class AnimationDriver:
    """Compute frames ``0..num_frames-1`` of the zoom into a shared buffer."""

    def __init__(
        self,
        config: ZoomConfig = DEFAULT_ZOOM,
        executor: Optional[FrameGridExecutor] = None,
        frame_workers: int = 1,
        progress: Optional[Callable[[int, int], None]] = None,
    ) -> None:
        self.config = config
        self.executor = executor if executor is not None else FrameGridExecutor()
        self.frame_workers = max(1, int(frame_workers))
        self.progress = progress

    def run(self, width: int, height: int, num_frames: int) -> RenderRun:
        validate_dimensions(width, height, num_frames)
        buffer = allocate_frame_buffer(num_frames, height, width)
        generator = ViewportGenerator(width=width, height=height, config=self.config)

        def fill(frame: int) -> bool:
            if self.progress is not None:
                self.progress(frame, num_frames)
            window = generator.window(frame)
            return self.executor.fill_frame(buffer, frame, window, width, height)

        start = time.perf_counter()
        if self.frame_workers == 1:
            completed = [fill(frame) for frame in range(num_frames)]
        else:
            # Frames write disjoint slices; map keeps the results in frame order.
            with ThreadPoolExecutor(max_workers=self.frame_workers) as pool:
                completed = list(pool.map(fill, range(num_frames)))
        elapsed = time.perf_counter() - start

        faulted = tuple(frame for frame, ok in enumerate(completed) if not ok)
        return RenderRun(
            buffer=buffer,
            width=width,
            height=height,
            num_frames=num_frames,
            faulted_frames=faulted,
            elapsed=elapsed,
        )
