"""Bitmap and movie output for a finished render."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

import imageio
import numpy as np
import PIL.Image

from .config import MAX_OUTPUT_FRAMES, MAX_OUTPUT_WIDTH
from .driver import RenderRun

FRAME_PREFIX = "fractal"
FRAME_FORMAT = "bmp"
# Keeps lexicographic and numeric file order identical below 1000 frames.
FRAME_NAME_OFFSET = 1000


def should_write(width: int, num_frames: int) -> bool:
    return width <= MAX_OUTPUT_WIDTH and num_frames <= MAX_OUTPUT_FRAMES


def frame_path(frame_dir: Path, frame: int) -> Path:
    return Path(frame_dir) / f"{FRAME_PREFIX}{frame + FRAME_NAME_OFFSET}.{FRAME_FORMAT}"


def frame_image(run: RenderRun, frame: int) -> PIL.Image.Image:
    """Grayscale image of ``frame`` with buffer row 0 at the bottom."""

    return PIL.Image.fromarray(np.ascontiguousarray(np.flipud(run.frame(frame))))


def _frames_to_emit(run: RenderRun, skip: Iterable[int]) -> list[int]:
    skipped = set(skip)
    return [frame for frame in range(run.num_frames) if frame not in skipped]


def write_frames(run: RenderRun, frame_dir: Path, skip: Iterable[int] = ()) -> list[Path]:
    """Write one BMP per frame into ``frame_dir`` and return the paths written."""

    frame_dir = Path(frame_dir)
    frame_dir.mkdir(parents=True, exist_ok=True)
    written = []
    for frame in _frames_to_emit(run, skip):
        path = frame_path(frame_dir, frame)
        frame_image(run, frame).save(str(path), format="BMP")
        written.append(path)
    return written


def write_movie(run: RenderRun, output_path: Path, skip: Iterable[int] = ()) -> Path:
    """Assemble the frames into an animated GIF at ``output_path``."""

    output_path = Path(output_path)
    if output_path.suffix.lower() != ".gif":
        output_path = output_path.with_suffix(".gif")
    output_path.parent.mkdir(parents=True, exist_ok=True)
    writer = imageio.get_writer(str(output_path), mode='I', duration=0.1, loop=0)
    try:
        for frame in _frames_to_emit(run, skip):
            writer.append_data(np.asarray(frame_image(run, frame)))
    finally:
        writer.close()
    return output_path
