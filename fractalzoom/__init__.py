"""Public API for rendering escape-time zoom animations."""

from .config import DEFAULT_ZOOM, ZoomConfig, validate_dimensions
from .device import select_device
from .driver import AnimationDriver, RenderRun, allocate_frame_buffer
from .encoder import frame_path, should_write, write_frames, write_movie
from .errors import AllocationError, FractalZoomError, InvalidArgumentError
from .evaluator import escape_depth, escape_depth_grid, to_depth_bytes
from .executor import FAULT_SENTINEL, FrameGridExecutor, Tile, frame_view, plan_tiles
from .viewport import ViewportGenerator, ViewportWindow, pixel_to_plane, plane_grid, zoom_delta

__all__ = [
    "AllocationError",
    "AnimationDriver",
    "DEFAULT_ZOOM",
    "FAULT_SENTINEL",
    "FractalZoomError",
    "FrameGridExecutor",
    "InvalidArgumentError",
    "RenderRun",
    "Tile",
    "ViewportGenerator",
    "ViewportWindow",
    "ZoomConfig",
    "allocate_frame_buffer",
    "escape_depth",
    "escape_depth_grid",
    "frame_path",
    "frame_view",
    "pixel_to_plane",
    "plan_tiles",
    "plane_grid",
    "select_device",
    "should_write",
    "to_depth_bytes",
    "validate_dimensions",
    "write_frames",
    "write_movie",
    "zoom_delta",
]
