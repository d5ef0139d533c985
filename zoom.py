import os
import sys
import warnings
from argparse import ArgumentParser
from pathlib import Path

_VERBOSE_FLAGS = {"--verbose", "-v"}
_cli_verbose = any(arg in _VERBOSE_FLAGS for arg in sys.argv[1:])
_env_log_level = os.environ.get("TF_CPP_MIN_LOG_LEVEL")
_suppress_messages = (not _cli_verbose) and _env_log_level != "0"

if _suppress_messages and _env_log_level is None:
    os.environ["TF_CPP_MIN_LOG_LEVEL"] = "3"

if _suppress_messages:
    warnings.filterwarnings(
        "ignore",
        message=r"Protobuf gencode version .* is exactly one major version older than the runtime version .*",
        category=UserWarning,
        module="google.protobuf",
    )

VERBOSE = _cli_verbose


def log(message, *args, **kwargs):
    if VERBOSE:
        print(message, *args, **kwargs)


import tensorflow as tf

if _suppress_messages:
    # Frame faults are reported at ERROR, so only quieter records are dropped.
    tf.get_logger().setLevel("ERROR")
    for handler in tf.get_logger().handlers:
        handler.setLevel("ERROR")

from fractalzoom import (
    AllocationError,
    AnimationDriver,
    FrameGridExecutor,
    InvalidArgumentError,
    ZoomConfig,
    select_device,
    should_write,
    validate_dimensions,
    write_frames,
    write_movie,
)
from fractalzoom.config import DEFAULT_TILE_SIZE, DEFAULT_ZOOM, MAX_OUTPUT_FRAMES, MAX_OUTPUT_WIDTH


def build_parser():
    parser = ArgumentParser(
        description='Render the frames of a zoom into an escape-time fractal as grayscale bitmaps.',
        usage='%(prog)s [options] width height num_frames',
    )

    parser.add_argument('width', type=int, help='frame width in pixels (at least 10)')
    parser.add_argument('height', type=int, help='frame height in pixels (at least 10)')
    parser.add_argument('num_frames', type=int, help='number of frames to render (at least 1)')

    parser.add_argument('--frame-dir', type=str,
                        dest='frame_dir', help='directory that receives the frame bitmaps, created if absent',
                        metavar='FRAME_DIR', default='fractal_frames')

    parser.add_argument('--tile-size', type=int,
                        dest='tile_size', help='edge of the square pixel tiles dispatched to worker threads',
                        metavar='TILE_SIZE', default=DEFAULT_TILE_SIZE)

    parser.add_argument('--workers', type=int,
                        dest='workers', help='number of threads evaluating tiles of a frame (default: executor choice)',
                        metavar='WORKERS', default=None)

    parser.add_argument('--frame-workers', type=int,
                        dest='frame_workers', help='number of frames computed concurrently',
                        metavar='FRAME_WORKERS', default=1)

    parser.add_argument('--x-mid', type=float,
                        dest='x_mid', help='real coordinate of the zoom centre',
                        metavar='X_MID', default=DEFAULT_ZOOM.x_mid)

    parser.add_argument('--y-mid', type=float,
                        dest='y_mid', help='imaginary coordinate of the zoom centre',
                        metavar='Y_MID', default=DEFAULT_ZOOM.y_mid)

    parser.add_argument('--delta', type=float,
                        dest='delta', help='half height of the first frame in the complex plane',
                        metavar='DELTA', default=DEFAULT_ZOOM.delta)

    parser.add_argument('--decay', type=float,
                        dest='decay', help='factor applied to the half height every frame. Choose < 1 to zoom in',
                        metavar='DECAY', default=DEFAULT_ZOOM.decay)

    parser.add_argument('--fault-policy', choices=['sentinel', 'skip'], default='sentinel',
                        help='What to do with frames whose computation faulted: write them filled with the '
                             'sentinel depth, or skip their files.')

    parser.add_argument('--gif', type=str, dest='gif', metavar='GIF_PATH', default=None,
                        help='Also assemble the frames into an animated GIF at this path.')

    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Enable verbose logging, including TensorFlow and hardware diagnostics.')

    return parser


def _report_progress(frame, num_frames):
    print("frame {0} out of {1}".format(frame, num_frames), end='\r')


def main(argv=None):
    parser = build_parser()
    opt = parser.parse_args(argv)

    global VERBOSE
    VERBOSE = bool(opt.verbose)

    try:
        validate_dimensions(opt.width, opt.height, opt.num_frames)
    except InvalidArgumentError as e:
        parser.error(str(e))
    if opt.tile_size < 1:
        parser.error("--tile-size must be at least 1.")
    if opt.workers is not None and opt.workers < 1:
        parser.error("--workers must be at least 1.")
    if opt.frame_workers < 1:
        parser.error("--frame-workers must be at least 1.")
    if opt.delta <= 0 or opt.decay <= 0:
        parser.error("--delta and --decay must be positive.")

    log("TensorFlow version: %s" % tf.__version__)
    device = select_device(log)

    config = ZoomConfig(x_mid=opt.x_mid, y_mid=opt.y_mid, delta=opt.delta, decay=opt.decay)
    executor = FrameGridExecutor(
        tile_shape=(opt.tile_size, opt.tile_size),
        max_workers=opt.workers,
        device=device,
    )
    driver = AnimationDriver(config, executor, frame_workers=opt.frame_workers, progress=_report_progress)

    print("computing {0} frames of {1} by {2} pixels".format(opt.num_frames, opt.width, opt.height))
    try:
        run = driver.run(opt.width, opt.height, opt.num_frames)
    except AllocationError as e:
        parser.exit(1, "%s: error: %s\n" % (parser.prog, e))
    print()
    print("compute time: {0:.4f} s".format(run.elapsed))

    if run.faulted_frames:
        print("faulted frames: {0}".format(", ".join(str(frame) for frame in run.faulted_frames)))

    if not should_write(opt.width, opt.num_frames):
        print("output skipped: files are only written for width <= {0} and at most {1} frames".format(
            MAX_OUTPUT_WIDTH, MAX_OUTPUT_FRAMES))
        return

    skip = run.faulted_frames if opt.fault_policy == 'skip' else ()
    frame_dir = Path(opt.frame_dir).expanduser().resolve()
    written = write_frames(run, frame_dir, skip=skip)
    print("wrote {0} frames to {1}".format(len(written), frame_dir))

    if opt.gif:
        gif_path = write_movie(run, Path(opt.gif).expanduser().resolve(), skip=skip)
        print("wrote movie to {0}".format(gif_path))


if __name__ == '__main__':
    main()
