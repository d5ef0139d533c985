"""TensorFlow device placement for tile evaluation."""

from __future__ import annotations

from typing import Callable, Optional

import tensorflow as tf


def select_device(log: Optional[Callable[[str], None]] = None) -> str:
    """Return the first visible GPU, or the CPU when none is usable."""

    gpus = tf.config.list_physical_devices('GPU')
    if not gpus:
        if log is not None:
            log("No GPU found, using CPU")
        return '/CPU:0'
    try:
        for gpu in gpus:
            tf.config.experimental.set_memory_growth(gpu, True)
    except RuntimeError as e:
        # Memory growth must be set before the GPUs are initialized.
        if log is not None:
            log(str(e))
        return '/CPU:0'
    if log is not None:
        log("GPU found, using %s" % gpus[0].name)
    return '/GPU:0'
