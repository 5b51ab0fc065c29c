# boundary.py
"""
The rectangular container the molecules live in.

The container is centred on the origin, so its walls sit at the
half-extents (+-width/2, +-height/2). The presentation layer updates the
size whenever the window is resized.
"""
import logging
import math
import numpy as np
from typing import Tuple

# --- Data Contracts ---
#
# class Container:
#   - __init__(self, width: float, height: float):
#     - Raises ValueError if either dimension is not a finite number > 0.
#
#   - resize(self, width: float, height: float) -> bool:
#     - Outputs: True if the new size was applied.
#     - Side Effects: Replaces width and height. A degenerate size is
#       ignored and logged instead of applied.
#
# clamp_positions(positions: np.ndarray, half_width: float, half_height: float) -> int:
#   - Side Effects: Moves every coordinate outside the half-extents onto
#     the nearest wall, in place.
#   - Outputs: Number of molecules that were moved.
#   - Invariants: Idempotent. Never touches velocities.

def _is_valid_extent(value: float) -> bool:
    return math.isfinite(value) and value > 0


class Container:
    """
    Tracks the current width and height of the simulation area.
    """
    def __init__(self, width: float, height: float):
        width, height = float(width), float(height)
        if not (_is_valid_extent(width) and _is_valid_extent(height)):
            msg = (
                f"Configuration error: container size {width}x{height} is invalid. "
                f"Width and height must both be positive."
            )
            logging.critical(msg)
            raise ValueError(msg)
        self.width = width
        self.height = height
        logging.info(f"Container initialized ({width:g}x{height:g}).")

    @property
    def half_extents(self) -> Tuple[float, float]:
        return self.width / 2.0, self.height / 2.0

    @property
    def area(self) -> float:
        return self.width * self.height

    def resize(self, width: float, height: float) -> bool:
        """
        Applies a new size reported by the presentation layer.

        A minimised window can report a zero size; such updates are
        skipped so the walls never collapse onto the origin.
        """
        width, height = float(width), float(height)
        if not (_is_valid_extent(width) and _is_valid_extent(height)):
            logging.warning(f"Ignoring degenerate container size {width}x{height}.")
            return False
        self.width = width
        self.height = height
        logging.debug(f"Container resized to {width:g}x{height:g}.")
        return True

    def __repr__(self) -> str:
        return f"Container(width={self.width}, height={self.height})"


def clamp_positions(positions: np.ndarray, half_width: float, half_height: float) -> int:
    """
    Clamps every position into [-half_width, half_width] x [-half_height, half_height].
    """
    if positions.shape[0] == 0:
        return 0
    limits = np.array([half_width, half_height])
    outside = np.any(np.abs(positions) > limits, axis=1)
    np.clip(positions, -limits, limits, out=positions)
    return int(np.count_nonzero(outside))
