# -*- coding: utf-8 -*-
"""
Direction sampling and quadrant classification.
"""

import numpy as np

from .constants import QUADRANTS
from .parameters import coerce_n_directions


def sample_directions(n_directions) -> tuple[float, ...]:
    """
    Evenly spaced compass bearings starting at North.

    Args:
        n_directions: Directions per 90° quadrant (1-20)

    Returns:
        Tuple of 4 * n_directions bearings in [0, 360), ascending, with a
        constant step of 90 / n_directions degrees.

    Raises:
        InvalidParameter: if n_directions is not a number or is out of range
    """
    n = coerce_n_directions(n_directions)
    step = 90.0 / n
    return tuple(float(d) for d in np.arange(4 * n) * step)


def quadrant_of(bearing: float) -> str:
    """
    Quadrant name for a compass bearing.

    Each quadrant is the half-open interval [start, start + 90) where North
    starts at 315°, East at 45°, South at 135° and West at 225°.
    """
    bearing = float(bearing) % 360.0
    for name, start in QUADRANTS.items():
        if (bearing - start) % 360.0 < 90.0:
            return name
    raise ValueError(f"Could not classify bearing {bearing}")  # pragma: no cover

