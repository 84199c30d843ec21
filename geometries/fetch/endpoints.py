# -*- coding: utf-8 -*-
"""
Candidate endpoint generation.

The unobstructed end of every fetch vector is a vertex of a regular polygon
approximating a circle of radius max_dist around the site. The polygon has
``n_directions * circle_fidelity`` segments per quadrant, so every sampled
bearing falls exactly on a vertex and no interpolation is needed.
"""

import numpy as np
from shapely.geometry import Point, Polygon

from .constants import BEARING_TOLERANCE_DEG
from .coordinates import bearing_to
from .exceptions import InvalidParameter


def create_search_circle(origin: tuple[float, float], max_dist: float,
                         n_directions: int, circle_fidelity: int = 1) -> Polygon:
    """
    Polygon approximating the circle of radius max_dist around a site.

    Args:
        origin: (x, y) of the site
        max_dist: Radius in CRS units
        n_directions: Directions per quadrant
        circle_fidelity: Circle vertices per sampled direction

    Returns:
        Polygon with 4 * n_directions * circle_fidelity vertices
    """
    return Point(origin).buffer(max_dist, quad_segs=n_directions * circle_fidelity)


def candidate_endpoints(origin: tuple[float, float], max_dist: float,
                        directions, circle_fidelity: int = 1) -> tuple[Polygon, np.ndarray]:
    """
    Unobstructed endpoints for each requested bearing.

    The circle ring starts East (90°) and runs clockwise, so its vertex order
    is the direction set rotated to begin at 90°. Vertices are matched to
    bearings by their actual bearing from the site, which makes the result
    independent of where the ring starts.

    Args:
        origin: (x, y) of the site
        max_dist: Radius in CRS units
        directions: Bearings from ``sample_directions``
        circle_fidelity: Circle vertices per sampled direction

    Returns:
        (circle, endpoints) where ``endpoints[i]`` is the (x, y) vertex at
        ``directions[i]``

    Raises:
        InvalidParameter: if the direction count is not a multiple of 4
        RuntimeError: if a bearing has no matching circle vertex
    """
    directions = np.asarray(directions, dtype=float)
    if len(directions) == 0 or len(directions) % 4:
        raise InvalidParameter("the number of directions must be a positive multiple of 4")

    n_directions = len(directions) // 4
    circle = create_search_circle(origin, max_dist, n_directions, circle_fidelity)
    vertices = np.asarray(circle.exterior.coords)[:-1]

    expected = len(directions) * circle_fidelity
    if len(vertices) != expected:
        raise RuntimeError(
            f"search circle has {len(vertices)} vertices, expected {expected}"
        )

    vertex_bearings = bearing_to(origin, vertices)
    # Signed angular difference folded into [-180, 180)
    diff = np.abs((vertex_bearings[None, :] - directions[:, None] + 180.0) % 360.0 - 180.0)
    nearest = np.argmin(diff, axis=1)
    misses = diff[np.arange(len(directions)), nearest] > BEARING_TOLERANCE_DEG
    if np.any(misses):
        raise RuntimeError(
            f"no circle vertex at bearing(s) {directions[misses].tolist()}"
        )

    return circle, vertices[nearest]
