# -*- coding: utf-8 -*-
"""
Ray-obstruction intersection.

Each fetch vector is cast as a full-length segment from the site to its
candidate endpoint. If it crosses an obstruction, the vector is cut at the
crossing nearest to the site; otherwise it keeps the full max_dist length.
"""

import logging

import numpy as np
from shapely.geometry import LineString, MultiLineString

from .exceptions import SiteOnLandError
from .models import FetchVector, Site
from .obstructions import ObstructionLayer

logger = logging.getLogger(__name__)


def _get_all_coords(geom) -> list[tuple[float, float]]:
    """Extract all coordinate tuples from any Shapely geometry."""
    if geom.is_empty:
        return []
    if geom.geom_type == 'Point':
        return [(geom.x, geom.y)]
    elif geom.geom_type in ('LineString', 'LinearRing'):
        return list(geom.coords)
    elif geom.geom_type == 'Polygon':
        return list(geom.exterior.coords)
    elif geom.geom_type in ('MultiPoint', 'MultiLineString',
                            'MultiPolygon', 'GeometryCollection'):
        coords = []
        for part in geom.geoms:
            coords.extend(_get_all_coords(part))
        return coords
    return []


def check_site_on_land(site: Site, obstructions: ObstructionLayer, index: int = 0) -> None:
    """
    Raise SiteOnLandError if the site lies in or on an obstruction polygon.
    """
    if obstructions.covers_point(site.point):
        raise SiteOnLandError(site.name, index)


def build_rays(origin: tuple[float, float], endpoints: np.ndarray) -> list[LineString]:
    """One segment per candidate endpoint, starting at the site."""
    return [LineString([origin, tuple(end)]) for end in endpoints]


def nearest_hit(ray: LineString, obstructions: ObstructionLayer) -> tuple[float, float] | None:
    """
    First point where *ray* meets an obstruction, measured from its start.

    Args:
        ray: Two-point segment from the site to the candidate endpoint
        obstructions: Polygons to test against

    Returns:
        (x, y) of the nearest intersection, or None if the ray is clear
    """
    candidates = obstructions.query(ray, predicate='intersects')
    if len(candidates) == 0:
        return None

    origin = np.asarray(ray.coords[0])
    best_d = float('inf')
    best_pt = None
    geoms = obstructions.geometry
    for i in candidates:
        intersection = ray.intersection(geoms.iloc[i])
        for px, py in _get_all_coords(intersection):
            d = float(np.hypot(px - origin[0], py - origin[1]))
            if d < best_d:
                best_d = d
                best_pt = (float(px), float(py))
    return best_pt


def cast_rays(site: Site, directions, endpoints: np.ndarray,
              obstructions: ObstructionLayer, max_dist: float) -> tuple[FetchVector, ...]:
    """
    Fetch vectors for one site.

    Args:
        site: The site (already checked not to be on land)
        directions: Bearings in degrees, ascending
        endpoints: Candidate endpoints, ``endpoints[i]`` at ``directions[i]``
        obstructions: Obstruction polygons, ideally already subset to the
                      site's search area
        max_dist: Search radius in CRS units (metres)

    Returns:
        Tuple of FetchVector with distances in kilometres
    """
    rays = build_rays(site.coords, endpoints)
    max_dist_km = max_dist / 1000.0

    if not obstructions.is_empty:
        # Keep only polygons touched by at least one ray
        obstructions = obstructions.subset(MultiLineString(rays), predicate='intersects')

    vectors = []
    for direction, ray, end in zip(directions, rays, endpoints):
        hit = None if obstructions.is_empty else nearest_hit(ray, obstructions)
        if hit is None:
            vectors.append(FetchVector(float(direction), max_dist_km,
                                       (float(end[0]), float(end[1])), False))
            continue
        dist = float(np.hypot(hit[0] - site.x, hit[1] - site.y))
        vectors.append(FetchVector(float(direction), min(dist, max_dist) / 1000.0, hit, True))

    blocked = sum(v.obstructed for v in vectors)
    logger.debug(f"{site.name}: {blocked}/{len(vectors)} vectors obstructed")
    return tuple(vectors)
