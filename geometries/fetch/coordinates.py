# -*- coding: utf-8 -*-
"""
Coordinate system utilities for fetch calculations.

Handles CRS transformations, linear-unit detection and compass bearings.
"""

from typing import Literal

import numpy as np
from pyproj import Transformer, CRS

from .constants import EARTH_RADIUS_M

LinearUnit = Literal['metre', 'other', 'unknown']

_METRE_NAMES = {'metre', 'meter', 'metres', 'meters', 'm'}


def transform_coords(coords: np.ndarray, from_crs: CRS, to_crs: CRS) -> np.ndarray:
    """Transform an (n, 2) array of x/y coordinates between coordinate systems."""
    coords = np.asarray(coords, dtype=float).reshape(-1, 2)
    transformer = Transformer.from_crs(from_crs, to_crs, always_xy=True)
    xs, ys = transformer.transform(coords[:, 0], coords[:, 1])
    return np.column_stack([xs, ys])


def is_projected(crs) -> bool:
    """True if *crs* is set and is a projected (planar) coordinate system."""
    if crs is None:
        return False
    return CRS.from_user_input(crs).is_projected


def linear_unit(crs) -> LinearUnit:
    """
    Classify the horizontal unit of a CRS.

    Returns:
        'metre' when both horizontal axes are in metres, 'other' when they use
        another linear unit (e.g. US survey foot), 'unknown' when the CRS is
        missing, geographic, or carries no axis information.
    """
    if crs is None:
        return 'unknown'
    crs = CRS.from_user_input(crs)
    if not crs.is_projected or not crs.axis_info:
        return 'unknown'

    names = {(axis.unit_name or '').strip().lower() for axis in crs.axis_info[:2]}
    if not names or '' in names or 'unknown' in names:
        return 'unknown'
    if names <= _METRE_NAMES:
        return 'metre'
    return 'other'


def unit_name(crs) -> str:
    """Human readable name of the first axis unit, or 'unknown'."""
    if crs is None:
        return 'unknown'
    crs = CRS.from_user_input(crs)
    if not crs.axis_info:
        return 'unknown'
    return crs.axis_info[0].unit_name or 'unknown'


def bearing_to(origin: tuple[float, float], coords) -> np.ndarray:
    """
    Compass bearings (degrees in [0, 360)) from *origin* to each coordinate.

    Args:
        origin: (x, y) of the observer
        coords: Array-like of (x, y) targets

    Returns:
        Array of bearings, one per target
    """
    coords = np.asarray(coords, dtype=float).reshape(-1, 2)
    dx = coords[:, 0] - origin[0]
    dy = coords[:, 1] - origin[1]
    return np.degrees(np.arctan2(dx, dy)) % 360.0


def vector_destination(lon, lat, bearing_deg, distance_m):
    """
    Destination point on a sphere given a start, bearing and distance.

    This is the great-circle formula used by the older step-search fetch
    method; the planar engine does not depend on it.

    Args:
        lon: Start longitude(s) in degrees
        lat: Start latitude(s) in degrees
        bearing_deg: Compass bearing(s) in degrees (0=N, 90=E)
        distance_m: Distance(s) in metres

    Returns:
        (longitude, latitude) arrays in degrees, longitudes wrapped to
        [-180, 180]
    """
    lat_a = np.radians(np.asarray(lat, dtype=float))
    lon_a = np.radians(np.asarray(lon, dtype=float))
    bearing = np.radians(np.asarray(bearing_deg, dtype=float))
    angular = np.asarray(distance_m, dtype=float) / EARTH_RADIUS_M

    lat_b = np.arcsin(np.sin(lat_a) * np.cos(angular) +
                      np.cos(lat_a) * np.sin(angular) * np.cos(bearing))
    lon_b = lon_a + np.arctan2(np.sin(bearing) * np.sin(angular) * np.cos(lat_a),
                               np.cos(angular) - np.sin(lat_a) * np.sin(lat_b))

    # Wrap into [-pi, pi]
    lon_b = (lon_b + np.pi) % (2 * np.pi) - np.pi
    return np.degrees(lon_b), np.degrees(lat_b)
