# -*- coding: utf-8 -*-
"""
Constants for fetch calculations.

Bearings follow the compass convention, clockwise from North:
    0° = North (+Y)
    90° = East (+X)
    180° = South (-Y)
    270° = West (-X)

Quadrants are half-open 90° sectors centred on the cardinal directions, so a
bearing on a sector boundary belongs to the sector clockwise of it
(45° is East, 315° is North).
"""

QUADRANTS = {
    'North': 315,
    'East': 45,
    'South': 135,
    'West': 225,
}

QUADRANT_NAMES = ('North', 'East', 'South', 'West')

# Parameter bounds (max_dist in kilometres)
MIN_DIRECTIONS = 1
MAX_DIRECTIONS = 20
MIN_MAX_DIST_KM = 1.0
MAX_MAX_DIST_KM = 500.0
MIN_CIRCLE_FIDELITY = 1
MAX_CIRCLE_FIDELITY = 10

DEFAULT_MAX_DIST_KM = 300.0
DEFAULT_DIRECTIONS = 9
DEFAULT_CIRCLE_FIDELITY = 1

# Mean Earth radius used by the legacy destination-point formula
EARTH_RADIUS_M = 6372795.0

# Tolerance (degrees) when matching circle vertices to requested bearings
BEARING_TOLERANCE_DEG = 1e-6
