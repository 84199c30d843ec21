# -*- coding: utf-8 -*-
"""
Wind Fetch Package

Calculates wind fetch, the unobstructed open-water distance over which wind
can blow toward a site, for every sampled compass direction. Uses the compass
convention (0°=North, 90°=East) and casts full-length rays to the edge of a
search circle, cutting each ray at its nearest obstruction.
"""

from .constants import QUADRANTS, QUADRANT_NAMES
from .exceptions import (
    FetchError,
    InvalidParameter,
    UnprojectedInputError,
    SiteOnLandError,
    FetchWarning,
    CrsMismatchWarning,
    NonLinearUnitWarning,
    InvalidParameterWarning,
)
from .parameters import FetchParameters, validate_parameters
from .coordinates import (
    bearing_to,
    linear_unit,
    vector_destination,
)
from .directions import sample_directions, quadrant_of
from .endpoints import create_search_circle, candidate_endpoints
from .obstructions import ObstructionLayer, extract_polygons
from .intersection import cast_rays, check_site_on_land, nearest_hit
from .aggregate import FetchSummary, summarise
from .models import Site, FetchVector, FetchResult, FetchCollection
from .generator import FetchCalculator, fetch

__all__ = [
    # Constants
    'QUADRANTS',
    'QUADRANT_NAMES',
    # Errors and warnings
    'FetchError',
    'InvalidParameter',
    'UnprojectedInputError',
    'SiteOnLandError',
    'FetchWarning',
    'CrsMismatchWarning',
    'NonLinearUnitWarning',
    'InvalidParameterWarning',
    # Parameters
    'FetchParameters',
    'validate_parameters',
    # Coordinates
    'bearing_to',
    'linear_unit',
    'vector_destination',
    # Directions
    'sample_directions',
    'quadrant_of',
    # Endpoints
    'create_search_circle',
    'candidate_endpoints',
    # Obstructions
    'ObstructionLayer',
    'extract_polygons',
    # Intersection
    'cast_rays',
    'check_site_on_land',
    'nearest_hit',
    # Aggregation
    'FetchSummary',
    'summarise',
    # Values
    'Site',
    'FetchVector',
    'FetchResult',
    'FetchCollection',
    # Calculator
    'FetchCalculator',
    'fetch',
]
