# -*- coding: utf-8 -*-
"""
Input layer preparation.

Brings the obstruction layer and the site layer onto one projected CRS
before any geometry work, and turns site features into ``Site`` values.
"""

import logging
import warnings

import geopandas as gpd
from shapely.geometry import Point
from shapely.geometry.base import BaseGeometry

from .coordinates import is_projected, linear_unit, unit_name
from .exceptions import (
    CrsMismatchWarning,
    InvalidParameter,
    InvalidParameterWarning,
    NonLinearUnitWarning,
    UnprojectedInputError,
)
from .models import Site
from .obstructions import ObstructionLayer

logger = logging.getLogger(__name__)


def as_site_frame(site_layer, crs=None) -> gpd.GeoDataFrame:
    """
    Normalise a site layer to a GeoDataFrame of points.

    Accepts a GeoDataFrame, a GeoSeries, a single shapely Point or an
    iterable of Points / (x, y) tuples.
    """
    if isinstance(site_layer, gpd.GeoDataFrame):
        frame = gpd.GeoDataFrame(geometry=site_layer.geometry.values,
                                 crs=site_layer.crs if crs is None else crs)
    elif isinstance(site_layer, gpd.GeoSeries):
        frame = gpd.GeoDataFrame(geometry=site_layer.values,
                                 crs=site_layer.crs if crs is None else crs)
    elif isinstance(site_layer, BaseGeometry):
        frame = gpd.GeoDataFrame(geometry=[site_layer], crs=crs)
    else:
        points = [p if isinstance(p, BaseGeometry) else Point(p) for p in site_layer]
        frame = gpd.GeoDataFrame(geometry=points, crs=crs)

    if len(frame) == 0:
        raise InvalidParameter("site layer contains no sites")
    if not (frame.geometry.geom_type == 'Point').all():
        raise InvalidParameter("site layer must contain only point geometries")
    return frame


def reconcile_crs(obstructions: ObstructionLayer, sites: gpd.GeoDataFrame,
                  quiet: bool = False) -> tuple[ObstructionLayer, gpd.GeoDataFrame]:
    """
    Put both layers on one projected CRS.

    - neither projected: UnprojectedInputError
    - both projected but different: CrsMismatchWarning, sites reprojected
      onto the obstruction CRS
    - only one projected: the other is reprojected onto it

    Returns:
        (obstructions, sites) sharing one projected CRS
    """
    obs_projected = is_projected(obstructions.crs)
    site_projected = is_projected(sites.crs)

    if not obs_projected and not site_projected:
        raise UnprojectedInputError(
            "polygon_layer and/or site_layer must be projected to calculate fetch"
        )

    if obs_projected and site_projected:
        if obstructions.crs != sites.crs:
            message = ("the CRS for polygon_layer and site_layer differ; "
                       "transforming site_layer CRS to match")
            logger.warning(message)
            warnings.warn(message, CrsMismatchWarning, stacklevel=3)
            sites = sites.to_crs(obstructions.crs)
        return obstructions, sites

    if not obs_projected:
        if obstructions.crs is None:
            raise UnprojectedInputError("polygon_layer has no CRS and cannot be projected")
        if not quiet:
            logger.info("projecting polygon_layer onto the site_layer CRS")
        return obstructions.to_crs(sites.crs), sites

    if sites.crs is None:
        raise UnprojectedInputError("site_layer has no CRS and cannot be projected")
    if not quiet:
        logger.info("projecting site_layer onto the polygon_layer CRS")
    return obstructions, sites.to_crs(obstructions.crs)


def check_linear_unit(crs) -> str:
    """
    Warn unless the CRS unit is metres.

    max_dist is given in kilometres and converted to metres, so any other
    unit means the caller has to rescale it.

    Returns:
        The linear unit classification ('metre', 'other' or 'unknown')
    """
    unit = linear_unit(crs)
    if unit == 'other':
        message = (f"the CRS unit is '{unit_name(crs)}', not metres; "
                   "ensure max_dist has been scaled appropriately")
    elif unit == 'unknown':
        message = ("the CRS unit could not be determined; "
                   "max_dist is interpreted as kilometres of CRS units")
    else:
        return unit
    logger.warning(message)
    warnings.warn(message, NonLinearUnitWarning, stacklevel=3)
    return unit


def resolve_site_names(site_names, n_sites: int) -> list[str]:
    """
    Site names for a run; defaults are 'Site 1', 'Site 2', ...

    A list whose length does not match the number of sites is replaced by
    the defaults with an InvalidParameterWarning.
    """
    defaults = [f"Site {i + 1}" for i in range(n_sites)]
    if site_names is None:
        return defaults
    if isinstance(site_names, str):
        site_names = [site_names]
    names = [str(name) for name in site_names]
    if len(names) != n_sites:
        message = ("lengths differ for the number of sites and site names; "
                   "using default names instead")
        logger.warning(message)
        warnings.warn(message, InvalidParameterWarning, stacklevel=3)
        return defaults
    return names


def sites_from_frame(sites: gpd.GeoDataFrame, names: list[str]) -> list[Site]:
    return [Site(float(p.x), float(p.y), name) for p, name in zip(sites.geometry, names)]
