# -*- coding: utf-8 -*-
"""
Main fetch calculator class.

Orchestrates fetch calculation for all sites: parameter validation, CRS
reconciliation, land checks, candidate endpoints, obstruction subsetting,
ray intersection and progress reporting.
"""

import logging
from typing import Callable, Optional

from .directions import sample_directions
from .endpoints import candidate_endpoints
from .intersection import cast_rays, check_site_on_land
from .layers import (
    as_site_frame,
    check_linear_unit,
    reconcile_crs,
    resolve_site_names,
    sites_from_frame,
)
from .models import FetchCollection, FetchResult, Site
from .obstructions import ObstructionLayer
from .parameters import FetchParameters, validate_parameters

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int, str], object]


class FetchCalculator:
    """
    Calculates wind fetch for marine sites against one obstruction layer.

    Handles the complete workflow:
    1. Validate parameters (once, before any geometry work)
    2. Reconcile the site and obstruction CRS
    3. Check that no site is on land (fails the whole run)
    4. For every site: candidate endpoints, obstruction subset, ray casting
    5. Report progress after each site

    The obstruction layer is only read; sites are processed sequentially.
    """

    def __init__(self, obstructions, max_dist: float = 300, n_directions: int = 9,
                 circle_fidelity: int = 1, quiet: bool = False, site_names=None):
        self.params: FetchParameters = validate_parameters(
            max_dist=max_dist,
            n_directions=n_directions,
            circle_fidelity=circle_fidelity,
            quiet=quiet,
            site_names=site_names,
        )
        if not isinstance(obstructions, ObstructionLayer):
            obstructions = ObstructionLayer(obstructions)
        self.obstructions = obstructions
        self.directions = sample_directions(self.params.n_directions)
        self._progress_callback: Optional[ProgressCallback] = None

    @classmethod
    def from_parameters(cls, obstructions, params: FetchParameters) -> 'FetchCalculator':
        return cls(obstructions, max_dist=params.max_dist, n_directions=params.n_directions,
                   circle_fidelity=params.circle_fidelity, quiet=params.quiet,
                   site_names=params.site_names)

    def set_progress_callback(self, callback: Optional[ProgressCallback]) -> None:
        """
        Set a callback function for progress updates.

        The callback signature is: callback(completed: int, total: int, message: str).
        The return value is ignored.
        """
        self._progress_callback = callback

    def _report_progress(self, completed: int, total: int, message: str) -> None:
        if self._progress_callback:
            self._progress_callback(completed, total, message)

    def _message(self, message: str) -> None:
        if not self.params.quiet:
            logger.info(message)

    def calculate(self, site_layer, site_names=None) -> FetchCollection:
        """
        Calculate fetch at every site of *site_layer*.

        Args:
            site_layer: GeoDataFrame/GeoSeries of points, or Points/(x, y)
                        tuples in the obstruction layer's CRS
            site_names: Optional names, one per site

        Returns:
            FetchCollection with one FetchResult per site, in input order

        Raises:
            UnprojectedInputError: if neither layer is projected
            SiteOnLandError: if any site is inside an obstruction polygon
        """
        crs = None if _has_crs(site_layer) else self.obstructions.crs
        sites_frame = as_site_frame(site_layer, crs=crs)
        obstructions, sites_frame = reconcile_crs(self.obstructions, sites_frame,
                                                  quiet=self.params.quiet)
        check_linear_unit(obstructions.crs)

        names = resolve_site_names(site_names if site_names is not None
                                   else self.params.site_names, len(sites_frame))
        sites = sites_from_frame(sites_frame, names)

        self._message("checking site locations are not on land")
        for index, site in enumerate(sites):
            check_site_on_land(site, obstructions, index)

        total = len(sites)
        self._report_progress(0, total, "Initializing...")

        results = []
        for i, site in enumerate(sites):
            self._message(f"calculating fetch for {site.name} ({i + 1} out of {total})")
            results.append(self.calculate_site(site, obstructions))
            self._report_progress(i + 1, total, f"Site {i + 1}/{total} - {site.name}")

        return FetchCollection(tuple(results))

    def calculate_site(self, site: Site, obstructions: ObstructionLayer | None = None) -> FetchResult:
        """
        Fetch vectors for a single site already in the obstruction CRS.

        The site must not be on land; ``calculate`` checks this for all
        sites before calling here.
        """
        if obstructions is None:
            obstructions = self.obstructions

        max_dist_m = self.params.max_dist_m
        circle, endpoints = candidate_endpoints(site.coords, max_dist_m, self.directions,
                                                self.params.circle_fidelity)

        nearby = obstructions.subset(circle)
        logger.debug(f"{site.name}: {len(nearby)}/{len(obstructions)} obstruction polygons in range")

        vectors = cast_rays(site, self.directions, endpoints, nearby, max_dist_m)
        return FetchResult(site, self.params.max_dist, vectors, obstructions.crs)


def _has_crs(site_layer) -> bool:
    return getattr(site_layer, 'crs', None) is not None


def fetch(polygon_layer, site_layer, max_dist: float = 300, n_directions: int = 9,
          site_names=None, quiet: bool = False, circle_fidelity: int = 1,
          progress_callback: Optional[ProgressCallback] = None) -> FetchCollection:
    """
    Calculate wind fetch for marine locations.

    Args:
        polygon_layer: Obstructions (coastline, islands, exposed reefs) as an
                       ObstructionLayer, GeoDataFrame or GeoSeries of polygons
        site_layer: Site locations as a GeoDataFrame or GeoSeries of points
        max_dist: Maximum fetch in kilometres (1-500), default 300
        n_directions: Fetch vectors per 90° quadrant (1-20), default 9, i.e.
                      one vector every 10°, the first pointing North
        site_names: Optional names; defaults to 'Site 1', 'Site 2', ...
        quiet: Suppress diagnostic messages
        circle_fidelity: Search circle vertices per sampled direction
        progress_callback: Optional callback(completed, total, message)

    Returns:
        FetchCollection
    """
    calculator = FetchCalculator(polygon_layer, max_dist=max_dist, n_directions=n_directions,
                                 circle_fidelity=circle_fidelity, quiet=quiet)
    calculator.set_progress_callback(progress_callback)
    return calculator.calculate(site_layer, site_names=site_names)
