# -*- coding: utf-8 -*-
"""
Value types produced by the fetch engine.

A ``FetchResult`` holds the fetch vectors of one site; a ``FetchCollection``
holds the results of one run. Both are immutable once created and are the
single representation the export and plotting functions work from.
"""

from dataclasses import dataclass, field
from typing import Iterator

import geopandas as gpd
import numpy as np
import pandas as pd
from pyproj import CRS
from shapely.geometry import LineString, Point

from .aggregate import FetchSummary, summarise
from .constants import QUADRANT_NAMES
from .coordinates import is_projected, transform_coords
from .directions import quadrant_of

# Distances are stored in km; allow for rounding in the m -> km conversion
_DIST_TOLERANCE_KM = 1e-9


@dataclass(frozen=True)
class Site:
    """A marine location in projected coordinates."""
    x: float
    y: float
    name: str = ''

    @property
    def point(self) -> Point:
        return Point(self.x, self.y)

    @property
    def coords(self) -> tuple[float, float]:
        return (self.x, self.y)


@dataclass(frozen=True)
class FetchVector:
    """
    Fetch in one compass direction.

    Attributes:
        direction: Compass bearing in degrees (0=N, 90=E)
        distance: Fetch length in kilometres
        endpoint: (x, y) where the vector ends, in the site's CRS
        obstructed: True if the vector was stopped by an obstruction
    """
    direction: float
    distance: float
    endpoint: tuple[float, float]
    obstructed: bool = False

    @property
    def quadrant(self) -> str:
        return quadrant_of(self.direction)


@dataclass(frozen=True)
class FetchResult:
    """Fetch vectors for one site, ordered by direction."""
    site: Site
    max_dist: float
    vectors: tuple[FetchVector, ...]
    crs: CRS | None = None

    def __post_init__(self):
        directions = [v.direction for v in self.vectors]
        if directions != sorted(directions):
            raise ValueError("fetch vectors must be ordered by direction")
        for v in self.vectors:
            if v.distance > self.max_dist + _DIST_TOLERANCE_KM:
                raise ValueError(
                    f"fetch of {v.distance} km at {v.direction}° exceeds max_dist {self.max_dist} km"
                )

    @property
    def name(self) -> str:
        return self.site.name

    @property
    def directions(self) -> np.ndarray:
        return np.array([v.direction for v in self.vectors])

    @property
    def distances(self) -> np.ndarray:
        return np.array([v.distance for v in self.vectors])

    @property
    def quadrants(self) -> list[str]:
        return [v.quadrant for v in self.vectors]

    def lines(self) -> list[LineString]:
        """One LineString per direction, from the site to the vector end."""
        return [LineString([self.site.coords, v.endpoint]) for v in self.vectors]

    def summary(self) -> FetchSummary:
        return summarise(self.vectors)

    def to_crs(self, crs) -> 'FetchResult':
        """Return a copy with the site and endpoints transformed to *crs*."""
        crs = CRS.from_user_input(crs)
        if self.crs is None:
            raise ValueError("cannot transform a fetch result without a CRS")
        coords = np.vstack([[self.site.coords], [v.endpoint for v in self.vectors]])
        moved = transform_coords(coords, self.crs, crs)
        site = Site(float(moved[0, 0]), float(moved[0, 1]), self.site.name)
        vectors = tuple(
            FetchVector(v.direction, v.distance, (float(x), float(y)), v.obstructed)
            for v, (x, y) in zip(self.vectors, moved[1:])
        )
        return FetchResult(site, self.max_dist, vectors, crs)


@dataclass(frozen=True)
class FetchCollection:
    """
    Fetch results for all sites of one run.

    Every result must share the same CRS and the same max_dist.
    """
    results: tuple[FetchResult, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, 'results', tuple(self.results))
        if not self.results:
            return
        first = self.results[0]
        for result in self.results[1:]:
            if result.crs != first.crs:
                raise ValueError("All sites must have the same CRS")
            if result.max_dist != first.max_dist:
                raise ValueError("All sites must have the same max_dist")

    def __len__(self) -> int:
        return len(self.results)

    def __iter__(self) -> Iterator[FetchResult]:
        return iter(self.results)

    def __getitem__(self, key) -> FetchResult:
        if isinstance(key, str):
            for result in self.results:
                if result.name == key:
                    return result
            raise KeyError(key)
        return self.results[key]

    @property
    def names(self) -> list[str]:
        return [r.name for r in self.results]

    @property
    def crs(self) -> CRS | None:
        return self.results[0].crs if self.results else None

    @property
    def max_dist(self) -> float | None:
        return self.results[0].max_dist if self.results else None

    @property
    def is_projected(self) -> bool:
        return is_projected(self.crs)

    def summary(self) -> pd.DataFrame:
        """Mean fetch (km) per quadrant and overall, one row per site."""
        rows = [r.summary().as_row() for r in self.results]
        return pd.DataFrame(rows, index=pd.Index(self.names, name='site'),
                            columns=list(QUADRANT_NAMES) + ['Average'])

    def to_crs(self, crs) -> 'FetchCollection':
        return FetchCollection(tuple(r.to_crs(crs) for r in self.results))

    def to_dataframe(self) -> pd.DataFrame:
        """
        One row per direction per site.

        Columns: site, fetch (km), direction, quadrant and the start/end
        coordinates, named x/y/x_end/y_end for projected CRS and
        lon/lat/lon_end/lat_end otherwise.
        """
        if self.is_projected:
            xs, ys, xe, ye = 'x', 'y', 'x_end', 'y_end'
        else:
            xs, ys, xe, ye = 'lon', 'lat', 'lon_end', 'lat_end'

        records = []
        for result in self.results:
            for v in result.vectors:
                records.append({
                    'site': result.name,
                    'fetch': v.distance,
                    'direction': v.direction,
                    'quadrant': v.quadrant,
                    xs: result.site.x,
                    ys: result.site.y,
                    xe: v.endpoint[0],
                    ye: v.endpoint[1],
                })
        frame = pd.DataFrame.from_records(
            records, columns=['site', 'fetch', 'direction', 'quadrant', xs, ys, xe, ye])
        frame['quadrant'] = pd.Categorical(frame['quadrant'], categories=list(QUADRANT_NAMES))
        return frame

    def to_geodataframe(self) -> gpd.GeoDataFrame:
        """Same rows as ``to_dataframe`` with a LineString per fetch vector."""
        frame = self.to_dataframe()
        lines = [line for result in self.results for line in result.lines()]
        return gpd.GeoDataFrame(frame, geometry=lines, crs=self.crs)

    def __str__(self) -> str:
        if not self.results:
            return "Empty fetch collection"
        header = (
            f"Is projected\t: {self.is_projected}\n"
            f"Max distance\t: {self.max_dist:g} km\n"
            f"Directions\t: {len(self.results[0].vectors)}\n"
            f"Sites\t\t: {len(self.results)}\n\n"
        )
        return header + self.summary().round(1).to_string()
