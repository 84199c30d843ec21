# -*- coding: utf-8 -*-
"""
Obstruction layer: land, islands and reefs that stop fetch vectors.

The layer wraps a GeoDataFrame of polygons and is never modified after
construction. Subsetting and reprojection return new layers.
"""

import logging

import geopandas as gpd
import numpy as np
from shapely.geometry import Polygon, MultiPolygon, GeometryCollection
from shapely.geometry.base import BaseGeometry
from shapely.ops import unary_union

from .exceptions import InvalidParameter

logger = logging.getLogger(__name__)


def extract_polygons(geom) -> list[Polygon]:
    """
    Extract all Polygon geometries from any geometry type.

    Handles Polygon, MultiPolygon, and GeometryCollection inputs.

    Args:
        geom: Any Shapely geometry object

    Returns:
        List of non-empty Polygon objects
    """
    polygons = []

    if geom is None or geom.is_empty:
        return polygons

    if isinstance(geom, Polygon):
        polygons.append(geom)
    elif isinstance(geom, MultiPolygon):
        for p in geom.geoms:
            if not p.is_empty:
                polygons.append(p)
    elif isinstance(geom, GeometryCollection):
        for g in geom.geoms:
            polygons.extend(extract_polygons(g))

    return polygons


class ObstructionLayer:
    """
    Read-only set of obstruction polygons sharing one CRS.

    Accepts a GeoDataFrame, a GeoSeries, or an iterable of shapely
    (Multi)Polygons together with a ``crs``. Invalid polygons are repaired
    with ``make_valid``; anything that is not polygonal is rejected.
    """

    def __init__(self, geometries, crs=None):
        if isinstance(geometries, gpd.GeoDataFrame):
            frame = gpd.GeoDataFrame(geometry=geometries.geometry.values,
                                     crs=geometries.crs if crs is None else crs)
        elif isinstance(geometries, gpd.GeoSeries):
            frame = gpd.GeoDataFrame(geometry=geometries.values,
                                     crs=geometries.crs if crs is None else crs)
        elif isinstance(geometries, BaseGeometry):
            frame = gpd.GeoDataFrame(geometry=[geometries], crs=crs)
        else:
            frame = gpd.GeoDataFrame(geometry=list(geometries), crs=crs)

        frame = frame[~(frame.geometry.isna() | frame.geometry.is_empty)]
        invalid = ~frame.geometry.is_valid
        if invalid.any():
            logger.info(f"Repairing {int(invalid.sum())} invalid obstruction polygon(s)")
            repaired = [unary_union(extract_polygons(g)) if bad else g
                        for g, bad in zip(frame.geometry.make_valid(), invalid)]
            frame = gpd.GeoDataFrame(geometry=repaired, crs=frame.crs)
            frame = frame[~frame.geometry.is_empty]

        bad_types = ~frame.geometry.geom_type.isin(['Polygon', 'MultiPolygon'])
        if bad_types.any():
            found = sorted(set(frame.geometry.geom_type[bad_types]))
            raise InvalidParameter(
                f"obstruction layer must contain only polygons, found {', '.join(found)}"
            )

        self._frame = frame.reset_index(drop=True)

    @classmethod
    def from_file(cls, path, **kwargs) -> 'ObstructionLayer':
        """Read a polygon layer (shapefile, GeoPackage, ...) with geopandas."""
        return cls(gpd.read_file(path, **kwargs))

    def __len__(self) -> int:
        return len(self._frame)

    def __repr__(self) -> str:
        return f"ObstructionLayer({len(self)} polygons, crs={self.crs})"

    @property
    def crs(self):
        return self._frame.crs

    @property
    def geometry(self) -> gpd.GeoSeries:
        return self._frame.geometry

    @property
    def is_empty(self) -> bool:
        return len(self._frame) == 0

    def query(self, geom, predicate: str | None = None) -> np.ndarray:
        """
        Sorted indices of polygons matching *geom* in the spatial index.

        Without a predicate the match is on bounding boxes only.
        """
        if self.is_empty:
            return np.array([], dtype=int)
        idx = self._frame.sindex.query(geom, predicate=predicate)
        return np.unique(idx)

    def subset(self, geom, predicate: str | None = None) -> 'ObstructionLayer':
        """
        New layer holding only the polygons that can interact with *geom*.

        Args:
            geom: Filter geometry, e.g. the search circle of a site or the
                  union of its candidate rays
            predicate: Spatial predicate for the exact test; ``None`` keeps
                       every polygon whose bounding box intersects *geom*

        Returns:
            ObstructionLayer sharing this layer's CRS
        """
        idx = self.query(geom, predicate)
        return ObstructionLayer(self._frame.iloc[idx], crs=self.crs)

    def covers_point(self, point) -> bool:
        """True if *point* lies inside or on the boundary of any polygon."""
        return len(self.query(point, predicate='intersects')) > 0

    def to_crs(self, crs) -> 'ObstructionLayer':
        return ObstructionLayer(self._frame.to_crs(crs))
