# -*- coding: utf-8 -*-
"""
Tests for coordinate utilities.

Uses the compass convention throughout: 0°=North (+Y), 90°=East (+X).
"""

import pytest
import numpy as np
from pyproj import CRS

from geometries.fetch.constants import EARTH_RADIUS_M
from geometries.fetch.coordinates import (
    bearing_to,
    is_projected,
    linear_unit,
    transform_coords,
    unit_name,
    vector_destination,
)


class TestBearingTo:
    """Test bearings from a site to target coordinates."""

    def test_cardinal_bearings(self):
        b = bearing_to((0, 0), [(0, 1), (1, 0), (0, -1), (-1, 0)])
        assert np.allclose(b, [0, 90, 180, 270])

    def test_range(self):
        b = bearing_to((5, 5), [(4, 6), (5, 6)])
        assert b[0] == pytest.approx(315)
        assert 0 <= b[1] < 360

    def test_unit_circle(self):
        for angle in range(0, 360, 15):
            dx, dy = np.sin(np.radians(angle)), np.cos(np.radians(angle))
            assert bearing_to((0, 0), [(dx, dy)])[0] == pytest.approx(angle, abs=1e-9)


class TestCrsHelpers:
    """Test CRS classification."""

    def test_is_projected(self):
        assert is_projected("EPSG:2193")
        assert not is_projected("EPSG:4326")
        assert not is_projected(None)

    def test_linear_unit_metre(self):
        assert linear_unit("EPSG:2193") == 'metre'
        assert linear_unit(CRS.from_epsg(3857)) == 'metre'

    def test_linear_unit_feet(self):
        """NAD83 / California zone 5 uses US survey feet."""
        assert linear_unit("EPSG:2229") == 'other'
        assert 'foot' in unit_name("EPSG:2229").lower()

    def test_linear_unit_unknown(self):
        assert linear_unit(None) == 'unknown'
        assert linear_unit("EPSG:4326") == 'unknown'
        assert unit_name(None) == 'unknown'


class TestTransform:
    """Test coordinate transformations."""

    def test_transform_coords_round_trip(self):
        coords = np.array([[1_650_000.0, 5_150_000.0], [1_700_000.0, 5_200_000.0]])
        lonlat = transform_coords(coords, CRS.from_epsg(2193), CRS.from_epsg(4326))
        back = transform_coords(lonlat, CRS.from_epsg(4326), CRS.from_epsg(2193))
        assert np.allclose(back, coords, atol=1e-4)
        assert np.all(lonlat[:, 1] < 0)


class TestVectorDestination:
    """Test the spherical destination formula."""

    def test_quarter_circumference_east(self):
        lon, lat = vector_destination(0.0, 0.0, 90.0, EARTH_RADIUS_M * np.pi / 2)
        assert lon == pytest.approx(90.0)
        assert lat == pytest.approx(0.0, abs=1e-9)

    def test_north_one_km(self):
        lon, lat = vector_destination(10.0, 0.0, 0.0, 1000.0)
        assert lon == pytest.approx(10.0)
        assert lat == pytest.approx(np.degrees(1000.0 / EARTH_RADIUS_M))

    def test_longitude_wraps(self):
        lon, _ = vector_destination(179.9, 0.0, 90.0, 50_000.0)
        assert -180.0 <= lon < -179.0

    def test_vectorised(self):
        lon, lat = vector_destination(np.zeros(4), np.zeros(4), [0, 90, 180, 270], 1000.0)
        assert lon.shape == (4,)
        assert lat[0] > 0 > lat[2]
        assert lon[1] > 0 > lon[3]
