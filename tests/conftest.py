import matplotlib
matplotlib.use('Agg')

import geopandas as gpd
import pytest
from shapely.geometry import Point, box

NZTM = "EPSG:2193"

# Open water off the Canterbury coast, in NZTM metres
CENTRE = (1_650_000.0, 5_150_000.0)
HOLE_HALF_WIDTH = 10_000.0
LAND_RADIUS = 100_000.0


def square_hole_land(centre=CENTRE, crs=NZTM) -> gpd.GeoDataFrame:
    """A 100 km circular obstruction with a 20 km square of water in its middle."""
    cx, cy = centre
    land = Point(centre).buffer(LAND_RADIUS).difference(
        box(cx - HOLE_HALF_WIDTH, cy - HOLE_HALF_WIDTH, cx + HOLE_HALF_WIDTH, cy + HOLE_HALF_WIDTH)
    )
    return gpd.GeoDataFrame({'name': ['island']}, geometry=[land], crs=crs)


@pytest.fixture
def land_layer():
    return square_hole_land()


@pytest.fixture
def centre_site():
    return gpd.GeoDataFrame({'name': ['centre']}, geometry=[Point(CENTRE)], crs=NZTM)


@pytest.fixture
def two_sites():
    cx, cy = CENTRE
    return gpd.GeoDataFrame(
        {'name': ['centre', 'east']},
        geometry=[Point(CENTRE), Point(cx + 5_000.0, cy)],
        crs=NZTM,
    )


@pytest.fixture
def far_island():
    """A small island 50 km north of the centre, well inside max_dist."""
    cx, cy = CENTRE
    return gpd.GeoDataFrame(
        geometry=[box(cx - 2_000.0, cy + 50_000.0, cx + 2_000.0, cy + 52_000.0)],
        crs=NZTM,
    )
