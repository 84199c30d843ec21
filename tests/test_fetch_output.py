# -*- coding: utf-8 -*-
"""
Tests for exporting, plotting and reporting fetch results.
"""

import xml.etree.ElementTree as ET

import pytest
import pandas as pd
import matplotlib.pyplot as plt

from compute.fetch_export import KML_NS, build_kml, fetch_table, write_csv, write_kml, write_summary_csv
from compute.fetch_report import generate_fetch_report_markdown
from compute.visualization import plot_fetch, save_fetch_plot
from geometries.fetch import (
    CrsMismatchWarning,
    FetchCollection,
    FetchResult,
    ObstructionLayer,
    fetch,
    validate_parameters,
)


@pytest.fixture
def collection(land_layer, two_sites):
    return fetch(land_layer, two_sites, n_directions=1, quiet=True, site_names=['centre', 'east'])


class TestCsv:
    """Test the raw fetch table export."""

    def test_default_is_wgs84(self, collection, tmp_path):
        path = tmp_path / "fetch.csv"
        write_csv(collection, path)
        table = pd.read_csv(path)
        assert list(table.columns) == ['site', 'fetch', 'direction', 'quadrant',
                                       'lon', 'lat', 'lon_end', 'lat_end']
        assert len(table) == 8
        assert table['lat'].between(-90, 0).all()
        assert set(table['site']) == {'centre', 'east'}

    def test_keep_projected(self, collection):
        table = fetch_table(collection, crs=None)
        assert 'x_end' in table.columns
        assert table['fetch'].tolist()[:4] == pytest.approx([10.0, 10.0, 10.0, 10.0], abs=1e-6)

    def test_summary_csv(self, collection, tmp_path):
        path = tmp_path / "summary.csv"
        write_summary_csv(collection, path)
        table = pd.read_csv(path, index_col='site')
        assert table.loc['east', 'East'] == pytest.approx(5.0, abs=1e-6)


class TestKml:
    """Test the KML export."""

    def _ns(self, tag):
        return f"{{{KML_NS}}}{tag}"

    def test_structure(self, collection):
        root = build_kml(collection, folder_name="Harbour").getroot()
        document = root.find(self._ns('Document'))
        outer = document.find(self._ns('Folder'))
        assert outer.find(self._ns('name')).text == "Harbour"
        sites = outer.findall(self._ns('Folder'))
        assert [f.find(self._ns('name')).text for f in sites] == ['centre', 'east']
        placemarks = sites[0].findall(self._ns('Placemark'))
        assert [p.find(self._ns('name')).text for p in placemarks] == ['0', '90', '180', '270']

    def test_coordinates_are_lon_lat(self, collection):
        root = build_kml(collection).getroot()
        coords = root.find(f".//{self._ns('coordinates')}").text.split()
        assert len(coords) == 2
        lon, lat, _ = (float(c) for c in coords[0].split(','))
        assert 165 < lon < 180
        assert -50 < lat < -40

    def test_write(self, collection, tmp_path):
        path = write_kml(collection, tmp_path / "fetch.kml")
        tree = ET.parse(path)
        assert len(tree.getroot().findall(f".//{self._ns('Placemark')}")) == 8

    def test_no_crs_rejected(self, collection, tmp_path):
        """Without a CRS the coordinates cannot be written as lon/lat."""
        bare = FetchCollection(tuple(
            FetchResult(r.site, r.max_dist, r.vectors, None) for r in collection
        ))
        with pytest.raises(ValueError):
            build_kml(bare)
        with pytest.raises(ValueError):
            write_kml(bare, tmp_path / "bare.kml")
        assert not (tmp_path / "bare.kml").exists()

    def test_no_overwrite(self, collection, tmp_path):
        path = tmp_path / "fetch.kml"
        path.write_text("keep")
        with pytest.raises(FileExistsError):
            write_kml(collection, path)
        write_kml(collection, path, overwrite=True)
        assert path.read_text() != "keep"


class TestPlot:
    """Test plotting with the Agg backend."""

    def test_plot_vectors(self, collection):
        ax = plot_fetch(collection)
        assert len(ax.collections) >= 1
        plt.close(ax.figure)

    def test_plot_with_obstructions(self, collection, land_layer):
        ax = plot_fetch(collection, ObstructionLayer(land_layer))
        assert len(ax.collections) >= 2
        plt.close(ax.figure)

    def test_vectors_moved_onto_obstruction_crs(self, collection, land_layer):
        geographic = ObstructionLayer(land_layer).to_crs("EPSG:4326")
        with pytest.warns(CrsMismatchWarning):
            ax = plot_fetch(collection, geographic)
        xmin, xmax = ax.get_xlim()
        assert 165 < xmin < xmax < 180
        plt.close(ax.figure)

    def test_save(self, collection, land_layer, tmp_path):
        path = tmp_path / "fetch.png"
        save_fetch_plot(collection, path, ObstructionLayer(land_layer))
        assert path.exists()
        assert path.stat().st_size > 0


class TestReport:
    """Test the Markdown report."""

    def test_report(self, collection):
        params = validate_parameters(n_directions=1)
        md = generate_fetch_report_markdown(collection, params)
        assert md.startswith("# Wind Fetch Report")
        assert "- Maximum distance: 300 km" in md
        assert "- Directions per quadrant: 1" in md
        assert "| centre |" in md
        assert "| east |" in md
        assert "4/4 directions reach land" in md

    def test_report_without_params(self, collection):
        md = generate_fetch_report_markdown(collection)
        assert "Circle fidelity" not in md
        assert "NZGD2000" in md
