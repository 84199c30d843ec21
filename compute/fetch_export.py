"""
Fetch export functions.

CSV and KML writers working from one ``FetchCollection``. Both write
longitude/latitude by default, the way the results are usually shared.
"""
from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from pathlib import Path

import pandas as pd
from pyproj import CRS

from geometries.fetch.models import FetchCollection

logger = logging.getLogger(__name__)

WGS84 = "EPSG:4326"
KML_NS = "http://www.opengis.net/kml/2.2"


def _in_crs(collection: FetchCollection, crs) -> FetchCollection:
    if crs is None or collection.crs is None:
        return collection
    if CRS.from_user_input(crs) == collection.crs:
        return collection
    return collection.to_crs(crs)


def fetch_table(collection: FetchCollection, crs=WGS84) -> pd.DataFrame:
    """Raw fetch data, one row per direction per site, in *crs* (None keeps the collection CRS)."""
    return _in_crs(collection, crs).to_dataframe()


def write_csv(collection: FetchCollection, path, crs=WGS84) -> pd.DataFrame:
    """Write the raw fetch table to *path* and return it."""
    table = fetch_table(collection, crs)
    table.to_csv(path, index=False)
    logger.info(f"Wrote {len(table)} fetch vectors to {path}")
    return table


def write_summary_csv(collection: FetchCollection, path) -> pd.DataFrame:
    """Write the per-site quadrant summary to *path* and return it."""
    summary = collection.summary()
    summary.to_csv(path)
    return summary


def _kml_colour(colour: str, alpha: float = 1.0) -> str:
    """Convert '#rrggbb' to KML's aabbggrr."""
    colour = colour.lstrip('#')
    if len(colour) != 6:
        raise ValueError(f"colour must be '#rrggbb', got '{colour}'")
    rr, gg, bb = colour[0:2], colour[2:4], colour[4:6]
    aa = f"{int(round(max(0.0, min(1.0, alpha)) * 255)):02x}"
    return f"{aa}{bb}{gg}{rr}".lower()


def build_kml(collection: FetchCollection, folder_name: str = "Wind fetch",
              colour: str = "#ffffff", alpha: float = 1.0, width: float = 1.0) -> ET.ElementTree:
    """
    KML document with one folder per site and one line placemark per direction.

    Coordinates are transformed to WGS84 as KML requires.

    Raises:
        ValueError: if the collection has results but no CRS
    """
    if len(collection) and collection.crs is None:
        raise ValueError("cannot write KML for fetch results without a CRS")
    collection = _in_crs(collection, WGS84)

    ET.register_namespace('', KML_NS)
    kml = ET.Element(f"{{{KML_NS}}}kml")
    document = ET.SubElement(kml, f"{{{KML_NS}}}Document")
    ET.SubElement(document, f"{{{KML_NS}}}name").text = folder_name

    style = ET.SubElement(document, f"{{{KML_NS}}}Style", id="fetch_line")
    line_style = ET.SubElement(style, f"{{{KML_NS}}}LineStyle")
    ET.SubElement(line_style, f"{{{KML_NS}}}color").text = _kml_colour(colour, alpha)
    ET.SubElement(line_style, f"{{{KML_NS}}}width").text = f"{width:g}"

    root_folder = ET.SubElement(document, f"{{{KML_NS}}}Folder")
    ET.SubElement(root_folder, f"{{{KML_NS}}}name").text = folder_name

    for result in collection:
        folder = ET.SubElement(root_folder, f"{{{KML_NS}}}Folder")
        ET.SubElement(folder, f"{{{KML_NS}}}name").text = result.name
        for v in result.vectors:
            placemark = ET.SubElement(folder, f"{{{KML_NS}}}Placemark")
            ET.SubElement(placemark, f"{{{KML_NS}}}name").text = f"{v.direction:g}"
            ET.SubElement(placemark, f"{{{KML_NS}}}description").text = (
                f"Fetch: {v.distance:.3f} km ({v.quadrant})"
            )
            ET.SubElement(placemark, f"{{{KML_NS}}}styleUrl").text = "#fetch_line"
            line = ET.SubElement(placemark, f"{{{KML_NS}}}LineString")
            ET.SubElement(line, f"{{{KML_NS}}}coordinates").text = (
                f"{result.site.x:.8f},{result.site.y:.8f},0 "
                f"{v.endpoint[0]:.8f},{v.endpoint[1]:.8f},0"
            )
    return ET.ElementTree(kml)


def write_kml(collection: FetchCollection, path, overwrite: bool = False, **kwargs) -> Path:
    """Write the fetch vectors to a KML file; refuses to overwrite unless asked."""
    path = Path(path)
    if path.exists() and not overwrite:
        raise FileExistsError(f"{path} exists; pass overwrite=True to replace it")
    tree = build_kml(collection, **kwargs)
    tree.write(path, encoding='utf-8', xml_declaration=True)
    logger.info(f"Wrote KML for {len(collection)} site(s) to {path}")
    return path
