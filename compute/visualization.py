"""Plotting of fetch vectors over the obstruction layer.

Draws every fetch vector of a ``FetchCollection`` as a line from its site,
optionally on top of the obstruction polygons (light grey, no border).
"""

import logging
import warnings

import geopandas as gpd
import matplotlib.pyplot as plt
from matplotlib.axes import Axes
from pyproj import CRS

from geometries.fetch.exceptions import CrsMismatchWarning
from geometries.fetch.models import FetchCollection
from geometries.fetch.obstructions import ObstructionLayer

logger = logging.getLogger(__name__)


def plot_fetch(collection: FetchCollection, obstructions: ObstructionLayer | None = None,
               ax: Axes | None = None, colour: str = 'tab:blue', linewidth: float = 0.8,
               show_sites: bool = True) -> Axes:
    """Plot fetch vectors, optionally with the obstruction polygons.

    If the obstruction layer uses another CRS the vectors are transformed
    onto it first (with a CrsMismatchWarning).
    """
    if ax is None:
        _, ax = plt.subplots(figsize=(8, 8))

    if obstructions is not None and obstructions.crs is not None and collection.crs is not None \
            and CRS.from_user_input(obstructions.crs) != collection.crs:
        message = "transforming fetch vectors onto the same map CRS as the polygon layer"
        logger.warning(message)
        warnings.warn(message, CrsMismatchWarning, stacklevel=2)
        collection = collection.to_crs(obstructions.crs)

    lines = collection.to_geodataframe()
    if len(lines):
        lines.plot(ax=ax, color=colour, linewidth=linewidth, zorder=2)

    if show_sites and len(collection):
        sites = gpd.GeoSeries([r.site.point for r in collection], crs=collection.crs)
        sites.plot(ax=ax, color='red', markersize=12, zorder=3)

    if obstructions is not None and not obstructions.is_empty:
        # Keep the view on the vectors, not the whole coastline
        xlim, ylim = ax.get_xlim(), ax.get_ylim()
        obstructions.geometry.plot(ax=ax, color='lightgrey', edgecolor='none', zorder=1)
        if len(lines):
            ax.set_xlim(xlim)
            ax.set_ylim(ylim)

    ax.set_aspect('equal')
    return ax


def save_fetch_plot(collection: FetchCollection, path, obstructions: ObstructionLayer | None = None,
                    dpi: int = 100, **kwargs) -> None:
    """Write the fetch plot to an image file (format from the file extension)."""
    fig, ax = plt.subplots(figsize=(7.2, 7.2))
    try:
        plot_fetch(collection, obstructions, ax=ax, **kwargs)
        fig.savefig(path, dpi=dpi, bbox_inches='tight')
    finally:
        plt.close(fig)
