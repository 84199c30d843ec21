"""
Fetch report generation.

Builds a human-readable Markdown report from a ``FetchCollection`` and the
parameters used for the run.
"""
from __future__ import annotations

from geometries.fetch.constants import QUADRANT_NAMES
from geometries.fetch.coordinates import unit_name
from geometries.fetch.models import FetchCollection
from geometries.fetch.parameters import FetchParameters


def generate_fetch_report_markdown(collection: FetchCollection,
                                   params: FetchParameters | None = None) -> str:
    """
    Build a Markdown report for one fetch run.

    Includes:
    - Parameter summary (max distance, directions, CRS)
    - Per-site quadrant means, mean and median
    - Most exposed direction(s) per site
    """
    md_lines: list[str] = []
    md_lines.append("# Wind Fetch Report")
    md_lines.append("")

    md_lines.append("## Parameters")
    if len(collection):
        md_lines.append(f"- Maximum distance: {collection.max_dist:g} km")
        md_lines.append(f"- Directions: {len(collection[0].vectors)}")
    if params is not None:
        md_lines.append(f"- Directions per quadrant: {params.n_directions}")
        md_lines.append(f"- Circle fidelity: {params.circle_fidelity}")
    crs = collection.crs
    crs_name = crs.name if crs is not None else "unknown"
    md_lines.append(f"- Coordinate system: {crs_name} (unit: {unit_name(crs)})")
    md_lines.append(f"- Sites: {len(collection)}")
    md_lines.append("")

    if not len(collection):
        md_lines.append("No sites were calculated.")
        return "\n".join(md_lines)

    md_lines.append("## Site Summary (km)")
    header = "| Site | " + " | ".join(QUADRANT_NAMES) + " | Mean | Median | Most exposed |"
    md_lines.append(header)
    md_lines.append("|" + "---|" * (len(QUADRANT_NAMES) + 4))
    for result in collection:
        s = result.summary()
        quads = " | ".join(f"{s.quadrant_means[q]:.1f}" for q in QUADRANT_NAMES)
        exposed = ", ".join(f"{d:g}°" for d in s.most_exposed)
        md_lines.append(
            f"| {result.name} | {quads} | {s.mean:.1f} | {s.median:.1f} | {exposed} ({s.max_fetch:.1f}) |"
        )
    md_lines.append("")

    md_lines.append("## Obstructed Directions")
    for result in collection:
        blocked = [v for v in result.vectors if v.obstructed]
        md_lines.append(f"- {result.name}: {len(blocked)}/{len(result.vectors)} directions reach land")

    return "\n".join(md_lines)
