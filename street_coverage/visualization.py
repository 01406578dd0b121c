"""Utilities for visualising segment coverage on a map."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

import folium  # Using folium to build an interactive Leaflet map.
import numpy as np

from .coverage import CoverageReport
from .models import Coordinate
from .node_index import resolve_node

LatLon = Tuple[float, float]
PathLike = Union[str, Path]

_TRACE_COLOR = "#2c7bb6"
_COVERED_COLOR = "#1a9641"
_UNCOVERED_COLOR = "#d73027"


def _to_latlon(coords: Sequence[Coordinate]) -> List[LatLon]:
    """Swap ``(lon, lat)`` pairs into folium's ``(lat, lon)`` order."""

    return [(float(lat), float(lon)) for lon, lat in coords]


def _map_center(report: CoverageReport, trace: Optional[Sequence[Coordinate]]) -> LatLon:
    coords: List[Coordinate] = list(trace or [])
    if not coords:
        for key in report.verdicts:
            coords.append(resolve_node(report.node_index, key.start))
            coords.append(resolve_node(report.node_index, key.end))
    if not coords:
        return (0.0, 0.0)
    array = np.asarray(coords, dtype=float)
    lon, lat = array.mean(axis=0)
    return (float(lat), float(lon))


def create_coverage_map(
    report: CoverageReport,
    *,
    trace: Optional[Sequence[Coordinate]] = None,
    show_uncovered: bool = True,
    output_html_path: Optional[PathLike] = None,
) -> folium.Map:
    """Create an interactive map of covered and uncovered streets.

    Args:
        report: Coverage verdicts for a matched trace.
        trace: Optional raw ``(lon, lat)`` GPS trace drawn underneath.
        show_uncovered: Draw segments with a gap above the threshold in red.
        output_html_path: Optional path to persist the map as an HTML file.

    Returns:
        A :class:`folium.Map` instance containing the overlay.
    """

    folium_map = folium.Map(
        location=_map_center(report, trace), zoom_start=15, control_scale=True
    )
    if trace and len(trace) >= 2:
        folium.PolyLine(
            _to_latlon(trace),
            color=_TRACE_COLOR,
            weight=3,
            opacity=0.5,
            tooltip="GPS trace",
        ).add_to(folium_map)

    layers = [(True, _COVERED_COLOR)]
    if show_uncovered:
        layers.append((False, _UNCOVERED_COLOR))
    for covered, color in layers:
        for key, line in report.lines(covered=covered):
            verdict = report.verdicts[key]
            tooltip = (
                f"{key.start} -> {key.end}: {verdict.observation_count} obs, "
                f"max gap {verdict.max_gap:.1f}"
            )
            folium.PolyLine(
                _to_latlon(list(line.coords)),
                color=color,
                weight=6 if covered else 4,
                opacity=0.9,
                tooltip=tooltip,
            ).add_to(folium_map)

    if output_html_path is not None:
        output_path = Path(output_html_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        folium_map.save(str(output_path))

    return folium_map


__all__ = ["create_coverage_map"]
