"""Sort each segment's observations along the segment's reference line."""

from __future__ import annotations

from typing import Dict, List, Mapping

import numpy as np

from ..models import Coordinate, SegmentKey
from ..node_index import resolve_node
from .linear_ref import locate_points


def order_segment_observations(
    observations: Mapping[SegmentKey, List[Coordinate]],
    node_index: Mapping[int, Coordinate],
) -> Dict[SegmentKey, List[Coordinate]]:
    """Return a copy of ``observations`` with each list sorted start -> end.

    Locations are ordered by their linear-referenced fraction along the
    infinite line through the segment's start and end node coordinates, so
    observations lying beyond either endpoint keep their spatial order. Ties
    and degenerate segments (coincident endpoints) keep their existing order.

    Raises:
        MissingNodeError: If either endpoint of any segment is not indexed.
    """

    ordered: Dict[SegmentKey, List[Coordinate]] = {}
    for key, coords in observations.items():
        start = resolve_node(node_index, key.start)
        end = resolve_node(node_index, key.end)
        ordered[key] = _sort_along(start, end, coords)
    return ordered


def _sort_along(
    start: Coordinate, end: Coordinate, coords: List[Coordinate]
) -> List[Coordinate]:
    if len(coords) < 2:
        return list(coords)
    fractions = locate_points(start, end, coords, clamp=False)
    if fractions is None:
        return list(coords)
    order = np.argsort(fractions, kind="stable")
    return [coords[int(idx)] for idx in order]


__all__ = ["order_segment_observations"]
