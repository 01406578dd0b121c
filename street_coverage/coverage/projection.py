"""Map classified segment keys back to renderable geometry."""

from __future__ import annotations

from typing import Iterable, List, Mapping, Tuple

from shapely.geometry import LineString

from ..models import Coordinate, SegmentKey
from ..node_index import resolve_node


def project_segment(key: SegmentKey, node_index: Mapping[int, Coordinate]) -> LineString:
    """Return the straight start -> end line for one segment."""

    return LineString(
        [resolve_node(node_index, key.start), resolve_node(node_index, key.end)]
    )


def project_segments(
    keys: Iterable[SegmentKey],
    node_index: Mapping[int, Coordinate],
) -> List[Tuple[SegmentKey, LineString]]:
    """Return ``(key, line)`` pairs sorted by key.

    Raises:
        MissingNodeError: If an endpoint is absent from the index.
    """

    return [(key, project_segment(key, node_index)) for key in sorted(keys)]


__all__ = ["project_segment", "project_segments"]
