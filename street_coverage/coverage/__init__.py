"""Segment coverage engine: aggregate, order, classify, project."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Dict, List, Mapping, Set, Tuple

from shapely.geometry import LineString

from ..models import Coordinate, MatchResponse, SegmentKey
from .aggregation import SegmentObservations, aggregate_segment_observations
from .classification import (
    SegmentVerdict,
    classify_segment,
    classify_segments,
    covered_segments,
    segment_gaps,
)
from .distance import (
    DistanceFn,
    distance_for_metric,
    geodesic_distance,
    haversine_distance,
    planar_distance,
    projected_distance,
)
from .linear_ref import locate_point, locate_points
from .ordering import order_segment_observations
from .projection import project_segment, project_segments

_LOG = logging.getLogger(__name__)


@dataclass(slots=True)
class CoverageReport:
    """Verdicts for every segment touched by one matched trace."""

    verdicts: Dict[SegmentKey, SegmentVerdict]
    node_index: Mapping[int, Coordinate]
    threshold: float

    @property
    def covered(self) -> Set[SegmentKey]:
        return {key for key, verdict in self.verdicts.items() if verdict.covered}

    @property
    def uncovered(self) -> Set[SegmentKey]:
        return {key for key, verdict in self.verdicts.items() if not verdict.covered}

    def lines(self, *, covered: bool = True) -> List[Tuple[SegmentKey, LineString]]:
        """Project covered (or uncovered) segments to two-point lines."""

        keys = self.covered if covered else self.uncovered
        return project_segments(keys, self.node_index)


def evaluate_coverage(
    response: MatchResponse,
    node_index: Mapping[int, Coordinate],
    *,
    threshold: float,
    distance: DistanceFn = planar_distance,
    merge_directions: bool = False,
) -> CoverageReport:
    """Classify every segment of a map-matching result.

    Raises:
        MissingNodeError: If a segment endpoint is not in ``node_index``; no
            partial report is produced.
        ValueError: If ``threshold`` is invalid.
    """

    observations = aggregate_segment_observations(
        response, merge_directions=merge_directions
    )
    ordered = order_segment_observations(observations, node_index)
    verdicts = classify_segments(ordered, threshold, distance=distance)
    covered_count = sum(1 for verdict in verdicts.values() if verdict.covered)
    _LOG.debug(
        "Classified %d segments (%d covered) at threshold %.2f",
        len(verdicts),
        covered_count,
        threshold,
    )
    return CoverageReport(verdicts=verdicts, node_index=node_index, threshold=threshold)


__all__ = [
    "CoverageReport",
    "evaluate_coverage",
    "SegmentObservations",
    "aggregate_segment_observations",
    "order_segment_observations",
    "SegmentVerdict",
    "classify_segment",
    "classify_segments",
    "covered_segments",
    "segment_gaps",
    "DistanceFn",
    "distance_for_metric",
    "geodesic_distance",
    "haversine_distance",
    "planar_distance",
    "projected_distance",
    "locate_point",
    "locate_points",
    "project_segment",
    "project_segments",
]
