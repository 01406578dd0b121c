"""Gap-based coverage classification of ordered segment observations."""

from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Dict, List, Mapping, Set, Tuple

from ..models import Coordinate, SegmentKey
from .distance import DistanceFn, planar_distance


@dataclass(frozen=True, slots=True)
class SegmentVerdict:
    """Coverage outcome for a single segment."""

    key: SegmentKey
    covered: bool
    coordinates: Tuple[Coordinate, ...]
    max_gap: float

    @property
    def observation_count(self) -> int:
        return len(self.coordinates)


def segment_gaps(
    coords: List[Coordinate], distance: DistanceFn = planar_distance
) -> List[float]:
    """Return the distances between consecutive ordered observations."""

    return [distance(a, b) for a, b in zip(coords, coords[1:])]


def classify_segment(
    key: SegmentKey,
    coords: List[Coordinate],
    threshold: float,
    *,
    distance: DistanceFn = planar_distance,
) -> SegmentVerdict:
    """Classify one segment; a gap equal to ``threshold`` still counts as covered."""

    gaps = segment_gaps(coords, distance)
    max_gap = max(gaps) if gaps else 0.0
    return SegmentVerdict(
        key=key,
        covered=all(gap <= threshold for gap in gaps),
        coordinates=tuple(coords),
        max_gap=max_gap,
    )


def classify_segments(
    ordered: Mapping[SegmentKey, List[Coordinate]],
    threshold: float,
    *,
    distance: DistanceFn = planar_distance,
) -> Dict[SegmentKey, SegmentVerdict]:
    """Classify every segment of an ordered observation mapping.

    Segments with fewer than two observations are vacuously covered; callers
    wanting evidence of traversal must enforce a minimum count themselves.

    Raises:
        ValueError: If ``threshold`` is negative or not finite.
    """

    _validate_threshold(threshold)
    return {
        key: classify_segment(key, coords, threshold, distance=distance)
        for key, coords in ordered.items()
    }


def covered_segments(
    ordered: Mapping[SegmentKey, List[Coordinate]],
    threshold: float,
    *,
    distance: DistanceFn = planar_distance,
) -> Set[SegmentKey]:
    """Return the keys of segments traversed without a gap above ``threshold``."""

    verdicts = classify_segments(ordered, threshold, distance=distance)
    return {key for key, verdict in verdicts.items() if verdict.covered}


def _validate_threshold(threshold: float) -> None:
    if not math.isfinite(threshold) or threshold < 0:
        raise ValueError(f"threshold must be a finite, non-negative number (got {threshold!r})")


__all__ = [
    "SegmentVerdict",
    "segment_gaps",
    "classify_segment",
    "classify_segments",
    "covered_segments",
]
