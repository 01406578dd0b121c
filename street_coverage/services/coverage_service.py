"""Street coverage service.

Runs one request end to end: read the GPX upload, map-match it, classify
every matched segment, and prepare GeoJSON for the renderer. The coverage
engine itself lives in `street_coverage.coverage` and stays free of I/O.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
import logging
from typing import Any, Dict, Mapping, Optional, Protocol, Sequence

from ..config import (
    COVERAGE_DISTANCE_METRIC,
    COVERAGE_GAP_THRESHOLD_M,
    COVERAGE_MERGE_DIRECTIONS,
    COVERAGE_MIN_OBSERVATIONS,
)
from ..coverage import (
    CoverageReport,
    DistanceFn,
    distance_for_metric,
    evaluate_coverage,
    geodesic_distance,
)
from ..errors import MissingNodeError
from ..export import report_to_feature_collection
from ..gpx_reader import GpxTrace, parse_gpx
from ..models import Coordinate, MatchResponse


class Matcher(Protocol):
    def match(
        self, points: Sequence[Coordinate], timestamps: Sequence[int]
    ) -> MatchResponse: ...


@dataclass(slots=True)
class CoverageServiceConfig:
    matcher: Matcher
    node_index: Mapping[int, Coordinate]
    threshold: float = COVERAGE_GAP_THRESHOLD_M
    distance_metric: str = COVERAGE_DISTANCE_METRIC
    merge_directions: bool = COVERAGE_MERGE_DIRECTIONS
    min_observations: int = COVERAGE_MIN_OBSERVATIONS
    include_uncovered: bool = False
    logger: logging.Logger | None = None


@dataclass(slots=True)
class CoverageOutcome:
    trace: GpxTrace
    report: CoverageReport
    geojson: Dict[str, Any] = field(default_factory=dict)


class CoverageService:
    def __init__(self, config: CoverageServiceConfig):
        self.config = config
        self._log = self.config.logger or logging.getLogger(self.__class__.__name__)

    def process_gpx(self, data: bytes | str) -> CoverageOutcome:
        """Return coverage for a GPX upload.

        Raises:
            GpxFormatError: If the upload is not a timestamped GPX track.
            MapMatchingError: If the matcher fails or returns garbage.
            MissingNodeError: If the node index disagrees with the matcher.
        """

        trace = parse_gpx(data)
        self._log.info(
            "Matching trace %s with %d points", trace.name or "<unnamed>", len(trace)
        )
        response = self.config.matcher.match(trace.points, trace.timestamps)
        report = self.evaluate(response, reference_points=trace.points)
        geojson = report_to_feature_collection(
            report, include_uncovered=self.config.include_uncovered
        )
        return CoverageOutcome(trace=trace, report=report, geojson=geojson)

    def evaluate(
        self,
        response: MatchResponse,
        *,
        reference_points: Optional[Sequence[Coordinate]] = None,
    ) -> CoverageReport:
        """Classify a match result, applying the minimum-observation policy."""

        distance = self._resolve_distance(
            reference_points or _tracepoint_locations(response)
        )
        try:
            report = evaluate_coverage(
                response,
                self.config.node_index,
                threshold=self.config.threshold,
                distance=distance,
                merge_directions=self.config.merge_directions,
            )
        except MissingNodeError as exc:
            self._log.error(
                "Node index and map matcher disagree: node %s unresolved", exc.node_id
            )
            raise
        report = self._apply_min_observations(report)
        self._log.info(
            "Classified %d segments: %d covered, %d with gaps",
            len(report.verdicts),
            len(report.covered),
            len(report.uncovered),
        )
        return report

    def _resolve_distance(self, points: Sequence[Coordinate]) -> DistanceFn:
        metric = self.config.distance_metric
        if not points and metric.strip().lower() == "projected":
            # No located tracepoint to choose a UTM zone from.
            self._log.debug("No reference points for projected metric, using geodesic")
            return geodesic_distance
        return distance_for_metric(metric, points)

    def _apply_min_observations(self, report: CoverageReport) -> CoverageReport:
        minimum = self.config.min_observations
        if minimum <= 0:
            return report
        demoted = 0
        verdicts = dict(report.verdicts)
        for key, verdict in report.verdicts.items():
            if verdict.covered and verdict.observation_count < minimum:
                verdicts[key] = replace(verdict, covered=False)
                demoted += 1
        if demoted:
            self._log.debug(
                "Marked %d segments uncovered with fewer than %d observations",
                demoted,
                minimum,
            )
        return CoverageReport(
            verdicts=verdicts, node_index=report.node_index, threshold=report.threshold
        )


def _tracepoint_locations(response: MatchResponse) -> list[Coordinate]:
    return [tp.location for tp in response.tracepoints if tp is not None]


__all__ = [
    "CoverageOutcome",
    "CoverageService",
    "CoverageServiceConfig",
    "Matcher",
]
