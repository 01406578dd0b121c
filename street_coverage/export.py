"""GeoJSON export of classified segments."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Sequence, Tuple, Union

from shapely.geometry import GeometryCollection, LineString, mapping

from .coverage import CoverageReport
from .models import SegmentKey

LOGGER = logging.getLogger(__name__)

PathLike = Union[str, Path]
GeoJSON = Dict[str, Any]


def report_to_feature_collection(
    report: CoverageReport, *, include_uncovered: bool = False
) -> GeoJSON:
    """Return one ``LineString`` feature per covered segment.

    With ``include_uncovered`` the uncovered segments are appended too; the
    ``covered`` property distinguishes them.
    """

    features = [
        _segment_feature(report, key, line, covered=True)
        for key, line in report.lines(covered=True)
    ]
    if include_uncovered:
        features.extend(
            _segment_feature(report, key, line, covered=False)
            for key, line in report.lines(covered=False)
        )
    return {"type": "FeatureCollection", "features": features}


def lines_to_geometry_collection(
    lines: Sequence[Tuple[SegmentKey, LineString]],
) -> GeoJSON:
    """Return the projected lines as a bare GeoJSON ``GeometryCollection``."""

    return mapping(GeometryCollection([line for _key, line in lines]))


def write_geojson(document: GeoJSON, path: PathLike) -> Path:
    """Write a GeoJSON document to ``path``, creating parent folders."""

    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(json.dumps(document), encoding="utf-8")
    LOGGER.info("GeoJSON written to %s", target)
    return target


def _segment_feature(
    report: CoverageReport, key: SegmentKey, line: LineString, *, covered: bool
) -> GeoJSON:
    verdict = report.verdicts[key]
    return {
        "type": "Feature",
        "geometry": mapping(line),
        "properties": {
            "start": key.start,
            "end": key.end,
            "covered": covered,
            "observations": verdict.observation_count,
            "max_gap": verdict.max_gap,
        },
    }


__all__ = [
    "report_to_feature_collection",
    "lines_to_geometry_collection",
    "write_geojson",
]
