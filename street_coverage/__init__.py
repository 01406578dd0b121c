"""Street coverage: which road segments did a GPS trace traverse end to end."""

from .coverage import CoverageReport, evaluate_coverage
from .errors import (
    CoverageError,
    GpxFormatError,
    MapMatchingError,
    MissingNodeError,
)
from .models import MatchResponse, SegmentKey
from .node_index import NodeCoordinateIndex

__all__ = [
    "CoverageReport",
    "evaluate_coverage",
    "CoverageError",
    "GpxFormatError",
    "MapMatchingError",
    "MissingNodeError",
    "MatchResponse",
    "SegmentKey",
    "NodeCoordinateIndex",
]
