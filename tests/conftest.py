"""Global pytest fixtures & helpers.

Adds project root to path and provides reusable map-matching payloads and
node indexes so coverage tests do not rebuild them in every file.
"""
from __future__ import annotations

import os
import sys
from typing import Any, Dict, List, Optional, Sequence, Tuple

import pytest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from street_coverage.models import MatchResponse
from street_coverage.node_index import NodeCoordinateIndex


# --- Factory helpers -------------------------------------------------
def make_tracepoint(location, matchings_index=0, waypoint_index=0, name=""):
    return {
        "location": list(location),
        "matchings_index": matchings_index,
        "waypoint_index": waypoint_index,
        "name": name,
        "distance": 1.5,
    }


def make_match_payload(
    matchings: Sequence[Sequence[Sequence[int]]],
    tracepoints: Sequence[Optional[Dict[str, Any]]],
) -> Dict[str, Any]:
    """Build an OSRM-shaped ``match`` body from per-matching leg node paths."""

    return {
        "code": "Ok",
        "matchings": [
            {
                "confidence": 0.9,
                "geometry": {"type": "LineString", "coordinates": []},
                "legs": [
                    {"annotation": {"nodes": list(nodes)}, "distance": 10.0, "duration": 5.0}
                    for nodes in legs
                ],
            }
            for legs in matchings
        ],
        "tracepoints": list(tracepoints),
    }


def make_response(
    matchings: Sequence[Sequence[Sequence[int]]],
    tracepoints: Sequence[Optional[Tuple[Tuple[float, float], int, int]]],
) -> MatchResponse:
    """Shorthand: tracepoints given as ``(location, matching, leg)`` or ``None``."""

    raw: List[Optional[Dict[str, Any]]] = [
        None if tp is None else make_tracepoint(tp[0], tp[1], tp[2]) for tp in tracepoints
    ]
    return MatchResponse.from_payload(make_match_payload(matchings, raw))


# --- Fixtures --------------------------------------------------------
@pytest.fixture
def planar_index() -> NodeCoordinateIndex:
    """Straight east-running street 10 -> 20 -> 30 -> 40 in planar units."""

    return NodeCoordinateIndex(
        {
            10: (0.0, 0.0),
            20: (10.0, 0.0),
            30: (20.0, 0.0),
            40: (30.0, 0.0),
        }
    )


@pytest.fixture
def sample_gpx() -> bytes:
    return b"""<?xml version="1.0" encoding="UTF-8"?>
<gpx version="1.1" creator="test" xmlns="http://www.topografix.com/GPX/1/1">
  <trk>
    <name>Morning Walk</name>
    <trkseg>
      <trkpt lat="40.2300" lon="-111.6500"><ele>1400</ele><time>2023-01-01T00:00:00Z</time></trkpt>
      <trkpt lat="40.2301" lon="-111.6500"><time>2023-01-01T00:00:05Z</time></trkpt>
    </trkseg>
    <trkseg>
      <trkpt lat="40.2302" lon="-111.6501"><time>2023-01-01T00:00:10.000Z</time></trkpt>
    </trkseg>
  </trk>
</gpx>
"""
