"""Tests for parsing map-matching payloads into dataclasses."""

from __future__ import annotations

import pytest

from street_coverage.errors import MapMatchingResponseError
from street_coverage.models import Leg, MatchResponse, SegmentKey, Tracepoint

from conftest import make_match_payload, make_tracepoint


def test_from_payload_parses_legs_and_tracepoints() -> None:
    payload = make_match_payload(
        [[[1, 2, 3], [3, 4]]],
        [make_tracepoint((-111.65, 40.23), 0, 0, name="Main St"), None],
    )

    response = MatchResponse.from_payload(payload)

    assert len(response.matchings) == 1
    assert [leg.nodes for leg in response.matchings[0].legs] == [[1, 2, 3], [3, 4]]
    assert response.matchings[0].confidence == pytest.approx(0.9)
    assert response.tracepoints[0] == Tracepoint(
        location=(-111.65, 40.23),
        matchings_index=0,
        waypoint_index=0,
        name="Main St",
        distance=1.5,
    )
    assert response.tracepoints[1] is None
    assert response.metadata == {"code": "Ok"}


def test_leg_without_annotation_has_no_nodes() -> None:
    payload = {"matchings": [{"legs": [{}]}], "tracepoints": []}

    response = MatchResponse.from_payload(payload)

    assert response.matchings[0].legs[0].nodes == []
    assert response.matchings[0].legs[0].segment_keys() == []


def test_malformed_tracepoint_raises_response_error() -> None:
    payload = make_match_payload([[[1, 2]]], [{"location": [1.0, 2.0]}])

    with pytest.raises(MapMatchingResponseError):
        MatchResponse.from_payload(payload)


def test_non_mapping_payload_rejected() -> None:
    with pytest.raises(MapMatchingResponseError):
        MatchResponse.from_payload(["not", "a", "dict"])  # type: ignore[arg-type]


def test_leg_for_bounds() -> None:
    response = MatchResponse.from_payload(make_match_payload([[[1, 2]]], []))
    inside = Tracepoint((0.0, 0.0), 0, 0)
    bad_leg = Tracepoint((0.0, 0.0), 0, 1)
    bad_matching = Tracepoint((0.0, 0.0), 2, 0)

    assert response.leg_for(inside) is response.matchings[0].legs[0]
    assert response.leg_for(bad_leg) is None
    assert response.leg_for(bad_matching) is None


def test_segment_key_helpers() -> None:
    key = SegmentKey(20, 10)

    assert key.canonical() == SegmentKey(10, 20)
    assert SegmentKey(10, 20).canonical() == SegmentKey(10, 20)
    assert Leg(nodes=[1, 2, 3]).segment_keys() == [SegmentKey(1, 2), SegmentKey(2, 3)]
