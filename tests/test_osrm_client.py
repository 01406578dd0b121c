"""Tests for the OSRM match client using a fake HTTP session."""

from __future__ import annotations

from typing import Any, List

import pytest
import requests

from street_coverage.errors import MapMatchingResponseError, MapMatchingServiceError
from street_coverage.osrm import OsrmClient

from conftest import make_match_payload, make_tracepoint

POINTS = [(-111.65, 40.23), (-111.6499, 40.2301)]
TIMESTAMPS = [1672531200, 1672531205]


class FakeResponse:
    def __init__(self, status_code: int = 200, payload: Any = None, text: str = "") -> None:
        self.status_code = status_code
        self._payload = payload
        self.text = text

    @property
    def ok(self) -> bool:
        return self.status_code < 400

    def json(self) -> Any:
        if self._payload is None:
            raise ValueError("No JSON object could be decoded")
        return self._payload


class FakeSession:
    def __init__(self, response: Any) -> None:
        self.response = response
        self.calls: List[str] = []

    def get(self, url: str, timeout: float) -> FakeResponse:
        self.calls.append(url)
        if isinstance(self.response, Exception):
            raise self.response
        return self.response


def _ok_payload() -> dict:
    return make_match_payload(
        [[[1, 2, 3]]],
        [make_tracepoint(POINTS[0], 0, 0), make_tracepoint(POINTS[1], 0, 1)],
    )


def test_build_match_url() -> None:
    client = OsrmClient("http://osrm.test/", "foot", session=FakeSession(None))

    url = client.build_match_url(POINTS, TIMESTAMPS)

    assert url == (
        "http://osrm.test/match/v1/foot/-111.650000,40.230000;-111.649900,40.230100"
        "?geometries=geojson&timestamps=1672531200;1672531205&annotations=true"
    )


@pytest.mark.parametrize(
    "points, timestamps",
    [([], []), (POINTS, TIMESTAMPS[:1])],
)
def test_invalid_trace_rejected(points, timestamps) -> None:
    client = OsrmClient(session=FakeSession(None))

    with pytest.raises(ValueError):
        client.match(points, timestamps)


def test_match_parses_response_and_caches() -> None:
    session = FakeSession(FakeResponse(payload=_ok_payload()))
    client = OsrmClient("http://osrm.test", session=session, cache_size=4)

    first = client.match(POINTS, TIMESTAMPS)
    second = client.match(POINTS, TIMESTAMPS)

    assert first is second
    assert len(session.calls) == 1
    assert first.matchings[0].legs[0].nodes == [1, 2, 3]

    client.clear_cache()
    client.match(POINTS, TIMESTAMPS)
    assert len(session.calls) == 2


def test_cache_disabled() -> None:
    session = FakeSession(FakeResponse(payload=_ok_payload()))
    client = OsrmClient("http://osrm.test", session=session, cache_size=0)

    client.match(POINTS, TIMESTAMPS)
    client.match(POINTS, TIMESTAMPS)

    assert len(session.calls) == 2


def test_no_match_code_raises_service_error() -> None:
    payload = {"code": "NoMatch", "message": "Could not match the trace."}
    client = OsrmClient(session=FakeSession(FakeResponse(400, payload)))

    with pytest.raises(MapMatchingServiceError, match="NoMatch"):
        client.match(POINTS, TIMESTAMPS)


def test_transport_failure_raises_service_error() -> None:
    client = OsrmClient(session=FakeSession(requests.ConnectionError("refused")))

    with pytest.raises(MapMatchingServiceError):
        client.match(POINTS, TIMESTAMPS)


def test_server_error_without_json_raises_service_error() -> None:
    client = OsrmClient(session=FakeSession(FakeResponse(502, None, "Bad gateway")))

    with pytest.raises(MapMatchingServiceError, match="status 502"):
        client.match(POINTS, TIMESTAMPS)


def test_undecodable_body_raises_response_error() -> None:
    client = OsrmClient(session=FakeSession(FakeResponse(200, None, "<html>")))

    with pytest.raises(MapMatchingResponseError):
        client.match(POINTS, TIMESTAMPS)


def test_malformed_ok_body_raises_response_error() -> None:
    payload = {"code": "Ok", "matchings": [], "tracepoints": [{"location": [0, 0]}]}
    client = OsrmClient(session=FakeSession(FakeResponse(200, payload)))

    with pytest.raises(MapMatchingResponseError):
        client.match(POINTS, TIMESTAMPS)
