"""Dataclasses describing map-matching results and segment identities."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, NamedTuple, Optional, Sequence, Tuple

from .errors import MapMatchingResponseError

# (x, y) pair. OSRM and GeoJSON use (longitude, latitude) order.
Coordinate = Tuple[float, float]


class SegmentKey(NamedTuple):
    """A traversed network edge identified by its two node ids."""

    start: int
    end: int

    def canonical(self) -> "SegmentKey":
        """Return the direction-independent form (smaller node id first)."""

        if self.start <= self.end:
            return self
        return SegmentKey(self.end, self.start)


@dataclass(frozen=True, slots=True)
class Tracepoint:
    """One input GPS point as resolved by the matcher."""

    location: Coordinate
    matchings_index: int
    waypoint_index: int
    name: str = ""
    distance: Optional[float] = None


@dataclass(slots=True)
class Leg:
    """Matched path between two consecutive waypoints of a matching."""

    nodes: List[int]
    distance: Optional[float] = None
    duration: Optional[float] = None

    def segment_keys(self) -> List[SegmentKey]:
        """Return one key per adjacent node pair of the leg path."""

        return [SegmentKey(a, b) for a, b in zip(self.nodes, self.nodes[1:])]


@dataclass(slots=True)
class Matching:
    """A contiguous sub-trace the matcher could snap to the network."""

    legs: List[Leg]
    confidence: Optional[float] = None
    geometry: Optional[Dict[str, Any]] = None


@dataclass(slots=True)
class MatchResponse:
    """Parsed map-matching result.

    ``tracepoints`` is aligned with the submitted trace; points the matcher
    dropped as outliers are ``None``.
    """

    matchings: List[Matching]
    tracepoints: List[Optional[Tracepoint]]
    metadata: Dict[str, Any] = field(default_factory=dict)

    def leg_for(self, tracepoint: Tracepoint) -> Optional[Leg]:
        """Return the leg a tracepoint belongs to, or ``None`` when out of range."""

        m_idx = tracepoint.matchings_index
        w_idx = tracepoint.waypoint_index
        if m_idx < 0 or m_idx >= len(self.matchings):
            return None
        legs = self.matchings[m_idx].legs
        if w_idx < 0 or w_idx >= len(legs):
            return None
        return legs[w_idx]

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "MatchResponse":
        """Build a response from the decoded OSRM ``match`` JSON body.

        Raises:
            MapMatchingResponseError: If required fields are missing or have
                the wrong shape.
        """

        if not isinstance(payload, Mapping):
            raise MapMatchingResponseError("Match response is not a JSON object")
        try:
            matchings = [_parse_matching(raw) for raw in payload.get("matchings") or []]
            tracepoints = [
                _parse_tracepoint(raw) if raw is not None else None
                for raw in payload.get("tracepoints") or []
            ]
        except (KeyError, TypeError, ValueError) as exc:
            raise MapMatchingResponseError(
                f"Malformed match response: {exc}"
            ) from exc
        metadata = {
            key: value
            for key, value in payload.items()
            if key not in {"matchings", "tracepoints"}
        }
        return cls(matchings=matchings, tracepoints=tracepoints, metadata=metadata)


def _parse_matching(raw: Mapping[str, Any]) -> Matching:
    confidence = raw.get("confidence")
    return Matching(
        legs=[_parse_leg(leg) for leg in raw.get("legs") or []],
        confidence=float(confidence) if confidence is not None else None,
        geometry=raw.get("geometry"),
    )


def _parse_leg(raw: Mapping[str, Any]) -> Leg:
    annotation = raw.get("annotation") or {}
    nodes: Sequence[Any] = annotation.get("nodes") or []
    distance = raw.get("distance")
    duration = raw.get("duration")
    return Leg(
        nodes=[int(node) for node in nodes],
        distance=float(distance) if distance is not None else None,
        duration=float(duration) if duration is not None else None,
    )


def _parse_tracepoint(raw: Mapping[str, Any]) -> Tracepoint:
    location = raw["location"]
    if len(location) != 2:
        raise ValueError("Expected lon/lat pair for tracepoint location")
    distance = raw.get("distance")
    return Tracepoint(
        location=(float(location[0]), float(location[1])),
        matchings_index=int(raw["matchings_index"]),
        waypoint_index=int(raw["waypoint_index"]),
        name=str(raw.get("name") or ""),
        distance=float(distance) if distance is not None else None,
    )


__all__ = [
    "Coordinate",
    "SegmentKey",
    "Tracepoint",
    "Leg",
    "Matching",
    "MatchResponse",
]
