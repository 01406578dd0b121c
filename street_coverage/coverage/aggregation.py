"""Attribute matched trace locations to the network edges of their legs.

The matcher only reports which leg a tracepoint resolved to, not which edge
inside the leg's node path. Each location is therefore copied onto every
edge of its leg as a coarse positional hint; ordering and gap detection then
work from geometry rather than leg membership.
"""

from __future__ import annotations

from collections import defaultdict
import logging
from typing import DefaultDict, Dict, List

from ..models import Coordinate, MatchResponse, SegmentKey

LOGGER = logging.getLogger(__name__)

SegmentObservations = Dict[SegmentKey, List[Coordinate]]


def aggregate_segment_observations(
    response: MatchResponse,
    *,
    merge_directions: bool = False,
) -> SegmentObservations:
    """Return the trace locations attributed to each segment of the response.

    Args:
        response: Parsed map-matching result.
        merge_directions: Store ``(v, u)`` under ``(u, v)`` when ``u < v`` so
            both traversal directions count towards the same street.

    Returns:
        Mapping of segment key to locations in tracepoint order. Tracepoints
        naming a matching or leg outside the response are skipped.
    """

    observations: DefaultDict[SegmentKey, List[Coordinate]] = defaultdict(list)
    discarded = 0
    for position, tracepoint in enumerate(response.tracepoints):
        if tracepoint is None:
            continue
        leg = response.leg_for(tracepoint)
        if leg is None:
            discarded += 1
            LOGGER.debug(
                "Discarding tracepoint %d: matching=%d leg=%d out of range",
                position,
                tracepoint.matchings_index,
                tracepoint.waypoint_index,
            )
            continue
        for key in leg.segment_keys():
            if merge_directions:
                key = key.canonical()
            observations[key].append(tracepoint.location)

    if discarded:
        LOGGER.debug("Discarded %d tracepoints with unresolved legs", discarded)
    return dict(observations)


__all__ = ["SegmentObservations", "aggregate_segment_observations"]
