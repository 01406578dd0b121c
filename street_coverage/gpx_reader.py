"""Read GPX track points and timestamps for map matching."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
import logging
from typing import List

import gpxpy
import gpxpy.gpx

from .errors import GpxFormatError
from .models import Coordinate

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class GpxTrace:
    """Flattened track: every ``trkpt`` across all tracks and segments."""

    points: List[Coordinate]
    timestamps: List[int]
    name: str | None = None

    def __len__(self) -> int:
        return len(self.points)


def parse_gpx(data: bytes | str) -> GpxTrace:
    """Parse GPX content into ``(lon, lat)`` points and unix timestamps.

    Times without a zone are read as UTC.

    Raises:
        GpxFormatError: If the content is not GPX, a point lacks a time or
            valid coordinates, or the file contains no track points.
    """

    try:
        text = data.decode("utf-8") if isinstance(data, bytes) else data
        gpx = gpxpy.parse(text)
    except UnicodeDecodeError as exc:
        raise GpxFormatError("Upload is not UTF-8 encoded GPX") from exc
    except gpxpy.gpx.GPXXMLSyntaxException as exc:
        raise GpxFormatError(f"Upload is not valid XML: {exc}") from exc
    except (gpxpy.gpx.GPXException, ValueError) as exc:
        raise GpxFormatError(f"Upload is not a readable GPX document: {exc}") from exc

    points: List[Coordinate] = []
    timestamps: List[int] = []
    for track in gpx.tracks:
        for segment in track.segments:
            for point in segment.points:
                if point.time is None:
                    raise GpxFormatError(
                        f"Track point {len(points)} has no timestamp"
                    )
                points.append((float(point.longitude), float(point.latitude)))
                timestamps.append(_unix_seconds(point.time))

    if not points:
        raise GpxFormatError("GPX file contains no track points")

    name = next((track.name for track in gpx.tracks if track.name), None)
    LOGGER.debug(
        "Parsed %d GPX track points from %d track(s)", len(points), len(gpx.tracks)
    )
    return GpxTrace(points=points, timestamps=timestamps, name=name)


def _unix_seconds(moment: datetime) -> int:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return int(moment.timestamp())


__all__ = ["GpxTrace", "parse_gpx"]
