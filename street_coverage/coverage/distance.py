"""Distance functions used to measure gaps between observations.

Coordinates are ``(lon, lat)`` for everything except :func:`planar_distance`,
which works in whatever units the input uses.
"""

from __future__ import annotations

import math
from typing import Callable, Optional, Sequence

import numpy as np
from pyproj import CRS, Geod, Transformer

from ..models import Coordinate

DistanceFn = Callable[[Coordinate, Coordinate], float]

EARTH_RADIUS_M = 6_371_008.8

_WGS84 = Geod(ellps="WGS84")


def planar_distance(a: Coordinate, b: Coordinate) -> float:
    """Euclidean distance in input coordinate units."""

    return math.hypot(b[0] - a[0], b[1] - a[1])


def haversine_distance(a: Coordinate, b: Coordinate) -> float:
    """Great-circle distance in metres on a spherical earth."""

    lon1, lat1 = math.radians(a[0]), math.radians(a[1])
    lon2, lat2 = math.radians(b[0]), math.radians(b[1])
    dlat = lat2 - lat1
    dlon = lon2 - lon1
    h = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    return 2 * EARTH_RADIUS_M * math.asin(min(1.0, math.sqrt(h)))


def geodesic_distance(a: Coordinate, b: Coordinate) -> float:
    """Distance in metres along the WGS84 ellipsoid."""

    _fwd, _back, dist = _WGS84.inv(a[0], a[1], b[0], b[1])
    return float(dist)


def projected_distance(points: Sequence[Coordinate]) -> DistanceFn:
    """Return a planar distance in metres within a UTM zone centred on ``points``."""

    transformer = build_local_transformer(points)

    def _distance(a: Coordinate, b: Coordinate) -> float:
        xs, ys = transformer.transform([a[0], b[0]], [a[1], b[1]])
        return math.hypot(xs[1] - xs[0], ys[1] - ys[0])

    return _distance


def build_local_transformer(points: Sequence[Coordinate]) -> Transformer:
    """Build a lon/lat -> local UTM transformer centred on the provided coordinates."""

    if not points:
        raise ValueError("Cannot build a projection for an empty point collection")
    mean_lon = float(np.mean([pt[0] for pt in points]))
    mean_lat = float(np.mean([pt[1] for pt in points]))
    zone = int((mean_lon + 180.0) // 6.0) + 1
    zone = max(1, min(zone, 60))
    epsg = 32600 + zone if mean_lat >= 0 else 32700 + zone
    return Transformer.from_crs(CRS.from_epsg(4326), CRS.from_epsg(epsg), always_xy=True)


_METRICS = {
    "planar": planar_distance,
    "haversine": haversine_distance,
    "geodesic": geodesic_distance,
}


def distance_for_metric(
    name: str,
    reference_points: Optional[Sequence[Coordinate]] = None,
) -> DistanceFn:
    """Resolve a configured metric name to a distance function.

    ``projected`` needs ``reference_points`` to choose its UTM zone.
    """

    normalized = name.strip().lower()
    if normalized == "projected":
        if not reference_points:
            raise ValueError("The projected metric requires reference points")
        return projected_distance(reference_points)
    try:
        return _METRICS[normalized]
    except KeyError:
        known = ", ".join(sorted([*_METRICS, "projected"]))
        raise ValueError(f"Unknown distance metric '{name}' (expected one of: {known})") from None


__all__ = [
    "DistanceFn",
    "planar_distance",
    "haversine_distance",
    "geodesic_distance",
    "projected_distance",
    "build_local_transformer",
    "distance_for_metric",
]
