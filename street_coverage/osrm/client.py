"""Client for the OSRM ``match`` service."""

from __future__ import annotations

from hashlib import sha256
import logging
from threading import RLock
from typing import Any, Optional, Sequence, Tuple

import requests
from cachetools import TTLCache

from ..config import (
    MATCH_CACHE_SIZE,
    MATCH_CACHE_TTL_SECONDS,
    OSRM_BASE_URL,
    OSRM_PROFILE,
    REQUEST_TIMEOUT,
)
from ..errors import MapMatchingResponseError, MapMatchingServiceError
from ..models import Coordinate, MatchResponse
from .session import create_session

LOGGER = logging.getLogger(__name__)


class OsrmClient:
    """Submit GPS traces to OSRM and parse the matched legs.

    Requests ask for GeoJSON geometries and node annotations so each leg
    carries the network node ids it passed through.
    """

    def __init__(
        self,
        base_url: str = OSRM_BASE_URL,
        profile: str = OSRM_PROFILE,
        *,
        session: Optional[requests.Session] = None,
        timeout: float = REQUEST_TIMEOUT,
        cache_size: int = MATCH_CACHE_SIZE,
        cache_ttl: float = MATCH_CACHE_TTL_SECONDS,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.profile = profile
        self.timeout = timeout
        self._session = session or create_session()
        self._cache: Optional[TTLCache[str, MatchResponse]] = None
        if cache_size > 0:
            self._cache = TTLCache(maxsize=cache_size, ttl=cache_ttl)
        self._cache_lock = RLock()

    def build_match_url(
        self, points: Sequence[Coordinate], timestamps: Sequence[int]
    ) -> str:
        """Return the ``match`` URL for ``(lon, lat)`` points and unix timestamps."""

        _validate_trace(points, timestamps)
        coords = ";".join(f"{lon:.6f},{lat:.6f}" for lon, lat in points)
        times = ";".join(str(int(ts)) for ts in timestamps)
        return (
            f"{self.base_url}/match/v1/{self.profile}/{coords}"
            f"?geometries=geojson&timestamps={times}&annotations=true"
        )

    def match(
        self, points: Sequence[Coordinate], timestamps: Sequence[int]
    ) -> MatchResponse:
        """Map-match a trace.

        Raises:
            ValueError: If the trace is empty or lengths differ.
            MapMatchingServiceError: On transport failures, HTTP errors, or a
                non-``Ok`` OSRM response code.
            MapMatchingResponseError: If the body is not a valid match result.
        """

        url = self.build_match_url(points, timestamps)
        cache_key = _cache_key(url)
        if self._cache is not None:
            with self._cache_lock:
                cached = self._cache.get(cache_key)
            if cached is not None:
                LOGGER.debug("Match cache hit for %d points", len(points))
                return cached

        LOGGER.debug("GET %s (%d points)", self.base_url, len(points))
        try:
            resp = self._session.get(url, timeout=self.timeout)
        except requests.RequestException as exc:
            LOGGER.warning("Map-matching request failed: %s", exc)
            raise MapMatchingServiceError(
                f"Failed to get response from map matching service: {exc}"
            ) from exc

        payload = _decode_payload(resp)
        code = payload.get("code")
        if not resp.ok or code != "Ok":
            detail = _describe_error(payload) or f"status {resp.status_code}"
            LOGGER.warning("Map-matching rejected trace: %s", detail)
            raise MapMatchingServiceError(f"Map matching service error: {detail}")

        result = MatchResponse.from_payload(payload)
        LOGGER.info(
            "Matched %d points into %d matchings",
            len(points),
            len(result.matchings),
        )
        if self._cache is not None:
            with self._cache_lock:
                self._cache[cache_key] = result
        return result

    def clear_cache(self) -> None:
        if self._cache is not None:
            with self._cache_lock:
                self._cache.clear()


def _validate_trace(points: Sequence[Coordinate], timestamps: Sequence[int]) -> None:
    if not points:
        raise ValueError("Cannot match an empty trace")
    if len(points) != len(timestamps):
        raise ValueError("Trace points and timestamps must be the same length")


def _cache_key(url: str) -> str:
    return sha256(url.encode("utf-8")).hexdigest()


def _decode_payload(resp: requests.Response) -> dict[str, Any]:
    try:
        payload = resp.json()
    except ValueError as exc:
        if not resp.ok:
            raise MapMatchingServiceError(
                f"Map matching service error: status {resp.status_code}"
            ) from exc
        raise MapMatchingResponseError(
            "Failed to parse response from map matching service"
        ) from exc
    if not isinstance(payload, dict):
        raise MapMatchingResponseError("Match response is not a JSON object")
    return payload


def _describe_error(payload: dict[str, Any]) -> Optional[str]:
    """Return compact ``code | message`` text from an OSRM error body."""

    parts: Tuple[str, ...] = tuple(
        str(payload[field]) for field in ("code", "message") if payload.get(field)
    )
    return " | ".join(parts) if parts else None


__all__ = ["OsrmClient"]
