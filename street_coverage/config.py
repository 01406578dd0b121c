"""Central configuration for the street coverage engine.

All values are constants imported by the rest of the package. Adjust as needed
for your environment. Every setting can be overridden through an environment
variable of the same name (optionally via a local `.env`).
"""

from __future__ import annotations

import importlib
import os


def _env_float(key: str, default: float) -> float:
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _env_int(key: str, default: int) -> int:
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _env_bool(key: str, default: bool) -> bool:
    value = os.getenv(key)
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "on"}:
        return True
    if normalized in {"0", "false", "no", "off"}:
        return False
    return default


def _env_str(key: str, default: str) -> str:
    value = os.getenv(key)
    if value is None or not value.strip():
        return default
    return value.strip()


# Load .env variables when python-dotenv is available.
_load_dotenv = None
try:
    _dotenv_mod = importlib.import_module("dotenv")
    _load_dotenv = getattr(_dotenv_mod, "load_dotenv", None)
except ImportError:
    _load_dotenv = None

if callable(_load_dotenv):
    # Load .env from the current directory or any parent folder.
    _load_dotenv()


# ---------------------------------------------------------------------------
# Map-matching service (OSRM)
# ---------------------------------------------------------------------------
# Base URL of the OSRM HTTP server, without a trailing slash.
OSRM_BASE_URL = _env_str("OSRM_BASE_URL", "http://localhost:5000").rstrip("/")

# Routing profile compiled into the OSRM dataset (foot, bicycle, car, ...).
OSRM_PROFILE = _env_str("OSRM_PROFILE", "foot")

# Request timeout in seconds. Long traces produce long URLs and slow matches.
REQUEST_TIMEOUT = _env_int("REQUEST_TIMEOUT", 30)

# HTTP session pool sizes.
HTTP_POOL_CONNECTIONS = _env_int("HTTP_POOL_CONNECTIONS", 10)
HTTP_POOL_MAXSIZE = _env_int("HTTP_POOL_MAXSIZE", 10)

# Retry/backoff behaviour for transient OSRM failures (5xx, connection resets).
OSRM_MAX_RETRIES = _env_int("OSRM_MAX_RETRIES", 3)
OSRM_BACKOFF_FACTOR = _env_float("OSRM_BACKOFF_FACTOR", 1.0)

# In-memory cache of successful match responses keyed by the request.
# Set MATCH_CACHE_SIZE to 0 to disable.
MATCH_CACHE_SIZE = _env_int("MATCH_CACHE_SIZE", 32)
MATCH_CACHE_TTL_SECONDS = _env_int("MATCH_CACHE_TTL_SECONDS", 3600)


# ---------------------------------------------------------------------------
# Coverage classification
# ---------------------------------------------------------------------------
# Largest allowed gap between consecutive observations along a segment. The
# unit must match COVERAGE_DISTANCE_METRIC (metres for geodesic/haversine,
# input coordinate units for planar).
COVERAGE_GAP_THRESHOLD_M = _env_float("COVERAGE_GAP_THRESHOLD_M", 15.0)

# One of: planar, haversine, geodesic, projected.
COVERAGE_DISTANCE_METRIC = _env_str("COVERAGE_DISTANCE_METRIC", "geodesic").lower()

# Treat (u, v) and (v, u) as the same street when True.
COVERAGE_MERGE_DIRECTIONS = _env_bool("COVERAGE_MERGE_DIRECTIONS", False)

# Segments with fewer observations than this are reported as not covered.
# 0 keeps the vacuous "no gap observed" behaviour for empty segments.
COVERAGE_MIN_OBSERVATIONS = _env_int("COVERAGE_MIN_OBSERVATIONS", 0)
