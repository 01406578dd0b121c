"""HTTP session factory for map-matching calls."""

from __future__ import annotations

import requests
from requests import Session
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from ..config import (
    HTTP_POOL_CONNECTIONS,
    HTTP_POOL_MAXSIZE,
    OSRM_BACKOFF_FACTOR,
    OSRM_MAX_RETRIES,
)

__all__ = ["create_session"]


def _build_retry() -> Retry:
    # OSRM answers 400 for unmatchable traces; only transient 5xx are retried.
    return Retry(
        total=max(0, OSRM_MAX_RETRIES),
        backoff_factor=OSRM_BACKOFF_FACTOR,
        status_forcelist=[500, 502, 503, 504],
        allowed_methods=["GET"],
        raise_on_status=False,
    )


def create_session() -> Session:
    session = requests.Session()
    adapter = HTTPAdapter(
        pool_connections=HTTP_POOL_CONNECTIONS,
        pool_maxsize=HTTP_POOL_MAXSIZE,
        max_retries=_build_retry(),
    )
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    session.headers.update(
        {
            "Accept-Encoding": "gzip, deflate",
            "Accept": "application/json",
        }
    )
    return session
