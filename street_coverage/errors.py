"""Central error types used across the application."""

from __future__ import annotations


class CoverageError(RuntimeError):
    """Base error for coverage evaluation failures."""


class MissingNodeError(CoverageError, KeyError):
    """Raised when a segment references a node id absent from the node index.

    The road graph and the map-matching service disagree, so no verdict for
    the request can be trusted.
    """

    def __init__(self, node_id: int) -> None:
        self.node_id = node_id
        super().__init__(f"Node {node_id} is missing from the node coordinate index")

    def __str__(self) -> str:
        return str(self.args[0])


class MapMatchingError(CoverageError):
    """Base error for map-matching service failures."""


class MapMatchingServiceError(MapMatchingError):
    """Raised when the map-matching service cannot be reached or rejects the trace."""


class MapMatchingResponseError(MapMatchingError):
    """Raised when the map-matching response cannot be parsed."""


class GpxFormatError(CoverageError, ValueError):
    """Raised when an upload is not a readable GPX track."""


__all__ = [
    "CoverageError",
    "MissingNodeError",
    "MapMatchingError",
    "MapMatchingServiceError",
    "MapMatchingResponseError",
    "GpxFormatError",
]
