"""Read-only lookup from road-network node id to coordinate."""

from __future__ import annotations

from collections.abc import Mapping
import logging
from pathlib import Path
from typing import IO, Iterator, Union
import xml.etree.ElementTree as ET

from .errors import MissingNodeError
from .models import Coordinate

LOGGER = logging.getLogger(__name__)

PathLike = Union[str, Path]


class NodeCoordinateIndex(Mapping):
    """Immutable node id -> ``(lon, lat)`` mapping shared across requests."""

    __slots__ = ("_coords",)

    def __init__(self, coords: Mapping[int, Coordinate] | None = None) -> None:
        self._coords: dict[int, Coordinate] = {
            int(node_id): (float(coord[0]), float(coord[1]))
            for node_id, coord in (coords or {}).items()
        }

    def __getitem__(self, node_id: int) -> Coordinate:
        return self._coords[node_id]

    def __iter__(self) -> Iterator[int]:
        return iter(self._coords)

    def __len__(self) -> int:
        return len(self._coords)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({len(self._coords)} nodes)"

    def lookup(self, node_id: int) -> Coordinate:
        """Return the coordinate for ``node_id``.

        Raises:
            MissingNodeError: If the node is not in the index.
        """

        try:
            return self._coords[node_id]
        except KeyError:
            raise MissingNodeError(node_id) from None

    @classmethod
    def from_osm_xml(cls, source: Union[PathLike, IO[bytes]]) -> "NodeCoordinateIndex":
        """Load node coordinates from an OSM XML extract.

        Only ``<node>`` elements are read; ways and relations are skipped.
        Nodes lacking an id, lat, or lon attribute are ignored.
        """

        coords: dict[int, Coordinate] = {}
        skipped = 0
        try:
            for _event, elem in ET.iterparse(source, events=("end",)):
                if elem.tag != "node":
                    if elem.tag in {"way", "relation"}:
                        elem.clear()
                    continue
                try:
                    node_id = int(elem.attrib["id"])
                    coords[node_id] = (
                        float(elem.attrib["lon"]),
                        float(elem.attrib["lat"]),
                    )
                except (KeyError, ValueError):
                    skipped += 1
                elem.clear()
        except ET.ParseError as exc:
            raise ValueError(f"Unable to parse OSM XML: {exc}") from exc
        if skipped:
            LOGGER.warning("Skipped %d OSM nodes without usable coordinates", skipped)
        LOGGER.info("Loaded %d node coordinates from OSM XML", len(coords))
        index = cls()
        index._coords = coords
        return index


def resolve_node(node_index: Mapping, node_id: int) -> Coordinate:
    """Look up ``node_id`` in any mapping, raising :class:`MissingNodeError`."""

    if isinstance(node_index, NodeCoordinateIndex):
        return node_index.lookup(node_id)
    try:
        return node_index[node_id]
    except KeyError:
        raise MissingNodeError(node_id) from None


__all__ = ["NodeCoordinateIndex", "resolve_node"]
