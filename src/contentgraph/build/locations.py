"""
NPC location resolution.

Resolves an NPC's zone and map coordinates from, in order of preference:

1. its spawn level, when the level's map has a known place name;
2. the static NPC -> zone table;
3. the secondary index, whose coordinates are flagged as approximate.

The first source that applies wins. Separately, an NPC with a spawn level
gets the place name of the closest map marker as its area.
"""

import logging
import math
from decimal import Decimal, ROUND_HALF_EVEN
from typing import Any, Dict, List, Optional

import orjson

from ..game_data.secondary_index import SecondaryIndex
from ..game_data.models import RawRow
from .models import Level, LocationInfo, MapMarker, Npc
from .references import ReferenceGraph

COORDINATE_QUANTUM = Decimal("0.01")


def round_coordinate(value: float) -> float:
    """Round a map coordinate to 2 decimal places.

    Rounds the shortest decimal representation of ``value`` half-to-even,
    so 12.345 -> 12.34 and 12.355 -> 12.36 regardless of how the float is
    stored in binary.
    """
    return float(Decimal(repr(value)).quantize(COORDINATE_QUANTUM, rounding=ROUND_HALF_EVEN))


def parse_coordinate_blob(blob: str) -> Optional[List[float]]:
    """Extract the first coordinate pair of a serialized secondary index blob.

    The blob looks like ``{"coordinate": {"<zone>": [[x, y], ...]}}``.
    Returns None when the blob holds no usable pair.
    """
    try:
        data = orjson.loads(blob)
    except orjson.JSONDecodeError:
        return None
    if not isinstance(data, dict):
        return None

    coordinate = data.get("coordinate")  # type: ignore
    if not isinstance(coordinate, dict) or not coordinate:
        return None

    # First zone, first point
    points = next(iter(coordinate.values()))  # type: ignore
    if not isinstance(points, list) or not points:
        return None
    first = points[0]  # type: ignore
    if not isinstance(first, list) or len(first) < 2:  # type: ignore
        return None

    try:
        return [float(first[0]), float(first[1])]  # type: ignore
    except (TypeError, ValueError):
        return None


class LocationResolver:
    """Resolves NPC zones, coordinates and nearest map markers.

    Holds the read-only location reference data registered by the index
    stage and records location references for every zone or area it
    assigns.
    """

    def __init__(self, references: ReferenceGraph, secondary_index: Optional[SecondaryIndex] = None):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.references = references
        self.secondary_index = secondary_index if secondary_index is not None else SecondaryIndex()

        self.location_info_by_map_id: Dict[int, LocationInfo] = {}
        self.level_by_npc_id: Dict[int, Level] = {}
        self.markers_by_map_id: Dict[int, List[MapMarker]] = {}
        self.npc_zone_by_npc_id: Dict[int, int] = {}

    # === REFERENCE DATA ===

    def add_location_info(self, info: LocationInfo) -> None:
        self.location_info_by_map_id[info.map_id] = info

    def add_level(self, level: Level) -> None:
        """Register a spawn level; the first level bound to an object wins."""
        if level.object_id is None:
            return
        self.level_by_npc_id.setdefault(level.object_id, level)

    def add_marker(self, marker: MapMarker) -> None:
        self.markers_by_map_id.setdefault(marker.map_id, []).append(marker)

    def set_npc_zone(self, npc_id: int, zone_id: int) -> None:
        self.npc_zone_by_npc_id[npc_id] = zone_id

    # === RESOLUTION ===

    @staticmethod
    def get_coords(level: Level) -> List[float]:
        """Return the level point rounded to map precision."""
        return [round_coordinate(level.x), round_coordinate(level.y)]

    def resolve_npc_location(self, npc: Npc, raw_npc: RawRow) -> Optional[Level]:
        """Set zone and coordinates on ``npc``.

        Returns the NPC's spawn level when one is registered, whether or not
        its map was known, so the caller can resolve the nearest marker.
        """
        npc_id: Any = raw_npc["id"]
        level = self.level_by_npc_id.get(npc_id)
        location_info = (
            self.location_info_by_map_id.get(level.map_id) if level is not None else None
        )

        if level is not None and location_info is not None:
            npc.zoneid = location_info.place_name_id
            npc.coords = self.get_coords(level)
            self.references.add_location_reference(location_info.place_name_id)
        elif npc_id in self.npc_zone_by_npc_id:
            zone_id = self.npc_zone_by_npc_id[npc_id]
            npc.zoneid = zone_id
            self.references.add_location_reference(zone_id)
        else:
            blob = self.secondary_index.get(npc_id)
            if blob is not None:
                coords = parse_coordinate_blob(blob)
                if coords is not None:
                    npc.coords = coords
                    npc.approx = True
                else:
                    self.logger.warning(f"Unusable secondary index entry for NPC {npc_id}")

        return level

    def resolve_npc_area(self, npc: Npc, level: Level) -> Optional[MapMarker]:
        """Set ``npc.areaid`` from the marker closest to its spawn level."""
        marker = self.find_closest_marker(level.map_id, level.x, level.y)
        if marker is not None:
            npc.areaid = marker.place_name_id
            self.references.add_location_reference(marker.place_name_id)
        return marker

    def find_closest_marker(self, map_id: int, x: float, y: float) -> Optional[MapMarker]:
        """Return the marker of a map closest to a point.

        Distance is planar Euclidean in map coordinates. On a tie the marker
        registered first wins. Returns None when the map has no markers.
        """
        closest: Optional[MapMarker] = None
        closest_distance = math.inf
        for marker in self.markers_by_map_id.get(map_id, []):
            distance = math.hypot(marker.x - x, marker.y - y)
            if distance < closest_distance:
                closest = marker
                closest_distance = distance
        return closest
