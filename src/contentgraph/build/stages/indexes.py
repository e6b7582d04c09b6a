"""
Location indices.

Loads the read-only location reference data (map place names, spawn
levels, map markers, static NPC zones) into the location resolver.
Every NPC-creating stage depends on it.
"""

from ...game_data.models import ROW_LEVEL, ROW_MAP, ROW_MAP_MARKER, ROW_NPC_ZONE
from ..context import BuildContext
from ..models import Level, LocationInfo, MapMarker
from ..pipeline import Stage, StageResult


class IndexesStage(Stage):
    name = "Indexes"
    provides = ("locations",)

    def run(self, ctx: BuildContext) -> StageResult:
        locations = ctx.locations

        for row in ctx.data.get_rows(ROW_MAP):
            if row.get("place_name"):
                locations.add_location_info(LocationInfo.from_row(row))

        for row in ctx.data.get_rows(ROW_LEVEL):
            locations.add_level(Level.from_row(row))

        for row in ctx.data.get_rows(ROW_MAP_MARKER):
            # Unlabeled markers cannot name an area
            if row.get("place_name"):
                locations.add_marker(MapMarker.from_row(row))

        for row in ctx.data.get_rows(ROW_NPC_ZONE):
            locations.set_npc_zone(int(row["id"]), int(row["zone"]))

        self.logger.debug(
            f"{len(locations.location_info_by_map_id)} maps, "
            f"{len(locations.level_by_npc_id)} NPC levels, "
            f"{sum(len(m) for m in locations.markers_by_map_id.values())} markers"
        )
        return StageResult.completed()
