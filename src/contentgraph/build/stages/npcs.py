"""
NPC import.

Creates every import candidate NPC, resolving its location on the way.
"""

from ..context import BuildContext
from ..pipeline import Stage, StageResult


class NpcsStage(Stage):
    name = "NPCs"
    provides = ("npcs",)
    requires = ("locations",)

    def run(self, ctx: BuildContext) -> StageResult:
        if not ctx.npcs_to_import:
            return StageResult.skipped("no NPCs to import")

        created = 0
        for row in ctx.npcs_to_import:
            if ctx.registry.get_or_create_npc(row) is not None:
                created += 1

        self.logger.debug(f"{created} NPCs registered")
        return StageResult.completed()
