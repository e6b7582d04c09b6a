"""
NPC alternates.

Links NPCs that share a display name to each other. Has to run after
every stage that can create an NPC.
"""

from ..context import BuildContext
from ..models import NPC_KIND
from ..pipeline import Stage, StageResult


class NpcAlternatesStage(Stage):
    name = "NpcAlternates"
    requires = ("npcs",)
    after_all = ("npcs",)

    def run(self, ctx: BuildContext) -> StageResult:
        linked = 0
        for name, npcs in ctx.registry.npc_alternates_by_name.items():
            if len(npcs) < 2:
                continue
            for npc in npcs:
                alts = [other.id for other in npcs if other is not npc]
                npc.extra["alts"] = alts
                for alt_id in alts:
                    ctx.references.add_reference(npc, NPC_KIND, alt_id, False)
            linked += 1
            self.logger.debug(f"{len(npcs)} NPCs share the name {name}")

        self.logger.debug(f"{linked} alternate groups linked")
        return StageResult.completed()
