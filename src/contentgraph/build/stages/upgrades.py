"""
Item upgrade chains.
"""

from ...game_data.models import ROW_ITEM_UPGRADE
from ..context import BuildContext
from ..pipeline import Stage, StageResult


class UpgradesStage(Stage):
    name = "Upgrades"
    requires = ("items",)

    def run(self, ctx: BuildContext) -> StageResult:
        rows = ctx.data.get_rows(ROW_ITEM_UPGRADE)
        if not rows:
            return StageResult.skipped("no upgrade rows")

        for row in rows:
            ctx.chains.upgrade_item(
                ctx.registry.item(row.get("from")),
                ctx.registry.item(row.get("to")),
            )
        return StageResult.completed()
