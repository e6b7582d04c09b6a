"""
Item import.

Creates one item per import candidate. The candidate list may repeat an
id; only the first row of an id is imported.
"""

from ...game_data.localize import capitalize_words
from ..context import BuildContext
from ..models import ITEM_KIND
from ..pipeline import Stage, StageResult


class ItemsStage(Stage):
    name = "Items"
    provides = ("items",)

    def run(self, ctx: BuildContext) -> StageResult:
        if not ctx.items_to_import:
            return StageResult.skipped("no items to import")

        registry = ctx.registry
        for row in ctx.items_to_import:
            item_id = row["id"]
            if registry.item(item_id) is not None:
                self.logger.debug(f"Duplicate item row {item_id} ignored")
                continue

            item = registry.create_item(item_id)
            ctx.localizer.column(item, row, "name", "name", capitalize_words)
            item.patch = ctx.patches.get(ITEM_KIND, item_id)
            item.icon = ctx.icons.icon_for_item(item_id)

        return StageResult.completed()
