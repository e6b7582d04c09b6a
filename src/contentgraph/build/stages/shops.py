"""
Shops.

Gil shops make their NPCs vendors of the listed items. Special shops are
trade shops whose entries pair reward items with their currency cost.
Both may create NPCs that only appear as shop keepers.
"""

from typing import Optional, Union

from ...game_data.models import ROW_NPC, ROW_SHOP, ROW_SPECIAL_SHOP
from ..context import BuildContext
from ..models import ITEM_KIND, Npc, SourceShop
from ..pipeline import Stage, StageResult


def _shop_npc(ctx: BuildContext, npc_ref: Union[int, str]) -> Optional[Npc]:
    if isinstance(npc_ref, str):
        raw_npc = ctx.data.get_row_by_name(ROW_NPC, npc_ref)
    else:
        raw_npc = ctx.data.get_row(ROW_NPC, npc_ref)
    if raw_npc is None:
        return None
    return ctx.registry.get_or_create_npc(raw_npc)


class GilShopsStage(Stage):
    name = "Shops"
    provides = ("npcs", "shops")
    requires = ("items", "locations")

    def run(self, ctx: BuildContext) -> StageResult:
        rows = ctx.data.get_rows(ROW_SHOP)
        if not rows:
            return StageResult.skipped("no shops")

        for row in rows:
            source_shop = SourceShop.from_row(row)
            for npc_ref in source_shop.npc_ids:
                npc = _shop_npc(ctx, npc_ref)
                if npc is None:
                    self.logger.debug(f"Shop {source_shop.id}: no NPC {npc_ref}")
                    continue
                ctx.shops.create_npc_gil_shop(source_shop, npc)

        return StageResult.completed()


class SpecialShopsStage(Stage):
    name = "SpecialShops"
    provides = ("npcs", "shops")
    requires = ("items", "locations")

    def run(self, ctx: BuildContext) -> StageResult:
        rows = ctx.data.get_rows(ROW_SPECIAL_SHOP)
        if not rows:
            return StageResult.skipped("no special shops")

        for row in rows:
            source_shop = SourceShop.from_row(row)
            for npc_ref in source_shop.npc_ids:
                npc = _shop_npc(ctx, npc_ref)
                if npc is None:
                    continue
                self._create_trade_shop(ctx, source_shop, npc)

        return StageResult.completed()

    def _create_trade_shop(self, ctx: BuildContext, source_shop: SourceShop, npc: Npc) -> None:
        shop = ctx.shops.create_shop(source_shop.name, npc, True)
        if shop is None:
            return

        for listing in source_shop.listings:
            # A trade is only useful if everything in it is in the graph
            listed = list(listing.rewards) + list(listing.costs)
            if any(ctx.registry.item(i.item_id) is None for i in listed):
                self.logger.debug(f"Skipping listing of {source_shop.name} with unknown items")
                continue

            shop.entries.append(ctx.shops.create_shop_entry(listing.costs, listing.rewards))
            for reward in listing.rewards:
                ctx.references.add_reference(npc, ITEM_KIND, reward.item_id, False)
