"""
Shop construction.

Shops hang off NPCs and are deduplicated by name per NPC. Gil shops list
plain item ids and link items to their vendors; trade shops list
ShopEntry records built by the pure constructors at the bottom.
"""

import logging
from typing import Callable, Iterable, Optional

from .models import (
    ITEM_KIND,
    NPC_KIND,
    Npc,
    Shop,
    ShopEntry,
    ShopListingItem,
    SourceListingItem,
    SourceShop,
)
from .references import ReferenceGraph
from .registry import EntityRegistry

UNKNOWN_SHOP_NAME = "Unknown Shop"
DEFAULT_GIL_SHOP_NAME = "Purchase Items"


class ShopBuilder:
    """Creates shops and shop entries on registry NPCs."""

    def __init__(
        self,
        registry: EntityRegistry,
        references: ReferenceGraph,
        item_name_lookup: Optional[Callable[[object], str]] = None,
    ):
        """Initialize the builder.

        Args:
            registry: Entity registry holding items and NPCs
            references: Reference graph receiving vendor references
            item_name_lookup: Returns the source name of an item id; only
                used for skip diagnostics.
        """
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.registry = registry
        self.references = references
        self.item_name_lookup = item_name_lookup

    def create_shop(self, name: str, npc: Optional[Npc], is_trade: bool) -> Optional[Shop]:
        """Create a shop, attached to ``npc`` when one is given.

        Returns None when the NPC already has a shop with exactly this name.
        """
        if npc is not None and npc.shops:
            for existing in npc.shops:
                if existing.name == name:
                    self.logger.debug(f"Skipping duplicate shop name {name} on NPC {npc.id}")
                    return None

        shop = Shop(name=name, trade=is_trade)

        if npc is not None:
            if npc.shops is None:
                npc.shops = []
            npc.shops.append(shop)

        return shop

    def create_npc_gil_shop(self, source_shop: SourceShop, npc: Npc) -> Optional[Shop]:
        """Create a purchase shop on ``npc`` and make the NPC a vendor of its items.

        Reward items missing from the registry are skipped. Returns None if
        the shop is a duplicate on this NPC.
        """
        name = DEFAULT_GIL_SHOP_NAME if source_shop.name == UNKNOWN_SHOP_NAME else source_shop.name
        shop = self.create_shop(name, npc, False)
        if shop is None:
            return None

        for reward in source_shop.reward_items:
            item = self.registry.item(reward.item_id)
            if item is None:
                source_name = self.item_name_lookup(reward.item_id) if self.item_name_lookup else ""
                if source_name and source_name.strip():
                    self.logger.info(f"Skipping shop item: {source_name}")
                continue

            if npc.id not in item.vendors:
                item.vendors.append(npc.id)
                self.references.add_reference(item, NPC_KIND, npc.id, True)

            shop.entries.append(reward.item_id)
            self.references.add_reference(npc, ITEM_KIND, reward.item_id, False)

        return shop

    def create_shop_entry(
        self,
        currency: Iterable[SourceListingItem],
        items: Iterable[SourceListingItem],
    ) -> ShopEntry:
        """Build a trade record from source listing items."""
        return ShopEntry(
            item=[self.create_shop_listing_item(i) for i in items],
            currency=[self.create_shop_listing_item(c) for c in currency],
        )

    @staticmethod
    def create_shop_listing_item(listing_item: SourceListingItem) -> ShopListingItem:
        """Build one side of a trade record."""
        return ShopListingItem(
            id=listing_item.item_id,
            amount=listing_item.count,
            hq=listing_item.is_hq,
            collectability=max(listing_item.collectability_rating, 0),
        )
