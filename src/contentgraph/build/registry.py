"""
Entity registry for the graph build.

Owns the canonical item and NPC collections, their id indices and the
name -> alternates index used to merge NPCs sharing a display name.
"""

import logging
from collections import defaultdict
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from ..game_data.localize import Localizer, capitalize_words
from ..game_data.models import RawRow
from ..game_data.patches import PatchIndex
from ..game_data.service import GameDataService
from .models import Item, Npc, NPC_KIND

if TYPE_CHECKING:
    from .locations import LocationResolver


class EntityRegistry:
    """Canonical id-indexed store of items and NPCs.

    Items and NPCs live for the whole build and are never removed. Ordered
    collections keep creation order, which is also the output order.
    """

    def __init__(
        self,
        localizer: Localizer,
        patches: PatchIndex,
        locations: "LocationResolver",
    ):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.localizer = localizer
        self.patches = patches
        self.locations = locations

        self.items: List[Item] = []
        self.items_by_id: Dict[Any, Item] = {}
        self.npcs: List[Npc] = []
        self.npcs_by_id: Dict[Any, Npc] = {}
        self.npc_alternates_by_name: Dict[str, List[Npc]] = defaultdict(list)

    # === ITEMS ===

    def create_item(self, item_id: Any) -> Item:
        """Create and register a new item.

        The caller guarantees ``item_id`` is not registered yet; no duplicate
        check is made here.
        """
        item = Item(id=item_id)
        self.items.append(item)
        self.items_by_id[item_id] = item
        return item

    def item(self, item_id: Any) -> Optional[Item]:
        """Return the item with this id, or None."""
        return self.items_by_id.get(item_id)

    # === NPCS ===

    def get_or_create_npc(self, raw_npc: RawRow) -> Optional[Npc]:
        """Return the NPC for a source row, creating it on first use.

        An already registered id returns the existing NPC without side
        effects. A row with a blank display name is invalid and yields None;
        nothing is registered for it.
        """
        npc_id = raw_npc["id"]
        existing = self.npcs_by_id.get(npc_id)
        if existing is not None:
            return existing

        resident = raw_npc.get("resident")
        if not isinstance(resident, dict):
            resident = {}
        display_name = GameDataService.extract_clean_name(
            resident.get("singular"), self.localizer.default_locale
        )
        if not display_name:
            self.logger.debug(f"Skipping NPC {npc_id} with blank name")
            return None

        npc = Npc(id=npc_id)
        self.localizer.column(npc, resident, "singular", "name", capitalize_words)
        npc.patch = self.patches.get(NPC_KIND, npc_id)

        name = npc.name(self.localizer.default_locale) or capitalize_words(display_name)
        self.npc_alternates_by_name[name].append(npc)

        title = resident.get("title")
        if title:
            npc.title = str(title)

        level = self.locations.resolve_npc_location(npc, raw_npc)
        if level is not None:
            self.locations.resolve_npc_area(npc, level)

        self.npcs.append(npc)
        self.npcs_by_id[npc_id] = npc
        return npc

    def npc(self, npc_id: Any) -> Optional[Npc]:
        """Return the NPC with this id, or None."""
        return self.npcs_by_id.get(npc_id)

    def alternates(self, name: str) -> List[Npc]:
        """Return the NPCs registered under a display name."""
        return list(self.npc_alternates_by_name.get(name, []))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "items": [item.to_dict() for item in self.items],
            "npcs": [npc.to_dict() for npc in self.npcs],
        }
