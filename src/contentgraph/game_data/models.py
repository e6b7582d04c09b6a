"""
Data models for exported game tables.

Contains type definitions and the row-type names used throughout the
game_data package. Keeps the dict-based approach for raw rows while
providing clear type hints.

Every table file holds a list of row objects; each row names its table in
the ``type`` field:

- ``item``: ``{"id", "name", "icon"?, "skip"?}``
- ``npc``: ``{"id", "resident"?: {"singular", "title"?}}``
- ``level``: ``{"id", "map", "x", "y", "object"?}``
- ``map``: ``{"id", "place_name"}``
- ``map_marker``: ``{"map", "place_name", "x", "y"}``
- ``npc_zone``: ``{"id", "zone"}``
- ``shop`` / ``special_shop``: ``{"id", "name", "npcs", "listings"}``
- ``item_upgrade``: ``{"from", "to"}``
- ``boss_reward``: ``{"mob", "currency", "amount"}``
- ``patch``: ``{"category", "id", "patch"}``
"""

from typing import Any, Dict, List, TypeAlias

# Type aliases for clarity
RawRow: TypeAlias = Dict[str, Any]
"""A single table row (e.g., item, npc, level) as a dict."""

RowCollection: TypeAlias = List[RawRow]
"""A collection of table rows."""

TypedRowsMap: TypeAlias = Dict[str, RowCollection]
"""Maps row type (e.g., 'item', 'npc') to list of rows."""

# Metadata keys added to rows during loading
METADATA_SOURCE_FILE = "_source_file"

ROW_TYPE_KEY = "type"
ROW_ID_KEY = "id"
UNKNOWN_ROW_TYPE = "unknown"

# Row types read by the built-in stages
ROW_ITEM = "item"
ROW_NPC = "npc"
ROW_LEVEL = "level"
ROW_MAP = "map"
ROW_MAP_MARKER = "map_marker"
ROW_NPC_ZONE = "npc_zone"
ROW_SHOP = "shop"
ROW_SPECIAL_SHOP = "special_shop"
ROW_ITEM_UPGRADE = "item_upgrade"
ROW_BOSS_REWARD = "boss_reward"
ROW_PATCH = "patch"
