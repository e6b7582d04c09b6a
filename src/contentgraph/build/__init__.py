"""
The graph build core.

Entity registry, reference graph, location resolver, shop builder, chain
linker and boss currency index, tied together by BuildContext and run by
StagePipeline.
"""

from .boss_currency import BossCurrencyIndex
from .chains import ChainLinker
from .context import BuildContext
from .locations import LocationResolver, parse_coordinate_blob, round_coordinate
from .models import (
    BossCurrencyEntry,
    Item,
    Level,
    LocationInfo,
    MapMarker,
    Npc,
    Reference,
    Shop,
    ShopEntry,
    ShopListingItem,
    SourceListing,
    SourceListingItem,
    SourceShop,
)
from .pipeline import (
    BuildOutcome,
    PipelineState,
    Stage,
    StagePipeline,
    StageResult,
    StageStatus,
    validate_stage_order,
)
from .references import ReferenceGraph
from .registry import EntityRegistry
from .shops import ShopBuilder
from .writer import GraphWriter

__all__ = [
    "BossCurrencyIndex",
    "ChainLinker",
    "BuildContext",
    "LocationResolver",
    "parse_coordinate_blob",
    "round_coordinate",
    "BossCurrencyEntry",
    "Item",
    "Level",
    "LocationInfo",
    "MapMarker",
    "Npc",
    "Reference",
    "Shop",
    "ShopEntry",
    "ShopListingItem",
    "SourceListing",
    "SourceListingItem",
    "SourceShop",
    "BuildOutcome",
    "PipelineState",
    "Stage",
    "StagePipeline",
    "StageResult",
    "StageStatus",
    "validate_stage_order",
    "ReferenceGraph",
    "EntityRegistry",
    "ShopBuilder",
    "GraphWriter",
]
