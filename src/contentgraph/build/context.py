"""
Build context.

One BuildContext is created per build and handed to every stage. It owns
all mutable build state (registry, references, resolvers, indices) and
the read-only collaborators the stages consult.
"""

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from ..errors import BuildAborted
from ..game_data.localize import Localizer
from ..game_data.models import ROW_ITEM, ROW_NPC, RawRow
from ..game_data.patches import PatchIndex
from ..game_data.secondary_index import SecondaryIndex
from ..game_data.service import GameDataService
from ..icons.store import IconStore
from ..settings.types import ConfigError
from .boss_currency import BossCurrencyIndex
from .chains import ChainLinker
from .locations import LocationResolver
from .references import ReferenceGraph
from .registry import EntityRegistry
from .shops import ShopBuilder

if TYPE_CHECKING:
    from ..settings import AppSettings


class BuildContext:
    """All state shared by the stages of one build."""

    def __init__(
        self,
        data: GameDataService,
        locales: Optional[List[str]] = None,
        secondary_index_path: Optional[Path] = None,
        icons: Optional[IconStore] = None,
        secondary_index: Optional[SecondaryIndex] = None,
    ):
        """Initialize the context.

        Args:
            data: Table source the stages read from
            locales: Locales to localize into; the first is the default
            secondary_index_path: JSON file loaded by `prepare` for the
                approximate coordinate fallback
            icons: Icon store; an unconfigured store is used when omitted
            secondary_index: Preloaded secondary index, replaced by the file
                at secondary_index_path when one is given
        """
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.data = data
        self.localizer = Localizer(locales or [data.default_locale])
        self.secondary_index_path = secondary_index_path
        self.icons = icons or IconStore()

        self.patches = PatchIndex()
        self.secondary_index = secondary_index if secondary_index is not None else SecondaryIndex()
        self.references = ReferenceGraph()
        self.locations = LocationResolver(self.references, self.secondary_index)
        self.registry = EntityRegistry(self.localizer, self.patches, self.locations)
        self.shops = ShopBuilder(self.registry, self.references, self._source_item_name)
        self.chains = ChainLinker(self.references)
        self.boss_currency = BossCurrencyIndex()

        # Candidate sets, filled by prepare()
        self.items_to_import: List[RawRow] = []
        self.npcs_to_import: List[RawRow] = []

        self.prepared = False
        self.aborted = False

    @classmethod
    def from_settings(cls, settings: "AppSettings") -> "BuildContext":
        """Create a context reading tables and icons from configured paths."""
        data_path = settings.data_path
        if data_path is None:
            raise ConfigError("Data path not set")
        index_path = settings.secondary_index_path
        data = GameDataService(
            data_path,
            default_locale=settings.default_locale,
            exclude=[index_path] if index_path is not None else [],
        )
        icons = IconStore(settings.icons_source_path, settings.icons_output_path)
        return cls(
            data,
            locales=settings.locales,
            secondary_index_path=index_path,
            icons=icons,
        )

    def _source_item_name(self, item_id: object) -> str:
        row = self.data.get_row(ROW_ITEM, item_id)
        return self.data.display_name(row) if row else ""

    # === PRE-PASS ===

    def is_item_skipped(self, row: RawRow) -> bool:
        """Items flagged as skipped or without a name are never imported."""
        return bool(row.get("skip")) or not self.data.display_name(row)

    def prepare(self) -> None:
        """Initialize candidate sets and lookup snapshots.

        Reads tables only; the registry is left untouched.
        """
        self.items_to_import = [
            row for row in self.data.get_rows(ROW_ITEM) if not self.is_item_skipped(row)
        ]
        self.npcs_to_import = [
            row
            for row in self.data.get_rows(ROW_NPC)
            if isinstance(row.get("resident"), dict) and self.data.display_name(row)
        ]

        self.patches = PatchIndex.from_service(self.data)
        self.registry.patches = self.patches

        if self.secondary_index_path is not None:
            self.secondary_index = SecondaryIndex.load(self.secondary_index_path)
            self.locations.secondary_index = self.secondary_index

        self.icons.initialize(self.items_to_import)

        self.prepared = True
        self.logger.info(
            f"Prepared {len(self.items_to_import)} items and "
            f"{len(self.npcs_to_import)} NPCs for import"
        )

    # === OUTPUT ===

    def to_graph(self) -> Dict[str, Any]:
        """Return the JSON-compatible entity graph.

        Raises:
            BuildAborted: If the build that used this context was aborted
        """
        if self.aborted:
            raise BuildAborted("graph", RuntimeError("context belongs to an aborted build"))

        graph = self.registry.to_dict()
        graph["references"] = self.references.to_dict()
        graph["bossCurrency"] = self.boss_currency.to_dict()
        return graph
