"""
Patch metadata lookup.

Maps (category, id) to the game patch an entity first appeared in.
"""

import logging
from typing import Any, Dict, Optional

from .models import ROW_PATCH
from .service import GameDataService

logger = logging.getLogger(__name__)


class PatchIndex:
    """Read-only (category, id) -> patch version lookup."""

    def __init__(self):
        self._patches: Dict[tuple[str, Any], str] = {}

    @classmethod
    def from_service(cls, service: GameDataService) -> "PatchIndex":
        """Build the index from the ``patch`` rows of a data source."""
        index = cls()
        for row in service.get_rows(ROW_PATCH):
            category = row.get("category")
            patch = row.get("patch")
            if not category or patch is None or row.get("id") is None:
                logger.debug(f"Skipping incomplete patch row: {row}")
                continue
            index.set(str(category), row["id"], str(patch))
        logger.debug(f"Patch index initialized with {len(index._patches)} entries")
        return index

    def set(self, category: str, entity_id: Any, patch: str) -> None:
        self._patches[(category, entity_id)] = patch

    def get(self, category: str, entity_id: Any) -> Optional[str]:
        """Return the patch version, or None when unknown."""
        return self._patches.get((category, entity_id))
