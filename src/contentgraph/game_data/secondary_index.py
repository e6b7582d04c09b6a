"""
Secondary NPC index.

An id-keyed store of serialized coordinate blobs, one per NPC, used only
as the last fallback when an NPC has no authoritative spawn location.
"""

import logging
from pathlib import Path
from typing import Dict, Mapping, Optional

import orjson

logger = logging.getLogger(__name__)


class SecondaryIndex:
    """Read-only NPC id -> serialized blob lookup."""

    def __init__(self, entries: Optional[Mapping[int, str]] = None):
        self._entries: Dict[int, str] = dict(entries or {})

    @classmethod
    def load(cls, path: Optional[Path]) -> "SecondaryIndex":
        """Load the index from a JSON object file.

        A missing or unreadable file yields an empty index; the fallback
        simply never matches.
        """
        if path is None or not path.exists():
            logger.info("No secondary index available")
            return cls()

        try:
            with path.open("rb") as f:
                data = orjson.loads(f.read())
        except (OSError, orjson.JSONDecodeError) as e:
            logger.error(f"Error reading secondary index {path}: {e}")
            return cls()

        if not isinstance(data, dict):
            logger.error(f"Secondary index {path} is not a JSON object")
            return cls()

        entries: Dict[int, str] = {}
        for key, blob in data.items():  # type: ignore
            try:
                npc_id = int(key)  # type: ignore
            except (TypeError, ValueError):
                logger.warning(f"Skipping secondary index key: {key!r}")
                continue
            # Blobs are normally serialized strings; accept inline objects too
            entries[npc_id] = blob if isinstance(blob, str) else orjson.dumps(blob).decode()

        logger.info(f"Secondary index loaded with {len(entries)} entries")
        return cls(entries)

    def get(self, npc_id: int) -> Optional[str]:
        """Return the serialized blob for an NPC, or None."""
        return self._entries.get(npc_id)

    def __len__(self) -> int:
        return len(self._entries)
