"""
Cross-reference bookkeeping.

The reference graph is an auxiliary index answering "what references this
id". The relationship fields on the entities (vendors, upgrades, ...) stay
the source of truth; call sites check those fields before recording an
edge.

Each (source, kind, target) edge is stored once. Repeating an edge is a
no-op, except that a primary call promotes an existing non-primary edge.
"""

import logging
from collections import defaultdict
from typing import Any, Dict, List, Optional, Protocol, Tuple

from .models import LOCATION_KIND, Reference


class ReferenceSource(Protocol):
    """Any graph entity: it has an id and a kind."""

    id: Any
    kind: str


class ReferenceGraph:
    """Directed references between graph entities."""

    def __init__(self):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self._edges: Dict[Tuple[Optional[str], Any, str, Any], Reference] = {}
        self._by_source: Dict[Tuple[Optional[str], Any], List[Reference]] = defaultdict(list)
        self._by_target: Dict[Tuple[str, Any], List[Reference]] = defaultdict(list)

    def add_reference(
        self,
        from_entity: Optional[ReferenceSource],
        kind: str,
        target_id: Any,
        is_primary: bool = False,
    ) -> Reference:
        """Record that ``from_entity`` references the ``kind`` entity ``target_id``.

        Returns the stored edge.
        """
        source_kind = from_entity.kind if from_entity is not None else None
        source_id = from_entity.id if from_entity is not None else None
        key = (source_kind, source_id, kind, target_id)

        existing = self._edges.get(key)
        if existing is not None:
            if is_primary and not existing.is_primary:
                existing.is_primary = True
            return existing

        reference = Reference(source_kind, source_id, kind, target_id, is_primary)
        self._edges[key] = reference
        self._by_source[(source_kind, source_id)].append(reference)
        self._by_target[(kind, target_id)].append(reference)
        return reference

    def add_location_reference(self, place_name_id: int) -> Reference:
        """Record that a location is used somewhere in the graph."""
        return self.add_reference(None, LOCATION_KIND, place_name_id, False)

    def references_from(self, entity: ReferenceSource) -> List[Reference]:
        """Return the edges recorded from an entity, in insertion order."""
        return list(self._by_source.get((entity.kind, entity.id), []))

    def referrers_of(self, kind: str, target_id: Any) -> List[Reference]:
        """Return the edges pointing at a target, in insertion order."""
        return list(self._by_target.get((kind, target_id), []))

    def is_referenced(self, kind: str, target_id: Any) -> bool:
        return (kind, target_id) in self._by_target

    def __len__(self) -> int:
        return len(self._edges)

    def to_dict(self) -> Dict[str, Dict[str, List[Dict[str, Any]]]]:
        """Serialize as ``{kind: {target_id: [{type, id, primary?}]}}``.

        Location references have no source and serialize as an empty list.
        """
        result: Dict[str, Dict[str, List[Dict[str, Any]]]] = {}
        for (kind, target_id), references in self._by_target.items():
            sources: List[Dict[str, Any]] = []
            for reference in references:
                if reference.source_kind is None:
                    continue
                entry: Dict[str, Any] = {"type": reference.source_kind, "id": reference.source_id}
                if reference.is_primary:
                    entry["primary"] = 1
                sources.append(entry)
            result.setdefault(kind, {})[str(target_id)] = sources
        return result
