"""Tests for the reference graph."""

from contentgraph.build import Item, Npc, ReferenceGraph
from contentgraph.build.models import ITEM_KIND, LOCATION_KIND, NPC_KIND


class TestReferenceGraph:
    """Test edge storage, deduplication and promotion."""

    def test_add_reference(self) -> None:
        graph = ReferenceGraph()
        item = Item(id=1)
        reference = graph.add_reference(item, NPC_KIND, 1001, True)

        assert reference.key == (ITEM_KIND, 1, NPC_KIND, 1001)
        assert reference.is_primary
        assert graph.references_from(item) == [reference]
        assert graph.referrers_of(NPC_KIND, 1001) == [reference]
        assert graph.is_referenced(NPC_KIND, 1001)
        assert not graph.is_referenced(NPC_KIND, 1002)

    def test_repeated_edge_is_stored_once(self) -> None:
        graph = ReferenceGraph()
        npc = Npc(id=1001)
        first = graph.add_reference(npc, ITEM_KIND, 1)
        second = graph.add_reference(npc, ITEM_KIND, 1)

        assert second is first
        assert len(graph) == 1

    def test_primary_promotes_existing_edge(self) -> None:
        graph = ReferenceGraph()
        item = Item(id=1)
        graph.add_reference(item, NPC_KIND, 1001, False)
        promoted = graph.add_reference(item, NPC_KIND, 1001, True)

        assert promoted.is_primary
        assert len(graph) == 1

    def test_non_primary_never_demotes(self) -> None:
        graph = ReferenceGraph()
        item = Item(id=1)
        graph.add_reference(item, NPC_KIND, 1001, True)
        again = graph.add_reference(item, NPC_KIND, 1001, False)
        assert again.is_primary

    def test_same_id_different_kind(self) -> None:
        """An item and an NPC sharing an id are distinct sources."""
        graph = ReferenceGraph()
        graph.add_reference(Item(id=7), ITEM_KIND, 8)
        graph.add_reference(Npc(id=7), ITEM_KIND, 8)
        assert len(graph) == 2
        assert len(graph.referrers_of(ITEM_KIND, 8)) == 2

    def test_location_reference(self) -> None:
        graph = ReferenceGraph()
        reference = graph.add_location_reference(500)
        graph.add_location_reference(500)

        assert reference.source_kind is None
        assert len(graph) == 1
        assert graph.is_referenced(LOCATION_KIND, 500)

    def test_to_dict(self) -> None:
        graph = ReferenceGraph()
        item = Item(id=1)
        npc = Npc(id=1001)
        graph.add_reference(item, NPC_KIND, 1001, True)
        graph.add_reference(npc, ITEM_KIND, 1)
        graph.add_location_reference(500)

        assert graph.to_dict() == {
            NPC_KIND: {"1001": [{"type": ITEM_KIND, "id": 1, "primary": 1}]},
            ITEM_KIND: {"1": [{"type": NPC_KIND, "id": 1001}]},
            LOCATION_KIND: {"500": []},
        }
