"""Tests for the entity registry."""

from typing import Any, Callable

from contentgraph.build import BuildContext
from contentgraph.build.models import LOCATION_KIND


def raw_npc(ctx: BuildContext, npc_id: int) -> Any:
    row = ctx.data.get_row("npc", npc_id)
    assert row is not None
    return row


class TestItems:
    """Test item registration."""

    def test_create_item(self, ctx: BuildContext) -> None:
        item = ctx.registry.create_item(42)
        assert ctx.registry.item(42) is item
        assert ctx.registry.items == [item]
        assert item.to_dict() == {"id": 42}

    def test_unknown_item(self, ctx: BuildContext) -> None:
        assert ctx.registry.item(42) is None


class TestNpcs:
    """Test NPC registration and location resolution."""

    def test_get_or_create_npc(self, ctx: BuildContext) -> None:
        npc = ctx.registry.get_or_create_npc(raw_npc(ctx, 1001))

        assert npc is not None
        assert npc.name("en") == "Merchant Joe"
        assert npc.name("de") == "Händler Jo"
        assert npc.title == "Weapon Dealer"
        assert npc.patch == "2.0"
        assert npc.zoneid == 500
        assert npc.coords == [12.34, 6.78]
        assert npc.areaid == 502
        assert not npc.approx

    def test_get_or_create_is_idempotent(self, ctx: BuildContext) -> None:
        registry = ctx.registry
        first = registry.get_or_create_npc(raw_npc(ctx, 1001))
        references = len(ctx.references)

        second = registry.get_or_create_npc(raw_npc(ctx, 1001))

        assert second is first
        assert len(registry.npcs) == 1
        assert registry.alternates("Merchant Joe") == [first]
        assert len(ctx.references) == references

    def test_blank_name_is_not_registered(self, ctx: BuildContext) -> None:
        assert ctx.registry.get_or_create_npc(raw_npc(ctx, 1003)) is None
        assert ctx.registry.get_or_create_npc(raw_npc(ctx, 1006)) is None
        assert ctx.registry.npcs == []
        assert not ctx.registry.npc_alternates_by_name

    def test_zone_table(self, ctx: BuildContext) -> None:
        npc = ctx.registry.get_or_create_npc(raw_npc(ctx, 1002))
        assert npc is not None
        assert npc.zoneid == 600
        assert npc.coords is None
        assert npc.areaid is None
        assert ctx.references.is_referenced(LOCATION_KIND, 600)

    def test_secondary_index(self, ctx: BuildContext) -> None:
        npc = ctx.registry.get_or_create_npc(raw_npc(ctx, 1004))
        assert npc is not None
        assert npc.coords == [21.5, 17.25]
        assert npc.approx
        assert npc.to_dict() == {
            "id": 1004,
            "en": {"name": "Wandering Minstrel"},
            "coords": [21.5, 17.25],
            "approx": 1,
        }

    def test_no_location(self, ctx: BuildContext) -> None:
        npc = ctx.registry.get_or_create_npc(raw_npc(ctx, 1005))
        assert npc is not None
        assert npc.to_dict() == {"id": 1005, "en": {"name": "Hermit"}}

    def test_alternates_by_name(self, ctx: BuildContext) -> None:
        joe = ctx.registry.get_or_create_npc(raw_npc(ctx, 1001))
        other_joe = ctx.registry.get_or_create_npc(raw_npc(ctx, 1002))
        assert ctx.registry.alternates("Merchant Joe") == [joe, other_joe]
        assert ctx.registry.alternates("Nobody") == []

    def test_without_location_indices(self, make_context: Callable[..., BuildContext]) -> None:
        ctx = make_context(index_locations=False)
        npc = ctx.registry.get_or_create_npc(raw_npc(ctx, 1001))
        assert npc is not None
        assert npc.zoneid is None
        assert npc.coords is None
