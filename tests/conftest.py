"""Shared fixtures: a small in-memory game table set."""

from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import pytest

from contentgraph.build import BuildContext
from contentgraph.build.stages import IndexesStage
from contentgraph.game_data import GameDataService, SecondaryIndex
from contentgraph.settings import AppSettings


def sample_rows() -> List[Dict[str, Any]]:
    """Rows covering every table the built-in stages read."""
    return [
        # Items
        {"type": "item", "id": 1, "name": {"en": "iron sword", "de": "eisenschwert"}, "icon": 30001},
        {"type": "item", "id": 2, "name": {"en": "steel sword"}, "icon": 30002},
        {"type": "item", "id": 3, "name": "mythril sword", "icon": 30002},
        {"type": "item", "id": 4, "name": "debug item", "skip": True},
        {"type": "item", "id": 5, "name": ""},
        {"type": "item", "id": 6, "name": "potion"},
        {"type": "item", "id": 100, "name": "allagan tomestone"},
        {"type": "item", "id": 200, "name": "seal"},
        # NPCs
        {
            "type": "npc",
            "id": 1001,
            "resident": {"singular": {"en": "merchant joe", "de": "händler jo"}, "title": "Weapon Dealer"},
        },
        {"type": "npc", "id": 1002, "resident": {"singular": {"en": "merchant joe"}}},
        {"type": "npc", "id": 1003, "resident": {"singular": {"en": "   "}}},
        {"type": "npc", "id": 1004, "resident": {"singular": "wandering minstrel"}},
        {"type": "npc", "id": 1005, "resident": {"singular": "hermit"}},
        {"type": "npc", "id": 1006},
        # Locations
        {"type": "map", "id": 10, "place_name": 500},
        {"type": "level", "id": 1, "map": 10, "x": 12.345, "y": 6.785, "object": 1001},
        {"type": "map_marker", "map": 10, "place_name": 501, "x": 10.0, "y": 5.0},
        {"type": "map_marker", "map": 10, "place_name": 502, "x": 13.0, "y": 7.0},
        {"type": "map_marker", "map": 10, "place_name": 503, "x": 30.0, "y": 30.0},
        {"type": "map_marker", "map": 10, "place_name": 0, "x": 12.3, "y": 6.8},
        {"type": "npc_zone", "id": 1002, "zone": 600},
        # Shops
        {
            "type": "shop",
            "id": 9000,
            "name": "Unknown Shop",
            "npcs": [1001],
            "listings": [
                {"rewards": [{"item": 1}, {"item": 2}]},
                {"rewards": [{"item": 4}, {"item": 999}]},
            ],
        },
        {
            "type": "special_shop",
            "id": 9100,
            "name": "Tomestone Exchange",
            "npcs": [1002],
            "listings": [
                {
                    "rewards": [{"item": 3, "count": 1, "hq": True}],
                    "costs": [{"item": 100, "count": 500}],
                },
                {
                    "rewards": [{"item": 6, "count": 3, "collectability": 250}],
                    "costs": [{"item": 999, "count": 1}],
                },
            ],
        },
        # Chains
        {"type": "item_upgrade", "from": 1, "to": 2},
        {"type": "item_upgrade", "from": 2, "to": 3},
        {"type": "item_upgrade", "from": 1, "to": 2},
        # Boss rewards
        {"type": "boss_reward", "mob": 77, "currency": 100, "amount": 5},
        {"type": "boss_reward", "mob": 77, "currency": 200, "amount": 3},
        {"type": "boss_reward", "mob": 78, "currency": 100, "amount": 0},
        # Patches
        {"type": "patch", "category": "npc", "id": 1001, "patch": "2.0"},
        {"type": "patch", "category": "item", "id": 1, "patch": "2.1"},
    ]


SECONDARY_INDEX = {1004: '{"coordinate": {"7": [[21.5, 17.25], [1.0, 2.0]]}}'}


@pytest.fixture
def rows() -> List[Dict[str, Any]]:
    return sample_rows()


@pytest.fixture
def service(rows: List[Dict[str, Any]]) -> GameDataService:
    return GameDataService.from_rows(rows)


@pytest.fixture
def make_context(rows: List[Dict[str, Any]]) -> Callable[..., BuildContext]:
    """Factory for prepared contexts with the location indices loaded."""

    def factory(
        extra_rows: Optional[List[Dict[str, Any]]] = None,
        index_locations: bool = True,
    ) -> BuildContext:
        service = GameDataService.from_rows(rows + (extra_rows or []))
        ctx = BuildContext(
            service,
            locales=["en", "de"],
            secondary_index=SecondaryIndex(SECONDARY_INDEX),
        )
        ctx.prepare()
        if index_locations:
            IndexesStage().run(ctx)
        return ctx

    return factory


@pytest.fixture
def ctx(make_context: Callable[..., BuildContext]) -> BuildContext:
    return make_context()


@pytest.fixture
def settings(tmp_path: Path) -> AppSettings:
    """Settings stored in a throwaway INI file."""
    return AppSettings(profile="test", settings_file=tmp_path / "settings.ini")
