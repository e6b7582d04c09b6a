"""
Built-in build stages.

`default_stages` returns the stage queue in its required order.
"""

from typing import List

from ..pipeline import Stage
from .alternates import NpcAlternatesStage
from .indexes import IndexesStage
from .items import ItemsStage
from .mobs import BossRewardsStage
from .npcs import NpcsStage
from .shops import GilShopsStage, SpecialShopsStage
from .upgrades import UpgradesStage


def default_stages() -> List[Stage]:
    """Return a fresh queue of the built-in stages."""
    return [
        IndexesStage(),
        ItemsStage(),
        NpcsStage(),
        GilShopsStage(),
        SpecialShopsStage(),
        UpgradesStage(),
        BossRewardsStage(),
        NpcAlternatesStage(),  # Has to be the very end.
    ]


__all__ = [
    "default_stages",
    "IndexesStage",
    "ItemsStage",
    "NpcsStage",
    "GilShopsStage",
    "SpecialShopsStage",
    "UpgradesStage",
    "BossRewardsStage",
    "NpcAlternatesStage",
]
