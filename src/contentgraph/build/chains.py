"""
Upgrade/downgrade chain linking between items.
"""

from typing import Optional

from .models import ITEM_KIND, Item
from .references import ReferenceGraph


class ChainLinker:
    """Links items into symmetric upgrade/downgrade pairs."""

    def __init__(self, references: ReferenceGraph):
        self.references = references

    def upgrade_item(self, downgrade: Optional[Item], upgrade: Optional[Item]) -> None:
        """Record that ``downgrade`` upgrades to ``upgrade``.

        Both directions are kept in sync and each id appears at most once
        per direction. Missing items and self links are ignored.
        """
        if downgrade is None or upgrade is None or downgrade is upgrade:
            return

        if upgrade.id not in downgrade.upgrades:
            downgrade.upgrades.append(upgrade.id)

        if downgrade.id not in upgrade.downgrades:
            upgrade.downgrades.append(downgrade.id)

        self.references.add_reference(downgrade, ITEM_KIND, upgrade.id, False)
        self.references.add_reference(upgrade, ITEM_KIND, downgrade.id, False)
