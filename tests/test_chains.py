"""Tests for upgrade chain linking and boss currency accumulation."""

import pytest

from contentgraph.build import BossCurrencyEntry, ChainLinker, Item, ReferenceGraph
from contentgraph.build.boss_currency import BossCurrencyIndex
from contentgraph.errors import BuildError, ContractViolation


class TestChainLinker:
    """Test symmetric upgrade/downgrade links."""

    def test_upgrade_item(self) -> None:
        linker = ChainLinker(ReferenceGraph())
        low, high = Item(id=1), Item(id=2)
        linker.upgrade_item(low, high)

        assert low.upgrades == [2]
        assert high.downgrades == [1]
        assert low.downgrades == []
        assert high.upgrades == []
        assert len(linker.references) == 2

    def test_repeated_link_is_stored_once(self) -> None:
        linker = ChainLinker(ReferenceGraph())
        low, high = Item(id=1), Item(id=2)
        linker.upgrade_item(low, high)
        linker.upgrade_item(low, high)

        assert low.upgrades == [2]
        assert high.downgrades == [1]
        assert len(linker.references) == 2

    def test_chain_of_three(self) -> None:
        linker = ChainLinker(ReferenceGraph())
        a, b, c = Item(id=1), Item(id=2), Item(id=3)
        linker.upgrade_item(a, b)
        linker.upgrade_item(b, c)

        assert b.downgrades == [1]
        assert b.upgrades == [3]

    def test_missing_or_self_link_ignored(self) -> None:
        linker = ChainLinker(ReferenceGraph())
        item = Item(id=1)
        linker.upgrade_item(item, None)
        linker.upgrade_item(None, item)
        linker.upgrade_item(item, item)

        assert item.upgrades == []
        assert item.downgrades == []
        assert len(linker.references) == 0


class TestBossCurrencyIndex:
    """Test boss currency rewards."""

    def test_rewards_keep_order(self) -> None:
        index = BossCurrencyIndex()
        index.add_boss_currency(5, 100, 77)
        index.add_boss_currency(3, 200, 77)

        assert index.get_boss_currency(77) == [BossCurrencyEntry(5, 100), BossCurrencyEntry(3, 200)]
        assert 77 in index
        assert index.to_dict() == {"77": [{"amount": 5, "id": 100}, {"amount": 3, "id": 200}]}

    def test_zero_amount_is_dropped(self) -> None:
        index = BossCurrencyIndex()
        index.add_boss_currency(0, 100, 78)
        # Checked before the currency id
        index.add_boss_currency(0, 0, 78)

        assert 78 not in index
        assert index.get_boss_currency(78) is None

    def test_zero_currency_is_a_contract_violation(self) -> None:
        index = BossCurrencyIndex()
        with pytest.raises(ContractViolation, match="mob 79"):
            index.add_boss_currency(4, 0, 79)
        assert issubclass(ContractViolation, BuildError)
        assert 79 not in index

    def test_returned_list_is_a_copy(self) -> None:
        index = BossCurrencyIndex()
        index.add_boss_currency(1, 100, 77)
        rewards = index.get_boss_currency(77)
        assert rewards is not None
        rewards.clear()
        assert index.get_boss_currency(77) == [BossCurrencyEntry(1, 100)]
