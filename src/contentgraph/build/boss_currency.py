"""
Boss currency accumulation.

Collects the currencies each mob rewards, keyed by mob id, in the order
stages report them.
"""

from typing import Dict, List, Optional

from ..errors import ContractViolation
from .models import BossCurrencyEntry


class BossCurrencyIndex:
    """Mob id -> ordered list of currency rewards."""

    def __init__(self):
        self._by_mob: Dict[int, List[BossCurrencyEntry]] = {}

    def add_boss_currency(self, amount: int, currency_id: int, mob_id: int) -> None:
        """Append a currency reward for a mob.

        Zero amounts are dropped. A zero currency id is a caller bug and
        raises ContractViolation.
        """
        if amount == 0:
            return

        if currency_id == 0:
            raise ContractViolation(f"Bad currency id 0 for mob {mob_id}")

        self._by_mob.setdefault(mob_id, []).append(BossCurrencyEntry(amount, currency_id))

    def get_boss_currency(self, mob_id: int) -> Optional[List[BossCurrencyEntry]]:
        """Return the rewards of a mob, or None if it has none."""
        entries = self._by_mob.get(mob_id)
        return list(entries) if entries is not None else None

    def __contains__(self, mob_id: object) -> bool:
        return mob_id in self._by_mob

    def to_dict(self) -> Dict[str, List[Dict[str, int]]]:
        return {
            str(mob_id): [entry.to_dict() for entry in entries]
            for mob_id, entries in self._by_mob.items()
        }
