"""
Boss currency rewards.
"""

from ...game_data.models import ROW_BOSS_REWARD
from ..context import BuildContext
from ..pipeline import Stage, StageResult


class BossRewardsStage(Stage):
    name = "BossRewards"
    requires = ("items",)

    def run(self, ctx: BuildContext) -> StageResult:
        rows = ctx.data.get_rows(ROW_BOSS_REWARD)
        if not rows:
            return StageResult.skipped("no boss rewards")

        for row in rows:
            ctx.boss_currency.add_boss_currency(
                int(row.get("amount", 0) or 0),
                int(row.get("currency", 0) or 0),
                int(row["mob"]),
            )
        return StageResult.completed()
