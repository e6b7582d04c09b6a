"""Tests for the stage pipeline and the built-in stage queue."""

from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import pytest
from PIL import Image

from contentgraph.build import (
    BuildContext,
    PipelineState,
    Stage,
    StagePipeline,
    StageResult,
    StageStatus,
    validate_stage_order,
)
from contentgraph.build.stages import (
    BossRewardsStage,
    GilShopsStage,
    IndexesStage,
    ItemsStage,
    NpcAlternatesStage,
    NpcsStage,
    default_stages,
)
from contentgraph.errors import BuildAborted, BuildError, ContractViolation, StageOrderError
from contentgraph.game_data import GameDataService
from contentgraph.icons import IconStore


class RecordingStage(Stage):
    """Stage that only records that it ran."""

    def __init__(self, name: str, log: List[str], result: Optional[StageResult] = None):
        self.name = name
        super().__init__()
        self.log = log
        self.result = result or StageResult.completed()

    def run(self, ctx: BuildContext) -> StageResult:
        self.log.append(self.name)
        return self.result


class FailingStage(Stage):
    name = "Failing"

    def run(self, ctx: BuildContext) -> StageResult:
        ctx.registry.create_item(12345)
        raise ContractViolation("broken contract")


@pytest.fixture
def fresh_ctx(make_context: Callable[..., BuildContext]) -> BuildContext:
    """Context that has not run any stage yet."""
    return make_context(index_locations=False)


class TestStageOrder:
    """Test validation of declared stage dependencies."""

    def test_default_order_is_valid(self) -> None:
        validate_stage_order(default_stages())

    def test_missing_requirement(self) -> None:
        with pytest.raises(StageOrderError, match="NPCs"):
            validate_stage_order([NpcsStage(), IndexesStage()])

    def test_stage_after_all_npc_creators(self) -> None:
        stages = [IndexesStage(), ItemsStage(), NpcsStage(), NpcAlternatesStage(), GilShopsStage()]
        with pytest.raises(StageOrderError, match="NpcAlternates"):
            validate_stage_order(stages)

    def test_invalid_queue_runs_nothing(self, rows: List[Dict[str, Any]]) -> None:
        ctx = BuildContext(GameDataService.from_rows(rows))
        pipeline = StagePipeline(ctx, [BossRewardsStage()])
        with pytest.raises(StageOrderError):
            pipeline.build()
        assert not ctx.prepared
        assert pipeline.state is PipelineState.IDLE
        assert len(ctx.boss_currency.to_dict()) == 0


class TestStagePipeline:
    """Test running, skipping and aborting builds."""

    def test_stages_run_in_order(self, fresh_ctx: BuildContext) -> None:
        log: List[str] = []
        progress: List[Any] = []
        stages = [RecordingStage("A", log), RecordingStage("B", log), RecordingStage("C", log)]
        pipeline = StagePipeline(fresh_ctx, stages, progress=lambda *args: progress.append(args))

        outcome = pipeline.build()

        assert log == ["A", "B", "C"]
        assert progress == [(1, 3, "A"), (2, 3, "B"), (3, 3, "C")]
        assert outcome.ok
        assert outcome.completed_stages == ["A", "B", "C"]
        assert pipeline.state is PipelineState.COMPLETED
        assert outcome.graph is not None

    def test_skipped_stage_does_not_stop_the_build(self, fresh_ctx: BuildContext) -> None:
        log: List[str] = []
        stages = [
            RecordingStage("A", log, StageResult.skipped("nothing to do")),
            RecordingStage("B", log),
        ]
        outcome = StagePipeline(fresh_ctx, stages).build()

        assert log == ["A", "B"]
        assert outcome.ok
        assert outcome.skipped_stages == {"A": "nothing to do"}
        assert outcome.completed_stages == ["B"]

    def test_fatal_result_aborts(self, fresh_ctx: BuildContext) -> None:
        log: List[str] = []
        error = BuildError("no tables")
        stages = [
            RecordingStage("A", log),
            RecordingStage("B", log, StageResult.fatal(error)),
            RecordingStage("C", log),
        ]
        outcome = StagePipeline(fresh_ctx, stages).build()

        assert log == ["A", "B"]
        assert outcome.state is PipelineState.ABORTED
        assert not outcome.ok
        assert outcome.failed_stage == "B"
        assert outcome.error is error
        assert outcome.graph is None

    def test_raised_exception_aborts_and_discards_graph(self, fresh_ctx: BuildContext) -> None:
        log: List[str] = []
        pipeline = StagePipeline(fresh_ctx, [FailingStage(), RecordingStage("After", log)])

        outcome = pipeline.build()

        assert log == []
        assert outcome.state is PipelineState.ABORTED
        assert isinstance(outcome.error, ContractViolation)
        assert outcome.graph is None
        assert fresh_ctx.aborted
        with pytest.raises(BuildAborted, match="Failing"):
            outcome.raise_for_status()
        with pytest.raises(BuildAborted):
            fresh_ctx.to_graph()

    def test_prepare_failure_aborts(self, rows: List[Dict[str, Any]]) -> None:
        bad_icon = {"type": "item", "id": 7, "name": "sword", "icon": "abc"}
        ctx = BuildContext(GameDataService.from_rows(rows + [bad_icon]))
        log: List[str] = []
        pipeline = StagePipeline(ctx, [RecordingStage("A", log)])

        outcome = pipeline.build()

        assert log == []
        assert pipeline.state is PipelineState.ABORTED
        assert outcome.state is PipelineState.ABORTED
        assert outcome.failed_stage == "prepare"
        assert isinstance(outcome.error, ValueError)
        assert outcome.graph is None
        assert ctx.aborted
        with pytest.raises(BuildAborted, match="prepare"):
            outcome.raise_for_status()

    def test_pipeline_runs_once(self, fresh_ctx: BuildContext) -> None:
        pipeline = StagePipeline(fresh_ctx, [])
        pipeline.build()
        with pytest.raises(BuildError, match="already ran"):
            pipeline.build()

    def test_stage_result_helpers(self) -> None:
        assert StageResult.completed().status is StageStatus.COMPLETED
        assert StageResult.skipped("x").reason == "x"
        fatal = StageResult.fatal(ValueError("bad"))
        assert fatal.is_fatal
        assert fatal.reason == "bad"


class TestFetchIconsOnly:
    """Test the icon-only run."""

    def test_no_stage_runs(self, rows: List[Dict[str, Any]], tmp_path: Path) -> None:
        raw = tmp_path / "raw"
        raw.mkdir()
        Image.new("RGB", (2, 2)).save(raw / "030001.png")

        ctx = BuildContext(
            GameDataService.from_rows(rows), icons=IconStore(raw, tmp_path / "icons")
        )
        log: List[str] = []
        outcome = StagePipeline(ctx, [RecordingStage("A", log)]).build(fetch_icons_only=True)

        assert log == []
        assert outcome.ok
        assert outcome.graph is None
        assert outcome.icon_report is not None
        assert outcome.icon_report.fetched == [30001]
        assert outcome.icon_report.missing == [30002]
        assert ctx.registry.items == []
        assert ctx.registry.npcs == []
        assert (tmp_path / "icons" / "30001.png").exists()

    def test_fetch_failure_aborts(self, rows: List[Dict[str, Any]], tmp_path: Path) -> None:
        ctx = BuildContext(GameDataService.from_rows(rows), icons=IconStore(tmp_path, None))
        pipeline = StagePipeline(ctx, [])

        outcome = pipeline.build(fetch_icons_only=True)

        assert pipeline.state is PipelineState.ABORTED
        assert outcome.failed_stage == "fetch_icons"
        assert outcome.icon_report is None
        with pytest.raises(BuildAborted):
            outcome.raise_for_status()


class TestDefaultStages:
    """Build the sample tables with the built-in stage queue."""

    @pytest.fixture
    def graph(self, fresh_ctx: BuildContext) -> Dict[str, Any]:
        outcome = StagePipeline(fresh_ctx, default_stages()).build()
        outcome.raise_for_status()
        assert outcome.graph is not None
        return outcome.graph

    @staticmethod
    def by_id(entities: List[Dict[str, Any]]) -> Dict[Any, Dict[str, Any]]:
        return {entity["id"]: entity for entity in entities}

    def test_items(self, graph: Dict[str, Any]) -> None:
        items = self.by_id(graph["items"])
        assert list(items) == [1, 2, 3, 6, 100, 200]
        assert items[1] == {
            "id": 1,
            "en": {"name": "Iron Sword"},
            "de": {"name": "Eisenschwert"},
            "patch": "2.1",
            "icon": 30001,
            "vendors": [1001],
            "upgrades": [2],
        }
        assert items[2]["downgrades"] == [1]
        assert items[2]["upgrades"] == [3]
        assert items[3]["downgrades"] == [2]
        assert "vendors" not in items[3]

    def test_npcs(self, graph: Dict[str, Any]) -> None:
        npcs = self.by_id(graph["npcs"])
        assert list(npcs) == [1001, 1002, 1004, 1005]

        joe = npcs[1001]
        assert joe["zoneid"] == 500
        assert joe["coords"] == [12.34, 6.78]
        assert joe["areaid"] == 502
        assert joe["title"] == "Weapon Dealer"
        assert joe["alts"] == [1002]
        assert joe["shops"] == [{"name": "Purchase Items", "entries": [1, 2]}]

        other_joe = npcs[1002]
        assert other_joe["zoneid"] == 600
        assert other_joe["alts"] == [1001]
        assert other_joe["shops"] == [
            {
                "name": "Tomestone Exchange",
                "entries": [
                    {
                        "item": [{"id": 3, "amount": 1, "hq": 1}],
                        "currency": [{"id": 100, "amount": 500}],
                    }
                ],
                "trade": 1,
            }
        ]

        assert npcs[1004]["approx"] == 1
        assert "alts" not in npcs[1005]

    def test_references(self, graph: Dict[str, Any]) -> None:
        references = graph["references"]
        assert references["npc"]["1001"] == [
            {"type": "item", "id": 1, "primary": 1},
            {"type": "item", "id": 2, "primary": 1},
            {"type": "npc", "id": 1002},
        ]
        assert references["item"]["3"] == [
            {"type": "npc", "id": 1002},
            {"type": "item", "id": 2},
        ]
        assert set(references["location"]) == {"500", "502", "600"}

    def test_boss_currency(self, graph: Dict[str, Any]) -> None:
        assert graph["bossCurrency"] == {
            "77": [{"amount": 5, "id": 100}, {"amount": 3, "id": 200}],
        }

    def test_skipped_stages(self) -> None:
        ctx = BuildContext(GameDataService.from_rows([]))
        outcome = StagePipeline(ctx, default_stages()).build()

        assert outcome.ok
        assert outcome.completed_stages == ["Indexes", "NpcAlternates"]
        assert set(outcome.skipped_stages) == {
            "Items",
            "NPCs",
            "Shops",
            "SpecialShops",
            "Upgrades",
            "BossRewards",
        }
        assert outcome.graph == {"items": [], "npcs": [], "references": {}, "bossCurrency": {}}
