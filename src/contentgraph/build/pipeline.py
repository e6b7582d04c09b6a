"""
Stage pipeline.

Runs a fixed, ordered queue of stages against one BuildContext. Stages
run strictly one after another; later stages see every effect of earlier
ones. A fatal stage result aborts the build and the graph is discarded.

Ordering dependencies are declared on the stages themselves:

- ``provides``: capability tags the stage produces (e.g. ``"npcs"``);
- ``requires``: tags some earlier stage must provide;
- ``after_all``: tags that no later stage may still provide.

The queue is checked against these declarations before anything runs.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Sequence

from ..errors import BuildAborted, BuildError, StageOrderError
from ..icons.store import IconFetchReport
from ..utils.logging_config import log_stage
from .context import BuildContext

ProgressCallback = Callable[[int, int, str], None]

# Failure names for the steps that run outside the stage queue
PREPARE_STEP = "prepare"
FETCH_ICONS_STEP = "fetch_icons"


class StageStatus(Enum):
    COMPLETED = "completed"
    SKIPPED = "skipped"
    FATAL = "fatal"


@dataclass
class StageResult:
    """Explicit outcome of one stage run."""
    status: StageStatus
    reason: str = ""
    error: Optional[BaseException] = None

    @classmethod
    def completed(cls) -> "StageResult":
        return cls(StageStatus.COMPLETED)

    @classmethod
    def skipped(cls, reason: str) -> "StageResult":
        """The stage had nothing to do; the build continues."""
        return cls(StageStatus.SKIPPED, reason=reason)

    @classmethod
    def fatal(cls, error: BaseException) -> "StageResult":
        """The stage failed; the build aborts."""
        return cls(StageStatus.FATAL, reason=str(error), error=error)

    @property
    def is_fatal(self) -> bool:
        return self.status is StageStatus.FATAL


class Stage(ABC):
    """Base class for one pipeline stage."""

    name: str = ""
    provides: tuple[str, ...] = ()
    requires: tuple[str, ...] = ()
    after_all: tuple[str, ...] = ()

    def __init__(self):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        if not self.name:
            self.name = self.__class__.__name__

    @abstractmethod
    def run(self, ctx: BuildContext) -> StageResult:
        """Apply the stage to the build context."""
        pass


class PipelineState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"
    ABORTED = "aborted"


@dataclass
class BuildOutcome:
    """What a build produced.

    ``graph`` is None for an aborted build and for an icon-only run.
    """
    state: PipelineState
    completed_stages: List[str] = field(default_factory=list)
    skipped_stages: Dict[str, str] = field(default_factory=dict)
    failed_stage: Optional[str] = None
    error: Optional[BaseException] = None
    graph: Optional[Dict[str, Any]] = None
    icon_report: Optional[IconFetchReport] = None

    @property
    def ok(self) -> bool:
        return self.state is PipelineState.COMPLETED

    def raise_for_status(self) -> None:
        """Raise BuildAborted if the build was aborted."""
        if self.state is PipelineState.ABORTED:
            raise BuildAborted(
                self.failed_stage or "?", self.error or BuildError("unknown failure")
            )


def validate_stage_order(stages: Sequence[Stage]) -> None:
    """Check the declared dependencies of a stage queue.

    Raises:
        StageOrderError: If a stage needs a capability no earlier stage
            provides, or runs before a stage it must follow
    """
    provided: set[str] = set()
    for position, stage in enumerate(stages):
        missing = [tag for tag in stage.requires if tag not in provided]
        if missing:
            raise StageOrderError(
                f"Stage '{stage.name}' requires {missing} but no earlier stage provides it"
            )
        for later in stages[position + 1:]:
            overlap = [tag for tag in stage.after_all if tag in later.provides]
            if overlap:
                raise StageOrderError(
                    f"Stage '{stage.name}' must run after '{later.name}' (provides {overlap})"
                )
        provided.update(stage.provides)


class StagePipeline:
    """Drains an ordered stage queue against a build context."""

    def __init__(
        self,
        ctx: BuildContext,
        stages: Sequence[Stage],
        progress: Optional[ProgressCallback] = None,
    ):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.ctx = ctx
        self.stages = list(stages)
        self.progress = progress
        self.state = PipelineState.IDLE

    def build(self, fetch_icons_only: bool = False) -> BuildOutcome:
        """Run the build once.

        With ``fetch_icons_only`` only the icon fetch runs and no stage
        executes.

        Raises:
            BuildError: If the pipeline already ran
            StageOrderError: If the stage queue violates a declared dependency
        """
        if self.state is not PipelineState.IDLE:
            raise BuildError(f"Pipeline already ran (state: {self.state.value})")

        if not fetch_icons_only:
            validate_stage_order(self.stages)

        self.state = PipelineState.RUNNING
        outcome = BuildOutcome(self.state)

        with log_stage(PREPARE_STEP):
            try:
                self.ctx.prepare()
            except Exception as e:
                self.logger.exception("Pre-pass raised")
                return self._abort(outcome, PREPARE_STEP, StageResult.fatal(e))

        if fetch_icons_only:
            with log_stage(FETCH_ICONS_STEP):
                try:
                    outcome.icon_report = self.ctx.icons.fetch_icons()
                except Exception as e:
                    self.logger.exception("Icon fetch raised")
                    return self._abort(outcome, FETCH_ICONS_STEP, StageResult.fatal(e))
            self.logger.info("All icons fetched.  Stopping.")
            self.state = PipelineState.COMPLETED
            outcome.state = self.state
            return outcome

        total = len(self.stages)

        for done, stage in enumerate(self.stages, start=1):
            self.logger.info(f"* {stage.name}... {done}/{total}")
            if self.progress is not None:
                self.progress(done, total, stage.name)

            with log_stage(stage.name):
                try:
                    result = stage.run(self.ctx)
                except Exception as e:
                    self.logger.exception(f"Stage '{stage.name}' raised")
                    result = StageResult.fatal(e)

            if result.is_fatal:
                return self._abort(outcome, stage.name, result)

            if result.status is StageStatus.SKIPPED:
                self.logger.info(f"Stage '{stage.name}' skipped: {result.reason}")
                outcome.skipped_stages[stage.name] = result.reason
            else:
                outcome.completed_stages.append(stage.name)

        self.state = PipelineState.COMPLETED
        outcome.state = self.state
        outcome.graph = self.ctx.to_graph()
        self.logger.info(
            f"Build completed: {len(self.ctx.registry.items)} items, "
            f"{len(self.ctx.registry.npcs)} NPCs, {len(self.ctx.references)} references"
        )
        return outcome

    def _abort(self, outcome: BuildOutcome, step: str, result: StageResult) -> BuildOutcome:
        self.state = PipelineState.ABORTED
        self.ctx.aborted = True
        outcome.state = self.state
        outcome.failed_stage = step
        outcome.error = result.error or BuildError(result.reason)
        outcome.graph = None
        self.logger.error(f"Build aborted at stage '{step}': {result.reason}")
        return outcome
