"""
Pipeline — the staged state machine that drives a scaffolding run.

States move strictly forward::

    init → configuring → generating → integrating → finalizing → done

Each stage holds an ordered list of segment builders. A builder is a
callable taking the PipelineContext and returning the steps for its
segment; it is called right before those steps run, so any probing it
does sees the project as the earlier segments left it. No failure
blocks a transition.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum

from railseed.adapters.registry import AdapterRegistry
from railseed.core.engine.executor import ExecutionPlan, ExecutionReport, execute_plan
from railseed.core.models.config import ScaffoldConfig
from railseed.core.models.identity import DerivedIdentity
from railseed.core.models.step import Step, StepOutcome
from railseed.core.services.probe import StateProbe

logger = logging.getLogger(__name__)


class StageName(str, Enum):
    INIT = "init"
    CONFIGURING = "configuring"
    GENERATING = "generating"
    INTEGRATING = "integrating"
    FINALIZING = "finalizing"
    DONE = "done"


STAGE_ORDER: list[StageName] = list(StageName)


@dataclass
class PipelineContext:
    """What segment builders may read: config, identity and the probe.

    ``hints`` collects operator guidance (e.g. manual remote setup)
    that builders want surfaced at the end of the run.
    """

    config: ScaffoldConfig
    identity: DerivedIdentity
    probe: StateProbe
    hints: list[str] = field(default_factory=list)


SegmentBuilder = Callable[[PipelineContext], list[Step]]


@dataclass
class Stage:
    name: StageName
    builders: list[SegmentBuilder] = field(default_factory=list)


@dataclass
class PipelineReport(ExecutionReport):
    """All outcomes of a run, grouped per stage, plus collected hints."""

    stages: dict[str, ExecutionReport] = field(default_factory=dict)
    hints: list[str] = field(default_factory=list)
    state: str = StageName.INIT.value

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["state"] = self.state
        data["hints"] = list(self.hints)
        data["stages"] = {
            name: {
                "status": r.status,
                "total": r.total,
                "succeeded": r.succeeded,
                "failed": r.failed,
                "skipped": r.skipped,
            }
            for name, r in self.stages.items()
        }
        return data


class Pipeline:
    """Run stages in state-machine order through an adapter registry.

    Args:
        stages: The stages to run. Their names must be distinct and
            none may be DONE; order is taken from the state machine,
            not from the list.
        registry: Dispatcher for every step.
        context: Shared, read-mostly run context.
        dry_run: Validate and report steps without executing them.
    """

    def __init__(
        self,
        stages: list[Stage],
        registry: AdapterRegistry,
        context: PipelineContext,
        dry_run: bool = False,
    ):
        by_name: dict[StageName, Stage] = {}
        for stage in stages:
            if stage.name is StageName.DONE:
                raise ValueError("'done' is terminal and cannot hold steps")
            if stage.name in by_name:
                raise ValueError(f"Duplicate stage: {stage.name.value}")
            by_name[stage.name] = stage

        self._stages = by_name
        self._registry = registry
        self._context = context
        self._dry_run = dry_run
        self._state = StageName.INIT

    @property
    def state(self) -> StageName:
        return self._state

    @property
    def context(self) -> PipelineContext:
        return self._context

    def run(self) -> PipelineReport:
        """Walk every state once and return the accumulated report."""
        report = PipelineReport()
        project_root = str(self._context.config.project_dir)

        for name in STAGE_ORDER:
            self._transition(name, report)
            if name is StageName.DONE:
                break

            stage_report = ExecutionReport()
            stage = self._stages.get(name)
            for builder in stage.builders if stage else []:
                try:
                    segment = list(builder(self._context))
                except Exception as e:
                    stage_report.outcomes.append(
                        self._builder_failure(name, builder, stage_report.total, e)
                    )
                    continue
                plan = ExecutionPlan(stage=name.value, offset=stage_report.total)
                for step in segment:
                    plan.add(step)
                stage_report.extend(
                    execute_plan(plan, self._registry, project_root, dry_run=self._dry_run)
                )

            report.stages[name.value] = stage_report
            report.extend(stage_report)

        report.hints = list(self._context.hints)
        return report

    @staticmethod
    def _builder_failure(
        name: StageName, builder: SegmentBuilder, offset: int, error: Exception
    ) -> StepOutcome:
        """A segment whose builder raised counts as one failed step."""
        segment = getattr(builder, "__name__", repr(builder))
        logger.warning("✗ %s: segment %s could not be built: %s", name.value, segment, error)
        return StepOutcome.failure(
            adapter="pipeline",
            step_id=f"{name.value}-{offset + 1:03d}",
            label=segment,
            error=f"Segment {segment} could not be built: {error}",
        )

    def _transition(self, name: StageName, report: PipelineReport) -> None:
        if STAGE_ORDER.index(name) < STAGE_ORDER.index(self._state):
            raise RuntimeError(f"Illegal transition {self._state.value} → {name.value}")
        self._state = name
        report.state = name.value
        logger.info("── %s ──", name.value)
