"""
Engine executor — runs one stage's steps in order.

Takes an execution plan, dispatches each step through the adapter
registry and collects the outcomes. A failed step is logged and the
loop moves on; failure never stops the stage. Critical steps are
logged at ERROR and counted separately so the caller can decide what
a critical failure means for the run as a whole.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from railseed.adapters.registry import AdapterRegistry
from railseed.core.models.step import Step, StepOutcome

logger = logging.getLogger(__name__)


@dataclass
class ExecutionPlan:
    """The ordered steps of one stage segment.

    ``offset`` is the number of steps earlier segments of the same
    stage already ran, so ids stay unique across the stage.
    """

    stage: str = ""
    steps: list[Step] = field(default_factory=list)
    offset: int = 0

    def add(self, step: Step) -> Step:
        """Append *step*, stamping it with its stage and positional id."""
        step.stage = self.stage
        step.id = f"{self.stage}-{self.offset + len(self.steps) + 1:03d}"
        self.steps.append(step)
        return step

    @property
    def total_steps(self) -> int:
        return len(self.steps)


@dataclass
class ExecutionReport:
    """Outcomes of one or more executed plans."""

    outcomes: list[StepOutcome] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.outcomes)

    @property
    def succeeded(self) -> int:
        return sum(1 for o in self.outcomes if o.ok)

    @property
    def failed(self) -> int:
        return sum(1 for o in self.outcomes if o.failed)

    @property
    def skipped(self) -> int:
        return sum(1 for o in self.outcomes if o.status == "skipped")

    @property
    def critical_failures(self) -> list[StepOutcome]:
        return [o for o in self.outcomes if o.failed and _is_critical(o)]

    @property
    def failures(self) -> list[StepOutcome]:
        return [o for o in self.outcomes if o.failed]

    @property
    def all_ok(self) -> bool:
        return self.failed == 0

    @property
    def status(self) -> str:
        if self.failed == 0:
            return "ok"
        if self.succeeded > 0:
            return "partial"
        return "failed"

    def extend(self, other: ExecutionReport) -> None:
        self.outcomes.extend(other.outcomes)

    def to_dict(self) -> dict:
        return {
            "status": self.status,
            "total": self.total,
            "succeeded": self.succeeded,
            "failed": self.failed,
            "skipped": self.skipped,
            "critical_failures": len(self.critical_failures),
            "outcomes": [o.model_dump(mode="json") for o in self.outcomes],
        }


def _is_critical(outcome: StepOutcome) -> bool:
    return outcome.metadata.get("policy") == "critical"


def execute_plan(
    plan: ExecutionPlan,
    registry: AdapterRegistry,
    project_root: str = ".",
    dry_run: bool = False,
) -> ExecutionReport:
    """Execute all steps in a plan through the adapter registry.

    Args:
        plan: The execution plan.
        registry: Adapter registry for dispatch.
        project_root: Project directory commands run in.
        dry_run: If True, validate but don't execute.

    Returns:
        ExecutionReport with one outcome per step.
    """
    report = ExecutionReport()

    for step in plan.steps:
        outcome = registry.execute_step(
            step=step,
            project_root=project_root,
            dry_run=dry_run,
        )
        # Registry-level failures (validation, missing adapter) never
        # reach the adapter, so carry the step's policy over here.
        if "policy" in step.params:
            outcome.metadata.setdefault("policy", step.params["policy"])
        report.outcomes.append(outcome)

        if outcome.failed:
            level = logging.ERROR if _is_critical(outcome) else logging.WARNING
            command = outcome.metadata.get("command") or step.params.get("command")
            if command and command != step.display:
                logger.log(level, "✗ %s [%s]: %s", step.display, command, outcome.error)
            else:
                logger.log(level, "✗ %s: %s", step.display, outcome.error)
        else:
            marker = "✓" if outcome.ok else "⊘"
            logger.info("%s %s:%s → %s", marker, plan.stage, step.display, outcome.status)

    return report
