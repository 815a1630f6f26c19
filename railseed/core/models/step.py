"""
Step and StepOutcome models — the execution contract.

Steps represent requested units of work. Outcomes represent results.
This is the fundamental I/O contract between the pipeline and adapters:
the pipeline sends Steps, adapters return StepOutcomes. Never exceptions.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, Literal

from pydantic import BaseModel, Field

StepKind = Literal["mutate-file", "materialize-file", "run-process", "probe-and-branch"]


def _now_iso() -> str:
    """Current UTC time as ISO string."""
    return datetime.now(UTC).isoformat()


class Step(BaseModel):
    """An ordered unit of pipeline work, executed by one adapter.

    Steps have no identity beyond their position: the ``id`` is
    assigned by the execution plan from the stage name and index.
    """

    id: str = ""                    # assigned by ExecutionPlan.add
    label: str = ""                 # human-readable, shown in warnings
    kind: StepKind
    adapter: str                    # which adapter handles this
    stage: str = ""                 # owning pipeline stage
    params: dict[str, Any] = Field(default_factory=dict)

    @property
    def display(self) -> str:
        """Label if set, otherwise the command or path the step targets."""
        return (
            self.label
            or self.params.get("command")
            or self.params.get("path")
            or self.id
        )


class StepOutcome(BaseModel):
    """Result of executing a Step.

    The adapter NEVER raises exceptions; failures are captured here
    and the pipeline continues with the next step.
    """

    adapter: str
    step_id: str
    label: str = ""
    status: Literal["ok", "skipped", "failed"] = "ok"

    started_at: str = Field(default_factory=_now_iso)
    ended_at: str = Field(default_factory=_now_iso)
    duration_ms: int = 0

    output: str = ""
    error: str | None = None

    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        """Whether the step succeeded."""
        return self.status == "ok"

    @property
    def failed(self) -> bool:
        """Whether the step failed (and the pipeline continued)."""
        return self.status == "failed"

    @classmethod
    def success(
        cls,
        adapter: str,
        step_id: str,
        output: str = "",
        **kwargs: Any,
    ) -> StepOutcome:
        """Create a success outcome."""
        return cls(
            adapter=adapter,
            step_id=step_id,
            status="ok",
            output=output,
            **kwargs,
        )

    @classmethod
    def failure(
        cls,
        adapter: str,
        step_id: str,
        error: str,
        **kwargs: Any,
    ) -> StepOutcome:
        """Create a failure outcome."""
        return cls(
            adapter=adapter,
            step_id=step_id,
            status="failed",
            error=error,
            **kwargs,
        )

    @classmethod
    def skip(
        cls,
        adapter: str,
        step_id: str,
        reason: str = "",
        **kwargs: Any,
    ) -> StepOutcome:
        """Create a skip outcome (dry-run)."""
        return cls(
            adapter=adapter,
            step_id=step_id,
            status="skipped",
            output=reason,
            **kwargs,
        )
