"""
Adapter base — the protocol contract between the pipeline and tools.

Every side effect the pipeline performs goes through an adapter: the
Process Runner (shell, git), the File Materializer (filesystem), the
Text Mutator (text) and the branch recorder (probe). The pipeline only
talks to adapters through this protocol, never directly to tools.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from railseed.core.models.step import Step, StepOutcome


class ExecutionContext(BaseModel):
    """Everything an adapter needs to execute a step."""

    step: Step
    project_root: str = "."
    dry_run: bool = False
    params: dict[str, Any] = Field(default_factory=dict)

    @property
    def working_dir(self) -> str:
        """Directory commands run in and relative paths resolve against."""
        return self.project_root

    def resolve(self, raw_path: str) -> Path:
        """Resolve *raw_path* relative to the working directory."""
        target = Path(raw_path)
        if not target.is_absolute():
            target = Path(self.working_dir) / target
        return target


class Adapter(ABC):
    """Abstract base class for all adapters.

    Adapters perform side effects and return outcomes.
    They NEVER raise exceptions; failures are captured in the StepOutcome.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """The adapter identifier (e.g., 'shell', 'filesystem', 'git')."""

    @abstractmethod
    def is_available(self) -> bool:
        """Check if this adapter's underlying tool is available.

        Should be fast and never raise.
        """

    @abstractmethod
    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        """Validate that the step can be executed.

        Returns:
            (is_valid, error_message). error_message is empty if valid.
        """

    @abstractmethod
    def execute(self, context: ExecutionContext) -> StepOutcome:
        """Execute the step and return an outcome.

        MUST never raise exceptions. All failures are captured
        in the outcome with status='failed'.
        """

    def _success(self, ctx: ExecutionContext, output: str = "", **kwargs: Any) -> StepOutcome:
        return StepOutcome.success(
            adapter=self.name, step_id=ctx.step.id, label=ctx.step.display,
            output=output, **kwargs,
        )

    def _failure(self, ctx: ExecutionContext, error: str, **kwargs: Any) -> StepOutcome:
        return StepOutcome.failure(
            adapter=self.name, step_id=ctx.step.id, label=ctx.step.display,
            error=error, **kwargs,
        )

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
