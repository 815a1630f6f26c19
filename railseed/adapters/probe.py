"""
Probe adapter — records which way a probe-and-branch step went.

The decision itself is made by the pipeline through the StateProbe
while building a stage. This adapter only puts it in the report, so
every branch taken (or not) shows up alongside the steps it chose.
"""

from __future__ import annotations

from railseed.adapters.base import Adapter, ExecutionContext
from railseed.core.models.step import StepOutcome


class ProbeAdapter(Adapter):
    """Turn a recorded branch decision into an outcome.

    Step params:
        question (str): What was asked (e.g. 'Dockerfile exists').
        answer (bool): What the probe said.
        branch (str): The branch taken as a result.
    """

    @property
    def name(self) -> str:
        return "probe"

    def is_available(self) -> bool:
        return True

    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        if not context.params.get("question"):
            return False, "Missing required param: 'question'"
        if "branch" not in context.params:
            return False, "Missing required param: 'branch'"
        return True, ""

    def execute(self, context: ExecutionContext) -> StepOutcome:
        question = context.params["question"]
        answer = bool(context.params.get("answer"))
        branch = context.params["branch"]
        return self._success(
            context,
            f"{question}: {'yes' if answer else 'no'} -> {branch}",
            metadata={"question": question, "answer": answer, "branch": branch},
        )
