"""
Mock adapter — test double that records steps instead of running them.

Registered under a real adapter name (usually 'shell' or 'git'), it
lets tests drive the whole pipeline without bin/rails, npm or a
network, while still asserting on the exact commands requested.
"""

from __future__ import annotations

from railseed.adapters.base import Adapter, ExecutionContext
from railseed.core.models.step import StepOutcome


class MockAdapter(Adapter):
    """Records every step it receives; succeeds unless told otherwise.

    Failures can be configured per step id or per command substring,
    since step ids depend on position and tests usually care about
    the command.
    """

    def __init__(
        self,
        adapter_name: str = "mock",
        available: bool = True,
        default_output: str = "[mock] executed",
    ):
        self._name = adapter_name
        self._available = available
        self._default_output = default_output
        self._responses: dict[str, StepOutcome] = {}
        self._failing_commands: dict[str, str] = {}
        self._call_log: list[ExecutionContext] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def call_log(self) -> list[ExecutionContext]:
        """All execution contexts this mock has received."""
        return self._call_log

    @property
    def call_count(self) -> int:
        return len(self._call_log)

    @property
    def commands(self) -> list[str]:
        """The 'command' param of every recorded step, in order."""
        return [ctx.params.get("command", "") for ctx in self._call_log]

    @property
    def operations(self) -> list[str]:
        """The 'operation' param of every recorded step, in order."""
        return [ctx.params.get("operation", "") for ctx in self._call_log]

    def is_available(self) -> bool:
        return self._available

    def set_response(self, step_id: str, outcome: StepOutcome) -> None:
        """Set a custom response for a specific step id."""
        self._responses[step_id] = outcome

    def set_failure(self, step_id: str, error: str = "Mock failure") -> None:
        """Configure a specific step id to fail."""
        self._responses[step_id] = StepOutcome.failure(
            adapter=self._name,
            step_id=step_id,
            error=error,
        )

    def fail_command(self, fragment: str, error: str = "Mock failure") -> None:
        """Fail every step whose command contains *fragment*."""
        self._failing_commands[fragment] = error

    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        return True, ""

    def execute(self, context: ExecutionContext) -> StepOutcome:
        self._call_log.append(context)

        if context.step.id in self._responses:
            return self._responses[context.step.id]

        command = context.params.get("command", "")
        for fragment, error in self._failing_commands.items():
            if fragment in command:
                return self._failure(context, error, metadata={"mock": True, "command": command})

        return self._success(context, self._default_output, metadata={"mock": True})

    def reset(self) -> None:
        """Clear call log and configured responses."""
        self._call_log.clear()
        self._responses.clear()
        self._failing_commands.clear()
