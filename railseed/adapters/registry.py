"""
Adapter registry — central dispatch for all step execution.

The registry is the single point of adapter management. It handles
registration, lookup, mock mode, dry runs and step execution. The
pipeline never talks to adapters directly, only through the registry.
"""

from __future__ import annotations

import logging
import time

from railseed.adapters.base import Adapter, ExecutionContext
from railseed.core.models.step import Step, StepOutcome

logger = logging.getLogger(__name__)


class AdapterRegistry:
    """Central registry and dispatcher for adapters.

    Features:
        - Register adapters by name
        - Mock mode: every step succeeds without touching the project
        - Execute steps through the appropriate adapter

    Args:
        mock_mode: Answer every step with a canned success instead of
            dispatching it (``railseed run --mock``).
    """

    def __init__(self, mock_mode: bool = False):
        self._adapters: dict[str, Adapter] = {}
        self._mock_mode = mock_mode

    @property
    def mock_mode(self) -> bool:
        return self._mock_mode

    def register(self, adapter: Adapter) -> None:
        """Register an adapter under its name."""
        name = adapter.name
        if name in self._adapters:
            logger.warning("Overwriting existing adapter: %s", name)
        self._adapters[name] = adapter
        logger.debug("Registered adapter: %s", name)

    def get(self, name: str) -> Adapter | None:
        """Look up an adapter by name."""
        return self._adapters.get(name)

    def execute_step(
        self,
        step: Step,
        project_root: str = ".",
        dry_run: bool = False,
    ) -> StepOutcome:
        """Execute a step through the appropriate adapter.

        1. Answers directly in mock mode, else resolves the adapter
        2. Builds the execution context
        3. Validates the step
        4. Executes (or dry-runs)
        5. Returns a StepOutcome (never raises)
        """
        start_time = time.monotonic()

        context = ExecutionContext(
            step=step,
            project_root=project_root,
            dry_run=dry_run,
            params=step.params,
        )

        if self._mock_mode:
            return StepOutcome.success(
                adapter=step.adapter,
                step_id=step.id,
                label=step.display,
                output=f"[mock] {step.adapter}:{step.id} executed",
                metadata={"mock": True, "dry_run": dry_run},
            )

        adapter = self._adapters.get(step.adapter)

        if adapter is None:
            return StepOutcome.failure(
                adapter=step.adapter,
                step_id=step.id,
                label=step.display,
                error=f"No adapter registered for '{step.adapter}'",
            )

        try:
            is_valid, error_msg = adapter.validate(context)
            if not is_valid:
                return StepOutcome.failure(
                    adapter=step.adapter,
                    step_id=step.id,
                    label=step.display,
                    error=f"Validation failed: {error_msg}",
                )
        except Exception as e:
            return StepOutcome.failure(
                adapter=step.adapter,
                step_id=step.id,
                label=step.display,
                error=f"Validation error: {e}",
            )

        if dry_run:
            return StepOutcome.skip(
                adapter=step.adapter,
                step_id=step.id,
                label=step.display,
                reason=f"[dry-run] Would execute {step.adapter}: {step.display}",
                metadata={"dry_run": True},
            )

        try:
            outcome = adapter.execute(context)
        except Exception as e:
            logger.error("Adapter %s raised during execution: %s", step.adapter, e)
            outcome = StepOutcome.failure(
                adapter=step.adapter,
                step_id=step.id,
                label=step.display,
                error=f"Unexpected error: {e}",
            )

        outcome.duration_ms = int((time.monotonic() - start_time) * 1000)
        return outcome
