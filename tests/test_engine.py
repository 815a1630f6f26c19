"""
Tests for the engine — execution plans, reports, and the staged pipeline.
"""

import logging
from pathlib import Path

import pytest

from railseed.adapters.mock import MockAdapter
from railseed.adapters.registry import AdapterRegistry
from railseed.core.engine.executor import ExecutionPlan, ExecutionReport, execute_plan
from railseed.core.engine.pipeline import (
    STAGE_ORDER,
    Pipeline,
    PipelineContext,
    Stage,
    StageName,
)
from railseed.core.models.config import ScaffoldConfig
from railseed.core.models.identity import DerivedIdentity
from railseed.core.models.step import StepOutcome
from railseed.core.services import steps

# ── Plan Tests ───────────────────────────────────────────────────────


class TestExecutionPlan:
    def test_assigns_stage_and_ids(self):
        plan = ExecutionPlan(stage="generating")
        a = plan.add(steps.run("bundle install"))
        b = plan.add(steps.rails("vite:install"))
        assert (a.id, b.id) == ("generating-001", "generating-002")
        assert a.stage == "generating"
        assert plan.total_steps == 2

    def test_offset(self):
        plan = ExecutionPlan(stage="init", offset=4)
        assert plan.add(steps.run("true")).id == "init-005"


# ── Report Tests ─────────────────────────────────────────────────────


class TestExecutionReport:
    def _outcome(self, status: str, **metadata) -> StepOutcome:
        return StepOutcome(adapter="shell", step_id="x", status=status, metadata=metadata)

    def test_all_ok(self):
        report = ExecutionReport(outcomes=[self._outcome("ok"), self._outcome("ok")])
        assert report.status == "ok"
        assert report.all_ok

    def test_partial(self):
        report = ExecutionReport(outcomes=[self._outcome("ok"), self._outcome("failed")])
        assert report.status == "partial"
        assert report.failed == 1

    def test_failed(self):
        assert ExecutionReport(outcomes=[self._outcome("failed")]).status == "failed"

    def test_critical_failures(self):
        report = ExecutionReport(outcomes=[
            self._outcome("failed", policy="critical"),
            self._outcome("failed", policy="best-effort"),
            self._outcome("ok", policy="critical"),
        ])
        assert len(report.critical_failures) == 1
        assert len(report.failures) == 2

    def test_to_dict(self):
        report = ExecutionReport(outcomes=[self._outcome("skipped")])
        data = report.to_dict()
        assert data["skipped"] == 1
        assert data["status"] == "ok"
        assert data["outcomes"][0]["status"] == "skipped"


# ── Execution Tests ──────────────────────────────────────────────────


class TestExecutePlan:
    def _registry(self) -> tuple[AdapterRegistry, MockAdapter]:
        mock = MockAdapter(adapter_name="shell")
        reg = AdapterRegistry()
        reg.register(mock)
        return reg, mock

    def test_failure_does_not_stop_plan(self):
        reg, mock = self._registry()
        mock.fail_command("step-2")
        plan = ExecutionPlan(stage="generating")
        for i in range(1, 5):
            plan.add(steps.run(f"echo step-{i}"))

        report = execute_plan(plan, reg)

        assert mock.commands == [f"echo step-{i}" for i in range(1, 5)]
        assert [o.status for o in report.outcomes] == ["ok", "failed", "ok", "ok"]

    def test_failure_logged_as_warning(self, caplog):
        reg, mock = self._registry()
        mock.fail_command("curl", "network down")
        plan = ExecutionPlan(stage="finalizing")
        plan.add(steps.run("curl -L x > .rubocop.yml", label="download .rubocop.yml"))

        with caplog.at_level(logging.WARNING):
            execute_plan(plan, reg)

        record = next(r for r in caplog.records if r.levelno == logging.WARNING)
        assert "download .rubocop.yml" in record.getMessage()
        assert "curl -L x > .rubocop.yml" in record.getMessage()
        assert "network down" in record.getMessage()

    def test_failure_log_names_labelled_command(self, caplog):
        reg, mock = self._registry()
        mock.fail_command("false", "Command exited with code 1")
        plan = ExecutionPlan(stage="finalizing")
        plan.add(steps.run("false", label="create remote repository"))

        with caplog.at_level(logging.WARNING):
            execute_plan(plan, reg)

        messages = [r.getMessage() for r in caplog.records if r.levelno == logging.WARNING]
        assert messages == ["✗ create remote repository [false]: Command exited with code 1"]

    def test_critical_failure_logged_as_error(self, caplog):
        reg, mock = self._registry()
        mock.fail_command("db:migrate")
        plan = ExecutionPlan(stage="generating")
        plan.add(steps.rails("db:migrate", policy="critical"))

        with caplog.at_level(logging.WARNING):
            report = execute_plan(plan, reg)

        assert any(r.levelno == logging.ERROR for r in caplog.records)
        assert len(report.critical_failures) == 1

    def test_dry_run(self, tmp_path: Path):
        reg, mock = self._registry()
        plan = ExecutionPlan(stage="init")
        plan.add(steps.run("rm -rf everything"))
        report = execute_plan(plan, reg, project_root=str(tmp_path), dry_run=True)
        assert report.skipped == 1
        assert mock.call_count == 0


# ── Pipeline Tests ───────────────────────────────────────────────────


def _context(root: Path) -> PipelineContext:
    from railseed.core.services.probe import StateProbe

    return PipelineContext(
        config=ScaffoldConfig(project_dir=root),
        identity=DerivedIdentity.from_name(root.name),
        probe=StateProbe(root, environ={}, which=lambda n: None),
    )


class TestPipeline:
    def test_stage_order_is_fixed(self):
        assert [s.value for s in STAGE_ORDER] == [
            "init", "configuring", "generating", "integrating", "finalizing", "done",
        ]

    def test_runs_stages_in_state_order(self, tmp_path: Path):
        seen: list[str] = []

        def record(name):
            def builder(ctx):
                seen.append(name)
                return []
            return builder

        stages = [
            Stage(StageName.FINALIZING, [record("finalizing")]),
            Stage(StageName.INIT, [record("init")]),
            Stage(StageName.GENERATING, [record("generating")]),
        ]
        pipeline = Pipeline(stages, AdapterRegistry(), _context(tmp_path))
        report = pipeline.run()

        assert seen == ["init", "generating", "finalizing"]
        assert pipeline.state is StageName.DONE
        assert report.state == "done"
        assert list(report.stages) == ["init", "configuring", "generating", "integrating", "finalizing"]

    def test_builders_see_earlier_effects(self, tmp_path: Path, registry):
        def create(ctx):
            return [steps.create_file("marker.txt", "x")]

        decisions: list[bool] = []

        def check(ctx):
            decisions.append(ctx.probe.exists("marker.txt"))
            return []

        stages = [Stage(StageName.GENERATING, [create]), Stage(StageName.INTEGRATING, [check])]
        Pipeline(stages, registry, _context(tmp_path)).run()
        assert decisions == [True]

    def test_failing_stage_does_not_block_later_stages(self, tmp_path: Path, registry, shell_mock):
        shell_mock.fail_command("bundle")
        stages = [
            Stage(StageName.GENERATING, [lambda ctx: [steps.run("bundle install")]]),
            Stage(StageName.FINALIZING, [lambda ctx: [steps.run("echo after")]]),
        ]
        report = Pipeline(stages, registry, _context(tmp_path)).run()
        assert shell_mock.commands == ["bundle install", "echo after"]
        assert report.stages["generating"].status == "failed"
        assert report.stages["finalizing"].status == "ok"
        assert report.state == "done"

    def test_raising_builder_is_recorded_as_failure(self, tmp_path: Path, registry, shell_mock):
        def unreadable(ctx):
            raise PermissionError("[Errno 13] Permission denied: 'app/frontend'")

        stages = [
            Stage(StageName.INTEGRATING, [unreadable, lambda ctx: [steps.run("npm i")]]),
            Stage(StageName.FINALIZING, [lambda ctx: [steps.run("echo after")]]),
        ]
        report = Pipeline(stages, registry, _context(tmp_path)).run()

        assert report.state == "done"
        assert shell_mock.commands == ["npm i", "echo after"]
        failure = report.failures[0]
        assert failure.adapter == "pipeline"
        assert failure.label == "unreadable"
        assert "Permission denied" in failure.error
        assert [o.step_id for o in report.stages["integrating"].outcomes] == [
            "integrating-001", "integrating-002",
        ]

    def test_ids_unique_across_segments(self, tmp_path: Path, registry):
        seg = lambda ctx: [steps.run("a"), steps.run("b")]  # noqa: E731
        report = Pipeline([Stage(StageName.INIT, [seg, seg])], registry, _context(tmp_path)).run()
        ids = [o.step_id for o in report.outcomes]
        assert ids == ["init-001", "init-002", "init-003", "init-004"]

    def test_hints_collected(self, tmp_path: Path):
        def hint(ctx):
            ctx.hints.append("do this by hand")
            return []

        report = Pipeline([Stage(StageName.FINALIZING, [hint])], AdapterRegistry(), _context(tmp_path)).run()
        assert report.hints == ["do this by hand"]
        assert report.to_dict()["hints"] == ["do this by hand"]

    def test_rejects_duplicate_stage(self, tmp_path: Path):
        with pytest.raises(ValueError):
            Pipeline([Stage(StageName.INIT), Stage(StageName.INIT)], AdapterRegistry(), _context(tmp_path))

    def test_rejects_done_stage(self, tmp_path: Path):
        with pytest.raises(ValueError):
            Pipeline([Stage(StageName.DONE)], AdapterRegistry(), _context(tmp_path))
