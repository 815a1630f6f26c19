"""
Scaffold use case — run the full recipe against one project directory.

Loads configuration, derives the identity, wires the adapter registry
and drives the pipeline to ``done``. The one thing that can stop a run
before it starts is a configuration problem; after that every failure
lands in the report.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from railseed.adapters.registry import AdapterRegistry
from railseed.core.config.loader import load_config
from railseed.core.engine.pipeline import Pipeline, PipelineContext, PipelineReport, Stage
from railseed.core.errors import ConfigError
from railseed.core.models.config import ScaffoldConfig
from railseed.core.models.identity import DerivedIdentity
from railseed.core.services.probe import StateProbe
from railseed.core.services.rails_recipe import build_stages

logger = logging.getLogger(__name__)


@dataclass
class ScaffoldResult:
    """Result of a scaffolding run."""

    report: PipelineReport | None = None
    config: ScaffoldConfig | None = None
    identity: DerivedIdentity | None = None
    dry_run: bool = False
    mock: bool = False
    error: str | None = None

    @property
    def critical_failed(self) -> bool:
        return bool(self.report and self.report.critical_failures)

    def to_dict(self) -> dict:
        result: dict = {}
        if self.error:
            result["error"] = self.error
            return result

        if self.identity:
            result["identity"] = self.identity.model_dump()
        if self.config:
            result["project_dir"] = str(self.config.project_dir)
        result["dry_run"] = self.dry_run
        result["mock"] = self.mock
        if self.report:
            result["report"] = self.report.to_dict()
        return result


def build_registry(config: ScaffoldConfig, mock_mode: bool = False) -> AdapterRegistry:
    """Registry with every adapter the recipe dispatches to."""
    from railseed.adapters.probe import ProbeAdapter
    from railseed.adapters.shell.command import ShellCommandAdapter
    from railseed.adapters.shell.filesystem import FilesystemAdapter
    from railseed.adapters.shell.text import TextEditAdapter
    from railseed.adapters.vcs.git import GitAdapter

    registry = AdapterRegistry(mock_mode=mock_mode)
    registry.register(ShellCommandAdapter(default_timeout=config.timeout))
    registry.register(FilesystemAdapter())
    registry.register(TextEditAdapter())
    registry.register(GitAdapter())
    registry.register(ProbeAdapter())
    return registry


def run_scaffold(
    project_dir: Path,
    config_path: Path | None = None,
    overrides: dict[str, Any] | None = None,
    dry_run: bool = False,
    mock: bool = False,
    registry: AdapterRegistry | None = None,
    probe: StateProbe | None = None,
    stages: list[Stage] | None = None,
) -> ScaffoldResult:
    """Scaffold *project_dir* with the Rails recipe.

    Args:
        project_dir: A freshly created Rails project.
        config_path: Optional explicit config file.
        overrides: CLI-level config values (None entries ignored).
        dry_run: Report the steps without executing them.
        mock: Answer every step with a canned success; ignored when
            *registry* is given.
        registry: Optional pre-configured adapter registry.
        probe: Optional pre-configured state probe.
        stages: Optional replacement for the built-in recipe.

    Returns:
        ScaffoldResult with the pipeline report, or an error.
    """
    result = ScaffoldResult(dry_run=dry_run, mock=mock)
    project_dir = Path(project_dir).resolve()

    if not project_dir.is_dir():
        result.error = f"Project directory not found: {project_dir}"
        return result

    if probe is None:
        probe = StateProbe(project_dir)

    try:
        config = load_config(project_dir, probe, path=config_path, overrides=overrides)
    except ConfigError as e:
        result.error = str(e)
        return result
    result.config = config

    identity = DerivedIdentity.from_path(project_dir)
    result.identity = identity

    if registry is None:
        registry = build_registry(config, mock_mode=mock)
    if registry.mock_mode:
        logger.info("Mock mode: no step touches the project")

    context = PipelineContext(config=config, identity=identity, probe=probe)
    pipeline = Pipeline(
        stages if stages is not None else build_stages(),
        registry,
        context,
        dry_run=dry_run,
    )
    result.report = pipeline.run()

    report = result.report
    logger.info(
        "Scaffold finished: %d steps, %d failed (%d critical)",
        report.total, report.failed, len(report.critical_failures),
    )
    return result
