"""
Config check use case — validate railseed.yml and report issues.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from railseed.core.config.loader import CONFIG_FILE, find_config_file, load_config
from railseed.core.errors import ConfigError
from railseed.core.models.config import ScaffoldConfig
from railseed.core.services.probe import StateProbe


@dataclass
class ConfigCheckResult:
    """Result of configuration validation."""

    valid: bool = False
    config: ScaffoldConfig | None = None
    config_path: Path | None = None
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "config_path": str(self.config_path) if self.config_path else None,
            "errors": self.errors,
            "warnings": self.warnings,
            "config": self.config.model_dump(mode="json") if self.config else None,
        }


def check_config(
    project_dir: Path,
    config_path: Path | None = None,
    probe: StateProbe | None = None,
) -> ConfigCheckResult:
    """Validate the configuration that a run in *project_dir* would use.

    A missing railseed.yml is fine (defaults apply) and only warned about.
    """
    result = ConfigCheckResult()
    project_dir = Path(project_dir)

    if config_path is None:
        config_path = find_config_file(project_dir)
        if config_path is None:
            result.warnings.append(f"No {CONFIG_FILE} found; using defaults.")
    result.config_path = config_path

    try:
        config = load_config(
            project_dir,
            probe or StateProbe(project_dir),
            path=config_path,
        )
    except ConfigError as e:
        result.errors.append(str(e))
        return result
    result.config = config

    if config.command_timeout == 0:
        result.warnings.append("command_timeout is 0: external commands may block forever.")

    if not config.rubocop_url:
        result.warnings.append("rubocop_url is empty: .rubocop.yml will not be downloaded.")

    if not config.private:
        result.warnings.append("private is false: the remote repository will be public.")

    result.valid = not result.errors
    return result
