"""
Configuration loader — builds the ScaffoldConfig for one run.

Three layers, later ones winning:

    railseed.yml  <  environment (via StateProbe)  <  CLI overrides

The file is optional. Everything is validated by the ScaffoldConfig
model; any problem surfaces as ConfigError before the pipeline starts.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from railseed.core.errors import ConfigError
from railseed.core.models.config import ScaffoldConfig
from railseed.core.services.probe import StateProbe

logger = logging.getLogger(__name__)

CONFIG_FILE = "railseed.yml"

OWNER_ENV_VARS = ("HOST_OWNER", "GITHUB_OWNER")
TIMEOUT_ENV_VAR = "RAILSEED_COMMAND_TIMEOUT"


def find_config_file(project_dir: Path) -> Path | None:
    """Return ``railseed.yml`` in *project_dir* if there is one."""
    candidate = Path(project_dir) / CONFIG_FILE
    return candidate if candidate.is_file() else None


def read_config_file(path: Path) -> dict[str, Any]:
    """Parse a config file into a mapping (empty file → empty mapping).

    Raises:
        ConfigError: If the file is unreadable, not YAML, or not a mapping.
    """
    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading config from %s", path)
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")
    return data


def environment_overrides(probe: StateProbe) -> dict[str, Any]:
    """Config values taken from environment variables."""
    values: dict[str, Any] = {}

    for var in OWNER_ENV_VARS:
        owner = probe.env_var(var)
        if owner:
            values["owner"] = owner
            break

    timeout = probe.env_var(TIMEOUT_ENV_VAR)
    if timeout is not None:
        try:
            values["command_timeout"] = int(timeout)
        except ValueError as e:
            raise ConfigError(f"{TIMEOUT_ENV_VAR} must be an integer, got {timeout!r}") from e

    return values


def load_config(
    project_dir: Path,
    probe: StateProbe,
    path: Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> ScaffoldConfig:
    """Build the validated configuration for scaffolding *project_dir*.

    Args:
        project_dir: The Rails project being scaffolded.
        probe: Source of environment values.
        path: Explicit config file. If None, ``railseed.yml`` in
            *project_dir* is used when present.
        overrides: CLI-level values; None entries are ignored.

    Raises:
        ConfigError: If any layer is invalid.
    """
    if path is None:
        path = find_config_file(project_dir)

    data: dict[str, Any] = read_config_file(path) if path is not None else {}
    data.update(environment_overrides(probe))
    data.update({k: v for k, v in (overrides or {}).items() if v is not None})
    data["project_dir"] = Path(project_dir)

    try:
        config = ScaffoldConfig.model_validate(data)
    except ValidationError as e:
        source = path or "settings"
        raise ConfigError(f"Invalid configuration in {source}: {e}") from e

    logger.debug("Config: %s", config.model_dump(mode="json"))
    return config
