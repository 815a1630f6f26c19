"""
Scaffold configuration — the explicit record passed into the pipeline.

Built once by the config loader from ``railseed.yml``, the environment
(read through the State Probe) and CLI overrides. Nothing downstream
reads ambient process state for these facts.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_COMMAND_TIMEOUT = 1800
DEFAULT_RUBOCOP_URL = (
    "https://raw.githubusercontent.com/lewagon/rails-templates/master/.rubocop.yml"
)


class ScaffoldConfig(BaseModel):
    """Everything the pipeline needs to know about this run.

    Attributes:
        project_dir:      The freshly created Rails project.
        owner:            Optional org/user namespace for remote creation.
        repo_name:        Remote repository name (default: directory name).
        private:          Create the remote repository as private.
        hosting_cli:      Executable used for remote creation.
        remote_name:      Git remote checked before printing setup hints.
        default_branch:   Branch name the initial commit ends up on.
        command_timeout:  Seconds per external command; 0 disables.
        rubocop_url:      Where to fetch .rubocop.yml from ("" skips it).
    """

    model_config = ConfigDict(extra="forbid")

    project_dir: Path = Field(default_factory=lambda: Path("."))
    owner: str | None = None
    repo_name: str | None = None
    private: bool = True
    hosting_cli: str = "gh"
    remote_name: str = "origin"
    default_branch: str = "main"
    command_timeout: int = Field(default=DEFAULT_COMMAND_TIMEOUT, ge=0)
    rubocop_url: str = DEFAULT_RUBOCOP_URL

    @property
    def timeout(self) -> int | None:
        """The command timeout, or None when disabled."""
        return self.command_timeout or None
