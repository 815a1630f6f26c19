"""
Preflight use case — which external tools the recipe needs are present.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from railseed.core.services.probe import StateProbe

# (tool, what it is used for, required)
RECIPE_TOOLS: list[tuple[str, str, bool]] = [
    ("bin/rails", "generators and database tasks", True),
    ("bundle", "gem installation", True),
    ("npm", "React/TypeScript packages", True),
    ("npx", "tsc --init", True),
    ("git", "initial commit", True),
    ("gh", "remote repository creation", False),
    ("curl", ".rubocop.yml download", False),
]


@dataclass
class ToolStatus:
    name: str
    purpose: str
    required: bool
    available: bool


@dataclass
class PreflightResult:
    project_dir: Path
    tools: list[ToolStatus] = field(default_factory=list)

    @property
    def missing_required(self) -> list[str]:
        return [t.name for t in self.tools if t.required and not t.available]

    @property
    def ready(self) -> bool:
        return not self.missing_required

    def to_dict(self) -> dict:
        return {
            "project_dir": str(self.project_dir),
            "ready": self.ready,
            "missing_required": self.missing_required,
            "tools": [
                {
                    "name": t.name,
                    "purpose": t.purpose,
                    "required": t.required,
                    "available": t.available,
                }
                for t in self.tools
            ],
        }


def check_tools(project_dir: Path, probe: StateProbe | None = None) -> PreflightResult:
    """Report availability of each tool the recipe invokes.

    ``bin/rails`` lives inside the project, so it is checked as a file;
    everything else must resolve on PATH.
    """
    probe = probe or StateProbe(project_dir)
    result = PreflightResult(project_dir=Path(project_dir))
    for name, purpose, required in RECIPE_TOOLS:
        available = probe.exists(name) if "/" in name else probe.command_available(name)
        result.tools.append(ToolStatus(name, purpose, required, available))
    return result
