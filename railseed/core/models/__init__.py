"""
Domain models — Pydantic types for the scaffolding pipeline.

    from railseed.core.models import Step, StepOutcome, FileTarget, ScaffoldConfig
"""

from railseed.core.models.config import ScaffoldConfig
from railseed.core.models.identity import DerivedIdentity
from railseed.core.models.step import Step, StepKind, StepOutcome
from railseed.core.models.target import ExternalCommand, FileTarget, GeneratedFile

__all__ = [
    "DerivedIdentity",
    "ExternalCommand",
    "FileTarget",
    "GeneratedFile",
    "ScaffoldConfig",
    "Step",
    "StepKind",
    "StepOutcome",
]
