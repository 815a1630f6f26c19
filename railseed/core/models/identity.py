"""
Derived identity — the naming facts computed once from the project directory.
"""

from __future__ import annotations

import re
from pathlib import Path

from pydantic import BaseModel, ConfigDict

_NON_IDENTIFIER_RE = re.compile(r"[^A-Za-z0-9_]")
_NON_TITLE_RE = re.compile(r"[^A-Za-z0-9]")


class DerivedIdentity(BaseModel):
    """Identifier/title pair for the project being scaffolded.

    Attributes:
        identifier: Word-capitalized, concatenated name ("MyCoolApp").
        title:      Word-capitalized, space-joined name ("My Cool App").
        repo_name:  The raw directory base name ("my_cool_app").
    """

    model_config = ConfigDict(frozen=True)

    identifier: str
    title: str
    repo_name: str

    @classmethod
    def from_name(cls, name: str) -> DerivedIdentity:
        """Derive the identity from a directory base name."""
        parts = _NON_IDENTIFIER_RE.sub("_", name).split("_")
        identifier = "".join(p.capitalize() for p in parts if p)

        words = _NON_TITLE_RE.sub(" ", name).split()
        title = " ".join(w.capitalize() for w in words)

        return cls(identifier=identifier, title=title, repo_name=name)

    @classmethod
    def from_path(cls, project_dir: Path) -> DerivedIdentity:
        """Derive the identity from a project directory path."""
        return cls.from_name(project_dir.resolve().name)
