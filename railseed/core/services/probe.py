"""
State probe — read-only questions about the filesystem and environment.

This is the single designated boundary for ambient process state:
environment variables, the executable search path, and git remote
configuration. The pipeline asks it which branch to take; it never
mutates anything.
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
from collections.abc import Callable, Mapping
from pathlib import Path

logger = logging.getLogger(__name__)


class StateProbe:
    """Answer branching questions about one project directory.

    Args:
        root: The project directory; relative paths resolve against it.
        environ: Environment mapping (default: ``os.environ``).
        which: Executable lookup (default: ``shutil.which``).
    """

    def __init__(
        self,
        root: Path,
        environ: Mapping[str, str] | None = None,
        which: Callable[[str], str | None] = shutil.which,
    ):
        self._root = Path(root)
        self._environ = os.environ if environ is None else environ
        self._which = which

    @property
    def root(self) -> Path:
        return self._root

    def exists(self, path: str) -> bool:
        """Whether *path* (relative to the project directory) exists."""
        target = Path(path)
        if not target.is_absolute():
            target = self._root / target
        return target.exists()

    def command_available(self, name: str) -> bool:
        """Whether *name* resolves on the execution path. Never runs it."""
        try:
            return self._which(name) is not None
        except OSError:
            return False

    def env_var(self, name: str) -> str | None:
        """Value of environment variable *name*; blank counts as unset."""
        value = self._environ.get(name)
        if value is None or not value.strip():
            return None
        return value.strip()

    def has_remote(self, name: str) -> bool:
        """Whether the project's git repository has a remote called *name*."""
        try:
            result = subprocess.run(
                ["git", "remote"],
                cwd=str(self._root),
                capture_output=True,
                text=True,
                timeout=10,
            )
        except (FileNotFoundError, subprocess.TimeoutExpired, OSError) as e:
            logger.debug("git remote probe failed: %s", e)
            return False
        if result.returncode != 0:
            return False
        return name in result.stdout.split()
