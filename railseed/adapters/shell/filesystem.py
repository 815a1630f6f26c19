"""
Filesystem adapter — the File Materializer.

Creates files from literal content, removes files and ensures
directories. Every call commits straight to disk; there is no
buffering and nothing to roll back.
"""

from __future__ import annotations

import logging
from pathlib import Path

from railseed.adapters.base import Adapter, ExecutionContext
from railseed.core.errors import AlreadyExistsError, ScaffoldError
from railseed.core.models.step import StepOutcome

logger = logging.getLogger(__name__)

_VALID_OPS = {"create", "remove", "mkdir"}


class FilesystemAdapter(Adapter):
    """File and directory materialization with outcomes.

    Step params:
        operation (str): One of 'create', 'remove', 'mkdir'.
        path (str): Target path (relative to the project directory or absolute).
        content (str): File content (for 'create').
        overwrite (bool): Replace an existing file (for 'create', default False).
    """

    @property
    def name(self) -> str:
        return "filesystem"

    def is_available(self) -> bool:
        return True

    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        operation = context.params.get("operation", "")
        if not operation:
            return False, "Missing required param: 'operation'"

        if operation not in _VALID_OPS:
            return False, f"Unknown operation '{operation}'. Valid: {', '.join(sorted(_VALID_OPS))}"

        if not context.params.get("path", ""):
            return False, "Missing required param: 'path'"

        if operation == "create" and "content" not in context.params:
            return False, "Missing required param: 'content' for create operation"

        return True, ""

    def execute(self, context: ExecutionContext) -> StepOutcome:
        operation = context.params["operation"]
        target = context.resolve(context.params["path"])

        try:
            if operation == "create":
                message = self._create(
                    target,
                    context.params["content"],
                    overwrite=bool(context.params.get("overwrite", False)),
                )
            elif operation == "remove":
                message = self._remove(target)
            else:
                message = self._mkdir(target)
        except (ScaffoldError, OSError) as e:
            return self._failure(
                context,
                str(e),
                metadata={"operation": operation, "path": str(target)},
            )

        logger.info("%-6s %s", operation, context.params["path"])
        return self._success(
            context,
            message,
            metadata={"operation": operation, "path": str(target)},
        )

    def _create(self, target: Path, content: str, overwrite: bool) -> str:
        if target.exists() and not overwrite:
            raise AlreadyExistsError(str(target))
        existed = target.exists()
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
        verb = "Overwrote" if existed else "Created"
        return f"{verb} {target} ({len(content)} bytes)"

    def _remove(self, target: Path) -> str:
        if not target.exists():
            return f"Nothing to remove: {target}"
        target.unlink()
        return f"Removed {target}"

    def _mkdir(self, target: Path) -> str:
        if target.is_dir():
            return f"Directory exists: {target}"
        target.mkdir(parents=True, exist_ok=True)
        return f"Directory created: {target}"
