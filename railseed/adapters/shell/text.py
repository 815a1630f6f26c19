"""
Text adapter — applies Text Mutator operations to files on disk.

Reads the target file, runs one of the pure functions from
``railseed.core.services.text_ops`` over its content, and writes the
result back only when it changed. A missing anchor or search string
becomes a failed outcome naming the file and the expected text.
"""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import ValidationError

from railseed.adapters.base import Adapter, ExecutionContext
from railseed.core.errors import NotFoundError, ScaffoldError
from railseed.core.models.step import StepOutcome
from railseed.core.models.target import FileTarget
from railseed.core.services import text_ops

logger = logging.getLogger(__name__)


class TextEditAdapter(Adapter):
    """Text transformations on existing files.

    Step params are a FileTarget: ``path``, ``operation`` and the
    operation's own fields (``before``/``after``, ``anchor``/``position``,
    ``content``).
    """

    @property
    def name(self) -> str:
        return "text"

    def is_available(self) -> bool:
        return True

    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        try:
            FileTarget.model_validate(context.params)
        except ValidationError as e:
            return False, f"Invalid file target: {e.errors()[0]['msg']}"
        return True, ""

    def execute(self, context: ExecutionContext) -> StepOutcome:
        target = FileTarget.model_validate(context.params)
        path = context.resolve(target.path)
        metadata = {"operation": target.operation, "path": target.path}

        try:
            original = self._read(path, target)
            updated = self._apply(original, target)
        except (ScaffoldError, ValueError, OSError) as e:
            return self._failure(context, str(e), metadata=metadata)

        changed = updated != original
        if changed:
            try:
                path.parent.mkdir(parents=True, exist_ok=True)
                path.write_text(updated, encoding="utf-8")
            except OSError as e:
                return self._failure(context, f"Cannot write {target.path}: {e}", metadata=metadata)
            logger.info("%-6s %s", _VERBS[target.operation], target.path)
        else:
            logger.info("%-6s %s (unchanged)", "identical", target.path)

        return self._success(
            context,
            f"{target.operation} {target.path}" + ("" if changed else " (unchanged)"),
            metadata={**metadata, "changed": changed},
        )

    def _read(self, path: Path, target: FileTarget) -> str:
        if path.is_file():
            return path.read_text(encoding="utf-8")
        # Appending to, or explicitly recreating, a missing file starts from empty.
        if target.operation == "append_if_absent" or (
            target.operation == "replace_whole" and target.create_missing
        ):
            return ""
        raise NotFoundError(target.path, target.path, f"File not found: {target.path}")

    def _apply(self, content: str, target: FileTarget) -> str:
        if target.operation == "replace_exact":
            return text_ops.replace_exact(content, target.before, target.after, path=target.path)
        if target.operation == "replace_whole":
            return text_ops.replace_whole(content, target.content)
        if target.operation == "insert_anchored":
            return text_ops.insert_anchored(
                content, target.anchor, target.content, target.position, path=target.path,
            )
        return text_ops.append_if_absent(content, target.content)


_VERBS = {
    "replace_exact": "gsub",
    "replace_whole": "rewrite",
    "insert_anchored": "insert",
    "append_if_absent": "append",
}
