"""
File target and external command models — typed views over step params.

Adapters validate a step's ``params`` into one of these before acting,
so malformed steps fail validation instead of failing half-way through.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, model_validator

TextOperation = Literal["replace_exact", "replace_whole", "insert_anchored", "append_if_absent"]


class FileTarget(BaseModel):
    """A file plus the text transformation to apply to it.

    Attributes:
        path:           Path relative to the project directory.
        operation:      Which Text Mutator operation to apply.
        content:        New content (replace_whole), insertion
                        (insert_anchored) or block (append_if_absent).
        before/after:   Search and replacement text (replace_exact).
        anchor:         Marker text (insert_anchored).
        position:       Insert before or after the anchor.
        create_missing: replace_whole only: create the file if absent.
    """

    path: str
    operation: TextOperation
    content: str = ""
    before: str = ""
    after: str = ""
    anchor: str = ""
    position: Literal["before", "after"] = "after"
    create_missing: bool = False

    @model_validator(mode="after")
    def _check_operation_params(self) -> FileTarget:
        if self.operation == "replace_exact" and not self.before:
            raise ValueError("replace_exact requires 'before'")
        if self.operation == "insert_anchored" and not self.anchor:
            raise ValueError("insert_anchored requires 'anchor'")
        if self.operation == "append_if_absent" and not self.content.strip():
            raise ValueError("append_if_absent requires a non-blank 'content'")
        return self


class ExternalCommand(BaseModel):
    """A shell command line plus its execution policy.

    ``best-effort`` failures are logged as warnings; ``critical`` failures
    are logged as errors and counted separately. Neither aborts the run.
    """

    command: str = Field(min_length=1)
    policy: Literal["best-effort", "critical"] = "best-effort"
    timeout: int | None = None   # seconds; None = run default, 0 = no limit


class GeneratedFile(BaseModel):
    """Literal file content produced by a generator, ready to materialize.

    ``overwrite`` decides between a plain create (fails when the file is
    already there) and a forced rewrite.
    """

    path: str
    content: str
    overwrite: bool = False
    reason: str = ""
