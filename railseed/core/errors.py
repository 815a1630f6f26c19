"""
Error taxonomy for the scaffolding engine.

These are raised inside adapters and services and caught at the adapter
boundary, where they become failed StepOutcomes. Only ConfigError
reaches the CLI user directly, before the pipeline starts.
"""

from __future__ import annotations


class ScaffoldError(Exception):
    """Base class for all railseed errors."""


class ConfigError(ScaffoldError):
    """Raised when railseed.yml or its overrides are invalid."""


class ContentMismatch(ScaffoldError):
    """An expected substring or anchor was not found in a target file.

    Signals that the file is not in the freshly generated state the
    step assumed.
    """

    def __init__(self, path: str, expected: str, message: str = "") -> None:
        self.path = path
        self.expected = expected
        super().__init__(message or f"{path}: expected text not found: {_preview(expected)}")


class AnchorNotFoundError(ContentMismatch):
    """insert_anchored could not find its anchor."""

    def __init__(self, path: str, anchor: str) -> None:
        super().__init__(path, anchor, f"{path}: anchor not found: {_preview(anchor)}")


class NotFoundError(ContentMismatch):
    """replace_exact could not find its search text, or the file is missing."""


class AlreadyExistsError(ScaffoldError):
    """A create was requested without overwrite and the file exists."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"File already exists: {path} (use overwrite to replace)")


class ProcessFailure(ScaffoldError):
    """An external command exited non-zero or could not be spawned."""

    def __init__(self, command: str, message: str, return_code: int | None = None) -> None:
        self.command = command
        self.return_code = return_code
        super().__init__(message)


def _preview(text: str, limit: int = 60) -> str:
    """Single-line, truncated repr of a search string for messages."""
    flat = text.replace("\n", "\\n")
    if len(flat) > limit:
        flat = flat[: limit - 3] + "..."
    return repr(flat)
