"""
Git adapter — local repository bootstrap.

Covers the handful of git operations the finalizing stage needs
(init, add, commit, branch rename). Remote creation goes through the
hosting CLI as a plain shell step, not through here.
"""

from __future__ import annotations

import logging
import shutil
import subprocess

from railseed.adapters.base import Adapter, ExecutionContext
from railseed.core.errors import ProcessFailure
from railseed.core.models.step import StepOutcome

logger = logging.getLogger(__name__)

_VALID_OPS = {"init", "add", "commit", "branch"}


class GitAdapter(Adapter):
    """Git operations for a freshly generated project.

    Step params:
        operation (str): One of 'init', 'add', 'commit', 'branch'.
        message (str): Commit message (for 'commit').
        name (str): New name for the current branch (for 'branch').
        paths (list[str]): Paths to stage (for 'add', default: everything).
        timeout (int): Timeout in seconds (default: 60).
    """

    @property
    def name(self) -> str:
        return "git"

    def is_available(self) -> bool:
        return shutil.which("git") is not None

    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        operation = context.params.get("operation", "")
        if not operation:
            return False, "Missing required param: 'operation'"

        if operation not in _VALID_OPS:
            return False, f"Unknown operation '{operation}'. Valid: {', '.join(sorted(_VALID_OPS))}"

        if operation == "commit" and not context.params.get("message"):
            return False, "Missing required param: 'message' for commit operation"

        if operation == "branch" and not context.params.get("name"):
            return False, "Missing required param: 'name' for branch operation"

        return True, ""

    def execute(self, context: ExecutionContext) -> StepOutcome:
        operation = context.params["operation"]
        args = self._args_for(operation, context.params)
        timeout = int(context.params.get("timeout", 60))

        try:
            output = self._git(args, context.working_dir, timeout)
        except ProcessFailure as e:
            return self._failure(
                context,
                str(e),
                metadata={"operation": operation, "command": e.command, "return_code": e.return_code},
            )
        except subprocess.TimeoutExpired:
            return self._failure(context, f"git {operation} timed out after {timeout}s")
        except Exception as e:
            return self._failure(context, f"Git error: {e}")

        logger.info("git  %s", " ".join(args))
        return self._success(context, output, metadata={"operation": operation})

    # ── Helpers ─────────────────────────────────────────────────

    @staticmethod
    def _args_for(operation: str, params: dict) -> list[str]:
        if operation == "init":
            return ["init"]
        if operation == "add":
            return ["add", *(params.get("paths") or ["."])]
        if operation == "commit":
            return ["commit", "-m", params["message"]]
        return ["branch", "-M", params["name"]]

    def _git(self, args: list[str], cwd: str, timeout: int) -> str:
        """Run a git command and return stdout."""
        result = subprocess.run(
            ["git", *args],
            cwd=cwd,
            capture_output=True,
            text=True,
            timeout=timeout,
        )
        if result.returncode != 0:
            raise ProcessFailure(
                f"git {' '.join(args)}",
                result.stderr.strip() or f"git exited with code {result.returncode}",
                return_code=result.returncode,
            )
        return result.stdout.strip()
