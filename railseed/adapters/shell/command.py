"""
Shell command adapter — the Process Runner.

Runs one external command line (bin/rails, bundle, npm, curl, gh, ...)
in the project directory and reports how it went. Whatever goes wrong
(non-zero exit, the shell failing to spawn, a timeout) comes back as a
failed outcome; nothing escapes this boundary.
"""

from __future__ import annotations

import logging
import os
import shutil
import signal
import subprocess
import time
from pathlib import Path

from pydantic import ValidationError

from railseed.adapters.base import Adapter, ExecutionContext
from railseed.core.errors import ProcessFailure
from railseed.core.models.step import StepOutcome
from railseed.core.models.target import ExternalCommand

logger = logging.getLogger(__name__)


class ShellCommandAdapter(Adapter):
    """Execute shell command lines and capture their output.

    Step params (validated as ExternalCommand):
        command (str): The command line, run through ``sh -c``.
        policy (str): 'best-effort' (default) or 'critical'.
        timeout (int): Seconds; overrides the adapter default, 0 = no limit.

    Args:
        default_timeout: Seconds allowed per command when the step
            does not set one. None means no limit.
    """

    def __init__(self, default_timeout: int | None = None):
        self._default_timeout = default_timeout or None

    @property
    def name(self) -> str:
        return "shell"

    def is_available(self) -> bool:
        return shutil.which("sh") is not None

    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        try:
            ExternalCommand.model_validate(context.params)
        except ValidationError as e:
            return False, f"Invalid command params: {e.errors()[0]['msg']}"

        if not Path(context.working_dir).is_dir():
            return False, f"Working directory does not exist: {context.working_dir}"

        return True, ""

    def execute(self, context: ExecutionContext) -> StepOutcome:
        cmd = ExternalCommand.model_validate(context.params)
        timeout = self._default_timeout if cmd.timeout is None else cmd.timeout or None
        metadata = {"command": cmd.command, "policy": cmd.policy}

        logger.info("run  %s", cmd.command)
        start = time.monotonic()

        try:
            output = self._run(cmd.command, context.working_dir, timeout)
        except ProcessFailure as e:
            return self._failure(
                context,
                str(e),
                duration_ms=int((time.monotonic() - start) * 1000),
                metadata={**metadata, "return_code": e.return_code},
            )
        except subprocess.TimeoutExpired:
            return self._failure(
                context,
                f"Command timed out after {timeout}s",
                metadata={**metadata, "timeout": timeout},
            )
        except Exception as e:
            return self._failure(
                context,
                f"Command execution error: {e}",
                metadata=metadata,
            )

        return self._success(
            context,
            output,
            duration_ms=int((time.monotonic() - start) * 1000),
            metadata={**metadata, "return_code": 0},
        )

    def _run(self, command: str, cwd: str, timeout: int | None) -> str:
        """Run *command* through the shell; raise ProcessFailure on non-zero exit.

        The shell leads its own process group, so a timeout kills
        everything it started, not just ``sh`` itself.
        """
        proc = subprocess.Popen(
            command,
            shell=True,
            cwd=cwd,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            start_new_session=True,
        )
        try:
            stdout, stderr = proc.communicate(timeout=timeout)
        except subprocess.TimeoutExpired:
            _kill_group(proc)
            raise

        stdout = stdout.strip()
        if stdout:
            logger.debug("%s\n%s", command, stdout)
        if proc.returncode != 0:
            raise ProcessFailure(
                command,
                stderr.strip() or f"Command exited with code {proc.returncode}",
                return_code=proc.returncode,
            )
        return stdout


def _kill_group(proc: subprocess.Popen) -> None:
    try:
        os.killpg(proc.pid, signal.SIGKILL)
    except ProcessLookupError:
        pass
    proc.communicate()
