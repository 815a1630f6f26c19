"""
Logging configuration — set up once by the CLI before anything runs.

Modules log through ``logging.getLogger(__name__)`` and inherit what is
configured here. The console level comes from, in order:

    --debug  >  --verbose  >  --quiet  >  RAILSEED_LOG_LEVEL  >  WARNING

RAILSEED_LOG_FILE adds a file handler; RAILSEED_LOG_FILE_LEVEL sets its
level independently of the console.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Mapping

LOG_LEVEL_ENV = "RAILSEED_LOG_LEVEL"
LOG_FILE_ENV = "RAILSEED_LOG_FILE"
LOG_FILE_LEVEL_ENV = "RAILSEED_LOG_FILE_LEVEL"

# Console formats, keyed by the most verbose level they apply to.
_CONSOLE_FORMATS: list[tuple[int, str, str | None]] = [
    (logging.DEBUG, "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s", "%H:%M:%S"),
    (logging.INFO, "%(asctime)s %(message)s", "%H:%M:%S"),
]
_FMT_WARNING = "%(levelname)s: %(message)s"

_FMT_FILE = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s"
_DATEFMT_FILE = "%Y-%m-%d %H:%M:%S"


def resolve_level(
    *,
    debug: bool = False,
    verbose: bool = False,
    quiet: bool = False,
    environ: Mapping[str, str] | None = None,
) -> str:
    """Pick the console level name from CLI flags and the environment."""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    if quiet:
        return "ERROR"
    env_level = (environ or {}).get(LOG_LEVEL_ENV, "")
    return env_level.strip().upper() or "WARNING"


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> None:
    """Install console (and optional file) handlers on the root logger.

    Args:
        level: Console level name.
        log_file: Optional path to append full-detail logs to.
        log_file_level: Level for the file; defaults to ``level``.
    """
    console_level = _parse_level(level)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(_console_formatter(console_level))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)
    root_level = console_level

    if log_file:
        file_level = _parse_level(log_file_level) if log_file_level else console_level
        handler = logging.FileHandler(log_file, encoding="utf-8")
        handler.setLevel(file_level)
        handler.setFormatter(logging.Formatter(_FMT_FILE, datefmt=_DATEFMT_FILE))
        root.addHandler(handler)
        root_level = min(root_level, file_level)

    root.setLevel(root_level)
    logging.raiseExceptions = False


def _console_formatter(level: int) -> logging.Formatter:
    for threshold, fmt, datefmt in _CONSOLE_FORMATS:
        if level <= threshold:
            return logging.Formatter(fmt, datefmt=datefmt)
    return logging.Formatter(_FMT_WARNING)


def _parse_level(level: str | None) -> int:
    """Level name to number; anything unrecognized means WARNING."""
    numeric = getattr(logging, (level or "").upper(), None)
    return numeric if isinstance(numeric, int) else logging.WARNING
