"""
Logging configuration: central setup for embedding applications.

Called once at startup by whatever drives a diagnostic run. Every module
that does ``logger = logging.getLogger(__name__)`` inherits this config,
including the executor's per-check ✓/✗/⊘ lines (INFO/WARNING/DEBUG).

Levels are resolved in precedence order:
    explicit argument  >  UPGRADE_LINT_LOG_LEVEL env var  >  WARNING (default)

Optional file output via UPGRADE_LINT_LOG_FILE / UPGRADE_LINT_LOG_FILE_LEVEL.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Mapping
from typing import NamedTuple

ENV_LOG_LEVEL = "UPGRADE_LINT_LOG_LEVEL"
ENV_LOG_FILE = "UPGRADE_LINT_LOG_FILE"
ENV_LOG_FILE_LEVEL = "UPGRADE_LINT_LOG_FILE_LEVEL"

# ── Formats ─────────────────────────────────────────────────────

# (highest level the format applies to, format, datefmt), most detailed first.
# Above INFO only the check outcome lines matter, so no decoration.
_CONSOLE_FORMATS: tuple[tuple[int, str, str | None], ...] = (
    (logging.DEBUG, "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d - %(message)s", "%H:%M:%S"),
    (logging.INFO, "%(asctime)s [%(name)s] %(message)s", "%H:%M:%S"),
)
_CONSOLE_FORMAT_DEFAULT = "%(message)s"

_FILE_FORMAT = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d - %(message)s"
_FILE_DATEFMT = "%Y-%m-%d %H:%M:%S"

# Cluster client libraries are chatty below WARNING
_NOISY_LOGGERS = ("urllib3", "kubernetes", "asyncio")


class LogSettings(NamedTuple):
    """Logging options after applying env fallbacks."""

    level: int
    log_file: str | None
    file_level: int


def resolve_settings(
    level: str | None = None,
    log_file: str | None = None,
    log_file_level: str | None = None,
    environ: Mapping[str, str] | None = None,
) -> LogSettings:
    """Fill unset options from the environment.

    The file level defaults to the console level.
    """
    env = os.environ if environ is None else environ
    numeric_level = _parse_level(level or env.get(ENV_LOG_LEVEL))
    file_level_name = log_file_level or env.get(ENV_LOG_FILE_LEVEL)
    return LogSettings(
        level=numeric_level,
        log_file=log_file or env.get(ENV_LOG_FILE) or None,
        file_level=_parse_level(file_level_name) if file_level_name else numeric_level,
    )


def setup_logging(
    level: str | None = None,
    log_file: str | None = None,
    log_file_level: str | None = None,
    quiet_third_party: bool = True,
    environ: Mapping[str, str] | None = None,
) -> LogSettings:
    """Configure Python logging for the entire process.

    Replaces (and closes) any handlers already on the root logger, so
    calling it again reconfigures rather than duplicating output.

    Args:
        level: Log level name. Falls back to UPGRADE_LINT_LOG_LEVEL, then WARNING.
        log_file: Optional log file path. Falls back to UPGRADE_LINT_LOG_FILE.
        log_file_level: Separate level for the file. Falls back to
            UPGRADE_LINT_LOG_FILE_LEVEL, then ``level``.
        quiet_third_party: Keep client-library loggers at WARNING unless
            running at DEBUG.
        environ: Environment to read fallbacks from (default: os.environ).

    Returns:
        The settings that were applied.
    """
    settings = resolve_settings(level, log_file, log_file_level, environ)

    root = logging.getLogger()
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()

    root.addHandler(_console_handler(settings.level))
    effective_level = settings.level

    if settings.log_file:
        root.addHandler(_file_handler(settings.log_file, settings.file_level))
        effective_level = min(effective_level, settings.file_level)

    root.setLevel(effective_level)

    if quiet_third_party and settings.level > logging.DEBUG:
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    # Don't propagate exceptions from logging itself
    logging.raiseExceptions = False
    return settings


def _console_handler(level: int) -> logging.Handler:
    fmt, datefmt = _CONSOLE_FORMAT_DEFAULT, None
    for threshold, candidate, candidate_datefmt in _CONSOLE_FORMATS:
        if level <= threshold:
            fmt, datefmt = candidate, candidate_datefmt
            break

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt, datefmt=datefmt))
    return handler


def _file_handler(path: str, level: int) -> logging.Handler:
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt=_FILE_DATEFMT))
    return handler


def _parse_level(level: str | None) -> int:
    """Convert a level name to its numeric constant, WARNING if unknown."""
    if not level:
        return logging.WARNING
    numeric = getattr(logging, level.upper(), None)
    if not isinstance(numeric, int):
        return logging.WARNING
    return numeric
