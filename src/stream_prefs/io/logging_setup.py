"""Logging bootstrap for stream-prefs hosts and the CLI.

Engine modules only create module loggers. A host calls configure() once to
attach a stderr handler and a rotating log file; the log file lives in a
``logs`` directory beside the namespace files unless overridden.

// [LAW:single-enforcer] Handler wiring for the stream_prefs logger happens here only.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from logging.handlers import RotatingFileHandler
from pathlib import Path

from stream_prefs.io.storage import get_config_dir

ROOT_LOGGER = "stream_prefs"
LOG_FILE_MAX_BYTES = 20 * 1024 * 1024
LOG_FILE_BACKUPS = 5


@dataclass(frozen=True)
class LoggingRuntime:
    """What configure() settled on."""

    session_name: str
    level_name: str
    level: int
    file_path: str


_RUNTIME: LoggingRuntime | None = None


def _parse_level(raw: str | None) -> tuple[str, int]:
    """Map a level name to (name, number); anything unrecognised is WARNING."""
    level = getattr(logging, str(raw or "").strip().upper(), None)
    if not isinstance(level, int):
        level = logging.WARNING
    return logging.getLevelName(level), level


def log_dir() -> Path:
    """STREAM_PREFS_LOG_DIR, else ``logs`` under the config directory."""
    override = os.environ.get("STREAM_PREFS_LOG_DIR")
    return Path(override) if override else get_config_dir() / "logs"


def _log_file_for(session_name: str) -> Path:
    # One file per session name; size rotation keeps it bounded.
    stem = "".join(ch if (ch.isalnum() or ch in "-_") else "-" for ch in session_name).strip("-_")
    return log_dir() / f"{stem or 'stream-prefs'}.log"


def _attach_handlers(logger: logging.Logger, level: int, file_path: Path) -> None:
    stderr = logging.StreamHandler()
    stderr.setFormatter(logging.Formatter("stream-prefs: %(levelname)s %(message)s"))

    rotating = RotatingFileHandler(
        file_path,
        maxBytes=LOG_FILE_MAX_BYTES,
        backupCount=LOG_FILE_BACKUPS,
        encoding="utf-8",
    )
    rotating.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s", datefmt="%Y-%m-%dT%H:%M:%S")
    )

    logger.handlers.clear()
    for handler in (stderr, rotating):
        handler.setLevel(level)
        logger.addHandler(handler)


def configure(session_name: str = "stream-prefs", level: str | None = None) -> LoggingRuntime:
    """Wire the stream_prefs logger once and return the resulting runtime.

    ``level`` wins over STREAM_PREFS_LOG_LEVEL; STREAM_PREFS_LOG_FILE wins
    over the per-session file in log_dir(). Later calls are no-ops that
    return the first runtime.
    """
    global _RUNTIME
    if _RUNTIME is not None:
        return _RUNTIME

    level_name, level_no = _parse_level(level or os.environ.get("STREAM_PREFS_LOG_LEVEL"))
    env_file = os.environ.get("STREAM_PREFS_LOG_FILE")
    file_path = Path(env_file) if env_file else _log_file_for(session_name)
    file_path.parent.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level_no)
    logger.propagate = False
    _attach_handlers(logger, level_no, file_path)
    logging.captureWarnings(True)

    _RUNTIME = LoggingRuntime(
        session_name=session_name,
        level_name=level_name,
        level=level_no,
        file_path=str(file_path),
    )
    logger.debug("Logging configured: level=%s file=%s", level_name, file_path)
    return _RUNTIME


def get_runtime() -> LoggingRuntime | None:
    """The runtime from configure(), or None before it ran."""
    return _RUNTIME
