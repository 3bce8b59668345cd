"""Log output for applications that host iccworks.

Library modules only call ``logging.getLogger(__name__)`` and emit nothing
until the host attaches handlers. :func:`configure_logging` installs a file
handler, and optionally a console handler, on the root logger.
:func:`set_library_level` tunes the ``iccworks`` logger on its own, e.g. to
see which named colors or translations were skipped while the rest of the
application stays at INFO.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional, Union

__all__ = [
    "configure_logging",
    "set_library_level",
    "LIBRARY_LOGGER",
    "LOG_DIR_ENV",
    "LOG_LEVEL_ENV",
]

LIBRARY_LOGGER = "iccworks"
LOG_DIR_ENV = "ICCWORKS_LOG_DIR"
LOG_LEVEL_ENV = "ICCWORKS_LOG_LEVEL"

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

Level = Union[int, str]

logger = logging.getLogger(__name__)


class _ManagedFileHandler(logging.FileHandler):
    """File handler owned by :func:`configure_logging`."""


class _ManagedStreamHandler(logging.StreamHandler):
    """Console handler owned by :func:`configure_logging`."""


_MANAGED_HANDLERS = (_ManagedFileHandler, _ManagedStreamHandler)


def _resolve_level(level: Optional[Level]) -> int:
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV, "").strip() or logging.INFO
    if isinstance(level, int):
        return level

    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        logger.warning("Ignoring unknown log level %r", level)
        return logging.INFO
    return resolved


def _log_directory(log_dir: Optional[Path]) -> Path:
    if log_dir:
        return Path(log_dir).expanduser()

    env_override = os.environ.get(LOG_DIR_ENV)
    if env_override:
        return Path(env_override).expanduser()

    # Prefer the project root (folder containing pyproject.toml or .git)
    for candidate in Path(__file__).resolve().parents:
        if (candidate / "pyproject.toml").exists() or (candidate / ".git").exists():
            return candidate / "logs"

    return Path.cwd() / "logs"


def set_library_level(level: Optional[Level]) -> logging.Logger:
    """Set the level of the ``iccworks`` logger only.

    ``logging.NOTSET`` hands the decision back to the root logger.
    """
    library_logger = logging.getLogger(LIBRARY_LOGGER)
    library_logger.setLevel(_resolve_level(level))
    return library_logger


def configure_logging(
    log_name: str = LIBRARY_LOGGER,
    *,
    level: Optional[Level] = None,
    log_dir: Optional[Path] = None,
    include_console: bool = True,
) -> Path:
    """Send root logging to ``<log_dir>/<log_name>.log`` and optionally stderr.

    ``level`` defaults to ``$ICCWORKS_LOG_LEVEL`` and then INFO. Handlers from
    an earlier call are closed and replaced. Returns the log file path.
    """
    target_directory = _log_directory(log_dir)
    target_directory.mkdir(parents=True, exist_ok=True)
    log_path = target_directory / f"{log_name}.log"

    root_logger = logging.getLogger()
    root_logger.setLevel(_resolve_level(level))
    for handler in list(root_logger.handlers):
        if isinstance(handler, _MANAGED_HANDLERS):
            root_logger.removeHandler(handler)
            handler.close()

    # handlers stay at NOTSET so set_library_level can open up iccworks alone
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers = [_ManagedFileHandler(log_path, encoding="utf-8")]
    if include_console:
        handlers.append(_ManagedStreamHandler())
    for handler in handlers:
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    logging.captureWarnings(True)
    logger.debug("Logging to %s", log_path)

    return log_path
