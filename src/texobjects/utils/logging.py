"""Logging setup for the ``texobjects`` package logger.

Only the ``texobjects`` logger is configured. Editor hosts embedding the
resolvers keep full control of the root logger and of their own handlers.
"""

from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path

__all__ = ["DEFAULT_LOG_DIR", "LOG_FILE_NAME", "PACKAGE_LOGGER", "setup_logging"]

PACKAGE_LOGGER = "texobjects"
LOG_FILE_NAME = "texobjects.log"
DEFAULT_LOG_DIR = Path.home() / ".texobjects" / "logs"
_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_active: tuple[int, Path, bool] | None = None


def setup_logging(
    level: int = logging.WARNING,
    *,
    log_dir: Path | str | None = None,
    console: bool = True,
    max_bytes: int = 512_000,
    backup_count: int = 2,
    force: bool = False,
) -> Path:
    """Attach a rotating log file (and optionally stderr) to the package logger.

    Calling again with the same level, directory and console flag is a no-op
    unless ``force`` is set. Any handlers installed by a previous call are
    closed and replaced.
    """

    global _active
    log_path = Path(log_dir or DEFAULT_LOG_DIR).expanduser() / LOG_FILE_NAME
    if not force and _active == (level, log_path, console):
        return log_path

    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    log_path.parent.mkdir(parents=True, exist_ok=True)
    formatter = logging.Formatter(fmt=_FORMAT, datefmt=_DATE_FORMAT)
    handlers: list[logging.Handler] = [
        logging.handlers.RotatingFileHandler(
            log_path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
        )
    ]
    if console:
        handlers.append(logging.StreamHandler())
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.setLevel(level)
    # Records stay out of the host's root handlers.
    logger.propagate = False
    _active = (level, log_path, console)
    return log_path
