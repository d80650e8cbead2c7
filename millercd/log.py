"""Optional per-session key log.

When enabled, every key press is recorded with the navigator state it was
applied to. The log file is recreated at the start of each session.
"""

from __future__ import annotations

import logging
from pathlib import Path

from platformdirs import user_log_dir

from .config import APP_NAME
from .errors import LogSetupError
from .navigation import Navigator

LOG_PATH = Path(user_log_dir(APP_NAME, appauthor=False)) / f"{APP_NAME}.log"
LOG_SEPARATOR = "-" * 32

logger = logging.getLogger(__name__)


def init_logging(path: Path = LOG_PATH) -> logging.Handler:
    """Attach a truncating file handler at INFO level to the package logger.

    Raises ``LogSetupError`` when the directory or file cannot be created.
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(path, mode="w", encoding="utf-8")
    except OSError as exc:
        raise LogSetupError(f"cannot open log file {path}: {exc}") from exc
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(message)s"))
    package_logger = logging.getLogger(APP_NAME)
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.INFO)
    return handler


def close_logging(handler: logging.Handler) -> None:
    logging.getLogger(APP_NAME).removeHandler(handler)
    handler.close()


def log_key_event(navigator: Navigator, key: str) -> None:
    """Record ``key`` along with the state it arrived in."""
    logger.info(LOG_SEPARATOR)
    logger.info("path: %s", navigator.working_directory)
    logger.info("selected: %s", navigator.current.selected)
    logger.info("key: %s", key)
    logger.info("mode: %s", navigator.mode)
    logger.info("search: %r", navigator.search.query)
