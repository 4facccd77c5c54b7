"""Logging setup for the interactive viewer.

The TUI owns the terminal, so records go to a log file instead of stderr.
"""

from __future__ import annotations

import logging
from pathlib import Path

from platformdirs import user_log_dir

APP_NAME = "headingnav"
LOG_FILENAME = "headingnav.log"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def default_log_path() -> Path:
    return Path(user_log_dir(APP_NAME, appauthor=False)) / LOG_FILENAME


def configure_logging(verbose: bool = False, log_path: Path | None = None) -> Path | None:
    """Route ``headingnav`` log records to ``log_path``.

    Returns the file in use, or ``None`` when it could not be opened (records
    then go to stderr, which is only safe outside the TUI).
    """
    logger = logging.getLogger(APP_NAME)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    target = log_path or default_log_path()
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(target, encoding="utf-8")
    except OSError:
        handler = logging.StreamHandler()
        target = None
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False
    return target
