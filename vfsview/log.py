"""Logging setup.

The terminal belongs to the UI while it runs, so records go to a log file
instead of stderr.
"""

from __future__ import annotations

import logging
from pathlib import Path

from platformdirs import user_log_dir

LOG_FILENAME = "vfsview.log"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def default_log_path() -> Path:
    return Path(user_log_dir("vfsview", appauthor=False)) / LOG_FILENAME


def configure_logging(log_path: Path | None = None, debug: bool = False) -> Path | None:
    """Attach a file handler to the ``vfsview`` logger.

    Returns the log path, or ``None`` when the file cannot be opened (logging
    is then left unconfigured rather than failing startup).
    """
    path = log_path if log_path is not None else default_log_path()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(path, encoding="utf-8")
    except OSError:
        return None
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger = logging.getLogger("vfsview")
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG if debug else logging.INFO)
    return path


__all__ = ["configure_logging", "default_log_path"]
