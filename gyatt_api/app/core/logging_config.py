"""
Logging setup for the GYATT PPL API.

``setup_logging`` configures the root logger once per process with a
console handler and, when ``LOG_FILE`` is set, a file handler.  A
relative log file path is resolved against the project root, the same
way as ``DATA_DIR``, and its directory is created if needed.  Calling
it again (as every ``create_app`` call in the test suite does) leaves
the existing handlers alone.
"""

import logging
from typing import Optional

from .config import resolve_path

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Configure the root logger.

    Parameters
    ----------
    level : str
        Logging level name (e.g. ``"DEBUG"``, ``"INFO"``), case
        insensitive.  Unknown names fall back to ``INFO``.
    logfile : Optional[str]
        File to log to in addition to the console.
    """
    root = logging.getLogger()
    if root.handlers:
        return

    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root.addHandler(console_handler)

    if logfile:
        log_path = resolve_path(logfile)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)
        root.info("Logging to %s", log_path)
