"""
Logging setup for the API process.

Everything goes through the root logger with a single format.  Access
logs from uvicorn and request logs from httpx are held at ``WARNING``
unless the API itself runs at ``DEBUG``; the query translator logs
skipped sort segments at ``DEBUG`` and those are the lines worth
reading when a list request misbehaves.
"""

import logging
from pathlib import Path
from typing import Dict, Optional


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

NOISY_LOGGERS: Dict[str, int] = {
    "uvicorn.access": logging.WARNING,
    "httpx": logging.WARNING,
}


def resolve_level(level: str) -> int:
    """Map a level name such as ``"debug"`` to its number, defaulting to INFO."""
    value = logging.getLevelName(level.strip().upper())
    return value if isinstance(value, int) else logging.INFO


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Configure root logging once.

    Parameters
    ----------
    level : str
        Level name for the application loggers.
    logfile : Optional[str]
        Extra file to write to.  Missing parent directories are created.
    """
    root = logging.getLogger()
    if root.handlers:
        return

    numeric_level = resolve_level(level)
    root.setLevel(numeric_level)
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    handlers = [logging.StreamHandler()]
    if logfile:
        log_path = Path(logfile).resolve()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)

    if numeric_level > logging.DEBUG:
        for name, quiet_level in NOISY_LOGGERS.items():
            logging.getLogger(name).setLevel(quiet_level)
