"""
Logging setup for the authstore package logger: one handler, file or stream.
Modules log through logging.getLogger(__name__); nothing is configured on import.
"""
import logging
from pathlib import Path
from typing import Optional

from authstore.core.settings import _project_root, get_settings

LOGGER_NAME = "authstore"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _log_path(log_file: str) -> Path:
    p = Path(log_file)
    if not p.is_absolute():
        p = _project_root() / p
    return p


def setup_logging(level: Optional[str] = None, log_file: Optional[str] = None) -> logging.Logger:
    """Configure and return the package logger. Defaults come from settings; safe to call twice."""
    settings = get_settings()
    level = (level or settings.log_level).upper()
    log_file = settings.log_file if log_file is None else log_file
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    if not logger.handlers:
        if log_file and log_file.strip():
            log_path = _log_path(log_file)
            log_path.parent.mkdir(parents=True, exist_ok=True)
            handler = logging.FileHandler(log_path, encoding="utf-8")
        else:
            handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    return logger
