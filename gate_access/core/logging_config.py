"""
Logging setup for the gate access service.

Console output plus a size-rotated file under LOG_DIR. Decision audit lines
go through the "gate_access.audit" logger so they can be routed separately.
"""
# Standard library imports
import logging
import logging.handlers
from pathlib import Path
from typing import Optional

# Local application imports
from .config import get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(module)s:%(lineno)d - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
MAX_LOG_SIZE = 10 * 1024 * 1024
BACKUP_COUNT = 5


def setup_logging(log_level: Optional[str] = None, log_dir: Optional[str] = None) -> None:
    """
    Configure the root logger with console and rotating file handlers.

    Args:
        log_level: Level name (DEBUG, INFO, ...); defaults to settings.log_level
        log_dir: Directory for log files; defaults to settings.log_dir
    """
    settings = get_settings()
    level = getattr(logging, (log_level or settings.log_level).upper(), logging.INFO)
    directory = Path(log_dir or settings.log_dir)
    directory.mkdir(parents=True, exist_ok=True)

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)

    file_handler = logging.handlers.RotatingFileHandler(
        directory / "gate_access.log",
        maxBytes=MAX_LOG_SIZE,
        backupCount=BACKUP_COUNT,
        encoding="utf-8",
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(formatter)

    audit_handler = logging.handlers.RotatingFileHandler(
        directory / "gate_decisions.log",
        maxBytes=MAX_LOG_SIZE,
        backupCount=BACKUP_COUNT,
        encoding="utf-8",
    )
    audit_handler.setLevel(logging.INFO)
    audit_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    root_logger.addHandler(console_handler)
    root_logger.addHandler(file_handler)

    audit_logger = logging.getLogger("gate_access.audit")
    audit_logger.setLevel(logging.INFO)
    for handler in audit_logger.handlers[:]:
        audit_logger.removeHandler(handler)
    audit_logger.addHandler(audit_handler)

    # PyMongo is chatty at DEBUG (heartbeats, pool events)
    logging.getLogger("pymongo").setLevel(max(level, logging.WARNING))

    logging.getLogger(__name__).info(
        "Logging configured (level=%s, dir=%s)", logging.getLevelName(level), directory.resolve()
    )
