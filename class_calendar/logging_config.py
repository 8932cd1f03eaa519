import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from class_calendar.config import settings as default_settings

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(settings=None) -> logging.Logger:
    """Attach console (+ rotating file, if LOG_FILE is set) handlers to the
    "class_calendar" logger. Safe to call more than once."""
    settings = settings or default_settings
    logger = logging.getLogger("class_calendar")
    logger.setLevel((settings.LOG_LEVEL or "INFO").upper())

    if logger.handlers:
        return logger

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers = [logging.StreamHandler()]
    if settings.LOG_FILE:
        log_dir = Path(settings.LOG_DIR)
        log_dir.mkdir(parents=True, exist_ok=True)
        handlers.append(RotatingFileHandler(
            log_dir / settings.LOG_FILE,
            maxBytes=settings.LOG_MAX_BYTES,
            backupCount=settings.LOG_BACKUP_COUNT,
            encoding="utf-8",
        ))

    for h in handlers:
        h.setFormatter(formatter)
        logger.addHandler(h)
    return logger
