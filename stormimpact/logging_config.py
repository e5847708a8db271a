"""
Pipeline logging.

Loggers live under the "stormimpact" namespace. The first segment of the
name picks the area log file in logs/ (clean, build, dashboard, pipeline);
anything else goes to general.log. DEBUG and up reaches the file, INFO and
up reaches stdout.

    logger = setup_logger("build.aggregate")   # -> logs/build.log
"""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler

from stormimpact.config_paths import LOGS_DIR

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

MAX_BYTES = 5 * 1024 * 1024
BACKUP_COUNT = 3

MODULE_LOG_MAP = {
    "clean": "clean.log",
    "build": "build.log",
    "dashboard": "dashboard.log",
    "pipeline": "pipeline.log",
    "general": "general.log",
}


def log_file_for(name: str) -> str:
    area = name.split(".", 1)[0].lower()
    return MODULE_LOG_MAP.get(area, MODULE_LOG_MAP["general"])


def setup_logger(name: str, level: int = logging.DEBUG) -> logging.Logger:
    """Return the "stormimpact.<name>" logger, attaching handlers on first use."""
    logger = logging.getLogger(f"stormimpact.{name}")
    if logger.handlers:
        return logger

    logger.setLevel(level)
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    LOGS_DIR.mkdir(parents=True, exist_ok=True)
    to_file = RotatingFileHandler(
        LOGS_DIR / log_file_for(name),
        maxBytes=MAX_BYTES,
        backupCount=BACKUP_COUNT,
        encoding="utf-8",
    )
    to_file.setLevel(logging.DEBUG)

    to_console = logging.StreamHandler(sys.stdout)
    to_console.setLevel(logging.INFO)

    for handler in (to_file, to_console):
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    return logger
