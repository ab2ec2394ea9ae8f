"""
Logging configuration for microchess services.

Console output plus a rotating log file, either as text or as JSON lines.

Usage:
    from microchess.logging_config import setup_logging

    setup_logging(level="info", fmt="json", log_file="/var/log/microchess.log")
    logger = logging.getLogger(__name__)
    logger.info("Random chess game generated", extra={"seed": "..."})
"""

import logging
import logging.handlers
import os
import sys
from typing import Optional

from pythonjsonlogger.json import JsonFormatter

LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
LOG_FILE_BACKUPS = 5

TEXT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
JSON_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"

_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def _formatter(fmt: str) -> logging.Formatter:
    if fmt == "json":
        return JsonFormatter(
            JSON_FORMAT,
            rename_fields={
                "asctime": "timestamp",
                "name": "logger",
                "levelname": "level",
            },
        )
    return logging.Formatter(TEXT_FORMAT)


def setup_logging(level: str = "info", fmt: str = "text", log_file: Optional[str] = None) -> None:
    """
    Configure root logger.

    Args:
        level: debug, info, warning, error, critical (default: info)
        fmt: text or json (default: text)
        log_file: Optional rotating log file (10 MiB x 5)
    """
    log_level = _LEVELS.get(level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Remove existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    formatter = _formatter(fmt.lower())

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(log_level)
    console.setFormatter(formatter)
    root_logger.addHandler(console)

    if log_file:
        os.makedirs(os.path.dirname(os.path.abspath(log_file)), exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=LOG_FILE_MAX_BYTES,
            backupCount=LOG_FILE_BACKUPS,
            encoding="utf-8",
        )
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    # Silence noisy libraries
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("chess").setLevel(logging.WARNING)
