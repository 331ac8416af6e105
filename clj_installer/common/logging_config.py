# clj_installer/common/logging_config.py
# -*- coding: utf-8 -*-
"""
Logging configuration for the installer.

Human-readable console output by default, JSON lines when requested (for
provisioning systems that collect the installer's output), and an optional
log file.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Optional

CONSOLE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_STANDARD_RECORD_KEYS = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", None, None)).keys()
) | {"message", "asctime"}


class JSONFormatter(logging.Formatter):
    """
    Formats log records as one JSON object per line.

    Includes timestamp (ISO format), level, service name, logger, message,
    source location and any ``extra`` fields passed to the logging call.
    """

    def __init__(self, service_name: str = "clj-installer"):
        super().__init__()
        self.service_name = service_name

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "service": self.service_name,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        extra_fields = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _STANDARD_RECORD_KEYS
        }
        if extra_fields:
            log_entry["extra"] = extra_fields

        return json.dumps(log_entry, ensure_ascii=False, default=str)


def setup_logging(
    service_name: str = "clj-installer",
    verbose: bool = False,
    log_format: str = "text",
    log_file_path: Optional[str] = None,
) -> logging.Logger:
    """
    Set up logging for the installer.

    Args:
        service_name: Name of the top-level logger.
        verbose: Log at DEBUG instead of INFO.
        log_format: "text" for the console format, "json" for JSON lines.
        log_file_path: Also write records (always as JSON) to this file.

    Returns:
        The configured service logger.
    """
    log_level = logging.DEBUG if verbose else logging.INFO

    json_formatter = JSONFormatter(service_name)
    console_formatter = logging.Formatter(CONSOLE_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Clear existing handlers so repeated calls do not duplicate output.
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(
        json_formatter if log_format == "json" else console_formatter
    )
    root_logger.addHandler(console_handler)

    if log_file_path:
        file_handler = logging.FileHandler(log_file_path)
        file_handler.setLevel(log_level)
        file_handler.setFormatter(json_formatter)
        root_logger.addHandler(file_handler)

    logger = logging.getLogger(service_name)
    logger.debug(
        "Logging initialized",
        extra={"log_level": logging.getLevelName(log_level), "log_format": log_format},
    )
    return logger
