"""Structured logging setup for Hemera.

Supports JSON and text output formats with optional file rotation.
Only the ``hemera`` logger is configured; the host application's root
logger is left alone.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from logging.handlers import RotatingFileHandler
from typing import Any

from hemera.config.settings import HemeraSettings

PACKAGE_LOGGER = "hemera"


class JSONFormatter(logging.Formatter):
    """Format log records as single-line JSON objects.

    Hemera records are emitted from its own wrapper frames, so the source
    location of the record says nothing about the instrumented code and is
    left out. The ``extra`` dict is merged in key order; its ``function``
    entry is the instrumented label. Extra keys never replace the record's
    own ``timestamp``, ``level``, ``logger`` or ``message``.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        extra = getattr(record, "extra", None)
        if isinstance(extra, dict):
            for key in sorted(extra):
                log_entry.setdefault(key, extra[key])

        if record.exc_info and record.exc_info[1] is not None:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str, ensure_ascii=False)


def configure_logging(settings: HemeraSettings) -> logging.Logger:
    """Configure the ``hemera`` logger from settings.

    Args:
        settings: Hemera settings with logging preferences.

    Returns:
        The configured package logger.
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(settings.log_level)

    # Remove existing handlers to avoid duplicates on reconfiguration
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    if settings.log_format == "json":
        formatter: logging.Formatter = JSONFormatter()
    else:
        formatter = logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")

    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setFormatter(formatter)
    package_logger.addHandler(stream_handler)

    if settings.log_file:
        file_handler = RotatingFileHandler(
            filename=settings.log_file,
            maxBytes=settings.log_file_max_bytes,
            backupCount=settings.log_file_backup_count,
        )
        file_handler.setFormatter(formatter)
        package_logger.addHandler(file_handler)

    package_logger.info(
        "Logging configured",
        extra={
            "extra": {
                "log_level": settings.log_level,
                "log_format": settings.log_format,
                "log_file": settings.log_file,
            }
        },
    )
    return package_logger
