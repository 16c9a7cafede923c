"""Structured logging configuration for obra-metrics.

Logs go to stderr so that records printed by the console sink on stdout
stay machine-readable.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from obra_metrics.exceptions import ConfigurationError

STANDARD_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# HTTP client used by the inflation source, and the sample data library
QUIET_LOGGERS = ("urllib3", "requests", "faker")


def setup_logging(
    level: str = "INFO",
    format_type: str = "standard",
) -> None:
    """Configure logging for obra-metrics.

    Parameters
    ----------
    level : str
        Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL). Unknown names
        fall back to INFO.
    format_type : str
        ``"standard"`` for pipe-separated text or ``"json"`` for one JSON
        object per line.

    Raises
    ------
    ConfigurationError
        If ``format_type`` is not recognized.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    formatter = _build_formatter(format_type)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(log_level)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    for existing in root_logger.handlers[:]:
        root_logger.removeHandler(existing)
    root_logger.addHandler(handler)

    logging.getLogger("obra_metrics").setLevel(log_level)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))


def _build_formatter(format_type: str) -> logging.Formatter:
    if format_type == "json":
        return JsonFormatter()
    if format_type == "standard":
        return logging.Formatter(fmt=STANDARD_FORMAT, datefmt=DATE_FORMAT)
    raise ConfigurationError(f"Unknown log format {format_type!r}: use 'standard' or 'json'")


class JsonFormatter(logging.Formatter):
    """One JSON object per record, stamped with the record's creation time in UTC."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        # Context passed as ``extra={"extra": {...}}``, e.g. a project id
        if hasattr(record, "extra"):
            log_data.update(record.extra)

        return json.dumps(log_data, default=str, ensure_ascii=False)


def get_logger(name: str) -> logging.Logger:
    """Get a logger with the given name.

    Parameters
    ----------
    name : str
        Logger name (usually __name__).

    Returns
    -------
    logging.Logger
        Configured logger.
    """
    return logging.getLogger(name)
