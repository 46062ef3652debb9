"""
Structured logging configuration for reductor.

Provides JSON-formatted logs with a trace_id naming the reducer or contract
being generated, so every line of one generation pass can be correlated.

Environment Variables:
    REDUCTOR_LOG_LEVEL: Log level (DEBUG, INFO, WARNING, ERROR) - default: INFO
    REDUCTOR_LOG_FORMAT: Log format (json, text) - default: json

Usage:
    from reductor.logging_config import setup_logging, get_logger

    setup_logging()
    logger = get_logger(__name__, trace_id="shop.TodoReducer")
    logger.info("Generated reducer with %d cases", 3)
"""

import logging
import os
import sys
from typing import Optional

from pythonjsonlogger import jsonlogger

LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


class TraceIDFilter(logging.Filter):
    """
    Logging filter that adds trace_id to all log records.

    Ensures all records carry a trace_id field, even if not logged through
    get_logger().
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "trace_id"):
            record.trace_id = "N/A"  # type: ignore
        return True


def setup_logging(level: Optional[str] = None, log_format: Optional[str] = None) -> None:
    """
    Configure root logger with structured logging.

    Explicit arguments win over environment variables:
    - REDUCTOR_LOG_LEVEL: DEBUG, INFO, WARNING, ERROR (default: INFO)
    - REDUCTOR_LOG_FORMAT: json, text (default: json)

    Log lines go to stderr so generated source printed on stdout stays clean.
    """
    level_name = (level or os.getenv("REDUCTOR_LOG_LEVEL", "INFO")).upper()
    fmt = (log_format or os.getenv("REDUCTOR_LOG_FORMAT", "json")).lower()
    log_level = LEVELS.get(level_name, logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(log_level)
    handler.addFilter(TraceIDFilter())

    if fmt == "json":
        formatter = jsonlogger.JsonFormatter(
            "%(asctime)s %(name)s %(levelname)s %(message)s %(trace_id)s",
            rename_fields={
                "asctime": "timestamp",
                "name": "logger",
                "levelname": "level",
            },
        )
    else:
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s [trace_id=%(trace_id)s]",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    handler.setFormatter(formatter)
    root_logger.addHandler(handler)


def get_logger(name: str, trace_id: Optional[str] = None) -> logging.LoggerAdapter:
    """
    Get a logger with optional trace_id for correlation.

    Args:
        name: Logger name (typically __name__)
        trace_id: Trace ID (typically the reducer or contract name)

    Returns:
        LoggerAdapter with trace_id in extra fields
    """
    logger = logging.getLogger(name)
    return logging.LoggerAdapter(logger, {"trace_id": trace_id or "N/A"})
