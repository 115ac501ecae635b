"""
Structured logging configuration for proptest-engine.

Provides JSON-formatted logs with trace_id support, so that lines from a
supervisor and its fork-mode workers can be correlated by replay seed.

Environment Variables:
    PROPTEST_LOG_LEVEL: Log level (DEBUG, INFO, WARNING, ERROR) - default: INFO
    PROPTEST_LOG_FORMAT: Log format (json, text) - default: json

Usage:
    from proptest_engine.logging_config import setup_logging, get_logger

    setup_logging()
    logger = get_logger(__name__, trace_id="1-2-3-4")
    logger.info("Shrinking", extra={"case": 12})
"""

import logging
import os
import sys
from typing import Optional

from pythonjsonlogger.json import JsonFormatter


class TraceIDFilter(logging.Filter):
    """
    Logging filter that adds trace_id to all log records.

    Ensures all logs have a trace_id field, even if not set via LoggerAdapter.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "trace_id"):
            record.trace_id = "N/A"  # type: ignore
        return True


def setup_logging(level: Optional[str] = None, fmt: Optional[str] = None) -> None:
    """
    Configure root logger with structured logging.

    Arguments override the environment:
    - PROPTEST_LOG_LEVEL: DEBUG, INFO, WARNING, ERROR (default: INFO)
    - PROPTEST_LOG_FORMAT: json, text (default: json)
    """
    log_level = (level or os.getenv("PROPTEST_LOG_LEVEL", "INFO")).upper()
    log_format = (fmt or os.getenv("PROPTEST_LOG_FORMAT", "json")).lower()

    level_map = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }
    lvl = level_map.get(log_level, logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(lvl)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    # stderr keeps worker logs out of test output
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(lvl)
    handler.addFilter(TraceIDFilter())

    if log_format == "json":
        formatter: logging.Formatter = JsonFormatter(
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
        trace_id: Trace ID for correlating logs (typically the replay seed)

    Returns:
        LoggerAdapter with trace_id in extra fields
    """
    logger = logging.getLogger(name)
    return logging.LoggerAdapter(logger, {"trace_id": trace_id or "N/A"})


def seed_trace_id(seed) -> str:
    """Render a four-word seed as a trace id."""
    return "-".join(str(w) for w in seed)
