"""Logging configuration for the library."""

import logging
from logging.config import dictConfig
from typing import Any

from kdindex.core.config import settings

LIBRARY_LOGGER_NAME = "kdindex"
QUERY_LOGGER_NAME = "kdindex.query"

# Attributes every LogRecord carries; anything else arrived through ``extra``.
_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


class KeyValueFormatter(logging.Formatter):
    """Formatter appending a record's ``extra`` fields as ``key=value`` pairs."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        fields = [
            f"{key}={value}"
            for key, value in vars(record).items()
            if key not in _RECORD_ATTRS
        ]
        if fields:
            line = f"{line} | {' '.join(fields)}"
        return line


def setup_logging() -> None:
    """Send the library's records to stdout.

    Only the ``kdindex`` logger is configured, so the application's root
    logger keeps whatever handlers it already has.
    """
    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "key_value": {
                    "()": KeyValueFormatter,
                    "fmt": settings.log_format,
                },
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "stream": "ext://sys.stdout",
                    "formatter": "key_value",
                },
            },
            "loggers": {
                LIBRARY_LOGGER_NAME: {
                    "level": settings.log_level.upper(),
                    "handlers": ["console"],
                    "propagate": False,
                },
            },
        }
    )


def get_logger(name: str) -> logging.Logger:
    """Get logger instance by name."""
    return logging.getLogger(name)


def log_query_info(
    index: str,
    k: int,
    results: int,
    duration_ms: float,
    **kwargs: Any,
) -> None:
    """Log structured kNN query information."""
    logger = get_logger(QUERY_LOGGER_NAME)
    logger.info(
        "Query completed",
        extra={
            "index": index,
            "k": k,
            "results": results,
            "duration_ms": duration_ms,
            **kwargs,
        },
    )
