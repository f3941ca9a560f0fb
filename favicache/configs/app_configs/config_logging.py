"""Logging configuration"""

import logging
import sys
from logging.config import dictConfig

from dockerflow import logging as dockerflow_logging

from favicache.configs import settings


def configure_logging() -> None:
    """Configure logging with MozLog."""
    match settings.logging.format:
        case "mozlog":
            handler = ["console-mozlog"]
        case "pretty":
            handler = ["console-pretty"]
        case _:
            raise ValueError(
                f"Invalid log format: {settings.logging.format}."
                f" Should either be 'mozlog' or 'pretty'."
            )

    if settings.current_env.lower() == "production" and handler != ["console-mozlog"]:
        raise ValueError("Log format must be 'mozlog' in production")

    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "text": {
                    "format": "%(message)s",
                },
                "json": {
                    "()": SeverityJsonFormatter,
                    "logger_name": "favicache",
                },
            },
            "handlers": {
                "console-mozlog": {
                    "level": settings.logging.level,
                    "class": "logging.StreamHandler",
                    "formatter": "json",
                    "stream": sys.stdout,
                },
                "console-pretty": {
                    "level": settings.logging.level,
                    "class": "rich.logging.RichHandler",
                    "formatter": "text",
                },
            },
            "loggers": {
                "favicache": {
                    "handlers": handler,
                    "level": settings.logging.level,
                    "propagate": settings.logging.can_propagate,
                },
            },
        }
    )


SEVERITY_BY_LEVEL: list[tuple[int, int]] = [
    (logging.CRITICAL, 600),
    (logging.ERROR, 500),
    (logging.WARNING, 400),
    (logging.INFO, 200),
    (logging.DEBUG, 100),
]


def severity_for(levelno: int) -> int:
    """Return the Cloud Logging severity of the nearest standard level at or below `levelno`."""
    for level, severity in SEVERITY_BY_LEVEL:
        if levelno >= level:
            return severity
    return 0


class SeverityJsonFormatter(dockerflow_logging.JsonLogFormatter):
    """MozLog JSON records with the numeric `severity` field Cloud Logging reads."""

    def convert_record(self, record):
        """Add `severity` next to MozLog's own `Severity`."""
        out = super().convert_record(record)
        out["severity"] = severity_for(record.levelno)
        return out
