"""Structured logging configuration — structlog + stdlib logging."""

from __future__ import annotations

import logging
import logging.config
import os

import structlog

# Applied to structlog events and to records from plain stdlib loggers alike.
SHARED_PROCESSORS: list[structlog.types.Processor] = [
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso", utc=True),
]


def _renderer(log_format: str) -> structlog.types.Processor:
    if log_format == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=False)


def setup_logging(default_level: str = "WARNING") -> None:
    """Configure structlog and stdlib logging.

    Reads from environment variables:
        IMPLICIT_DEPS_LOG_LEVEL  — log level (default: *default_level*)
        IMPLICIT_DEPS_LOG_FORMAT — console | json (default: console)

    Logs go to stderr; stdout is reserved for command output.
    """
    log_level = os.environ.get("IMPLICIT_DEPS_LOG_LEVEL", default_level).upper()
    log_format = os.environ.get("IMPLICIT_DEPS_LOG_FORMAT", "console").lower()

    structlog.configure(
        processors=[*SHARED_PROCESSORS, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = {
        "()": structlog.stdlib.ProcessorFormatter,
        "foreign_pre_chain": SHARED_PROCESSORS,
        "processors": [
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            _renderer(log_format),
        ],
    }
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {"structlog": formatter},
            "handlers": {
                "stderr": {
                    "class": "logging.StreamHandler",
                    "stream": "ext://sys.stderr",
                    "formatter": "structlog",
                },
            },
            "root": {"handlers": ["stderr"], "level": log_level},
            "loggers": {"implicit_deps": {"level": log_level}},
        }
    )
