"""Structured logging: structlog rendering on top of stdlib logging."""

from __future__ import annotations

import logging
import logging.config
import os

import structlog

_QUIET_LOGGERS = ("uvicorn.access", "sqlalchemy.engine", "asyncpg", "aiosqlite")


def _renderer(log_format: str) -> structlog.types.Processor:
    if log_format == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer()


def setup_logging(level: str | None = None, log_format: str | None = None) -> None:
    """Configure structlog and route stdlib records through the same renderer.

    Arguments win over the environment:
        JOBBOARD_LOG_LEVEL  - log level for the ``jobboard`` loggers (default: INFO)
        JOBBOARD_LOG_FORMAT - console | json (default: console)
    """
    log_level = (level or os.environ.get("JOBBOARD_LOG_LEVEL", "INFO")).upper()
    fmt = (log_format or os.environ.get("JOBBOARD_LOG_FORMAT", "console")).lower()

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    structlog.configure(
        processors=[*shared_processors, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    loggers: dict[str, dict] = {name: {"level": "WARNING"} for name in _QUIET_LOGGERS}
    loggers["jobboard"] = {"level": log_level}
    loggers["uvicorn.error"] = {"level": "INFO"}

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "structlog": {
                    "()": structlog.stdlib.ProcessorFormatter,
                    "foreign_pre_chain": shared_processors,
                    "processors": [
                        structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                        _renderer(fmt),
                    ],
                },
            },
            "handlers": {
                "default": {
                    "class": "logging.StreamHandler",
                    "stream": "ext://sys.stdout",
                    "formatter": "structlog",
                },
            },
            "root": {"handlers": ["default"], "level": log_level},
            "loggers": loggers,
        }
    )
