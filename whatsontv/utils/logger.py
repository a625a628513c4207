"""Structured logging configuration using structlog.

Provides centralized logging setup with:
- JSON output for Lambda/cron, colored console output for interactive use
- Context binding via contextvars (e.g. Lambda request_id)
- Timestamp and log level on every log line
- Exception formatting

Logs are written to stderr so schedule output on stdout stays clean.

Usage:
    from whatsontv.utils.logger import setup_logging

    setup_logging(log_level="INFO", log_format="console")

    import structlog
    logger = structlog.get_logger(__name__)
    logger.info("event_name", key="value")
"""
from __future__ import annotations

import logging
import sys

import structlog


def setup_logging(log_level: str = "INFO", log_format: str = "console") -> None:
    """Configure structlog for the entire application.

    Args:
        log_level: Logging level: DEBUG, INFO, WARNING, ERROR, CRITICAL.
        log_format: Output format: 'json' for machines, 'console' for humans.
    """
    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if log_format == "json":
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    level = getattr(logging, log_level.upper(), logging.INFO)

    structlog.configure(
        processors=[*shared_processors, renderer],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )

    # Route stdlib logging (httpx, httpcore) through the same level
    logging.basicConfig(format="%(message)s", level=level, stream=sys.stderr)
    # httpx logs every request at INFO; api_request/api_response already cover it
    logging.getLogger("httpx").setLevel(max(level, logging.WARNING))
