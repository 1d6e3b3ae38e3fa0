"""Logging configuration for the command-line application."""

import logging
import sys

import structlog


def configure_logging(log_level: str = "WARNING", dev_mode: bool = False) -> None:
    """Configure structlog on top of the standard library logging.

    Logs are written to stderr so that command output on stdout stays
    machine readable.

    Args:
        log_level: Minimum level to emit, e.g. "INFO" or "debug".
        dev_mode: Render human friendly console output instead of JSON.
    """
    level = getattr(logging, log_level.upper(), logging.WARNING)
    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
    ]
    if dev_mode:
        processors.append(structlog.dev.ConsoleRenderer())
    else:
        processors.extend(
            [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
        )

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=level,
        force=True,
    )
