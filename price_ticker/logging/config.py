"""
Centralized logging configuration for the price ticker.

This module configures structlog over the standard library logging module
for every component. Logs go to stderr by default so that diagnostics never
interleave with the price display written to stdout.
"""
import logging
import sys
from typing import IO, Any, Optional

import structlog
from structlog.types import FilteringBoundLogger


def configure_logging(
    level: str = "WARNING",
    format_json: bool = False,
    include_timestamp: bool = True,
    include_caller: bool = False,
    stream: Optional[IO[str]] = None,
    extra_processors: Optional[list] = None
) -> None:
    """
    Configure structlog for the entire application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_json: If True, output JSON format; otherwise human-readable
        include_timestamp: Include timestamp in log output
        include_caller: Include caller information (filename, line number)
        stream: Destination stream, stderr when omitted
        extra_processors: Additional structlog processors to include
    """
    log_level = getattr(logging, level.upper())
    stream = stream if stream is not None else sys.stderr

    logging.basicConfig(
        level=log_level,
        stream=stream,
        format="%(message)s",  # structlog will handle formatting
        force=True
    )

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if include_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))

    if include_caller:
        processors.append(structlog.processors.CallsiteParameterAdder(
            parameters=[structlog.processors.CallsiteParameter.FILENAME,
                       structlog.processors.CallsiteParameter.LINENO]
        ))

    if extra_processors:
        processors.extend(extra_processors)

    if format_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=stream.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> FilteringBoundLogger:
    """
    Get a configured structlog logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger instance
    """
    return structlog.get_logger(name)


def get_fetch_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger for fetch attempt diagnostics.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger bound to the fetch subsystem
    """
    # Initial values stay lazy; bind() would resolve the configuration at import time
    return structlog.get_logger(name, subsystem="fetch")


def get_shutdown_logger(name: str) -> FilteringBoundLogger:
    """Get a logger for cancellation and shutdown events."""
    return structlog.get_logger(name, subsystem="shutdown")


def log_fetch_attempt(
    logger: FilteringBoundLogger,
    attempt: int,
    max_attempts: int,
    classification: str,
    next_action: str,
    delay: float = 0.0,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a failed fetch attempt with standardized format.

    Args:
        logger: Structlog logger instance
        attempt: 1-based attempt number
        max_attempts: Attempt budget of the current poll cycle
        classification: Failure class reported by the retry policy
        next_action: "retry" or "give_up"
        delay: Backoff before the next attempt, in seconds
        context: Additional context data
    """
    bound_logger = logger.bind(
        attempt=attempt,
        max_attempts=max_attempts,
        classification=classification,
        next_action=next_action,
    )

    if next_action == "retry":
        bound_logger = bound_logger.bind(retry_in_seconds=delay)

    if context:
        bound_logger = bound_logger.bind(context=context)

    if next_action == "retry":
        bound_logger.warning("Fetch attempt failed")
    else:
        bound_logger.error("Fetch failed, giving up for this cycle")
