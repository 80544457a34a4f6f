"""
Centralized logging configuration for the position extractor.

This module provides standardized logging configuration using structlog
for all components. All logging throughout the system should use this
configuration to ensure consistent formatting and structured logging.
"""
import logging
import sys
from typing import Any, Optional

import structlog
from structlog.types import FilteringBoundLogger


def configure_logging(
    level: str = "INFO",
    format_json: bool = False,
    include_timestamp: bool = True,
    include_caller: bool = False,
) -> None:
    """
    Configure structlog for the entire application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_json: If True, output JSON format; otherwise human-readable
        include_timestamp: Include timestamp in log output
        include_caller: Include caller information (filename, line number)
    """
    log_level = getattr(logging, level.upper())

    logging.basicConfig(
        level=log_level,
        stream=sys.stdout,
        format="%(message)s",  # structlog will handle formatting
        force=True,
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
        processors.append(structlog.processors.TimeStamper(fmt="iso", utc=True))

    if include_caller:
        processors.append(structlog.processors.CallsiteParameterAdder(
            parameters=[structlog.processors.CallsiteParameter.FILENAME,
                        structlog.processors.CallsiteParameter.LINENO]
        ))

    if format_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()))

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


def get_scheduler_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger bound to the scheduling subsystem.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger for scheduling decisions
    """
    return get_logger(name).bind(subsystem="scheduler")


def log_extraction_summary(
    logger: FilteringBoundLogger,
    day_ahead_date: str,
    trade_count: int,
    position_count: int,
    discarded_count: int,
    output_path: Optional[str],
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log the outcome of one extraction run with a standardized format.

    Args:
        logger: Structlog logger instance
        day_ahead_date: ISO date the positions were extracted for
        trade_count: Number of trades retrieved from the source
        position_count: Number of hourly positions produced
        discarded_count: Number of periods that could not be mapped
        output_path: Written report path, None if nothing was written
        context: Additional context data
    """
    bound_logger = logger.bind(
        day_ahead_date=day_ahead_date,
        trade_count=trade_count,
        position_count=position_count,
        discarded_count=discarded_count,
        output_path=output_path,
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    if discarded_count:
        bound_logger.warning("Extraction completed with discarded periods")
    else:
        bound_logger.info("Extraction completed")
