"""
Centralized logging configuration for the trading journal.

This module provides standardized logging configuration using structlog
for all components. Ledger mutations are logged through a dedicated bound
logger so that balance changes can be followed in the output.
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
    extra_processors: Optional[list] = None
) -> None:
    """
    Configure structlog for the entire application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_json: If True, output JSON format; otherwise human-readable
        include_timestamp: Include timestamp in log output
        include_caller: Include caller information (filename, line number)
        extra_processors: Additional structlog processors to include
    """
    log_level = getattr(logging, level.upper())

    logging.basicConfig(
        level=log_level,
        stream=sys.stdout,
        format="%(message)s"  # structlog will handle formatting
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
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

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


def get_ledger_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger bound for ledger mutations.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Structlog logger tagged with the ledger subsystem
    """
    return get_logger(name).bind(
        subsystem="ledger",
        audit_trail=True
    )


def log_ledger_mutation(
    logger: FilteringBoundLogger,
    operation: str,
    version: int,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a ledger mutation with standardized format.

    Args:
        logger: Structlog logger instance
        operation: Name of the mutating operation (append_trade, rebase, restore)
        version: Ledger version after the mutation
        context: Additional context data
    """
    bound_logger = logger.bind(
        operation=operation,
        ledger_version=version,
    )

    if context:
        bound_logger = bound_logger.bind(**context)

    bound_logger.info("Ledger mutated")
