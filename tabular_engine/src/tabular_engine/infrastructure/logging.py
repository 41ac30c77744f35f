"""Structured logging configuration.

All engine components log through structlog. Events are snake_case names
with key/value context (table name, column, row) rather than formatted
strings, so that the JSON renderer yields queryable records.

Cell values travel in events as-is; ``encode_cell_values`` turns the ones
JSON cannot represent (datetimes, NaN) into strings just before rendering.
"""

from __future__ import annotations

import logging
import math
import sys
from contextlib import AbstractContextManager
from datetime import datetime
from typing import TYPE_CHECKING, Any

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

if TYPE_CHECKING:
    from tabular_engine.infrastructure.config import ObservabilityConfig


def encode_cell(value: Any) -> Any:
    """Loggable form of one cell value."""
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, float) and math.isnan(value):
        return "NaN"
    return value


def encode_cell_values(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Processor applying ``encode_cell`` to top-level values and to mappings
    and lists one level down (``cells={...}``, ``columns=[...]``)."""
    for key, value in event_dict.items():
        if isinstance(value, dict):
            event_dict[key] = {k: encode_cell(v) for k, v in value.items()}
        elif isinstance(value, list):
            event_dict[key] = [encode_cell(v) for v in value]
        else:
            event_dict[key] = encode_cell(value)
    return event_dict


def setup_logging(level: str = "INFO", log_format: str = "json") -> None:
    """
    Set up structured logging with structlog.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Renderer to use, 'json' for machines or 'console' for humans
    """
    numeric_level = getattr(logging, level.upper())
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=numeric_level)

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        encode_cell_values,
    ]
    if log_format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def setup_logging_from_config(config: ObservabilityConfig) -> None:
    """Configure logging from the observability section of the config."""
    setup_logging(level=config.log_level, log_format=config.log_format)


def table_context(table: str, **context: Any) -> AbstractContextManager[Any]:
    """Bind ``table`` (and any extra context) to every event logged inside the block.

    Usage:
        with table_context("Products", flow="inventory"):
            inventory.sort_by(ProductColumns.QUANTITY)
    """
    return structlog.contextvars.bound_contextvars(table=table, **context)


def get_logger(name: str | None = None, **initial_context: Any) -> structlog.BoundLogger:
    """
    Get a bound logger instance.

    Args:
        name: Logger name (module name typically)
        **initial_context: Context bound to every event, e.g. ``table="Products"``

    Returns:
        A bound structlog logger
    """
    logger = structlog.get_logger(name)
    if initial_context:
        logger = logger.bind(**initial_context)
    return logger
