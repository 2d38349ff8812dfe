"""
Logging Configuration for Gold-Layer Sales Analytics

Report modules log through structlog; records from third-party libraries
that use the standard library go through the same renderer, so a report
run produces a single stream of JSON (or console) lines.
"""

import logging
import sys
from typing import List, Optional

import structlog
from structlog.processors import JSONRenderer, TimeStamper
from structlog.stdlib import add_log_level, ProcessorFormatter

from src.config.settings import get_settings


def _pre_chain() -> List:
    """Processors applied to both structlog and stdlib records"""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        add_log_level,
        TimeStamper(fmt="iso", utc=True),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]


def _renderer(log_format: str):
    if log_format == "json":
        return JSONRenderer(sort_keys=True)
    # console output is for local runs; colors only on a terminal
    return structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())


def configure_logging(
    log_level: Optional[str] = None,
    log_format: Optional[str] = None,
) -> None:
    """
    Route structlog and stdlib logging through one stdout handler.

    Args:
        log_level: Override log level (DEBUG, INFO, WARNING, ERROR)
        log_format: Override renderer ("json" or "text")
    """
    monitoring = get_settings().monitoring
    level = (log_level or monitoring.log_level).upper()
    log_format = log_format or monitoring.log_format
    numeric_level = logging.getLevelName(level)
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    pre_chain = _pre_chain()
    structlog.configure(
        processors=pre_chain + [ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        ProcessorFormatter(processor=_renderer(log_format), foreign_pre_chain=pre_chain)
    )

    root_logger = logging.getLogger()
    root_logger.handlers = [handler]
    root_logger.setLevel(numeric_level)

    # chatty dependencies only surface warnings
    for name in monitoring.quiet_loggers:
        logging.getLogger(name).setLevel(max(numeric_level, logging.WARNING))

    get_logger(__name__).debug("Logging configured", level=level, format=log_format)


def bind_report_context(**fields) -> None:
    """Attach fields (run id, gold path, ...) to every log line of this run"""
    structlog.contextvars.bind_contextvars(**fields)


def clear_report_context() -> None:
    structlog.contextvars.clear_contextvars()


def get_logger(name: str):
    """Get a logger instance with the given name."""
    return structlog.get_logger(name)
