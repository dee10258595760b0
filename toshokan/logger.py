"""Structured logging using structlog.

The provider is imported by a host application, so nothing here touches the
root logger or structlog's global configuration. Loggers are structlog
wrappers around stdlib loggers under the ``toshokan`` namespace: events are
rendered to a single string (JSON in production, console-friendly in
development) and then handled by whatever logging setup the host has.

``configure_logging()`` is only for running the provider standalone; it
attaches a stdout handler to the ``toshokan`` logger alone.
"""

import logging
import sys

import structlog
from structlog.types import EventDict, Processor

from toshokan.config import settings

PACKAGE_LOGGER = "toshokan"


def add_log_level(_logger: logging.Logger, method_name: str, event_dict: EventDict) -> EventDict:
    """Add log level to the event dict."""
    if method_name == "warn":
        # Structlog uses "warn", but we want "warning"
        event_dict["level"] = "warning"
    else:
        event_dict["level"] = method_name
    return event_dict


def build_processors() -> list[Processor]:
    """Processor chain ending in a renderer chosen by environment.

    - Production: JSON format for log aggregation
    - Development: Console-friendly colored output
    """
    if settings.is_production:
        renderer: Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(
            colors=True,
            exception_formatter=structlog.dev.plain_traceback,
        )

    return [
        structlog.stdlib.filter_by_level,
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        renderer,
    ]


def configure_logging(level: str | None = None) -> None:
    """Send provider logs to stdout when no host logging is configured.

    Only the ``toshokan`` logger is changed; calling this twice does not add
    a second handler.

    Args:
        level: Log level name, defaults to ``settings.log_level``.
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(package_logger.handlers):
        if getattr(handler, "toshokan_handler", False):
            package_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter("%(message)s"))
    handler.toshokan_handler = True

    package_logger.addHandler(handler)
    package_logger.setLevel(getattr(logging, (level or settings.log_level).upper()))
    package_logger.propagate = False


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a logger bound to a stdlib logger in the ``toshokan`` namespace.

    Args:
        name: Logger name, usually ``__name__``. Defaults to ``toshokan``.

    Returns:
        structlog logger instance.

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.info("search_results_found", count=12)
    """
    return structlog.wrap_logger(
        logging.getLogger(name or PACKAGE_LOGGER),
        processors=build_processors(),
        wrapper_class=structlog.stdlib.BoundLogger,
    )
