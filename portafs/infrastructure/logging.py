import logging
import sys
from typing import Any

import structlog
from structlog.types import Processor

from portafs.core.config import settings
from portafs.infrastructure.logging_processors import (
    add_service_context,
    add_operation_context,
    add_caller_info,
    format_exception_info,
    set_log_severity,
)

PACKAGE_LOGGER = "portafs"


def configure_default_logging(force: bool = False) -> None:
    """Route events through stdlib logging with nothing attached

    Library default: records go to the ``portafs`` stdlib logger, which only
    carries a ``NullHandler`` until ``setup_logging`` or the host application
    installs handlers. An existing structlog configuration is left alone
    unless ``force`` is set.
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    if not any(isinstance(h, logging.NullHandler) for h in package_logger.handlers):
        package_logger.addHandler(logging.NullHandler())

    if structlog.is_configured() and not force:
        return

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.KeyValueRenderer(key_order=["event"]),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )


def setup_logging() -> None:
    timestamper = structlog.processors.TimeStamper(fmt="iso")

    shared_processors: list[Processor] = [
        # Add contextvars (operation, root path, etc.)
        structlog.contextvars.merge_contextvars,

        add_service_context,
        add_operation_context,

        structlog.processors.add_log_level,
        set_log_severity,

        # Add caller info in development
        add_caller_info if settings.is_development else lambda *args: args[-1],

        format_exception_info,

        timestamper,
    ]

    if settings.log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(
            colors=True,
            exception_formatter=structlog.dev.rich_traceback
        )

    structlog.configure(
        processors=shared_processors + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.handlers.clear()
    package_logger.addHandler(handler)
    package_logger.setLevel(getattr(logging, settings.log_level))
    package_logger.propagate = False


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()


def unbind_context(*keys: str) -> None:
    structlog.contextvars.unbind_contextvars(*keys)


configure_default_logging()
