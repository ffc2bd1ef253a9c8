"""Custom structlog processors for filesystem logging"""

import os
import sys
import traceback

from structlog.contextvars import get_contextvars
from structlog.types import EventDict, WrappedLogger


def add_service_context(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Add service-level context to logs"""
    event_dict["service"] = "portafs"

    from portafs.core.config import settings
    event_dict["environment"] = settings.environment
    event_dict["pid"] = os.getpid()

    return event_dict


def add_operation_context(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Add filesystem operation context from contextvars"""
    context = get_contextvars()

    for key in ("operation", "root", "encoding"):
        if key in context and key not in event_dict:
            event_dict[key] = context[key]

    return event_dict


def add_caller_info(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Add caller location information for debugging"""
    import inspect

    # Skip structlog and logging frames
    frame = None
    for record in inspect.stack()[1:]:
        module = inspect.getmodule(record.frame)
        name = module.__name__ if module else ""
        if name and not name.startswith(("structlog", "logging", __name__)):
            frame = record
            break

    if frame:
        event_dict["caller"] = {
            "filename": os.path.basename(frame.filename),
            "function": frame.function,
            "lineno": frame.lineno
        }

    return event_dict


def format_exception_info(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Format exception information for better readability"""
    exc_info = event_dict.pop("exc_info", None)
    if exc_info:
        if isinstance(exc_info, tuple):
            exc_type, exc_value, exc_tb = exc_info
        elif isinstance(exc_info, BaseException):
            exc_type, exc_value, exc_tb = type(exc_info), exc_info, exc_info.__traceback__
        else:
            exc_type, exc_value, exc_tb = sys.exc_info()

        if exc_type:
            event_dict["exception"] = {
                "type": exc_type.__name__,
                "message": str(exc_value),
                "traceback": traceback.format_exception(exc_type, exc_value, exc_tb)
            }

    return event_dict


def set_log_severity(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Set severity field for log aggregation systems"""
    level_map = {
        "debug": "DEBUG",
        "info": "INFO",
        "warning": "WARNING",
        "error": "ERROR",
        "critical": "CRITICAL"
    }

    if "level" in event_dict:
        event_dict["severity"] = level_map.get(event_dict["level"], "INFO")

    return event_dict
