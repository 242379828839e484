"""Structured logging for code-pulse.

Records are JSON lines on stderr (stdout carries the MCP stdio transport) or
appended to a log file. Every record is tagged with the service name so logs
from several MCP servers can share one sink.
"""
import sys
from typing import Any, List, Optional, TextIO

import structlog

SERVICE_NAME = "code-pulse"

_LEVELS = {
    "DEBUG": 10,
    "INFO": 20,
    "WARNING": 30,
    "ERROR": 40,
}

# File opened by the last configure_logging call, if any
_log_stream: Optional[TextIO] = None


def _add_service(logger: Any, method_name: str, event_dict: Any) -> Any:
    event_dict.setdefault("service", SERVICE_NAME)
    return event_dict


def configure_logging(log_level: str = "INFO", log_file: Optional[str] = None) -> None:
    """Configure structured JSON logging.

    Reconfiguring closes a log file opened by a previous call.

    Args:
        log_level: DEBUG, INFO, WARNING or ERROR; unknown names mean INFO
        log_file: Append to this file instead of stderr
    """
    global _log_stream

    processors: List[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        _add_service,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer()
    ]

    previous = _log_stream
    _log_stream = open(log_file, "a", encoding="utf-8") if log_file else None

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(_LEVELS.get(log_level.upper(), 20)),
        context_class=dict,
        logger_factory=structlog.WriteLoggerFactory(file=_log_stream or sys.stderr),
        cache_logger_on_first_use=True,
    )

    if previous is not None:
        previous.close()


def get_logger(name: str) -> Any:
    """Get a structlog logger.

    Args:
        name: Logger name, a module path or ``tool.<tool_name>``

    Returns:
        Logger bound to the current configuration on first use
    """
    return structlog.get_logger(name)
