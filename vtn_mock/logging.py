"""
Structured logging configuration using structlog.

Standardized log format:
{
    "ts": "2026-03-06T10:55:26.543210Z",
    "level": "info",
    "service": "mock-vtn",
    "correlation_id": "uuid-v4",
    "event": "subscription.upserted",
    "module": "vtn_mock.storage.subscription_registry",
    "func_name": "upsert",
    "lineno": 42,
    ...additional context...
}
"""
import structlog
import logging
from typing import Any

SERVICE_NAME = "mock-vtn"


def _service_name_adder(service_name: str):
    def add_service_name(logger: Any, method_name: str, event_dict: dict) -> dict:
        """Add service name to all log entries."""
        event_dict["service"] = service_name
        return event_dict

    return add_service_name


def setup_logging(json_output: bool = True, service_name: str = SERVICE_NAME, level: str = "INFO"):
    """
    Configure structured logging with standardized fields.

    Args:
        json_output: If True, output JSON logs. If False, use console format.
        service_name: Name of the service stamped on every entry.
        level: Minimum level name (DEBUG, INFO, WARNING, ...).
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    shared_processors = [
        # Add contextvars (includes correlation_id from middleware)
        structlog.contextvars.merge_contextvars,
        _service_name_adder(service_name),
        structlog.processors.TimeStamper(fmt="iso", key="ts"),
        structlog.processors.add_log_level,
        structlog.processors.CallsiteParameterAdder(
            {
                structlog.processors.CallsiteParameter.MODULE,
                structlog.processors.CallsiteParameter.FUNC_NAME,
                structlog.processors.CallsiteParameter.LINENO,
            }
        ),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if json_output:
        processors = shared_processors + [structlog.processors.JSONRenderer()]
    else:
        processors = shared_processors + [structlog.dev.ConsoleRenderer()]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        level=log_level,
    )

    # Silence uvicorn's default logging to avoid duplicate logs
    logging.getLogger("uvicorn.error").handlers = []
    logging.getLogger("uvicorn.access").handlers = []


def get_logger():
    """Get a configured structlog logger."""
    return structlog.get_logger()
