"""Structured logging with send_id support.

Uses structlog for structured logging with JSON or console output.
Every structlog entry carries a send_id so the log lines of one CLI
invocation (or one application-defined unit of work) can be correlated.
"""

from __future__ import annotations

import logging
import sys
from contextvars import ContextVar
from typing import Any, TextIO

import structlog

from ..core.ids import generate_id

# Context var for send_id propagation
_send_id: ContextVar[str] = ContextVar("send_id", default="")


def get_send_id() -> str:
    """Get current send ID from context, creating one if unset."""
    sid = _send_id.get()
    if not sid:
        sid = generate_id()
        _send_id.set(sid)
    return sid


def new_send_id() -> str:
    """Generate and set a new send ID."""
    sid = generate_id()
    _send_id.set(sid)
    return sid


def _add_send_id(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Structlog processor: add send_id to every log entry."""
    event_dict["send_id"] = get_send_id()
    return event_dict


HANDLER_NAME = "xapi_client"


def setup_logging(
    level: str = "INFO",
    format: str = "console",
    stream: TextIO | None = None,
) -> None:
    """Configure structured logging.

    structlog loggers and plain ``logging`` loggers (such as the one in
    ``xapi_client.client``) are rendered by the same root handler, so both
    carry the send_id and share one output format.  Calling this again
    replaces the handler installed by the previous call.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR).
        format: "json" for machine consumption, "console" for humans.
        stream: Output stream, stderr by default.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    shared: list[Any] = [
        structlog.contextvars.merge_contextvars,
        _add_send_id,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *shared,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.UnicodeDecoder(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    if format == "json":
        renderer: Any = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )
    )

    root = logging.getLogger()
    for old in [h for h in root.handlers if h.get_name() == HANDLER_NAME]:
        root.removeHandler(old)
    root.addHandler(handler)
    root.setLevel(log_level)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger for a module."""
    return structlog.get_logger(name)
