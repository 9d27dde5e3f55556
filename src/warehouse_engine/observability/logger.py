"""Structured logging with operation-id support.

Uses structlog on top of stdlib logging, so modules keep calling
``logging.getLogger(__name__)`` and still get structured output once
``setup_logging`` has run. Every entry carries an ``op_id`` that ties the
per-unit records of one multi-step operation together.
"""

from __future__ import annotations

import logging
import sys
import uuid
from contextvars import ContextVar
from typing import Any

import structlog

from warehouse_engine.core.enums import LogFormat

# Context var for op_id propagation
_op_id: ContextVar[str] = ContextVar("op_id", default="")


def get_op_id() -> str:
    """Get current operation ID from context, creating one if unset."""
    oid = _op_id.get()
    if not oid:
        oid = uuid.uuid4().hex[:12]
        _op_id.set(oid)
    return oid


def set_op_id(op_id: str) -> None:
    _op_id.set(op_id)


def new_op_id() -> str:
    """Generate and set a new operation ID."""
    oid = uuid.uuid4().hex[:12]
    _op_id.set(oid)
    return oid


def _add_op_id(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Structlog processor: add op_id to every log entry."""
    event_dict["op_id"] = get_op_id()
    return event_dict


def setup_logging(
    level: str = "INFO",
    format: LogFormat | str = LogFormat.CONSOLE,
) -> None:
    """Configure structured logging for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR).
        format: "json" for machine-readable output, "console" for humans.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    shared: list[Any] = [
        structlog.contextvars.merge_contextvars,
        _add_op_id,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if LogFormat(format) == LogFormat.JSON:
        renderer: Any = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *shared,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.UnicodeDecoder(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # Route plain stdlib records (logging.getLogger users) through the same
    # renderer.
    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(log_level)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger for a module."""
    return structlog.get_logger(name)
