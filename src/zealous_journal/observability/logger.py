"""Structured logging for the journal CLI.

structlog renders every entry, including records from plain
``logging.getLogger(__name__)`` module loggers, as JSON (or coloured
console lines) on stderr.  stdout stays reserved for command output.

Each CLI invocation starts a *run*: a short run_id plus the command
name (and account, when one is given) are bound as context so all
entries of one run can be grouped.
"""

from __future__ import annotations

import logging
import sys
import uuid
from contextvars import ContextVar
from typing import Any

import structlog

from zealous_journal.core.errors import ConfigError

SERVICE_NAME = "zealous-journal"
LOG_FORMATS = ("json", "console")

_run_id: ContextVar[str] = ContextVar("run_id", default="")


def current_run_id() -> str:
    """Run id of the current invocation ("" outside a run)."""
    return _run_id.get()


def start_run(command: str, **context: Any) -> str:
    """Begin a new run: fresh run_id, context reset to *command* + *context*.

    ``None`` values in *context* are dropped.
    """
    rid = uuid.uuid4().hex[:12]
    _run_id.set(rid)
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(command=command)
    bind_context(**context)
    return rid


def bind_context(**context: Any) -> None:
    """Add fields to every following log entry of this run."""
    fields = {k: v for k, v in context.items() if v is not None}
    if fields:
        structlog.contextvars.bind_contextvars(**fields)


def _add_run_id(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Structlog processor: add run_id while a run is active."""
    rid = _run_id.get()
    if rid:
        event_dict["run_id"] = rid
    return event_dict


def _add_service(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    event_dict.setdefault("service", SERVICE_NAME)
    return event_dict


class _StderrHandler(logging.StreamHandler):
    """StreamHandler bound to whatever ``sys.stderr`` is at emit time."""

    def __init__(self) -> None:
        super().__init__()

    @property
    def stream(self) -> Any:  # type: ignore[override]
        return sys.stderr

    @stream.setter
    def stream(self, value: Any) -> None:
        pass


def setup_logging(
    level: str = "INFO",
    format: str = "json",
) -> None:
    """Configure structured logging for the application.

    Safe to call more than once; the previous journal handler is
    replaced, other root handlers are left alone.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR).
        format: "json" for machine-readable output, "console" for humans.

    Raises:
        ConfigError: *format* is not one of :data:`LOG_FORMATS`.
    """
    if format not in LOG_FORMATS:
        raise ConfigError(f"Unknown log format {format!r}; expected one of {LOG_FORMATS}")
    log_level = getattr(logging, level.upper(), logging.INFO)

    shared: list[Any] = [
        structlog.contextvars.merge_contextvars,
        _add_run_id,
        _add_service,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if format == "json":
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

    handler = _StderrHandler()
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
    for existing in [h for h in root.handlers if isinstance(h, _StderrHandler)]:
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(log_level)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger for a module."""
    return structlog.get_logger(name)
