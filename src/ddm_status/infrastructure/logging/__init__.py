"""Structured logging configuration -- structlog + stdlib integration.

Provides a single :func:`setup_logging` entry-point that configures
**structlog** and Python's built-in :mod:`logging` so that every log
statement (including libraries that use ``logging.getLogger``) flows through
a unified processor pipeline and renderer.

Processors added to every log event:

* **timestamp** -- UTC ISO-8601 (``2026-03-10T09:23:01.123Z``)
* **log level** -- ``debug`` / ``info`` / ``warning`` / ``error`` / ``critical``
* **logger name** -- the ``__name__`` of the calling module
* **refresh_id** -- bound by :class:`StatusRefresher` for each refresh via
  :mod:`structlog.contextvars`

With ``json_output=True`` events are rendered as single-line JSON objects
(for unified logging / log shipping on managed fleets).  Otherwise they are
rendered for a terminal via :class:`structlog.dev.ConsoleRenderer`.
"""
from __future__ import annotations

import logging
import sys
from typing import Any

import structlog


def _formatter(renderer: Any, pre_chain: list[Any]) -> logging.Formatter:
    return structlog.stdlib.ProcessorFormatter(
        processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        foreign_pre_chain=pre_chain,
    )


def setup_logging(
    level: str = "info",
    json_output: bool = False,
    log_file: str | None = None,
) -> None:
    """Configure structlog with stdlib logging integration.

    Args:
        level: Log level string (``debug``, ``info``, ``warning``, ``error``,
            ``critical``).
        json_output: If ``True``, output JSON lines; otherwise human-readable
            output, coloured when stderr is a terminal.
        log_file: Optional file path for log output **in addition** to
            stderr.  File output is always JSON regardless of
            ``json_output``.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]

    if json_output:
        renderer: Any = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(
            colors=sys.stderr.isatty(),
            pad_event=40,
        )

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(_formatter(renderer, shared_processors))
    handlers: list[logging.Handler] = [console_handler]

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(
            _formatter(structlog.processors.JSONRenderer(), shared_processors)
        )
        handlers.append(file_handler)

    root_logger = logging.getLogger()
    root_logger.handlers[:] = handlers
    root_logger.setLevel(log_level)
    logging.getLogger("asyncio").setLevel(logging.WARNING)

    structlog.get_logger().info(
        "logging_configured",
        level=level,
        json_output=json_output,
        log_file=log_file or "none",
    )


def get_logger(name: str | None = None) -> Any:
    """Return a structlog bound logger.

    Thin convenience wrapper so that callers do not need to import structlog
    directly::

        from ddm_status.infrastructure.logging import get_logger
        logger = get_logger(__name__)
    """
    return structlog.get_logger(name)


def bind_refresh_id(refresh_id: str) -> None:
    """Attach *refresh_id* to every log event of the current context."""
    structlog.contextvars.bind_contextvars(refresh_id=refresh_id)


def clear_refresh_id() -> None:
    structlog.contextvars.unbind_contextvars("refresh_id")


__all__ = ["setup_logging", "get_logger", "bind_refresh_id", "clear_refresh_id"]
