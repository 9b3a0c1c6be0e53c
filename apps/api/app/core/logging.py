"""Structured logging via structlog.

Configures structlog once at application startup. All subsequent calls to
`structlog.get_logger()` (or `logging.getLogger()` via the stdlib bridge)
use this configuration, including the engine's `perfpilot.*` loggers.

Renderer selection:
  debug=True   `ConsoleRenderer` with colours for local development.
  debug=False  `JSONRenderer` for machine-parseable logs in production.

ContextVar injection:
  `request_id` and `analysis_id` are read from the ContextVars bound by
  `RequestContextMiddleware`, so every log line emitted while handling an
  analysis carries both without passing them around.
"""

from __future__ import annotations

import logging
import sys

import structlog

from app.core.middleware import get_analysis_id, get_request_id


def _inject_context_vars(
    logger: logging.Logger,
    method: str,
    event_dict: dict,
) -> dict:
    """Structlog processor: inject request_id and analysis_id from ContextVars."""
    request_id = get_request_id()
    analysis_id = get_analysis_id()
    if request_id:
        event_dict["request_id"] = request_id
    if analysis_id:
        event_dict["analysis_id"] = analysis_id
    return event_dict


def configure_structlog(debug: bool = True) -> None:
    """Configure structlog for the application lifetime.

    Call once from `create_app()` before any routers are registered.
    Calling it again simply reapplies the same configuration.
    """
    shared_processors: list = [
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        _inject_context_vars,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if debug:
        renderer = structlog.dev.ConsoleRenderer()
    else:
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=shared_processors + [renderer],
        wrapper_class=structlog.make_filtering_bound_logger(logging.DEBUG),
        context_class=dict,
        logger_factory=structlog.WriteLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=True,
    )

    # Route stdlib logging (engine, SQLAlchemy, httpx) to stdout as well.
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=logging.DEBUG if debug else logging.INFO,
    )
