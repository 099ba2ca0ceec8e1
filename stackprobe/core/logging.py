"""Structured logging via structlog.

Configures structlog once at application startup. Engine modules keep
using `logging.getLogger(__name__)`; their records are routed through
`structlog.stdlib.ProcessorFormatter` so they get the same processors,
and the same renderer, as lines logged through structlog itself.

Renderer selection:
  debug=True: `ConsoleRenderer` with colours for local development.
  debug=False: `JSONRenderer` for machine-parseable logs in production.

Every line carries `request_id` from `stackprobe.core.middleware._request_id_var`
and whatever the analyzer has bound with `structlog.contextvars`
(`repo`, `host`).
"""

from __future__ import annotations

import logging
import sys

import structlog

from stackprobe.core.middleware import get_request_id


def _inject_request_id(
    logger: logging.Logger,
    method: str,
    event_dict: dict,
) -> dict:
    """Structlog processor: inject request_id from its ContextVar."""
    request_id = get_request_id()
    if request_id:
        event_dict["request_id"] = request_id
    return event_dict


def _shared_processors() -> list:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        _inject_request_id,
        structlog.processors.StackInfoRenderer(),
    ]


def build_formatter(debug: bool = True) -> structlog.stdlib.ProcessorFormatter:
    """Return the stdlib formatter that renders records the structlog way."""
    if debug:
        renderers: list = [structlog.dev.ConsoleRenderer()]
    else:
        renderers = [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=_shared_processors(),
        processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, *renderers],
    )


def configure_structlog(debug: bool = True) -> None:
    """Configure structlog for the application lifetime.

    Call once from `create_app()`. Calling multiple times is safe: the
    handler installed by a previous call is replaced, not duplicated.
    """
    structlog.configure(
        processors=_shared_processors()
        + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    root = logging.getLogger()
    for handler in list(root.handlers):
        if isinstance(handler.formatter, structlog.stdlib.ProcessorFormatter):
            root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(build_formatter(debug))
    root.addHandler(handler)
    root.setLevel(logging.DEBUG if debug else logging.INFO)
