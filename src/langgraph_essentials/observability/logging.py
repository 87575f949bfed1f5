"""
langgraph_essentials.observability.logging

structlog setup for the example workflows.

Node and runner logs go to stderr, so they never interleave with the state dumps the
examples print on stdout. `LGE_LOG_JSON=true` switches the renderer to one JSON object
per line.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog


def configure_logging(*, service_name: str, level: str, json_logs: bool = False) -> None:
    numeric_level = getattr(logging, level.upper(), logging.WARNING)
    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=numeric_level)
    # basicConfig is a no-op once a handler exists, e.g. on a second CLI call in one process.
    logging.getLogger().setLevel(numeric_level)

    structlog.configure(
        processors=[*_enrichers(service_name), *_renderers(json_logs)],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def _enrichers(service_name: str) -> list[Any]:
    """Fields every record carries: run context, level, logger, UTC time, service."""

    def add_service(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        event_dict.setdefault("service", service_name)
        return event_dict

    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        add_service,
    ]


def _renderers(json_logs: bool) -> list[Any]:
    if json_logs:
        return [structlog.processors.dict_tracebacks, structlog.processors.JSONRenderer()]
    return [structlog.dev.ConsoleRenderer(colors=False)]


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


# --- Module Notes -----------------------------------------------------------
# `observability.context.bind_run_context` puts `workflow` and `thread_id` into the
# contextvars that `merge_contextvars` reads.
