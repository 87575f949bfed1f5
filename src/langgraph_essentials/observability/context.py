"""
langgraph_essentials.observability.context

Run-scoped logging context.

Responsibilities:
- Bind workflow/thread metadata into structlog contextvars for one graph run.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import structlog


@contextmanager
def bind_run_context(
    *, workflow: str, thread_id: str | None = None, **extra: Any
) -> Iterator[None]:
    """
    Every log line emitted inside the block carries `workflow` (and `thread_id` when known).
    """

    structlog.contextvars.clear_contextvars()
    values: dict[str, Any] = {"workflow": workflow, **extra}
    if thread_id is not None:
        values["thread_id"] = thread_id
    structlog.contextvars.bind_contextvars(**values)
    try:
        yield
    finally:
        # Avoid leaking context into the next run in the same process.
        structlog.contextvars.clear_contextvars()
