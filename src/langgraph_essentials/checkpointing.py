"""
langgraph_essentials.checkpointing

Checkpointer construction from settings.

Responsibilities:
- Open the configured LangGraph checkpoint saver (in-memory or SQLite).
- Own the saver's lifetime (the SQLite connection closes when the context exits).
- Build per-thread run configs.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

from langgraph.checkpoint.base import BaseCheckpointSaver
from langgraph.checkpoint.memory import MemorySaver
from langgraph.checkpoint.sqlite.aio import AsyncSqliteSaver

from langgraph_essentials.observability.logging import get_logger
from langgraph_essentials.settings import Settings
from langgraph_essentials.utils import generate_id

log = get_logger(__name__)


@asynccontextmanager
async def open_checkpointer(settings: Settings) -> AsyncIterator[BaseCheckpointSaver]:
    if settings.checkpoint_backend == "sqlite":
        path = Path(settings.checkpoint_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        log.info("checkpointer_opened", backend="sqlite", path=str(path))
        async with AsyncSqliteSaver.from_conn_string(str(path)) as saver:
            yield saver
        return

    log.info("checkpointer_opened", backend="memory")
    yield MemorySaver()


def thread_config(thread_id: str | None = None) -> dict[str, Any]:
    """
    LangGraph run config addressing one checkpoint thread.
    """

    return {"configurable": {"thread_id": thread_id or f"thread-{generate_id()}"}}


# --- Module Notes -----------------------------------------------------------
# MemorySaver keeps checkpoints for the life of the process only; use the SQLite backend
# to resume an interrupted review from a later invocation with the same thread id.
