"""
langgraph_essentials.workflows.reducers

Merge functions for state keys that several nodes write.

- `events` grows by one entry per node, including nodes of the same superstep.
- `analyses` and `facts` collect keyed results from independent writers.
"""

from __future__ import annotations

from typing import Any


def append_events(
    left: list[dict[str, Any]] | None, right: list[dict[str, Any]] | None
) -> list[dict[str, Any]]:
    """Concatenate event lists; a node returning `{"events": [...]}` only adds entries."""

    return [*(left or ()), *(right or ())]


def merge_dicts(
    left: dict[str, Any] | None, right: dict[str, Any] | None
) -> dict[str, Any]:
    """
    Shallow merge where the newer update wins per key.

    Sentiment, keywords and statistics land in `analyses` from separate branches, and each
    chat turn adds whatever facts it recognised to `facts`.
    """

    merged = dict(left or {})
    merged.update(right or {})
    return merged
