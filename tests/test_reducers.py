"""
tests.test_reducers
"""

from __future__ import annotations

from langgraph_essentials.workflows.reducers import append_events, merge_dicts


def test_append_events_concatenates_without_mutating() -> None:
    left = [{"event": "A", "details": {}}]
    right = [{"event": "B", "details": {}}]
    merged = append_events(left, right)
    assert [e["event"] for e in merged] == ["A", "B"]
    assert len(left) == 1 and len(right) == 1


def test_append_events_handles_missing_sides() -> None:
    assert append_events(None, None) == []
    assert append_events(None, [{"event": "A"}]) == [{"event": "A"}]
    assert append_events([{"event": "A"}], None) == [{"event": "A"}]


def test_merge_dicts_right_wins() -> None:
    left = {"a": 1, "b": 1}
    merged = merge_dicts(left, {"b": 2, "c": 3})
    assert merged == {"a": 1, "b": 2, "c": 3}
    assert left == {"a": 1, "b": 1}
    assert merge_dicts(None, None) == {}
    assert merge_dicts({"a": 1}, {}) == {"a": 1}
