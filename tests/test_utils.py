"""
tests.test_utils

Properties of the four utility helpers.
"""

from __future__ import annotations

import json
import re
import time
from datetime import datetime

import pytest

from langgraph_essentials.utils import format_state, generate_id, log_with_timestamp, sleep

LINE_RE = re.compile(r"^\[(\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z)\] (.*)$")


@pytest.mark.asyncio
@pytest.mark.parametrize("ms", [0, 1, 25, 60])
async def test_sleep_waits_at_least_requested_time(ms: int) -> None:
    start = time.monotonic()
    await sleep(ms)
    assert time.monotonic() >= start + ms / 1000


@pytest.mark.asyncio
async def test_sleep_treats_negative_as_zero() -> None:
    await sleep(-5)


def test_generate_id_charset_and_length() -> None:
    ids = [generate_id() for _ in range(200)]
    for value in ids:
        assert re.fullmatch(r"[0-9a-z]{9}", value)
    # Not guaranteed, but a collision in 200 draws from 36**9 would be remarkable.
    assert len(set(ids)) > 190


@pytest.mark.parametrize(
    "value",
    [
        {"subject": "hi", "tags": ["a", "b"], "nested": {"n": 1, "ok": True, "none": None}},
        [1, 2.5, "three", None, False],
        "plain",
        42,
        None,
        {"unicode": "café"},
    ],
)
def test_format_state_round_trips(value: object) -> None:
    text = format_state(value)
    assert json.loads(text) == value


def test_format_state_is_indented() -> None:
    assert format_state({"a": 1}) == '{\n  "a": 1\n}'


def test_format_state_renders_non_json_values() -> None:
    class Opaque:
        def __str__(self) -> str:
            return "opaque!"

    assert json.loads(format_state({"x": Opaque()})) == {"x": "opaque!"}


def test_log_with_timestamp_without_data(capsys: pytest.CaptureFixture[str]) -> None:
    log_with_timestamp("hello world")
    out = capsys.readouterr().out
    lines = out.splitlines()
    assert len(lines) == 1
    match = LINE_RE.match(lines[0])
    assert match is not None
    datetime.fromisoformat(match.group(1).replace("Z", "+00:00"))
    assert match.group(2) == "hello world"


def test_log_with_timestamp_with_data(capsys: pytest.CaptureFixture[str]) -> None:
    log_with_timestamp("state", {"count": 2, "items": ["a"]})
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 1
    match = LINE_RE.match(lines[0])
    assert match is not None
    assert match.group(2) == 'state: {"count": 2, "items": ["a"]}'


def test_log_with_timestamp_keeps_falsy_data(capsys: pytest.CaptureFixture[str]) -> None:
    log_with_timestamp("count", 0)
    line = capsys.readouterr().out.strip()
    assert line.endswith("] count: 0")


def test_log_with_timestamp_folds_line_breaks(capsys: pytest.CaptureFixture[str]) -> None:
    log_with_timestamp("first\nsecond", "a\nb\r\nc")
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 1
    match = LINE_RE.match(lines[0])
    assert match is not None
    assert match.group(2) == "first second: a b c"
