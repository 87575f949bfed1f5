"""
langgraph_essentials.utils

Common utility helpers shared by the example workflows.
"""

from __future__ import annotations

import asyncio
import json
import random
import string
from datetime import datetime, timezone
from typing import Any

_ID_ALPHABET = string.digits + string.ascii_lowercase
_ID_LENGTH = 9


async def sleep(ms: float) -> None:
    """Suspend the current task for at least `ms` milliseconds."""

    loop = asyncio.get_running_loop()
    deadline = loop.time() + max(ms, 0) / 1000
    # The event loop may wake a timer up to one clock tick early.
    while True:
        remaining = deadline - loop.time()
        if remaining <= 0:
            return
        await asyncio.sleep(remaining)


def generate_id() -> str:
    """
    Short base-36 id for demo threads and records.

    Uses the non-cryptographic `random` module; do not rely on uniqueness.
    """

    return "".join(random.choices(_ID_ALPHABET, k=_ID_LENGTH))


def format_state(state: Any) -> str:
    """Indented JSON rendering of a state record for console output."""

    return json.dumps(state, indent=2, default=str, ensure_ascii=False)


def log_with_timestamp(message: str, data: Any = None) -> None:
    """Print one `[timestamp] message[: data]` line; line breaks are folded into spaces."""

    timestamp = _iso_now()
    if data is None:
        print(f"[{timestamp}] {_one_line(message)}")
        return
    rendered = data if isinstance(data, str) else json.dumps(data, default=str, ensure_ascii=False)
    print(f"[{timestamp}] {_one_line(message)}: {_one_line(rendered)}")


def _one_line(text: str) -> str:
    return " ".join(str(text).splitlines())


def _iso_now() -> str:
    # Millisecond precision with a `Z` suffix, e.g. 2024-05-01T12:00:00.123Z
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")
