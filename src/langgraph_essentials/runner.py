"""
langgraph_essentials.runner

Drives compiled graphs and prints their progress.

Responsibilities:
- Stream node updates to the console as each node finishes.
- Pause on human-in-the-loop interrupts, obtain a decision, and resume.
- Return the final state snapshot of a run.
"""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass, field
from typing import Any

import click
from langgraph.types import Command

from langgraph_essentials.observability.logging import get_logger
from langgraph_essentials.utils import format_state

log = get_logger(__name__)

Echo = Callable[[str], None]
Decider = Callable[[dict[str, Any]], Any | Awaitable[Any]]

INTERRUPT_KEY = "__interrupt__"


@dataclass(slots=True)
class RunResult:
    values: dict[str, Any]
    thread_id: str | None = None
    resumes: int = 0
    decisions: list[Any] = field(default_factory=list)


async def stream_run(
    graph: Any,
    inputs: Any,
    *,
    config: dict[str, Any] | None = None,
    echo: Echo = click.echo,
) -> dict[str, Any]:
    """
    Stream one run (or one resumed segment) and return the last full state seen.

    Uses `stream_mode=["updates", "values"]`: updates drive the console output, values
    track the merged state.
    """

    last_values: dict[str, Any] = {}
    async for mode, chunk in graph.astream(inputs, config, stream_mode=["updates", "values"]):
        if mode == "values":
            if isinstance(chunk, dict):
                last_values = chunk
            continue

        if not isinstance(chunk, dict):
            continue
        for node_name, update in chunk.items():
            if node_name == INTERRUPT_KEY:
                for item in update or ():
                    value = getattr(item, "value", item)
                    echo(f"-- interrupted: waiting for input\n{format_state(value)}")
                continue
            log.debug("node_update", node=node_name)
            echo(f"-- {node_name}\n{format_state(_printable(update))}")

    return last_values


async def pending_interrupts(graph: Any, config: dict[str, Any]) -> list[Any]:
    """Interrupt payloads the paused thread is waiting on (empty when not paused)."""

    snapshot = await graph.aget_state(config)
    values: list[Any] = []
    for task in snapshot.tasks or ():
        for item in getattr(task, "interrupts", ()) or ():
            values.append(item.value)
    return values


async def run_with_review(
    graph: Any,
    inputs: Any,
    *,
    config: dict[str, Any],
    decide: Decider,
    echo: Echo = click.echo,
    max_resumes: int = 10,
) -> RunResult:
    """
    Run a checkpointed graph to completion, answering every interrupt via `decide`.

    Pass `inputs=None` to continue a thread that is already paused on an interrupt.
    """

    result = RunResult(values={}, thread_id=config.get("configurable", {}).get("thread_id"))
    payload: Any = inputs
    while True:
        if payload is not None:
            await stream_run(graph, payload, config=config, echo=echo)

        waiting = await pending_interrupts(graph, config)
        if not waiting:
            break
        if result.resumes >= max_resumes:
            raise RuntimeError(f"Run still interrupted after {max_resumes} resumes")

        decision = decide(waiting[0])
        if inspect.isawaitable(decision):
            decision = await decision
        result.decisions.append(decision)
        result.resumes += 1
        log.info("resume", resumes=result.resumes)
        payload = Command(resume=decision)

    snapshot = await graph.aget_state(config)
    result.values = dict(snapshot.values or {})
    return result


def scripted_decisions(decisions: Iterable[Any]) -> Decider:
    """
    Decider that replays a fixed list of decisions (programmatic mode).

    Raises `RuntimeError` when the graph asks for more decisions than were scripted.
    """

    remaining = list(decisions)

    def _decide(_payload: dict[str, Any]) -> Any:
        if not remaining:
            raise RuntimeError("No scripted decision left for this interrupt")
        return remaining.pop(0)

    return _decide


def _printable(update: Any) -> Any:
    # Message objects render as "role: content" instead of their full repr.
    if isinstance(update, dict) and isinstance(update.get("messages"), list):
        return {
            **update,
            "messages": [
                f"{getattr(m, 'type', 'message')}: {getattr(m, 'content', m)}"
                for m in update["messages"]
            ],
        }
    return update


# --- Module Notes -----------------------------------------------------------
# Workflow exceptions are not caught here; they surface to the caller (and the CLI) as-is.
