"""
langgraph_essentials.cli

Command line entry point for the example workflows.

Usage:
    langgraph-essentials basic [--subject ... --body ... --sender ...]
    langgraph-essentials routing [--batch]
    langgraph-essentials parallel [--map-reduce]
    langgraph-essentials memory [--multi-thread] [--thread-id ID]
    langgraph-essentials hitl [--interactive | --programmatic] [--thread-id ID]
    langgraph-essentials visualize WORKFLOW [--output PATH]
"""

from __future__ import annotations

import asyncio
from typing import Any

import click
from langgraph.checkpoint.memory import MemorySaver

from langgraph_essentials import __version__
from langgraph_essentials.checkpointing import open_checkpointer, thread_config
from langgraph_essentials.llm import build_chat_model, message_text
from langgraph_essentials.observability.context import bind_run_context
from langgraph_essentials.observability.logging import configure_logging
from langgraph_essentials.runner import (
    pending_interrupts,
    run_with_review,
    scripted_decisions,
    stream_run,
)
from langgraph_essentials.settings import Settings, get_settings
from langgraph_essentials.utils import format_state, log_with_timestamp
from langgraph_essentials.visualization import to_mermaid, write_mermaid
from langgraph_essentials.workflows.basic import build_basic_graph
from langgraph_essentials.workflows.human_review import build_review_graph
from langgraph_essentials.workflows.interrupts import REVIEW_ACTIONS
from langgraph_essentials.workflows.memory import (
    build_memory_graph,
    checkpoint_history,
    send_message,
)
from langgraph_essentials.workflows.parallel import build_map_reduce_graph, build_parallel_graph
from langgraph_essentials.workflows.routing import build_routing_graph
from langgraph_essentials.workflows.samples import (
    SAMPLE_CONVERSATIONS,
    SAMPLE_DOCUMENTS,
    SAMPLE_EMAILS,
)

# Programmatic review: ask for one redraft, then approve it.
DEFAULT_REVIEW_SCRIPT: tuple[Any, ...] = (
    {"action": "revise", "feedback": "Mention that we reply within one business day."},
    "approve",
)

WORKFLOWS = ("basic", "routing", "parallel", "map-reduce", "memory", "hitl")


@click.group()
@click.version_option(__version__, prog_name="langgraph-essentials")
@click.option("--log-level", default=None, help="Override LGE_LOG_LEVEL (e.g. INFO, DEBUG).")
@click.option(
    "--provider",
    type=click.Choice(["fake", "openai", "anthropic"]),
    default=None,
    help="Override LGE_LLM_PROVIDER.",
)
@click.pass_context
def cli(ctx: click.Context, log_level: str | None, provider: str | None) -> None:
    """LangGraph essentials: runnable example workflows."""

    overrides: dict[str, Any] = {}
    if log_level:
        overrides["log_level"] = log_level
    if provider:
        overrides["llm_provider"] = provider
    settings = get_settings().model_copy(update=overrides)

    configure_logging(
        service_name=settings.service_name,
        level=settings.log_level,
        json_logs=settings.log_json,
    )
    ctx.obj = settings


@cli.command()
@click.option("--subject", default=None, help="Email subject (defaults to a sample email).")
@click.option("--body", default=None, help="Email body.")
@click.option("--sender", default=None, help="Email sender.")
@click.pass_obj
def basic(settings: Settings, subject: str | None, body: str | None, sender: str | None) -> None:
    """Linear graph: read -> classify -> draft -> finalize."""

    email: dict[str, Any] = dict(SAMPLE_EMAILS[1])
    if subject is not None or body is not None:
        email = {"subject": subject or "", "body": body or "", "sender": sender or ""}
    elif sender is not None:
        email["sender"] = sender

    async def _run() -> None:
        graph = build_basic_graph(model=build_chat_model(settings))
        log_with_timestamp("Starting basic workflow", email.get("subject"))
        with bind_run_context(workflow="basic"):
            final = await stream_run(graph, email)
        _print_outcome(final)

    asyncio.run(_run())


@cli.command()
@click.option("--batch", is_flag=True, help="Process every sample email in one batch call.")
@click.pass_obj
def routing(settings: Settings, batch: bool) -> None:
    """Conditional edges: route each email by its classification."""

    async def _run() -> None:
        graph = build_routing_graph(model=build_chat_model(settings))
        with bind_run_context(workflow="routing", batch=batch):
            if batch:
                log_with_timestamp("Routing batch", len(SAMPLE_EMAILS))
                results = await graph.abatch([dict(e) for e in SAMPLE_EMAILS])
                for result in results:
                    click.echo(
                        f"{result['email_id']}: {result['classification']:<9} -> "
                        f"{result['route']:<16} [{result['status']}]"
                    )
                return
            for email in SAMPLE_EMAILS:
                log_with_timestamp("Routing email", email["subject"])
                final = await stream_run(graph, dict(email))
                _print_outcome(final)

    asyncio.run(_run())


@cli.command()
@click.option(
    "--map-reduce", "map_reduce", is_flag=True, help="Fan out one task per document with Send."
)
@click.pass_obj
def parallel(settings: Settings, map_reduce: bool) -> None:
    """Fan-out/fan-in: analysers run in the same superstep."""

    async def _run() -> None:
        if map_reduce:
            graph = build_map_reduce_graph()
            with bind_run_context(workflow="map-reduce"):
                documents = [dict(d) for d in SAMPLE_DOCUMENTS]
                final = await stream_run(graph, {"documents": documents})
            click.echo(format_state({"totals": final.get("totals", {})}))
            return

        graph = build_parallel_graph(model=build_chat_model(settings))
        for doc in SAMPLE_DOCUMENTS:
            log_with_timestamp("Analysing document", doc["doc_id"])
            with bind_run_context(workflow="parallel", doc_id=doc["doc_id"]):
                final = await stream_run(graph, dict(doc))
            click.echo(
                format_state({"analyses": final.get("analyses"), "report": final.get("report")})
            )

    asyncio.run(_run())


@cli.command()
@click.option(
    "--multi-thread", "multi_thread", is_flag=True, help="Run two isolated conversation threads."
)
@click.option("--thread-id", default=None, help="Thread id for the first conversation.")
@click.pass_obj
def memory(settings: Settings, multi_thread: bool, thread_id: str | None) -> None:
    """Checkpointed chat: state persists per thread id."""

    conversations = ["alice", "bob"] if multi_thread else ["alice"]

    async def _run() -> None:
        model = build_chat_model(settings)
        async with open_checkpointer(settings) as saver:
            graph = build_memory_graph(model=model, checkpointer=saver)
            for index, user in enumerate(conversations):
                config = thread_config(thread_id if index == 0 else None)
                tid = config["configurable"]["thread_id"]
                click.echo(f"== thread {tid} ({user})")
                with bind_run_context(workflow="memory", thread_id=tid):
                    for text in SAMPLE_CONVERSATIONS[user]:
                        state = await send_message(graph, text, config=config)
                        click.echo(f"user: {text}")
                        click.echo(f"assistant: {message_text(state['messages'][-1])}")
                    state = await graph.aget_state(config)
                    click.echo(format_state({"facts": state.values.get("facts", {})}))
                    history = await checkpoint_history(graph, config=config)
                    log_with_timestamp(f"Thread {tid} has {len(history)} checkpoints")

    asyncio.run(_run())


@cli.command()
@click.option(
    "--interactive", "mode", flag_value="interactive", help="Prompt for each review decision."
)
@click.option(
    "--programmatic",
    "mode",
    flag_value="programmatic",
    default=True,
    help="Replay a scripted decision list (default).",
)
@click.option("--thread-id", default=None, help="Checkpoint thread id (random when omitted).")
@click.pass_obj
def hitl(settings: Settings, mode: str, thread_id: str | None) -> None:
    """Human-in-the-loop: interrupt before sending, resume with a decision."""

    if mode == "interactive":
        decide = _prompt_decision
    else:
        decide = scripted_decisions(DEFAULT_REVIEW_SCRIPT)

    async def _run() -> None:
        model = build_chat_model(settings)
        async with open_checkpointer(settings) as saver:
            graph = build_review_graph(
                model=model, checkpointer=saver, max_revisions=settings.max_revisions
            )
            config = thread_config(thread_id)
            tid = config["configurable"]["thread_id"]
            # A thread already paused on review (SQLite backend) is resumed, not restarted.
            inputs: dict[str, Any] | None = dict(SAMPLE_EMAILS[0])
            if await pending_interrupts(graph, config):
                inputs = None
            log_with_timestamp(
                "Resuming review workflow" if inputs is None else "Starting review workflow",
                {"thread_id": tid, "mode": mode},
            )
            with bind_run_context(workflow="hitl", thread_id=tid):
                result = await run_with_review(graph, inputs, config=config, decide=decide)
            click.echo(f"resumed {result.resumes} time(s)")
            _print_outcome(result.values)

    asyncio.run(_run())


@cli.command()
@click.argument("workflow", type=click.Choice(WORKFLOWS))
@click.option(
    "--output", "-o", default=None, help="Write Mermaid source to this file instead of stdout."
)
@click.pass_obj
def visualize(settings: Settings, workflow: str, output: str | None) -> None:
    """Print (or save) the Mermaid diagram of a workflow graph."""

    graph = _build_for_visualization(workflow, settings)
    if output:
        path = write_mermaid(graph, output)
        click.echo(f"Wrote {path}")
        return
    click.echo(to_mermaid(graph))


def _build_for_visualization(workflow: str, settings: Settings) -> Any:
    model = build_chat_model(settings.model_copy(update={"llm_provider": "fake"}))
    if workflow == "basic":
        return build_basic_graph(model=model)
    if workflow == "routing":
        return build_routing_graph(model=model)
    if workflow == "parallel":
        return build_parallel_graph(model=model)
    if workflow == "map-reduce":
        return build_map_reduce_graph()
    if workflow == "memory":
        return build_memory_graph(model=model, checkpointer=MemorySaver())
    return build_review_graph(
        model=model, checkpointer=MemorySaver(), max_revisions=settings.max_revisions
    )


def _prompt_decision(payload: dict[str, Any]) -> dict[str, Any]:
    click.echo(f"\nDraft (revision {payload.get('revision')}) for: {payload.get('subject')}")
    click.echo(payload.get("draft", ""))
    action = click.prompt("Decision", type=click.Choice(REVIEW_ACTIONS), default="approve")
    decision: dict[str, Any] = {"action": action}
    if action == "edit":
        decision["edited_draft"] = click.prompt("Edited draft")
    elif action == "revise":
        decision["feedback"] = click.prompt("Feedback for the redraft")
    return decision


def _print_outcome(state: dict[str, Any]) -> None:
    summary = {
        k: state.get(k)
        for k in ("email_id", "classification", "priority", "route", "status", "revision", "draft")
        if state.get(k) is not None
    }
    click.echo(format_state(summary))


def main() -> None:
    cli()


# --- Module Notes -----------------------------------------------------------
# Visualization always uses the offline model: drawing a graph never needs credentials.
