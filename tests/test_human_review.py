"""
tests.test_human_review

Interrupt/resume behaviour of the review workflow.

Responsibilities:
- The graph pauses at `human_review` with the draft in the interrupt payload.
- Every decision reaches its documented terminal status.
"""

from __future__ import annotations

import pytest
from langchain_core.language_models.fake_chat_models import FakeListChatModel
from langgraph.checkpoint.memory import MemorySaver
from langgraph.types import Command
from pydantic import ValidationError

from langgraph_essentials.checkpointing import thread_config
from langgraph_essentials.runner import pending_interrupts
from langgraph_essentials.workflows.human_review import build_review_graph, route_after_review
from langgraph_essentials.workflows.interrupts import ReviewDecision
from langgraph_essentials.workflows.samples import SAMPLE_EMAILS


def _graph(model: FakeListChatModel, max_revisions: int = 3):
    return build_review_graph(model=model, checkpointer=MemorySaver(), max_revisions=max_revisions)


async def _start(graph, thread_id: str) -> dict:
    config = thread_config(thread_id)
    await graph.ainvoke(dict(SAMPLE_EMAILS[0]), config)
    return config


async def _values(graph, config: dict) -> dict:
    return (await graph.aget_state(config)).values


def test_review_decision_parsing() -> None:
    assert ReviewDecision.model_validate("Approve").action == "approve"
    decision = ReviewDecision.model_validate({"action": "revise", "feedback": "shorter"})
    assert decision.feedback == "shorter"
    with pytest.raises(ValidationError):
        ReviewDecision.model_validate({"action": "edit"})
    with pytest.raises(ValidationError):
        ReviewDecision.model_validate("maybe")


def test_route_after_review() -> None:
    assert route_after_review({"review": {"action": "approve"}}, max_revisions=3) == "send_reply"
    assert route_after_review({"review": {"action": "edit"}}, max_revisions=3) == "send_reply"
    assert (
        route_after_review({"review": {"action": "revise"}, "revision": 1}, max_revisions=3)
        == "draft_response"
    )
    assert (
        route_after_review({"review": {"action": "revise"}, "revision": 3}, max_revisions=3)
        == "discard"
    )
    assert route_after_review({"review": {"action": "reject"}}, max_revisions=3) == "discard"


@pytest.mark.asyncio
async def test_pauses_before_sending(fake_model: FakeListChatModel) -> None:
    graph = _graph(fake_model)
    config = await _start(graph, "pause")

    snapshot = await graph.aget_state(config)
    assert snapshot.next == ("human_review",)
    assert "status" not in snapshot.values

    [payload] = await pending_interrupts(graph, config)
    assert payload["draft"] == "Draft one."
    assert payload["revision"] == 1
    assert payload["classification"] == "urgent"
    assert payload["allowed_actions"] == ["approve", "edit", "revise", "reject"]


@pytest.mark.asyncio
async def test_approve_sends_draft(fake_model: FakeListChatModel) -> None:
    graph = _graph(fake_model)
    config = await _start(graph, "approve")

    await graph.ainvoke(Command(resume="approve"), config)

    values = await _values(graph, config)
    assert values["status"] == "sent"
    assert values["draft"] == "Draft one."
    assert await pending_interrupts(graph, config) == []


@pytest.mark.asyncio
async def test_edit_replaces_draft(fake_model: FakeListChatModel) -> None:
    graph = _graph(fake_model)
    config = await _start(graph, "edit")

    await graph.ainvoke(Command(resume={"action": "edit", "edited_draft": "Custom reply"}), config)

    values = await _values(graph, config)
    assert values["status"] == "sent"
    assert values["draft"] == "Custom reply"


@pytest.mark.asyncio
async def test_reject_discards(fake_model: FakeListChatModel) -> None:
    graph = _graph(fake_model)
    config = await _start(graph, "reject")

    await graph.ainvoke(Command(resume="reject"), config)

    values = await _values(graph, config)
    assert values["status"] == "discarded"
    assert values["events"][-1] == {"event": "DISCARDED", "details": {"reason": "rejected"}}


@pytest.mark.asyncio
async def test_revise_redrafts_then_pauses_again(fake_model: FakeListChatModel) -> None:
    graph = _graph(fake_model)
    config = await _start(graph, "revise")

    await graph.ainvoke(Command(resume={"action": "revise", "feedback": "Be brief"}), config)

    [payload] = await pending_interrupts(graph, config)
    assert payload["draft"] == "Draft two."
    assert payload["revision"] == 2


@pytest.mark.asyncio
async def test_revise_beyond_limit_discards(fake_model: FakeListChatModel) -> None:
    graph = _graph(fake_model, max_revisions=2)
    config = await _start(graph, "limit")

    await graph.ainvoke(Command(resume="revise"), config)
    await graph.ainvoke(Command(resume="revise"), config)

    values = await _values(graph, config)
    assert values["status"] == "discarded"
    assert values["revision"] == 2
    assert values["events"][-1]["details"] == {"reason": "max_revisions_reached"}


@pytest.mark.asyncio
async def test_invalid_decision_raises(fake_model: FakeListChatModel) -> None:
    graph = _graph(fake_model)
    config = await _start(graph, "invalid")

    with pytest.raises(ValidationError):
        await graph.ainvoke(Command(resume={"action": "ship-it"}), config)


@pytest.mark.asyncio
async def test_second_email_on_finished_thread_starts_at_first_revision(
    fake_model: FakeListChatModel,
) -> None:
    graph = _graph(fake_model)
    config = await _start(graph, "reuse")
    await graph.ainvoke(Command(resume={"action": "revise", "feedback": "Be brief"}), config)
    await graph.ainvoke(Command(resume="approve"), config)
    assert (await _values(graph, config))["status"] == "sent"

    await graph.ainvoke(dict(SAMPLE_EMAILS[1]), config)

    [payload] = await pending_interrupts(graph, config)
    assert payload["email_id"] == SAMPLE_EMAILS[1]["email_id"]
    assert payload["draft"] == "Draft three."
    assert payload["revision"] == 1

    # The cap counts drafts of this email only, so a revise is still allowed.
    await graph.ainvoke(Command(resume="revise"), config)
    [payload] = await pending_interrupts(graph, config)
    assert payload["draft"] == "Draft four."
    assert payload["revision"] == 2
