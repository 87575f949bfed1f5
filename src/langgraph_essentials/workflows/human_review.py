"""
langgraph_essentials.workflows.human_review

Human-in-the-loop email approval using LangGraph interrupts.

Responsibilities:
- Pause before sending a drafted reply and hand the draft to a human.
- Route on the human decision: send, redraft with feedback, or discard.
- Bound the number of redraft loops.

The graph must be compiled with a checkpointer; interrupts persist the paused run.
"""

from __future__ import annotations

from langchain_core.language_models import BaseChatModel
from langgraph.checkpoint.base import BaseCheckpointSaver
from langgraph.graph import END, START, StateGraph
from langgraph.types import interrupt

from langgraph_essentials.observability.logging import get_logger
from langgraph_essentials.workflows.interrupts import REVIEW_ACTIONS, ReviewDecision
from langgraph_essentials.workflows.nodes import (
    bind_model,
    classify_email_node,
    draft_response_node,
    event,
    read_email_node,
)
from langgraph_essentials.workflows.state import EmailState

log = get_logger(__name__)


def build_review_graph(
    *,
    model: BaseChatModel,
    checkpointer: BaseCheckpointSaver,
    max_revisions: int = 3,
):
    """
    Returns a compiled LangGraph runnable.
    """

    graph = StateGraph(EmailState)

    graph.add_node("read_email", read_email_node)
    graph.add_node("classify_email", classify_email_node)
    graph.add_node("draft_response", bind_model(draft_response_node, model))
    graph.add_node("human_review", human_review_node)
    graph.add_node("send_reply", send_reply_node)
    graph.add_node("discard", discard_node)

    graph.add_edge(START, "read_email")
    graph.add_edge("read_email", "classify_email")
    graph.add_edge("classify_email", "draft_response")
    graph.add_edge("draft_response", "human_review")

    graph.add_conditional_edges(
        "human_review",
        _bind_max_revisions(route_after_review, max_revisions),
        {"send_reply": "send_reply", "draft_response": "draft_response", "discard": "discard"},
    )

    graph.add_edge("send_reply", END)
    graph.add_edge("discard", END)

    return graph.compile(checkpointer=checkpointer)


async def human_review_node(state: EmailState) -> EmailState:
    # On resume LangGraph re-runs this node from the top; `interrupt` then returns the
    # resume value instead of pausing, so nothing before it may have side effects.
    payload = {
        "email_id": state.get("email_id"),
        "subject": state.get("subject"),
        "classification": state.get("classification"),
        "draft": state.get("draft", ""),
        "revision": int(state.get("revision", 0) or 0),
        "allowed_actions": list(REVIEW_ACTIONS),
    }
    resume_value = interrupt(payload)

    decision = ReviewDecision.model_validate(resume_value)
    log.info("human_review", action=decision.action, revision=payload["revision"])

    update: EmailState = {
        "review": decision.model_dump(),
        "events": [event("HUMAN_REVIEW", action=decision.action, revision=payload["revision"])],
    }
    if decision.action == "edit":
        update["draft"] = decision.edited_draft or ""
    return update


def route_after_review(state: EmailState, *, max_revisions: int) -> str:
    action = (state.get("review") or {}).get("action")
    if action in ("approve", "edit"):
        return "send_reply"
    if action == "revise":
        if int(state.get("revision", 0) or 0) >= max_revisions:
            return "discard"
        return "draft_response"
    return "discard"


async def send_reply_node(state: EmailState) -> EmailState:
    log.info("send_reply", email_id=state.get("email_id"), sender=state.get("sender"))
    return {
        "status": "sent",
        "events": [event("SENT", to=state.get("sender"), revision=state.get("revision"))],
    }


async def discard_node(state: EmailState) -> EmailState:
    review = state.get("review") or {}
    reason = "rejected" if review.get("action") == "reject" else "max_revisions_reached"
    log.info("discard", email_id=state.get("email_id"), reason=reason)
    return {"status": "discarded", "events": [event("DISCARDED", reason=reason)]}


def _bind_max_revisions(fn, max_revisions: int):
    def _wrapped(state: EmailState) -> str:
        return fn(state, max_revisions=max_revisions)

    return _wrapped


# --- Module Notes -----------------------------------------------------------
# `revision` counts drafts produced so far, so `max_revisions=3` allows the initial draft
# plus two redrafts before a further `revise` is treated as a discard.
