"""
langgraph_essentials.workflows.routing

Conditional routing: one handler per email classification.

Responsibilities:
- Route classified emails with `add_conditional_edges`.
- Provide terminal handler nodes (spam, urgent, question, general).
"""

from __future__ import annotations

from langchain_core.language_models import BaseChatModel
from langgraph.graph import END, START, StateGraph

from langgraph_essentials.observability.logging import get_logger
from langgraph_essentials.workflows.nodes import (
    bind_model,
    classify_email_node,
    draft_response_node,
    event,
    read_email_node,
)
from langgraph_essentials.workflows.state import EmailState

log = get_logger(__name__)

ROUTES = {
    "spam": "handle_spam",
    "urgent": "escalate_urgent",
    "question": "answer_question",
    "general": "draft_general",
}


def build_routing_graph(*, model: BaseChatModel):
    """
    Returns a compiled LangGraph runnable.
    """

    graph = StateGraph(EmailState)

    graph.add_node("read_email", read_email_node)
    graph.add_node("classify_email", classify_email_node)
    graph.add_node("handle_spam", handle_spam_node)
    graph.add_node("escalate_urgent", bind_model(escalate_urgent_node, model))
    graph.add_node("answer_question", bind_model(answer_question_node, model))
    graph.add_node("draft_general", bind_model(draft_general_node, model))

    graph.add_edge(START, "read_email")
    graph.add_edge("read_email", "classify_email")
    graph.add_conditional_edges(
        "classify_email",
        route_by_classification,
        {node: node for node in ROUTES.values()},
    )
    for node in ROUTES.values():
        graph.add_edge(node, END)

    return graph.compile()


def route_by_classification(state: EmailState) -> str:
    return ROUTES.get(state.get("classification", "general"), "draft_general")


async def handle_spam_node(state: EmailState) -> EmailState:
    # No reply for spam; no model call either.
    log.info("handle_spam", email_id=state.get("email_id"))
    return {
        "route": "handle_spam",
        "status": "discarded",
        "events": [event("SPAM_DISCARDED", sender=state.get("sender"))],
    }


async def escalate_urgent_node(state: EmailState, *, model: BaseChatModel) -> EmailState:
    update = await draft_response_node(
        state,
        model=model,
        instructions="Acknowledge the urgency and say the on-call team has been paged.",
    )
    log.warning("escalate_urgent", email_id=state.get("email_id"), priority=state.get("priority"))
    return {
        **update,
        "route": "escalate_urgent",
        "status": "escalated",
        "events": [*update["events"], event("ESCALATED", priority=state.get("priority"))],
    }


async def answer_question_node(state: EmailState, *, model: BaseChatModel) -> EmailState:
    update = await draft_response_node(
        state, model=model, instructions="Answer the question directly."
    )
    return {
        **update,
        "route": "answer_question",
        "status": "answered",
        "events": [*update["events"], event("ANSWERED")],
    }


async def draft_general_node(state: EmailState, *, model: BaseChatModel) -> EmailState:
    update = await draft_response_node(state, model=model)
    return {**update, "route": "draft_general", "status": "drafted"}
