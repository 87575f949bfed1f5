"""
langgraph_essentials.workflows.basic

Linear email pipeline: the smallest useful StateGraph.

read_email -> classify_email -> draft_response -> finalize -> END
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


def build_basic_graph(*, model: BaseChatModel):
    """
    Returns a compiled LangGraph runnable.
    """

    graph = StateGraph(EmailState)

    graph.add_node("read_email", read_email_node)
    graph.add_node("classify_email", classify_email_node)
    graph.add_node("draft_response", bind_model(draft_response_node, model))
    graph.add_node("finalize", finalize_node)

    graph.add_edge(START, "read_email")
    graph.add_edge("read_email", "classify_email")
    graph.add_edge("classify_email", "draft_response")
    graph.add_edge("draft_response", "finalize")
    graph.add_edge("finalize", END)

    return graph.compile()


async def finalize_node(state: EmailState) -> EmailState:
    log.info("finalize", email_id=state.get("email_id"))
    return {"status": "drafted", "events": [event("FINALIZE", status="drafted")]}
