"""
langgraph_essentials.workflows.memory

Conversation memory with a checkpointer.

Responsibilities:
- Persist chat history and remembered facts per `thread_id`.
- Show that separate threads do not share state.
- Expose helpers for reading the checkpoint history of a thread.
"""

from __future__ import annotations

import re
from typing import Any

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import HumanMessage, SystemMessage
from langgraph.checkpoint.base import BaseCheckpointSaver
from langgraph.graph import END, START, StateGraph

from langgraph_essentials.observability.logging import get_logger
from langgraph_essentials.workflows.nodes import bind_model, event
from langgraph_essentials.workflows.state import ChatState

log = get_logger(__name__)

FACT_PATTERNS: dict[str, re.Pattern[str]] = {
    "name": re.compile(r"\bmy name is ([A-Za-z][\w'-]*)", re.IGNORECASE),
    "location": re.compile(r"\bI live in ([A-Z][\w' -]*?)(?:[.,!?]| and |$)", re.IGNORECASE),
    "likes": re.compile(r"\bI (?:like|love) ([\w' -]+?)(?:[.,!?]|$)", re.IGNORECASE),
}

CHAT_SYSTEM_PROMPT = "You are a friendly assistant. Keep answers short."


def build_memory_graph(*, model: BaseChatModel, checkpointer: BaseCheckpointSaver):
    """
    Returns a compiled LangGraph runnable.
    """

    graph = StateGraph(ChatState)

    graph.add_node("remember_facts", remember_facts_node)
    graph.add_node("chatbot", bind_model(chatbot_node, model))

    graph.add_edge(START, "remember_facts")
    graph.add_edge("remember_facts", "chatbot")
    graph.add_edge("chatbot", END)

    return graph.compile(checkpointer=checkpointer)


def extract_facts(text: str) -> dict[str, str]:
    facts: dict[str, str] = {}
    for key, pattern in FACT_PATTERNS.items():
        match = pattern.search(text)
        if match:
            facts[key] = match.group(1).strip()
    return facts


async def remember_facts_node(state: ChatState) -> ChatState:
    messages = state.get("messages") or []
    latest = next((m for m in reversed(messages) if isinstance(m, HumanMessage)), None)
    if latest is None:
        raise ValueError("Chat turn needs at least one human message")

    facts = extract_facts(str(latest.content))
    if facts:
        log.info("remember_facts", keys=sorted(facts))
    return {"facts": facts, "events": [event("REMEMBER", keys=sorted(facts))]}


async def chatbot_node(state: ChatState, *, model: BaseChatModel) -> ChatState:
    facts = state.get("facts") or {}
    system = CHAT_SYSTEM_PROMPT
    if facts:
        known = ", ".join(f"{k}={v}" for k, v in sorted(facts.items()))
        system += f" Known facts about the user: {known}."

    reply = await model.ainvoke([SystemMessage(content=system), *state.get("messages", [])])
    turn = int(state.get("turn_count", 0) or 0) + 1
    log.info("chatbot", turn=turn)
    return {"messages": [reply], "turn_count": turn, "events": [event("CHAT_TURN", turn=turn)]}


async def send_message(graph: Any, text: str, *, config: dict[str, Any]) -> ChatState:
    """One conversation turn on the thread named in `config`."""

    return await graph.ainvoke({"messages": [HumanMessage(content=text)]}, config)


async def checkpoint_history(graph: Any, *, config: dict[str, Any]) -> list[dict[str, Any]]:
    """
    Newest-first summary of every checkpoint stored for the thread.
    """

    history: list[dict[str, Any]] = []
    async for snapshot in graph.aget_state_history(config):
        values = snapshot.values or {}
        history.append(
            {
                "step": (snapshot.metadata or {}).get("step"),
                "next": list(snapshot.next),
                "messages": len(values.get("messages", [])),
                "turn_count": values.get("turn_count", 0),
            }
        )
    return history


# --- Module Notes -----------------------------------------------------------
# Only the checkpointer carries memory between turns: each `ainvoke` passes just the new
# human message and `add_messages` appends it to the stored history.
