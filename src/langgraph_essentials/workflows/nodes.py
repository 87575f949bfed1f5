"""
langgraph_essentials.workflows.nodes

Email-processing nodes shared by the basic, routing and human review examples.

Responsibilities:
- Validate and normalize the incoming email.
- Classify it with deterministic keyword rules.
- Draft a reply with the configured chat model.
"""

from __future__ import annotations

import re
from collections.abc import Awaitable, Callable
from typing import Any

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import HumanMessage, SystemMessage

from langgraph_essentials.llm import message_text
from langgraph_essentials.observability.logging import get_logger
from langgraph_essentials.utils import generate_id
from langgraph_essentials.workflows.state import EmailState

log = get_logger(__name__)

SPAM_MARKERS = (
    "lottery",
    "prize",
    "winner",
    "click here",
    "unsubscribe",
    "free money",
    "claim your",
)
URGENT_MARKERS = ("urgent", "asap", "outage", "is down", "immediately", "emergency", "critical")
QUESTION_OPENERS = ("how", "what", "when", "where", "why", "can", "could", "do", "does", "is")

PRIORITY_BY_CLASSIFICATION = {
    "urgent": "high",
    "question": "medium",
    "general": "low",
    "spam": "none",
}

DRAFT_SYSTEM_PROMPT = (
    "You are a helpful customer support assistant. Write a short, polite reply to the "
    "email below. Keep it under 120 words and do not invent facts."
)


def event(name: str, **details: Any) -> dict[str, Any]:
    """One entry for the `events` log; nodes return it as `{"events": [event(...)]}`."""

    return {"event": name, "details": details}


def classify_text(subject: str, body: str) -> str:
    text = f"{subject}\n{body}".lower()
    if any(marker in text for marker in SPAM_MARKERS):
        return "spam"
    if any(marker in text for marker in URGENT_MARKERS):
        return "urgent"
    first_word = re.split(r"\W+", body.strip().lower(), maxsplit=1)[0] if body.strip() else ""
    if "?" in text or first_word in QUESTION_OPENERS:
        return "question"
    return "general"


async def read_email_node(state: EmailState) -> EmailState:
    """
    Validate input and normalize whitespace.
    """

    subject = " ".join(str(state.get("subject") or "").split())
    body = " ".join(str(state.get("body") or "").split())
    if not subject and not body:
        raise ValueError("Email needs a subject or a body")

    email_id = state.get("email_id") or f"email-{generate_id()}"
    sender = state.get("sender") or "unknown@example.com"

    log.info("read_email", email_id=email_id, sender=sender)
    update: EmailState = {
        "email_id": email_id,
        "sender": sender,
        "subject": subject,
        "body": body,
        "revision": 0,
        "review": {},
        "events": [event("READ_EMAIL", email_id=email_id)],
    }
    # A new email on a reused thread starts a fresh review cycle.
    if state.get("draft"):
        update["draft"] = ""
    return update


async def classify_email_node(state: EmailState) -> EmailState:
    classification = classify_text(state.get("subject", ""), state.get("body", ""))
    priority = PRIORITY_BY_CLASSIFICATION[classification]
    log.info("classify_email", classification=classification, priority=priority)
    return {
        "classification": classification,
        "priority": priority,
        "events": [event("CLASSIFY", classification=classification, priority=priority)],
    }


async def draft_response_node(
    state: EmailState, *, model: BaseChatModel, instructions: str = ""
) -> EmailState:
    revision = int(state.get("revision", 0) or 0) + 1
    prompt = _draft_prompt(state, instructions=instructions)

    reply = await model.ainvoke(
        [SystemMessage(content=DRAFT_SYSTEM_PROMPT), HumanMessage(content=prompt)]
    )
    draft = message_text(reply)

    log.info("draft_response", revision=revision, chars=len(draft))
    return {
        "draft": draft,
        "revision": revision,
        "events": [event("DRAFT", revision=revision)],
    }


def _draft_prompt(state: EmailState, *, instructions: str) -> str:
    lines = [
        f"From: {state.get('sender', 'unknown')}",
        f"Subject: {state.get('subject', '')}",
        f"Classification: {state.get('classification', 'general')}",
        "",
        state.get("body", ""),
    ]
    if instructions:
        lines += ["", f"Instructions: {instructions}"]

    feedback = (state.get("review") or {}).get("feedback")
    previous = state.get("draft")
    if feedback and previous:
        lines += ["", "Previous draft:", previous, "", f"Reviewer feedback: {feedback}"]
    return "\n".join(lines)


def bind_model(
    fn: Callable[..., Awaitable[Any]],
    model: BaseChatModel,
    **kwargs: Any,
) -> Callable[[Any], Awaitable[Any]]:
    async def _wrapped(state: Any) -> Any:
        return await fn(state, model=model, **kwargs)

    return _wrapped


# --- Module Notes -----------------------------------------------------------
# Nodes return partial updates only; LangGraph merges them into the running state using
# the reducers declared in `state.py`.
