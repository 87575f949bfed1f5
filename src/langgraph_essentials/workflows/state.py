"""
langgraph_essentials.workflows.state

Typed state schemas used by the example graphs.

Responsibilities:
- Define the contract between nodes (inputs/outputs) for each example.
- Attach reducers to keys written by more than one node.
"""

from __future__ import annotations

import operator
from typing import Annotated, Any, TypedDict

from langchain_core.messages import AnyMessage
from langgraph.graph.message import add_messages

from langgraph_essentials.workflows.reducers import append_events, merge_dicts


class EmailState(TypedDict, total=False):
    # Input
    email_id: str
    sender: str
    subject: str
    body: str

    # Classification
    classification: str
    priority: str
    route: str

    # Drafting / review
    draft: str
    revision: int
    review: dict[str, Any]

    # Outcome
    status: str

    events: Annotated[list[dict[str, Any]], append_events]


class DocumentState(TypedDict, total=False):
    doc_id: str
    text: str
    analyses: Annotated[dict[str, Any], merge_dicts]
    report: str
    events: Annotated[list[dict[str, Any]], append_events]


class DocumentTask(TypedDict):
    # Payload of one dynamic fan-out `Send`.
    doc_id: str
    text: str


class BatchState(TypedDict, total=False):
    documents: list[dict[str, str]]
    summaries: Annotated[list[dict[str, Any]], operator.add]
    totals: dict[str, int]
    events: Annotated[list[dict[str, Any]], append_events]


class ChatState(TypedDict, total=False):
    messages: Annotated[list[AnyMessage], add_messages]
    facts: Annotated[dict[str, str], merge_dicts]
    turn_count: int
    events: Annotated[list[dict[str, Any]], append_events]


# --- Module Notes -----------------------------------------------------------
# These TypedDicts are intentionally permissive (total=False): callers pass only the input
# keys and nodes fill in the rest through partial updates.
