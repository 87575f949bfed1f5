"""
langgraph_essentials.workflows.parallel

Parallel execution: static fan-out/fan-in and dynamic map/reduce with `Send`.

Responsibilities:
- Run three independent analysers over one document in the same superstep and
  merge their results with a reducer before `combine` runs.
- Fan a list of documents out to one `summarize_document` task each and collect the results.
"""

from __future__ import annotations

import re
from collections import Counter

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import HumanMessage, SystemMessage
from langgraph.graph import END, START, StateGraph
from langgraph.types import Send

from langgraph_essentials.llm import message_text
from langgraph_essentials.observability.logging import get_logger
from langgraph_essentials.workflows.nodes import bind_model, event
from langgraph_essentials.workflows.state import BatchState, DocumentState, DocumentTask

log = get_logger(__name__)

ANALYSERS = ("analyze_sentiment", "extract_keywords", "compute_statistics")
KEYWORD_LIMIT = 5

POSITIVE_WORDS = frozenset(
    {"good", "great", "excellent", "easy", "clear", "love", "happy", "fast", "helpful", "positive"}
)
NEGATIVE_WORDS = frozenset(
    {"bad", "broken", "slow", "delayed", "error", "errors", "poor", "hate", "sad", "negative"}
)
STOPWORDS = frozenset(
    {
        "a", "an", "and", "are", "as", "at", "be", "because", "before", "by", "for", "from",
        "in", "is", "it", "its", "of", "on", "or", "same", "starts", "that", "the", "their",
        "this", "to", "was", "were", "with",
    }
)

SUMMARY_SYSTEM_PROMPT = "Summarize the document in one short paragraph using the analysis provided."


def _words(text: str) -> list[str]:
    return re.findall(r"[a-z0-9']+", text.lower())


# --- Static fan-out / fan-in --------------------------------------------------


def build_parallel_graph(*, model: BaseChatModel):
    """
    Returns a compiled LangGraph runnable.

    prepare -> {analyze_sentiment, extract_keywords, compute_statistics} -> combine -> END
    """

    graph = StateGraph(DocumentState)

    graph.add_node("prepare", prepare_node)
    graph.add_node("analyze_sentiment", analyze_sentiment_node)
    graph.add_node("extract_keywords", extract_keywords_node)
    graph.add_node("compute_statistics", compute_statistics_node)
    graph.add_node("combine", bind_model(combine_node, model))

    graph.add_edge(START, "prepare")
    for name in ANALYSERS:
        graph.add_edge("prepare", name)
    # A list of sources makes `combine` wait for every branch.
    graph.add_edge(list(ANALYSERS), "combine")
    graph.add_edge("combine", END)

    return graph.compile()


async def prepare_node(state: DocumentState) -> DocumentState:
    text = " ".join(str(state.get("text") or "").split())
    if not text:
        raise ValueError("Document text is empty")
    doc_id = state.get("doc_id") or "doc"
    log.info("prepare", doc_id=doc_id, chars=len(text))
    return {"doc_id": doc_id, "text": text, "events": [event("PREPARE", doc_id=doc_id)]}


async def analyze_sentiment_node(state: DocumentState) -> DocumentState:
    words = _words(state["text"])
    positive = sum(1 for w in words if w in POSITIVE_WORDS)
    negative = sum(1 for w in words if w in NEGATIVE_WORDS)
    if positive > negative:
        label = "positive"
    elif negative > positive:
        label = "negative"
    else:
        label = "neutral"
    return {
        "analyses": {"sentiment": {"label": label, "positive": positive, "negative": negative}},
        "events": [event("SENTIMENT", label=label)],
    }


async def extract_keywords_node(state: DocumentState) -> DocumentState:
    counts = Counter(w for w in _words(state["text"]) if w not in STOPWORDS and len(w) > 2)
    keywords = [word for word, _ in counts.most_common(KEYWORD_LIMIT)]
    return {"analyses": {"keywords": keywords}, "events": [event("KEYWORDS", count=len(keywords))]}


async def compute_statistics_node(state: DocumentState) -> DocumentState:
    text = state["text"]
    words = _words(text)
    sentences = [s for s in re.split(r"[.!?]+", text) if s.strip()]
    stats = {
        "words": len(words),
        "sentences": len(sentences),
        "avg_word_length": round(sum(len(w) for w in words) / len(words), 2) if words else 0.0,
    }
    return {"analyses": {"statistics": stats}, "events": [event("STATISTICS", **stats)]}


async def combine_node(state: DocumentState, *, model: BaseChatModel) -> DocumentState:
    analyses = state.get("analyses", {})
    missing = [k for k in ("sentiment", "keywords", "statistics") if k not in analyses]
    if missing:
        raise ValueError(f"combine ran before all analysers finished: missing {missing}")

    reply = await model.ainvoke(
        [
            SystemMessage(content=SUMMARY_SYSTEM_PROMPT),
            HumanMessage(content=f"Document:\n{state['text']}\n\nAnalysis:\n{analyses}"),
        ]
    )
    report = message_text(reply)
    log.info("combine", doc_id=state.get("doc_id"), sentiment=analyses["sentiment"]["label"])
    return {"report": report, "events": [event("COMBINE", analyses=sorted(analyses))]}


# --- Dynamic map / reduce ------------------------------------------------------


def build_map_reduce_graph():
    """
    Returns a compiled LangGraph runnable.

    START -(Send per document)-> summarize_document -> collect -> END
    """

    graph = StateGraph(BatchState)

    graph.add_node("summarize_document", summarize_document_node)
    graph.add_node("collect", collect_node)

    graph.add_conditional_edges(START, fan_out_documents, ["summarize_document", "collect"])
    graph.add_edge("summarize_document", "collect")
    graph.add_edge("collect", END)

    return graph.compile()


def fan_out_documents(state: BatchState) -> list[Send] | str:
    documents = state.get("documents") or []
    if not documents:
        return "collect"
    return [
        Send(
            "summarize_document",
            {"doc_id": str(doc.get("doc_id") or f"doc-{i}"), "text": str(doc.get("text", ""))},
        )
        for i, doc in enumerate(documents, start=1)
    ]


async def summarize_document_node(task: DocumentTask) -> BatchState:
    words = _words(task["text"])
    sentences = [s.strip() for s in re.split(r"(?<=[.!?])\s+", task["text"].strip()) if s.strip()]
    summary = {
        "doc_id": task["doc_id"],
        "words": len(words),
        "first_sentence": sentences[0] if sentences else "",
    }
    return {"summaries": [summary]}


async def collect_node(state: BatchState) -> BatchState:
    summaries = state.get("summaries") or []
    totals = {"documents": len(summaries), "words": sum(s["words"] for s in summaries)}
    log.info("collect", **totals)
    return {"totals": totals, "events": [event("COLLECT", **totals)]}


# --- Module Notes -----------------------------------------------------------
# Branch ordering inside a superstep is up to LangGraph; reducers make the merged result
# independent of that order (except `summaries`, which callers should sort by `doc_id`).
