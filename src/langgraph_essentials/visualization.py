"""
langgraph_essentials.visualization

Graph visualization helpers.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any


def to_mermaid(graph: Any) -> str:
    """Mermaid flowchart source for a compiled graph."""

    return graph.get_graph().draw_mermaid()


def write_mermaid(graph: Any, path: str | Path) -> Path:
    target = Path(path)
    if not target.suffix:
        target = target.with_suffix(".mmd")
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(to_mermaid(graph), encoding="utf-8")
    return target


def describe_graph(graph: Any) -> dict[str, Any]:
    """
    Plain-data view of a compiled graph: node ids and (source, target, conditional) edges.
    """

    drawable = graph.get_graph()
    return {
        "nodes": sorted(drawable.nodes),
        "edges": [(e.source, e.target, bool(e.conditional)) for e in drawable.edges],
    }
