"""
langgraph_essentials.workflows

Example LangGraph workflows.

Responsibilities:
- Typed state schemas, reducers, nodes, routing, and graph compilation per example.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Each example module exposes a `build_*_graph(...)` factory; drivers live in `runner`.
