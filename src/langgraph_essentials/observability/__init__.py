"""
langgraph_essentials.observability

Observability package.

Responsibilities:
- Structured logging configuration.
- Run context propagation for consistent log enrichment.
"""

# Package marker.
