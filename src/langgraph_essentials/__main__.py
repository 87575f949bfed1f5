"""
langgraph_essentials.__main__

Entrypoint for running the CLI via `python -m langgraph_essentials`.
"""

from __future__ import annotations

from langgraph_essentials.cli import main

if __name__ == "__main__":
    main()
