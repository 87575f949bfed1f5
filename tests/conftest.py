"""
tests.conftest

Shared fixtures.

Responsibilities:
- Provide an offline chat model with predictable replies.
- Keep host environment variables from leaking into Settings.
"""

from __future__ import annotations

from collections.abc import Iterator

import pytest
from langchain_core.language_models.fake_chat_models import FakeListChatModel

from langgraph_essentials.settings import get_settings

DRAFTS = ["Draft one.", "Draft two.", "Draft three.", "Draft four."]


@pytest.fixture
def fake_model() -> FakeListChatModel:
    return FakeListChatModel(responses=list(DRAFTS))


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[pytest.MonkeyPatch]:
    for name in (
        "OPENAI_API_KEY",
        "ANTHROPIC_API_KEY",
        "LGE_OPENAI_API_KEY",
        "LGE_ANTHROPIC_API_KEY",
        "LGE_LLM_PROVIDER",
        "LGE_CHECKPOINT_BACKEND",
        "LGE_CHECKPOINT_PATH",
        "LGE_MAX_REVISIONS",
        "LGE_LOG_LEVEL",
        "LGE_LOG_JSON",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield monkeypatch
    get_settings.cache_clear()
