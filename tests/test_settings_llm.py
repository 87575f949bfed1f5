"""
tests.test_settings_llm

Env-driven settings and the chat model factory.
"""

from __future__ import annotations

import pytest
from langchain_core.language_models.fake_chat_models import FakeListChatModel
from langchain_core.messages import AIMessage

from langgraph_essentials.llm import LLMConfigurationError, build_chat_model, message_text
from langgraph_essentials.settings import Settings


def test_defaults_run_offline(clean_env: pytest.MonkeyPatch) -> None:
    settings = Settings(_env_file=None)
    assert settings.llm_provider == "fake"
    assert settings.checkpoint_backend == "memory"
    assert isinstance(build_chat_model(settings), FakeListChatModel)


def test_env_overrides(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("LGE_LLM_PROVIDER", "anthropic")
    clean_env.setenv("LGE_MAX_REVISIONS", "5")
    clean_env.setenv("LGE_CHECKPOINT_BACKEND", "sqlite")
    settings = Settings(_env_file=None)
    assert settings.llm_provider == "anthropic"
    assert settings.max_revisions == 5
    assert settings.checkpoint_backend == "sqlite"


def test_api_key_is_hidden(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("OPENAI_API_KEY", "sk-test-secret")
    settings = Settings(_env_file=None)
    assert settings.openai_api_key is not None
    assert settings.openai_api_key.get_secret_value() == "sk-test-secret"
    assert "sk-test-secret" not in repr(settings)


@pytest.mark.parametrize("provider", ["openai", "anthropic"])
def test_missing_credentials_fail_fast(clean_env: pytest.MonkeyPatch, provider: str) -> None:
    clean_env.setenv("LGE_LLM_PROVIDER", provider)
    with pytest.raises(LLMConfigurationError):
        build_chat_model(Settings(_env_file=None))


def test_openai_model_is_built_from_env_key(clean_env: pytest.MonkeyPatch) -> None:
    from langchain_openai import ChatOpenAI

    clean_env.setenv("LGE_LLM_PROVIDER", "openai")
    clean_env.setenv("OPENAI_API_KEY", "sk-test")
    model = build_chat_model(Settings(_env_file=None))
    assert isinstance(model, ChatOpenAI)
    assert model.model_name == "gpt-4o-mini"


def test_anthropic_model_is_built_from_prefixed_key(clean_env: pytest.MonkeyPatch) -> None:
    from langchain_anthropic import ChatAnthropic

    clean_env.setenv("LGE_LLM_PROVIDER", "anthropic")
    clean_env.setenv("LGE_ANTHROPIC_API_KEY", "sk-ant-test")
    assert isinstance(build_chat_model(Settings(_env_file=None)), ChatAnthropic)


def test_message_text() -> None:
    assert message_text(AIMessage(content="  hello ")) == "hello"
    blocks = [{"type": "text", "text": "a"}, {"type": "tool_use", "id": "x"}, "b"]
    assert message_text(AIMessage(content=blocks)) == "ab"
    assert message_text("raw") == "raw"
