"""
langgraph_essentials.llm

Chat model factory used by every workflow that drafts text.

Responsibilities:
- Build a LangChain chat model for the configured provider.
- Fail fast (before any network call) when a provider's credentials are missing.
- Provide an offline fake model so examples run without API keys.
"""

from __future__ import annotations

from langchain_core.language_models import BaseChatModel
from langchain_core.language_models.fake_chat_models import FakeListChatModel

from langgraph_essentials.observability.logging import get_logger
from langgraph_essentials.settings import Settings

log = get_logger(__name__)

# Canned replies cycled by the offline model.
FAKE_RESPONSES: tuple[str, ...] = (
    "Thanks for reaching out! We have received your message and will follow up shortly.",
    "Happy to help. Here is a short answer to your question, with details to follow.",
    "We are on it. The team has been notified and we will update you within the hour.",
    "Summary: the material is clear, generally positive, and covers the key points.",
)


class LLMConfigurationError(RuntimeError):
    """Raised when the selected provider cannot be configured (e.g. missing API key)."""


def build_chat_model(settings: Settings) -> BaseChatModel:
    provider = settings.llm_provider

    if provider == "fake":
        log.debug("llm_selected", provider=provider)
        return FakeListChatModel(responses=list(FAKE_RESPONSES))

    if provider == "openai":
        if settings.openai_api_key is None:
            raise LLMConfigurationError(
                "llm_provider=openai requires OPENAI_API_KEY (or LGE_OPENAI_API_KEY)"
            )
        from langchain_openai import ChatOpenAI

        log.debug("llm_selected", provider=provider, model=settings.openai_model)
        return ChatOpenAI(
            model=settings.openai_model,
            temperature=settings.temperature,
            api_key=settings.openai_api_key.get_secret_value(),
        )

    if provider == "anthropic":
        if settings.anthropic_api_key is None:
            raise LLMConfigurationError(
                "llm_provider=anthropic requires ANTHROPIC_API_KEY (or LGE_ANTHROPIC_API_KEY)"
            )
        from langchain_anthropic import ChatAnthropic

        log.debug("llm_selected", provider=provider, model=settings.anthropic_model)
        return ChatAnthropic(
            model=settings.anthropic_model,
            temperature=settings.temperature,
            api_key=settings.anthropic_api_key.get_secret_value(),
        )

    raise LLMConfigurationError(f"Unknown llm_provider: {provider}")


def message_text(message: object) -> str:
    """Plain text of a chat model reply (string content or a list of content blocks)."""

    content = getattr(message, "content", message)
    if isinstance(content, str):
        return content.strip()
    if isinstance(content, list):
        parts = []
        for block in content:
            if isinstance(block, str):
                parts.append(block)
            elif isinstance(block, dict) and block.get("type") == "text":
                parts.append(str(block.get("text", "")))
        return "".join(parts).strip()
    return str(content).strip()


# --- Module Notes -----------------------------------------------------------
# Provider SDKs are imported lazily so the offline path only needs langchain-core.
