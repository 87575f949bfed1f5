"""
langgraph_essentials.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for the examples and the CLI.
- Hide provider credentials from repr/logging.
- Offer a cached settings instance shared by every command.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import AliasChoices, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Env-driven configuration (prefix `LGE_`, optional `.env` file).

    Defaults run every example offline: the `fake` provider needs no credentials
    and the in-memory checkpointer needs no storage.
    """

    model_config = SettingsConfigDict(
        env_prefix="LGE_",
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
        case_sensitive=False,
    )

    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "langgraph-essentials"
    log_level: str = "WARNING"
    log_json: bool = False

    # LLM
    llm_provider: Literal["fake", "openai", "anthropic"] = "fake"
    openai_api_key: SecretStr | None = Field(
        default=None,
        validation_alias=AliasChoices("LGE_OPENAI_API_KEY", "OPENAI_API_KEY"),
        repr=False,
    )
    openai_model: str = "gpt-4o-mini"
    anthropic_api_key: SecretStr | None = Field(
        default=None,
        validation_alias=AliasChoices("LGE_ANTHROPIC_API_KEY", "ANTHROPIC_API_KEY"),
        repr=False,
    )
    anthropic_model: str = "claude-3-5-haiku-latest"
    temperature: float = 0.2

    # Checkpointing
    checkpoint_backend: Literal["memory", "sqlite"] = "memory"
    checkpoint_path: str = "./checkpoints.sqlite"

    # Human review
    max_revisions: int = Field(default=3, ge=1)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars for every command.
    return Settings()


# --- Module Notes -----------------------------------------------------------
# CLI flags override individual fields via `Settings.model_copy(update=...)`; the cached
# instance itself is never mutated.
