"""Application configuration."""

import os
from uuid import UUID

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    openai_api_key: str
    openai_model: str = "gpt-5.2"
    openai_store: bool = False
    ai_timeout_seconds: float = 20.0
    api_tokens: str | None = None
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_api_tokens(raw: str | None) -> dict[str, UUID]:
    """Parse comma separated ``token:user_id`` pairs into a lookup table.

    Malformed pairs are skipped.
    """
    if raw is None:
        return {}
    tokens: dict[str, UUID] = {}
    for chunk in raw.split(","):
        token, separator, user_id = chunk.strip().partition(":")
        if not separator or not token.strip():
            continue
        try:
            tokens[token.strip()] = UUID(user_id.strip())
        except ValueError:
            continue
    return tokens
