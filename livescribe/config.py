from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings validated via Pydantic.

    Values are loaded from environment variables and/or a .env file.
    """

    # API Keys
    openai_api_key: str = ""
    anthropic_api_key: str = ""
    assemblyai_api_key: str = ""  # Optional: only needed for recorded-audio sources

    # Supabase
    supabase_url: str = ""
    supabase_key: str = ""

    # App config
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    log_level: str = "INFO"
    storage_backend: str = "memory"
    default_user_id: int = 1

    # Answering service
    llm_provider: str = "openai"
    openai_model: str = "gpt-4o"
    llm_model: str = "claude-sonnet-4-20250514"
    llm_temperature: float = 0.7
    llm_max_tokens: int = 500
    answer_service_url: str = "http://localhost:8000/api/chat"
    answer_timeout_seconds: float = 30.0

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached Settings instance.

    Gracefully handles missing .env files (e.g. in CI/testing) by falling
    back to environment variables and defaults.
    """
    try:
        return Settings()
    except Exception:
        # If .env is missing or unreadable, build settings from env vars only.
        return Settings(_env_file=None)  # type: ignore[call-arg]


settings = get_settings()
