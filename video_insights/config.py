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
    gemini_api_key: str = ""
    youtube_api_key: str = ""
    youtube_oauth_token: str = ""  # Captions listing needs OAuth, an API key is not enough

    # Providers
    ai_runtime_provider: str = "local"
    openai_model: str = "gpt-4o-mini"
    anthropic_model: str = "claude-sonnet-4-20250514"
    gemini_model: str = "gemini-1.5-flash-latest"

    # App config
    api_host: str = "0.0.0.0"
    api_port: int = 4000
    cors_origin: str = "http://localhost:5173"
    log_level: str = "INFO"
    max_upload_bytes: int = 2 * 1024 * 1024

    # In-memory store lifetimes
    transcript_ttl_seconds: int = 60 * 60
    analysis_cache_ttl_seconds: int = 60 * 10
    export_ttl_seconds: int = 60 * 10

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    @property
    def cors_origins(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origin.split(",") if origin.strip()]


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
