from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache
from typing import Optional


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    openai_api_key: str
    allowed_origins: str = "http://localhost:3000"

    # Optional: set to use OpenRouter or any OpenAI-compatible provider
    # e.g. https://openrouter.ai/api/v1
    openai_base_url: Optional[str] = None

    chat_model: str = "gpt-4"
    temperature: float = 0.9
    max_tokens: int = 500
    request_timeout_seconds: float = 30.0

    # Redirect service; the URL is handed to the client, never fetched here
    image_base_url: str = "https://source.unsplash.com/800x1200/"

    log_level: str = "INFO"

    @property
    def origins_list(self) -> list[str]:
        return [o.strip() for o in self.allowed_origins.split(",")]


class FeedSettings(BaseSettings):
    """Settings for the terminal feed client (FEED_* variables)."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="FEED_", extra="ignore")

    api_base_url: str = "http://127.0.0.1:8000"
    initial_batch_size: int = 3
    prefetch_batch_size: int = 2
    timeout_seconds: float = 60.0
    log_level: str = "WARNING"


@lru_cache()
def get_settings() -> Settings:
    return Settings()


@lru_cache()
def get_feed_settings() -> FeedSettings:
    return FeedSettings()
