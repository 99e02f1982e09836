"""Application configuration."""
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings

GEMINI_OPENAI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/openai/"


class Settings(BaseSettings):
    """App settings from env."""

    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.0-flash-exp"
    # Gemini is reached through its OpenAI-compatible endpoint
    gemini_base_url: str = GEMINI_OPENAI_BASE_URL
    llm_temperature: float = 0.4
    llm_timeout_seconds: float = 30.0

    # Tried in order; first backend with a non-empty result wins
    search_backends: list[str] = ["duckduckgo"]  # "duckduckgo" | "tavily" | "serper"
    search_timeout_seconds: float = 10.0
    # Callers are promised at most 5 sources and never none
    max_sources: int = Field(default=5, ge=1, le=5)

    tav_api_key: str = ""
    serp_api_key: str = ""

    log_level: str = "INFO"
    log_json: bool = False

    class Config:
        env_file = ".env"
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    return Settings()
