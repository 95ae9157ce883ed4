"""Configuration management for the Safety Docs Engine."""

from functools import lru_cache
from typing import Literal

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables from .env file (only if accessible)
try:
    load_dotenv()
except (PermissionError, OSError):
    # In sandboxed environments, .env might not be accessible
    # Environment variables should be set directly
    pass


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    # Environment
    SAFETY_DOCS_ENV: str = Field(default="dev", description="Environment: dev, staging, prod, test")

    # Completion service
    COMPLETION_PROVIDER: Literal["anthropic", "openai"] = Field(
        default="anthropic", description="Which completion service backs the document flows"
    )
    ANTHROPIC_API_KEY: str = Field(default="", description="Anthropic API key")
    OPENAI_API_KEY: str = Field(default="", description="OpenAI API key")

    # Document generation
    GENERATION_MODEL: str = Field(
        default="claude-sonnet-4-5-20250929", description="Model for document generation flows"
    )
    OPENAI_GENERATION_MODEL: str = Field(
        default="gpt-4o", description="Model for document generation when provider is openai"
    )
    GENERATION_MAX_TOKENS: int = Field(default=8000, description="Max output tokens per document")
    GENERATION_TEMPERATURE: float = Field(default=0.2, description="Sampling temperature")
    GENERATION_TIMEOUT_SECONDS: float = Field(
        default=180.0, description="Client-side timeout for one completion call"
    )

    # Safety consultant
    CONSULTANT_MODEL: str = Field(
        default="claude-haiku-4-5-20251001", description="Model for safety consultant advice"
    )
    CONSULTANT_MAX_TOKENS: int = Field(default=2048, description="Max tokens for consultant answers")
    CORE_MEMORY_PATH: str = Field(
        default="core-memory.json", description="JSON list of {key, url} reference documents"
    )

    # Article scraping
    ARTICLE_FETCH_TIMEOUT_SECONDS: float = Field(
        default=20.0, description="Timeout for fetching a news article"
    )
    MAX_ARTICLE_CHARS: int = Field(
        default=40_000, description="Article text is truncated to this length before prompting"
    )

    # Output validation
    RISK_CONSISTENCY_MODE: Literal["off", "warn", "enforce"] = Field(
        default="warn",
        description="How generated documents are cross-checked against computed risk ratings",
    )

    # Media attachments (hazard hunter, document analyzer)
    MAX_MEDIA_BYTES: int = Field(
        default=5_000_000, description="Max decoded size of a data-URI attachment"
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings instance

    Raises:
        ValidationError: If environment variables hold invalid values
    """
    return Settings()
