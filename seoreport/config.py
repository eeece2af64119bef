"""
Centralized configuration for the SEO report service.
Values are read from environment variables prefixed with ``SEOREPORT_``
or from a local ``.env`` file.
"""

from functools import lru_cache
from typing import Dict

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SECTION_PENALTIES: Dict[str, int] = {
    "meta": 15,
    "pageQuality": 15,
    "linkStructure": 25,
    "performance": 40,
    "crawlability": 30,
    "externalFactors": 20,
}


class Settings(BaseSettings):
    """Application settings loaded from the environment."""

    model_config = SettingsConfigDict(
        env_prefix="SEOREPORT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ======================
    # Fetching
    # ======================
    fetch_timeout: float = Field(default=10.0, description="Fetch timeout in seconds")
    max_content_size: int = Field(
        default=10 * 1024 * 1024, description="Maximum response body size in bytes"
    )
    max_redirects: int = Field(default=10, description="Maximum redirects to follow")
    user_agent: str = Field(
        default=(
            "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
            "(KHTML, like Gecko) Chrome/122.0.0.0 Safari/537.36"
        ),
        description="User-Agent header sent to target sites",
    )
    block_private_addresses: bool = Field(
        default=True,
        description="Reject URLs whose host resolves to a private or loopback address",
    )

    # ======================
    # Scoring
    # ======================
    section_penalties: Dict[str, int] = Field(
        default_factory=lambda: dict(DEFAULT_SECTION_PENALTIES),
        description="Points deducted from a section per finding that belongs to it",
    )

    # ======================
    # Storage
    # ======================
    database_path: str = Field(default="seoreport.db", description="SQLite report store")

    # ======================
    # Assistant
    # ======================
    anthropic_api_key: str = Field(default="", description="Anthropic API key")
    anthropic_model: str = Field(
        default="claude-3-5-sonnet-latest", description="Model used for conversations"
    )
    ai_max_tokens: int = Field(default=1000, description="Max tokens per assistant reply")

    # ======================
    # API
    # ======================
    rate_limit_enabled: bool = Field(default=True, description="Enable slowapi limits")
    analyze_rate_limit: str = Field(default="10/minute", description="Limit for /analyze-seo")

    # ======================
    # Logging
    # ======================
    log_level: str = Field(default="INFO", description="Logging level")


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()
