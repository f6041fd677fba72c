"""
Configuration Management

Uses Pydantic Settings for environment-based configuration.
Loads from .env file automatically.
"""

from typing import Optional
from functools import lru_cache
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    # Claude API (Optional - candidate generation is skipped without it)
    ANTHROPIC_API_KEY: Optional[str] = None
    CLAUDE_MODEL: str = "claude-sonnet-4-20250514"
    CLAUDE_TIMEOUT: float = 20.0  # seconds per Claude request

    # Database (SQLite fallback when DATABASE_URL is unset)
    DATABASE_URL: Optional[str] = None
    SQLITE_PATH: str = "competitors.db"

    # Application Settings
    LOG_LEVEL: str = "INFO"

    # Limits
    MAX_COMPETITORS: int = 5
    DEFAULT_MAX_ATTEMPTS: int = 8
    AUDIT_KEEP: int = 10

    # Deadlines (seconds)
    VERIFY_TIME_LIMIT: float = 45.0
    AUDIT_TIME_LIMIT: float = 60.0

    # Probe timeouts (seconds)
    FAST_HEAD_TIMEOUT: float = 1.2
    FAST_GET_TIMEOUT: float = 2.5
    FAST_HTML_TIMEOUT: float = 4.0
    THOROUGH_HEAD_TIMEOUT: float = 5.0
    THOROUGH_GET_TIMEOUT: float = 9.0
    THOROUGH_HTML_TIMEOUT: float = 12.0

    PROBE_USER_AGENT: str = "Mozilla/5.0 (compatible; DomainVerifier/1.0)"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"  # Ignore extra fields in .env file
        case_sensitive = False  # Allow both UPPERCASE and lowercase


@lru_cache
def get_settings() -> Settings:
    """Get or create cached settings instance."""
    return Settings()
