"""
Configuration settings for the Email Risk Analyzer.

All settings are loaded from environment variables with sensible defaults.
Use .env file for local development.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )
    
    # === Application ===
    APP_NAME: str = "Email Risk Analyzer"
    APP_VERSION: str = "0.1.0"
    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    
    # === Analyzer (Anthropic Messages API) ===
    ANALYZER_BASE_URL: str = "https://api.anthropic.com"
    ANALYZER_API_KEY: str = ""
    ANALYZER_API_VERSION: str = "2023-06-01"
    ANALYZER_MODEL: str = "claude-sonnet-4-20250514"
    ANALYZER_MAX_TOKENS: int = 1000
    ANALYZER_TIMEOUT: float = 60.0  # seconds, per HTTP call
    
    # === Retry (caller-side wrapper, disabled by default) ===
    ANALYZER_MAX_RETRIES: int = 0
    RETRY_BACKOFF_BASE: float = 2.0
    
    # === Pipeline ===
    ANALYSIS_TIMEOUT: Optional[float] = None  # whole-operation timeout, seconds
    
    # === Monitoring ===
    PROMETHEUS_ENABLED: bool = True


# Global settings instance
settings = Settings()
