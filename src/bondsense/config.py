"""
Configuration settings for BondSense.

All settings are loaded from environment variables with sensible defaults.
Use .env file for local development.
"""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_PROMPTS_DIR = Path(__file__).parent / "prompts"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Application ===
    APP_NAME: str = "BondSense"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    ENVIRONMENT: str = "development"
    CORS_ORIGINS: list[str] = ["*"]

    # === Gemini Configuration ===
    GEMINI_BASE_URL: str = "https://generativelanguage.googleapis.com"
    GEMINI_MODEL: str = "gemini-1.5-flash"
    GEMINI_TIMEOUT: int = 120  # seconds, bounds a single attempt

    # === Generation Parameters ===
    CHAT_TEMPERATURE: float = 0.7
    OVERALL_TEMPERATURE: float = 0.8
    LLM_TOP_K: int = 40
    LLM_TOP_P: float = 0.95
    LLM_MAX_OUTPUT_TOKENS: int = 8192
    KEY_CHECK_TEMPERATURE: float = 0.1
    KEY_CHECK_MAX_OUTPUT_TOKENS: int = 100

    # === Transcript Limits ===
    CHAT_TEXT_LIMIT: int = 30000  # chars
    OVERALL_TEXT_LIMIT: int = 50000  # chars

    # === Retry Policy ===
    MAX_RETRIES: int = 3
    RETRY_BASE_DELAY_MS: int = 2000
    RETRY_JITTER_MAX_MS: int = 1000

    # === Prompts ===
    PROMPT_TEMPLATES_DIR: str = str(DEFAULT_PROMPTS_DIR)

    # === Monitoring ===
    PROMETHEUS_ENABLED: bool = True


# Global settings instance
settings = Settings()
