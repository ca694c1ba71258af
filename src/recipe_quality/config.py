"""
Recipe Quality - Configuration and settings.

The active validation policy is chosen here (QUALITY_POLICY) and nowhere
else, so strict and relaxed thresholds are never mixed implicitly.
"""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class QualitySettings(BaseSettings):
    """Settings for the quality gate and its optional OpenAI enhancer."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Validation
    quality_policy: Literal["strict", "relaxed"] = "strict"

    # OpenAI (only needed when an enhancer is wired in)
    openai_api_key: str | None = None
    enhance_model: str = "gpt-4o"
    enhance_temperature: float = 0.7
    # One first try plus two retries
    enhance_max_attempts: int = 3

    # Application
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # RECIPE_QUALITY_LOG_PROMPTS=true - log generation prompts to local files (dev only)
    recipe_quality_log_prompts: bool = False


@lru_cache
def get_settings() -> QualitySettings:
    """Get cached settings instance."""
    return QualitySettings()


class _SettingsProxy:
    """Lazy proxy for settings to avoid loading .env at import time."""

    _instance: QualitySettings | None = None

    def __getattr__(self, name: str):
        if self._instance is None:
            self._instance = get_settings()
        return getattr(self._instance, name)

    def reset(self) -> None:
        """Drop the cached instance so the next access re-reads the environment."""
        get_settings.cache_clear()
        self._instance = None


settings = _SettingsProxy()
