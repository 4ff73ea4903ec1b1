"""
Configuration settings for Math Formula Hub.

Uses Pydantic Settings for environment variable management with .env file support.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ========================================
    # AI Integration (Gemini)
    # ========================================
    gemini_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("gemini_api_key", "api_key"),
        description="Google Generative AI (Gemini) API key; empty is passed through",
    )
    ai_model: str = Field(
        default="gemini-3-flash-preview",
        description="Gemini model used for explanations and syllabi",
    )
    thinking_budget: int = Field(
        default=16000,
        description="Thinking budget sent when deep reasoning is enabled",
    )

    # ========================================
    # Learner Defaults
    # ========================================
    default_grade_level: int = Field(
        default=9,
        ge=7,
        le=12,
        description="Grade/class the dashboard starts on",
    )
    default_explanation_depth: Literal["simple", "comprehensive"] = Field(
        default="simple",
        description="Initial explanation depth",
    )
    default_theme: Literal["indigo", "emerald", "amber", "cyan"] = Field(
        default="indigo",
        description="Initial color theme",
    )
    default_enable_thinking: bool = Field(
        default=True,
        description="Deep reasoning on by default",
    )
    default_enable_voice: bool = Field(
        default=False,
        description="Voice guidance on by default",
    )
    history_limit: int = Field(
        default=5,
        description="Number of recent topics kept on the dashboard",
    )

    # ========================================
    # Logging
    # ========================================
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING",
        description="Logging verbosity level",
    )
    log_file: str | None = Field(
        default=None,
        description="Log file path (None for stderr only)",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
