"""
SafeCall Application Settings

Configuration management using Pydantic Settings.
All values can be overridden from environment variables.

SECURITY: The default code word is only a fallback for sessions
created without one. Never log it.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class CompanionSettings(BaseSettings):
    """AI companion persona configuration."""

    model_config = SettingsConfigDict(env_prefix="SAFECALL_COMPANION_")

    ai_name: str = Field(default="Alex", min_length=1, description="Companion display name")
    default_code_word: str = Field(
        default="pineapple",
        min_length=1,
        description="Code word used when a session starts without one",
    )
    greeting: str = Field(
        default="Hey! Good to hear from you! How's everything going? What's up?",
        description="Scripted opening line of every call",
    )
    mock_location: str = Field(
        default="123 Main St, New York, NY 10001",
        description="Simulated location attached to alerts",
    )


class TimingSettings(BaseSettings):
    """Call timing configuration."""

    model_config = SettingsConfigDict(env_prefix="SAFECALL_TIMING_")

    tick_interval_seconds: float = Field(default=1.0, gt=0.0, description="Duration counter period")
    thinking_delay_min_ms: int = Field(default=800, ge=0)
    thinking_delay_max_ms: int = Field(default=1500, gt=0)
    distress_alert_delay_ms: int = Field(default=1500, ge=0)
    speaking_min_ms: int = Field(default=2000, ge=0)
    speaking_ms_per_char: int = Field(default=50, ge=0)

    @model_validator(mode="after")
    def validate_thinking_window(self) -> "TimingSettings":
        """Thinking delay window must be non-empty."""
        if self.thinking_delay_max_ms <= self.thinking_delay_min_ms:
            raise ValueError(
                "thinking_delay_max_ms must be greater than thinking_delay_min_ms"
            )
        return self


class Settings(BaseSettings):
    """
    Main application settings.

    All configuration is loaded from environment variables with SAFECALL_ prefix.

    Usage:
        settings = get_settings()
        delay = settings.timing.distress_alert_delay_ms
    """

    model_config = SettingsConfigDict(
        env_prefix="SAFECALL_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    env: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Application environment"
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level"
    )

    # Nested settings
    companion: CompanionSettings = Field(default_factory=CompanionSettings)
    timing: TimingSettings = Field(default_factory=TimingSettings)

    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.env == "production"


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings.

    Uses LRU cache to ensure settings are only loaded once.
    For testing, construct Settings directly and pass it in.

    Returns:
        Settings: Application settings instance
    """
    return Settings()
