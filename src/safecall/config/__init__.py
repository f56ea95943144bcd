"""
SafeCall Configuration Module

Provides centralized configuration management with:
- Environment-based settings loading
- Validation of timing windows
- Companion persona defaults
"""

from safecall.config.settings import (
    CompanionSettings,
    Settings,
    TimingSettings,
    get_settings,
)

__all__ = ["CompanionSettings", "Settings", "TimingSettings", "get_settings"]
