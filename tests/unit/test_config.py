"""
Unit Tests for Configuration and Logging

Tests settings validation, environment overrides and log redaction.
"""

import json
import logging

import pytest
import structlog
from pydantic import ValidationError

from safecall.config import CompanionSettings, Settings, TimingSettings
from safecall.config.logging_config import (
    _redact_sensitive_data,
    configure_logging,
    get_logger,
    get_processors,
)


class TestSettings:
    """Settings loading and validation."""

    def test_defaults(self) -> None:
        settings = Settings()

        assert settings.companion.ai_name == "Alex"
        assert settings.companion.default_code_word == "pineapple"
        assert settings.timing.thinking_delay_min_ms == 800
        assert settings.timing.thinking_delay_max_ms == 1500
        assert settings.timing.distress_alert_delay_ms == 1500
        assert not settings.is_production()

    def test_empty_thinking_window_rejected(self) -> None:
        with pytest.raises(ValidationError):
            TimingSettings(thinking_delay_min_ms=1000, thinking_delay_max_ms=1000)

    def test_tick_interval_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            TimingSettings(tick_interval_seconds=0)

    def test_environment_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SAFECALL_COMPANION_AI_NAME", "Robin")
        monkeypatch.setenv("SAFECALL_TIMING_DISTRESS_ALERT_DELAY_MS", "250")

        assert CompanionSettings().ai_name == "Robin"
        assert TimingSettings().distress_alert_delay_ms == 250

    def test_invalid_env_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Settings(env="qa")


class TestLogRedaction:
    """Sensitive values never reach log output."""

    def test_code_word_redacted(self) -> None:
        event = _redact_sensitive_data(None, "info", {
            "event": "Code word updated",
            "code_word": "pineapple",
            "contact_phone": "+1 (555) 123-4567",
        })

        assert event["event"] == "Code word updated"
        assert event["code_word"] == "[REDACTED]"
        assert event["contact_phone"] == "[REDACTED]"

    def test_nested_values_redacted(self) -> None:
        event = _redact_sensitive_data(None, "info", {
            "event": "Notification",
            "payload": {"location_detail": "123 Main St", "title": "Alert sent to Mom"},
        })

        assert event["payload"]["location_detail"] == "[REDACTED]"
        assert event["payload"]["title"] == "Alert sent to Mom"

    def test_redaction_in_every_environment(self) -> None:
        assert _redact_sensitive_data in get_processors(is_development=True)
        assert _redact_sensitive_data in get_processors(is_development=False)

    def test_phone_numbers_scrubbed_from_text(self) -> None:
        event = _redact_sensitive_data(None, "info", {
            "event": "Alert failed for +1 (555) 987-6543",
            "attempts": 2,
        })

        assert event["event"] == "Alert failed for [REDACTED]"
        assert event["attempts"] == 2


class TestConfigureLogging:
    """structlog wiring on top of stdlib logging."""

    @pytest.fixture(autouse=True)
    def reset_structlog(self):
        yield
        structlog.reset_defaults()

    def test_json_output_is_redacted(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.INFO)
        configure_logging(Settings(env="staging", log_level="INFO"))

        get_logger("safecall.test").info(
            "Code word updated",
            code_word="pineapple",
            contact_phone="+1 (555) 123-4567",
        )

        record = json.loads(caplog.records[-1].getMessage())
        assert record["event"] == "Code word updated"
        assert record["code_word"] == "[REDACTED]"
        assert record["contact_phone"] == "[REDACTED]"
        assert record["service"] == "safecall-engine"
        assert record["level"] == "info"
        assert "pineapple" not in caplog.text

    def test_loggers_not_cached_outside_production(self) -> None:
        configure_logging(Settings(env="development"))
        assert structlog.get_config()["cache_logger_on_first_use"] is False

        configure_logging(Settings(env="production"))
        assert structlog.get_config()["cache_logger_on_first_use"] is True
