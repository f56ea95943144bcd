"""
SafeCall Logging Configuration

Structured logging for call sessions:
- Values under sensitive keys (code word, phone, location) are masked
- Phone numbers are scrubbed from free-text values
- Console output in development, JSON lines elsewhere

SECURITY: The code word is the user's secret. Components must not
pass it to a logger at all; redaction here is the second line.
"""

import logging
import re
import sys
from typing import Any, Optional, TextIO

import structlog

from safecall import __version__
from safecall.config.settings import Settings


REDACTED = "[REDACTED]"

# Key fragments whose values are masked
SENSITIVE_PATTERNS: frozenset[str] = frozenset({
    "code_word",
    "codeword",
    "phone",
    "location",
    "token",
    "secret",
})

# Contact numbers such as "+1 (555) 123-4567"
PHONE_NUMBER_RE = re.compile(r"(?:\+\d{1,3}\s?)?\(\d{3}\)\s?\d{3}-\d{4}")


def _is_sensitive_key(key: str) -> bool:
    key_lower = key.lower()
    return any(pattern in key_lower for pattern in SENSITIVE_PATTERNS)


def _scrub(key: str, value: Any) -> Any:
    if _is_sensitive_key(key):
        return REDACTED
    if isinstance(value, str):
        return PHONE_NUMBER_RE.sub(REDACTED, value)
    if isinstance(value, dict):
        return {k: _scrub(k, v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_scrub(key, item) for item in value]
    return value


def _redact_sensitive_data(
    logger: logging.Logger,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """
    Mask sensitive values in a log entry.

    Keys are matched against SENSITIVE_PATTERNS at any nesting depth;
    string values under other keys have phone numbers replaced.
    """
    return {key: _scrub(key, value) for key, value in event_dict.items()}


def _add_service_context(
    logger: logging.Logger,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    event_dict["service"] = "safecall-engine"
    event_dict["version"] = __version__
    return event_dict


def get_processors(is_development: bool) -> list[Any]:
    """
    Build the structlog processor chain.

    Redaction runs after timestamping and before rendering in
    every environment.

    Args:
        is_development: Use the console renderer instead of JSON
    """
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        _redact_sensitive_data,
        _add_service_context,
    ]

    if is_development:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))
    else:
        processors.extend([
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ])

    return processors


def configure_logging(settings: Settings, stream: Optional[TextIO] = None) -> None:
    """
    Configure structlog on top of stdlib logging.

    Called once by the host application. Loggers are only cached in
    production so tests can reconfigure freely.

    Args:
        settings: Application settings
        stream: Output stream (stdout by default)
    """
    structlog.configure(
        processors=get_processors(settings.env == "development"),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=settings.is_production(),
    )

    logging.basicConfig(
        format="%(message)s",
        stream=stream or sys.stdout,
        level=getattr(logging, settings.log_level),
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger (typically for __name__)."""
    return structlog.get_logger(name)
