"""Call session services package."""

from safecall.services.session.call_session import CallSessionEngine, SessionListener

__all__ = ["CallSessionEngine", "SessionListener"]
