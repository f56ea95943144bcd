"""Alert services package."""

from safecall.services.alerts.alert_dispatcher import AlertDispatch, AlertDispatcher

__all__ = ["AlertDispatcher", "AlertDispatch"]
