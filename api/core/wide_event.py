"""Wide Event context for canonical log lines.

Provides a request-scoped dict for accumulating context throughout the request
lifecycle. RequestTimingMiddleware initializes it at request start and emits
it as a single ``request.completed`` log line at request end.

Usage:
    from core.wide_event import set_wide_event_fields

    # In route handlers, services or repositories:
    set_wide_event_fields(order_id=order.id, item_count=len(items))
"""

from contextvars import ContextVar
from typing import Any

_wide_event: ContextVar[dict[str, Any] | None] = ContextVar("wide_event", default=None)


def init_wide_event() -> dict[str, Any]:
    """Initialize a new wide event dict for the current async context."""
    event: dict[str, Any] = {}
    _wide_event.set(event)
    return event


def get_wide_event() -> dict[str, Any]:
    """Get the current wide event dict. Returns empty dict if not initialized."""
    event = _wide_event.get()
    return event if event is not None else {}


def set_wide_event_fields(**kwargs: Any) -> None:
    """Set multiple fields on the current wide event.

    No-op if called outside request context (e.g., CLI, scripts, unit tests).
    """
    event = _wide_event.get()
    if event is not None:
        event.update(kwargs)


def clear_wide_event() -> None:
    """Clear the wide event for the current context."""
    _wide_event.set(None)
