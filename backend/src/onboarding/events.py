"""Accessors for EventBridge IAM user creation events."""

from __future__ import annotations

from typing import Any
from typing import Mapping
from typing import Optional


def get_detail(event: Mapping[str, Any]) -> Optional[Mapping[str, Any]]:
    """Return the event detail, or None when it is absent or not an object."""
    detail = event.get("detail")
    if isinstance(detail, Mapping):
        return detail
    return None


def get_user_name(detail: Mapping[str, Any]) -> Optional[str]:
    """Return ``detail.userName``; None when missing, null or not a string."""
    user_name = detail.get("userName")
    return user_name if isinstance(user_name, str) else None


def summarize_event(event: Mapping[str, Any]) -> dict[str, Any]:
    """Envelope fields that are safe to log."""
    detail = get_detail(event) or {}
    return {
        "id": event.get("id"),
        "source": event.get("source"),
        "detail_type": event.get("detail-type"),
        "event_name": detail.get("eventName"),
        "has_detail": "detail" in event,
    }
