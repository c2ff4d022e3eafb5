"""
RevenueCat subscription event types and webhook payload parsing
"""
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel


class SubscriptionEvent(str, Enum):
    """Subscription lifecycle events this service reacts to."""

    INITIAL_PURCHASE = "INITIAL_PURCHASE"
    RENEWAL = "RENEWAL"
    CANCELLATION = "CANCELLATION"
    EXPIRATION = "EXPIRATION"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def _missing_(cls, value):
        return cls.UNKNOWN


# Flag updates applied to the user row for each event.
# CANCELLATION keeps access until the provider sends EXPIRATION.
EVENT_EFFECTS: Dict[SubscriptionEvent, Dict[str, bool]] = {
    SubscriptionEvent.INITIAL_PURCHASE: {"has_trial": False, "is_subscribed": True},
    SubscriptionEvent.RENEWAL: {"is_subscribed": True},
    SubscriptionEvent.CANCELLATION: {},
    SubscriptionEvent.EXPIRATION: {"is_subscribed": False},
    SubscriptionEvent.UNKNOWN: {},
}


class WebhookEvent(BaseModel):
    """Validated webhook notification."""

    event_type: str
    app_user_id: str

    @property
    def event(self) -> SubscriptionEvent:
        return SubscriptionEvent(self.event_type)


class SubscriptionStatus(BaseModel):
    user_id: int
    has_trial: bool
    is_subscribed: bool


def _non_empty_str(value: Any) -> Optional[str]:
    """Return the value unchanged if it is a non-blank string that encodes as UTF-8."""
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        # JSON allows lone surrogates ("\ud800"), which the database driver cannot bind
        value.encode("utf-8")
    except UnicodeEncodeError:
        return None
    return value


def parse_webhook_payload(payload: Any) -> Optional[WebhookEvent]:
    """
    Extract the event type and app_user_id from a webhook body.

    Accepts the flat form {"event": "RENEWAL", "app_user_id": "app_12"} and
    RevenueCat's envelope {"event": {"type": "RENEWAL", "app_user_id": "app_12"}}.

    Returns:
        WebhookEvent, or None when either field is missing or empty
    """
    if not isinstance(payload, dict):
        return None

    event = payload.get("event")
    if isinstance(event, dict):
        event_type = _non_empty_str(event.get("type"))
        app_user_id = _non_empty_str(event.get("app_user_id"))
    else:
        event_type = _non_empty_str(event)
        app_user_id = _non_empty_str(payload.get("app_user_id"))

    if event_type is None or app_user_id is None:
        return None
    return WebhookEvent(event_type=event_type, app_user_id=app_user_id)
