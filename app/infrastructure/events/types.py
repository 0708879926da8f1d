"""Event topics published by the HTTP SMS Manager services."""

from enum import Enum
from typing import Union


class EventType(str, Enum):
    """Closed set of event topics.

    The value is the topic string carried by Event.event_type and used as
    the subscription key in the dispatcher.
    """

    MESSAGE_API_SENT = "message.api.sent"
    MESSAGE_PHONE_SENDING = "message.phone.sending"
    MESSAGE_PHONE_SENT = "message.phone.sent"
    MESSAGE_PHONE_DELIVERED = "message.phone.delivered"
    MESSAGE_PHONE_FAILED = "message.phone.failed"
    MESSAGE_PHONE_RECEIVED = "message.phone.received"
    MESSAGE_THREAD_UPDATED = "thread.updated"
    HEARTBEAT_RECEIVED = "heartbeat.received"


def event_type_name(event_type: Union[EventType, str]) -> str:
    """Return the topic string for an EventType member or a plain string."""
    if isinstance(event_type, EventType):
        return event_type.value
    return str(event_type)
