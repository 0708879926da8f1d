"""Payloads of the events published by the message service.

Payloads are dumped to JSON-compatible dicts when an event is created and
validated back into these models by each listener.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class MessageAPISentPayload(BaseModel):
    """Payload of message.api.sent: a message was queued through the API."""

    message_id: str
    owner: str
    contact: str
    content: str
    request_received_at: datetime


class MessagePhoneEventPayload(BaseModel):
    """Payload of the message.phone.* events reported by, or for, the phone.

    failure_reason is only set for message.phone.failed.
    """

    message_id: str
    owner: str
    contact: str
    content: str
    timestamp: datetime
    failure_reason: Optional[str] = None
