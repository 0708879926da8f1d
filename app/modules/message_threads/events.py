"""Payload of the event published when a thread changes."""

from datetime import datetime

from pydantic import BaseModel


class MessageThreadUpdatedPayload(BaseModel):
    thread_id: str
    owner: str
    contact: str
    last_message_id: str
    status: str
    timestamp: datetime
