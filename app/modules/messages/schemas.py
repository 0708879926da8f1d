"""API request and response schemas for messages."""

from datetime import datetime
from enum import Enum
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field

from api.schemas import PhoneNumber, UTCTimestamp

MessageContent = Annotated[str, Field(min_length=1, max_length=2048)]


class MessageSendRequest(BaseModel):
    """Queue a message to be sent by the owner's phone."""

    owner: PhoneNumber
    contact: PhoneNumber
    content: MessageContent


class MessageReceiveRequest(BaseModel):
    """A message received by the owner's phone."""

    owner: PhoneNumber
    contact: PhoneNumber
    content: MessageContent
    timestamp: UTCTimestamp


class PhoneEventName(str, Enum):
    """Delivery events reported by the phone for an outgoing message."""

    SENT = "sent"
    DELIVERED = "delivered"
    FAILED = "failed"


class MessageEventRequest(BaseModel):
    """A delivery event reported by the phone."""

    event_name: PhoneEventName
    timestamp: UTCTimestamp
    reason: Optional[str] = Field(default=None, max_length=1024)


class MessageResponse(BaseModel):
    """Serialized message."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    owner: str
    contact: str
    content: str
    type: str
    status: str
    request_received_at: datetime
    order_timestamp: datetime
    last_attempted_at: Optional[datetime] = None
    sent_at: Optional[datetime] = None
    delivered_at: Optional[datetime] = None
    failed_at: Optional[datetime] = None
    received_at: Optional[datetime] = None
    failure_reason: Optional[str] = None
    send_attempt_count: int
    created_at: datetime
    updated_at: datetime
