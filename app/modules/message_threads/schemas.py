"""API response schemas for message threads."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class MessageThreadResponse(BaseModel):
    """Serialized message thread."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    owner: str
    contact: str
    last_message_id: str
    last_message_content: str
    status: str
    order_timestamp: datetime
    created_at: datetime
    updated_at: datetime
