"""API request and response schemas for heartbeats."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from api.schemas import PhoneNumber


class HeartbeatStoreRequest(BaseModel):
    """A heartbeat sent by the owner's phone."""

    owner: PhoneNumber
    quantity: int = Field(default=1, ge=0)


class HeartbeatResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    owner: str
    quantity: int
    timestamp: datetime
    created_at: datetime
