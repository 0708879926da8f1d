"""Payload of heartbeat.received."""

from datetime import datetime

from pydantic import BaseModel


class HeartbeatReceivedPayload(BaseModel):
    heartbeat_id: str
    owner: str
    quantity: int
    timestamp: datetime
