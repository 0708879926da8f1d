"""Database records for the event system."""

from sqlalchemy import JSON, Column, Index, Integer, String, Text

from infrastructure.persistence.database import Base
from infrastructure.persistence.types import UTCDateTime, utcnow


class StoredEvent(Base):
    """A published event"""

    __tablename__ = "events"

    id = Column(String(36), primary_key=True)
    event_type = Column(String(128), nullable=False, index=True)
    source = Column(String(255), nullable=False, default="")
    payload = Column(JSON, nullable=False, default=dict)
    occurred_at = Column(UTCDateTime, nullable=False)
    created_at = Column(UTCDateTime, nullable=False, default=utcnow)


class EventListenerLogRecord(Base):
    """Execution log of one listener for one event.

    The composite primary key is the de-duplication contract: one row,
    and so at most one success, per (event_id, listener_name).
    """

    __tablename__ = "event_listener_logs"

    event_id = Column(String(36), primary_key=True)
    listener_name = Column(String(255), primary_key=True)
    event_type = Column(String(128), nullable=False, default="")
    status = Column(String(16), nullable=False)
    error = Column(Text, nullable=True)
    attempts = Column(Integer, nullable=False, default=0)
    created_at = Column(UTCDateTime, nullable=False, default=utcnow)
    updated_at = Column(UTCDateTime, nullable=False, default=utcnow)

    __table_args__ = (Index("ix_event_listener_logs_status", "status"),)
