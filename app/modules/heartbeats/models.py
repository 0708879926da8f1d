"""Database models for phone heartbeats."""

from sqlalchemy import Column, Index, Integer, String

from infrastructure.persistence import Base, UTCDateTime, utcnow


class Heartbeat(Base):
    """A sign of life from an owner's phone."""

    __tablename__ = "heartbeats"

    id = Column(String(36), primary_key=True)
    owner = Column(String(20), nullable=False)
    quantity = Column(Integer, nullable=False, default=1)
    timestamp = Column(UTCDateTime, nullable=False)
    created_at = Column(UTCDateTime, nullable=False, default=utcnow)

    __table_args__ = (Index("ix_heartbeats_owner_timestamp", "owner", "timestamp"),)


class HeartbeatMonitor(Base):
    """When each phone was last seen."""

    __tablename__ = "heartbeat_monitors"

    owner = Column(String(20), primary_key=True)
    last_heartbeat_at = Column(UTCDateTime, nullable=False)
    updated_at = Column(UTCDateTime, nullable=False, default=utcnow, onupdate=utcnow)
