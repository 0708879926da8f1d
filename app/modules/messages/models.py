"""Database models for SMS messages."""

from enum import Enum

from sqlalchemy import Column, Index, Integer, String, Text

from infrastructure.persistence import Base, UTCDateTime, utcnow


class MessageType(str, Enum):
    """Direction of a message relative to the phone."""

    MOBILE_TERMINATED = "mobile-terminated"
    MOBILE_ORIGINATED = "mobile-originated"


class MessageStatus(str, Enum):
    """Lifecycle status of a message."""

    PENDING = "pending"
    SENDING = "sending"
    SENT = "sent"
    DELIVERED = "delivered"
    FAILED = "failed"
    RECEIVED = "received"


class Message(Base):
    """An SMS message sent from, or received by, an owner's phone."""

    __tablename__ = "messages"

    id = Column(String(36), primary_key=True)
    owner = Column(String(20), nullable=False)
    contact = Column(String(20), nullable=False)
    content = Column(Text, nullable=False)
    type = Column(String(32), nullable=False)
    status = Column(String(16), nullable=False)

    request_received_at = Column(UTCDateTime, nullable=False, default=utcnow)
    order_timestamp = Column(UTCDateTime, nullable=False, default=utcnow)
    last_attempted_at = Column(UTCDateTime, nullable=True)
    sent_at = Column(UTCDateTime, nullable=True)
    delivered_at = Column(UTCDateTime, nullable=True)
    failed_at = Column(UTCDateTime, nullable=True)
    received_at = Column(UTCDateTime, nullable=True)
    failure_reason = Column(Text, nullable=True)
    send_attempt_count = Column(Integer, nullable=False, default=0)

    created_at = Column(UTCDateTime, nullable=False, default=utcnow)
    updated_at = Column(UTCDateTime, nullable=False, default=utcnow, onupdate=utcnow)

    __table_args__ = (
        Index("ix_messages_owner_contact", "owner", "contact"),
        Index("ix_messages_owner_status", "owner", "status"),
    )
