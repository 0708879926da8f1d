"""Database models for message threads."""

from sqlalchemy import Column, String, Text, UniqueConstraint

from infrastructure.persistence import Base, UTCDateTime, utcnow


class MessageThread(Base):
    """The latest message exchanged between an owner and a contact."""

    __tablename__ = "message_threads"

    id = Column(String(36), primary_key=True)
    owner = Column(String(20), nullable=False)
    contact = Column(String(20), nullable=False)
    last_message_id = Column(String(36), nullable=False)
    last_message_content = Column(Text, nullable=False)
    status = Column(String(16), nullable=False)
    order_timestamp = Column(UTCDateTime, nullable=False)

    created_at = Column(UTCDateTime, nullable=False, default=utcnow)
    updated_at = Column(UTCDateTime, nullable=False, default=utcnow, onupdate=utcnow)

    __table_args__ = (
        UniqueConstraint("owner", "contact", name="uq_message_threads_owner_contact"),
    )
