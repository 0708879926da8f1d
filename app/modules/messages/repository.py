"""SQLAlchemy repository for messages."""

from typing import List

from sqlalchemy import select
from sqlalchemy.orm import sessionmaker

from infrastructure.persistence import session_scope
from modules.messages.errors import MessageNotFoundError
from modules.messages.models import Message, MessageStatus


class MessageRepository:
    """Stores and queries messages."""

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    def save(self, message: Message) -> Message:
        """Insert a new message."""
        with session_scope(self._session_factory) as session:
            session.add(message)
        return message

    def update(self, message: Message) -> Message:
        """Persist changes to an existing message."""
        with session_scope(self._session_factory) as session:
            return session.merge(message)

    def load(self, message_id: str) -> Message:
        """Get a message by id.

        Raises:
            MessageNotFoundError: If the message does not exist.
        """
        with session_scope(self._session_factory) as session:
            message = session.get(Message, message_id)
            if message is None:
                raise MessageNotFoundError(message_id)
            return message

    def index(self, owner: str, contact: str, skip: int, limit: int) -> List[Message]:
        """Messages exchanged between owner and contact, newest first."""
        with session_scope(self._session_factory) as session:
            return list(
                session.scalars(
                    select(Message)
                    .where(Message.owner == owner, Message.contact == contact)
                    .order_by(Message.order_timestamp.desc())
                    .offset(skip)
                    .limit(limit)
                ).all()
            )

    def get_outstanding(self, owner: str, limit: int) -> List[Message]:
        """Pending outgoing messages for the owner's phone, oldest first."""
        with session_scope(self._session_factory) as session:
            return list(
                session.scalars(
                    select(Message)
                    .where(
                        Message.owner == owner,
                        Message.status == MessageStatus.PENDING.value,
                    )
                    .order_by(Message.order_timestamp.asc())
                    .limit(limit)
                ).all()
            )
