"""SQLAlchemy repository for message threads."""

from typing import List

from sqlalchemy import select
from sqlalchemy.orm import sessionmaker

from infrastructure.persistence import session_scope
from modules.message_threads.errors import MessageThreadNotFoundError
from modules.message_threads.models import MessageThread


class MessageThreadRepository:
    """Stores and queries message threads."""

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    def save(self, thread: MessageThread) -> MessageThread:
        with session_scope(self._session_factory) as session:
            session.add(thread)
        return thread

    def update(self, thread: MessageThread) -> MessageThread:
        with session_scope(self._session_factory) as session:
            return session.merge(thread)

    def load_by_owner_contact(self, owner: str, contact: str) -> MessageThread:
        """Get the thread between owner and contact.

        Raises:
            MessageThreadNotFoundError: If no such thread exists.
        """
        with session_scope(self._session_factory) as session:
            thread = session.scalars(
                select(MessageThread).where(
                    MessageThread.owner == owner, MessageThread.contact == contact
                )
            ).one_or_none()
            if thread is None:
                raise MessageThreadNotFoundError(owner, contact)
            return thread

    def index(self, owner: str, skip: int, limit: int) -> List[MessageThread]:
        """Threads of an owner, most recent activity first."""
        with session_scope(self._session_factory) as session:
            return list(
                session.scalars(
                    select(MessageThread)
                    .where(MessageThread.owner == owner)
                    .order_by(MessageThread.order_timestamp.desc())
                    .offset(skip)
                    .limit(limit)
                ).all()
            )
