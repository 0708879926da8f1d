"""SQLAlchemy event store."""

from sqlalchemy.orm import sessionmaker

from infrastructure.events.models import Event
from infrastructure.events.repositories import EventRepository
from infrastructure.persistence.database import session_scope
from infrastructure.persistence.errors import NotFoundError
from infrastructure.persistence.models import StoredEvent


class SQLAlchemyEventRepository(EventRepository):
    """Published events stored in the events table."""

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    def save(self, event: Event) -> None:
        with session_scope(self._session_factory) as session:
            if session.get(StoredEvent, event.id) is not None:
                return
            session.add(
                StoredEvent(
                    id=event.id,
                    event_type=event.event_type,
                    source=event.source,
                    payload=event.payload_dict(),
                    occurred_at=event.occurred_at,
                )
            )

    def load(self, event_id: str) -> Event:
        with session_scope(self._session_factory) as session:
            stored = session.get(StoredEvent, event_id)
            if stored is None:
                raise NotFoundError(f"cannot find event with id [{event_id}]")
            return Event(
                id=stored.id,
                event_type=stored.event_type,
                source=stored.source,
                payload=stored.payload or {},
                occurred_at=stored.occurred_at,
            )
