"""SQLAlchemy event listener log repository."""

from typing import List

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from infrastructure.events.errors import EventListenerLogNotFoundError
from infrastructure.events.models import EventListenerLog, ListenerStatus
from infrastructure.events.repositories import EventListenerLogRepository
from infrastructure.logging import get_module_logger
from infrastructure.persistence.database import session_scope
from infrastructure.persistence.errors import PersistenceError
from infrastructure.persistence.models import EventListenerLogRecord

logger = get_module_logger()


def _to_record(log: EventListenerLog) -> EventListenerLogRecord:
    return EventListenerLogRecord(
        event_id=log.event_id,
        listener_name=log.listener_name,
        event_type=log.event_type,
        status=log.status.value,
        error=log.error,
        attempts=log.attempts,
        created_at=log.created_at,
        updated_at=log.updated_at,
    )


def _to_log(record: EventListenerLogRecord) -> EventListenerLog:
    return EventListenerLog(
        event_id=record.event_id,
        listener_name=record.listener_name,
        event_type=record.event_type,
        status=ListenerStatus(record.status),
        error=record.error,
        attempts=record.attempts,
        created_at=record.created_at,
        updated_at=record.updated_at,
    )


class SQLAlchemyEventListenerLogRepository(EventListenerLogRepository):
    """Listener logs stored in the event_listener_logs table."""

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    def save(self, log: EventListenerLog) -> None:
        """Upsert the log row for (event_id, listener_name).

        merge() selects then inserts or updates. When a concurrent delivery
        inserts the same pair between the two, the insert fails on the
        primary key and the save is retried once, now as an update.
        """
        for attempt in (1, 2):
            try:
                with self._session_factory.begin() as session:
                    session.merge(_to_record(log))
                return
            except IntegrityError as e:
                if attempt == 2:
                    raise PersistenceError(
                        f"cannot save listener log [{log.event_id}, {log.listener_name}]: {e}"
                    ) from e
                logger.debug(
                    "event_listener_log_insert_conflict",
                    event_id=log.event_id,
                    listener=log.listener_name,
                )
            except SQLAlchemyError as e:
                raise PersistenceError(
                    f"cannot save listener log [{log.event_id}, {log.listener_name}]: {e}"
                ) from e

    def find_by_event_and_listener(
        self, event_id: str, listener_name: str
    ) -> EventListenerLog:
        with session_scope(self._session_factory) as session:
            record = session.get(EventListenerLogRecord, (event_id, listener_name))
            if record is None:
                raise EventListenerLogNotFoundError(event_id, listener_name)
            return _to_log(record)

    def find_by_event(self, event_id: str) -> List[EventListenerLog]:
        with session_scope(self._session_factory) as session:
            records = session.scalars(
                select(EventListenerLogRecord)
                .where(EventListenerLogRecord.event_id == event_id)
                .order_by(EventListenerLogRecord.created_at)
            ).all()
            return [_to_log(record) for record in records]
