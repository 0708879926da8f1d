"""Data persistence with SQLAlchemy.

Exports the engine/session helpers and the persistence error types.
Repositories live next to the records they store and are imported
directly, e.g. infrastructure.persistence.event_listener_logs.
"""

from infrastructure.persistence.database import (
    Base,
    create_database_engine,
    create_session_factory,
    run_migrations,
    session_scope,
)
from infrastructure.persistence.errors import NotFoundError, PersistenceError
from infrastructure.persistence.types import UTCDateTime, as_utc, utcnow

__all__ = [
    "Base",
    "create_database_engine",
    "create_session_factory",
    "run_migrations",
    "session_scope",
    "NotFoundError",
    "PersistenceError",
    "UTCDateTime",
    "as_utc",
    "utcnow",
]
