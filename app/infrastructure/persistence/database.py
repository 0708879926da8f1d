"""
Database configuration and connection management.

All tables share one declarative Base so that run_migrations() can create
every table registered by the model modules.
"""

from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from infrastructure.configuration import DatabaseSettings
from infrastructure.logging import get_module_logger
from infrastructure.persistence.errors import PersistenceError

logger = get_module_logger()

Base = declarative_base()


def create_database_engine(settings: DatabaseSettings) -> Engine:
    """Create the SQLAlchemy engine for the configured database.

    SQLite connections are shared across the server's worker threads, and
    in-memory SQLite databases use a single static connection so every
    session sees the same data.
    """
    url = settings.DATABASE_URL
    kwargs = {"echo": settings.DATABASE_ECHO}

    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if ":memory:" in url or url in ("sqlite://", "sqlite+pysqlite://"):
            kwargs["poolclass"] = StaticPool

    engine = create_engine(url, **kwargs)
    logger.debug("database_engine_created", dialect=engine.dialect.name)
    return engine


def create_session_factory(engine: Engine) -> sessionmaker:
    """Session maker whose objects stay readable after commit."""
    return sessionmaker(
        bind=engine, autoflush=False, expire_on_commit=False, class_=Session
    )


def run_migrations(engine: Engine) -> None:
    """Create every table that does not exist yet."""
    logger.debug("running_migrations", tables=sorted(Base.metadata.tables))
    try:
        Base.metadata.create_all(engine)
    except SQLAlchemyError as e:
        raise PersistenceError(f"cannot migrate database: {e}") from e


@contextmanager
def session_scope(session_factory: sessionmaker) -> Iterator[Session]:
    """Provide a transactional scope around a series of operations.

    Commits on success, rolls back on error and converts SQLAlchemy errors
    into PersistenceError.
    """
    session = session_factory()
    try:
        yield session
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        raise PersistenceError(str(e)) from e
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
