"""SQLAlchemy repository for heartbeats and heartbeat monitors."""

from typing import List

from sqlalchemy import select
from sqlalchemy.orm import sessionmaker

from infrastructure.persistence import session_scope
from modules.heartbeats.errors import HeartbeatMonitorNotFoundError
from modules.heartbeats.models import Heartbeat, HeartbeatMonitor


class HeartbeatRepository:
    """Stores heartbeats and the last-seen record of each phone."""

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    def store(self, heartbeat: Heartbeat) -> Heartbeat:
        with session_scope(self._session_factory) as session:
            session.add(heartbeat)
        return heartbeat

    def index(self, owner: str, skip: int, limit: int) -> List[Heartbeat]:
        """Heartbeats of a phone, newest first."""
        with session_scope(self._session_factory) as session:
            return list(
                session.scalars(
                    select(Heartbeat)
                    .where(Heartbeat.owner == owner)
                    .order_by(Heartbeat.timestamp.desc())
                    .offset(skip)
                    .limit(limit)
                ).all()
            )

    def load_monitor(self, owner: str) -> HeartbeatMonitor:
        """Get the last-seen record of a phone.

        Raises:
            HeartbeatMonitorNotFoundError: If the phone has no record yet.
        """
        with session_scope(self._session_factory) as session:
            monitor = session.get(HeartbeatMonitor, owner)
            if monitor is None:
                raise HeartbeatMonitorNotFoundError(owner)
            return monitor

    def save_monitor(self, monitor: HeartbeatMonitor) -> HeartbeatMonitor:
        """Insert or update a last-seen record."""
        with session_scope(self._session_factory) as session:
            return session.merge(monitor)
