"""Heartbeat service."""

from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional
from uuid import uuid4

from infrastructure.events import EventDispatcher, EventPublishingService, EventType
from infrastructure.logging import get_module_logger
from infrastructure.persistence import as_utc
from infrastructure.telemetry import get_tracer
from modules.heartbeats.errors import HeartbeatMonitorNotFoundError
from modules.heartbeats.events import HeartbeatReceivedPayload
from modules.heartbeats.models import Heartbeat, HeartbeatMonitor
from modules.heartbeats.repository import HeartbeatRepository

logger = get_module_logger()
tracer = get_tracer(__name__)


@dataclass(frozen=True)
class HeartbeatStoreParams:
    owner: str
    timestamp: datetime
    quantity: int = 1


@dataclass(frozen=True)
class HeartbeatLastSeenParams:
    owner: str
    timestamp: datetime


class HeartbeatService(EventPublishingService):
    """Records heartbeats and keeps track of when each phone was last seen."""

    source = "heartbeats"

    def __init__(
        self,
        repository: HeartbeatRepository,
        dispatcher: EventDispatcher,
        publish_timeout: Optional[float] = None,
    ):
        super().__init__(dispatcher, publish_timeout)
        self._repository = repository

    def store(self, params: HeartbeatStoreParams) -> Heartbeat:
        """Store a heartbeat and publish heartbeat.received."""
        with tracer.start_as_current_span("heartbeat_service.store"):
            heartbeat = self._repository.store(
                Heartbeat(
                    id=str(uuid4()),
                    owner=params.owner,
                    quantity=params.quantity,
                    timestamp=as_utc(params.timestamp),
                )
            )
            logger.debug("heartbeat_stored", heartbeat_id=heartbeat.id, owner=heartbeat.owner)

            self._publish(
                EventType.HEARTBEAT_RECEIVED,
                HeartbeatReceivedPayload(
                    heartbeat_id=heartbeat.id,
                    owner=heartbeat.owner,
                    quantity=heartbeat.quantity,
                    timestamp=heartbeat.timestamp,
                ).model_dump(mode="json"),
            )
            return heartbeat

    def index(self, owner: str, skip: int, limit: int) -> List[Heartbeat]:
        return self._repository.index(owner, skip, limit)

    def update_last_seen(self, params: HeartbeatLastSeenParams) -> HeartbeatMonitor:
        """Move the phone's last-seen time forward.

        An older timestamp than the one recorded leaves the monitor unchanged.
        """
        with tracer.start_as_current_span("heartbeat_service.update_last_seen"):
            timestamp = as_utc(params.timestamp)
            try:
                monitor = self._repository.load_monitor(params.owner)
            except HeartbeatMonitorNotFoundError:
                monitor = HeartbeatMonitor(owner=params.owner, last_heartbeat_at=timestamp)
                logger.info("heartbeat_monitor_created", owner=params.owner)
                return self._repository.save_monitor(monitor)

            if as_utc(monitor.last_heartbeat_at) >= timestamp:
                return monitor

            monitor.last_heartbeat_at = timestamp
            return self._repository.save_monitor(monitor)
