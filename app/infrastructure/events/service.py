"""Base class for domain services that publish events."""

import time
from typing import Any, Mapping, Optional, Union

from infrastructure.events.dispatcher import EventDispatcher, PublishResult
from infrastructure.events.models import Event
from infrastructure.events.types import EventType
from infrastructure.logging import get_module_logger

logger = get_module_logger()


class EventPublishingService:
    """Domain service that publishes an event after each committed change.

    Usage:
        class HeartbeatService(EventPublishingService):
            def store(self, params):
                heartbeat = self._repository.store(...)
                self._publish(EventType.HEARTBEAT_RECEIVED, payload)
                return heartbeat
    """

    source = ""

    def __init__(
        self,
        dispatcher: EventDispatcher,
        publish_timeout: Optional[float] = None,
    ):
        """Initialize the service.

        Args:
            dispatcher: Shared event dispatcher.
            publish_timeout: Optional per-event delivery deadline in seconds.
        """
        self._dispatcher = dispatcher
        self._publish_timeout = publish_timeout

    def _publish(
        self,
        event_type: Union[EventType, str],
        payload: Mapping[str, Any],
    ) -> PublishResult:
        """Create an event and deliver it to its listeners.

        Listener failures are logged and never fail the calling operation.
        """
        event = Event.create(event_type, payload, source=self.source)

        deadline = None
        if self._publish_timeout is not None:
            deadline = time.monotonic() + self._publish_timeout

        result = self._dispatcher.publish(event, deadline=deadline)
        if not result.is_success:
            logger.warning(
                "event_delivery_incomplete",
                event_id=event.id,
                event_type=event.event_type,
                failures=[f.listener_name for f in result.failures],
                skipped=result.skipped,
                store_error=result.store_error,
            )
        return result
