"""Listeners that record phone activity as heartbeats."""

from typing import List

from infrastructure.events import (
    Event,
    EventListenerLogRepository,
    EventType,
    ListenerGroup,
    ListenerRoute,
)
from modules.heartbeats.events import HeartbeatReceivedPayload
from modules.heartbeats.service import (
    HeartbeatLastSeenParams,
    HeartbeatService,
    HeartbeatStoreParams,
)
from modules.messages.events import MessagePhoneEventPayload

# Message events that prove the phone is online.
PHONE_ACTIVITY_EVENT_TYPES = (
    EventType.MESSAGE_PHONE_SENDING,
    EventType.MESSAGE_PHONE_SENT,
    EventType.MESSAGE_PHONE_DELIVERED,
    EventType.MESSAGE_PHONE_RECEIVED,
)


class HeartbeatListener(ListenerGroup):
    """Listener group bound to the HeartbeatService."""

    def __init__(self, service: HeartbeatService, log_repository: EventListenerLogRepository):
        super().__init__(log_repository)
        self._service = service

    def routes(self) -> List[ListenerRoute]:
        routes = [
            ListenerRoute(event_type, "heartbeat.on-phone-activity", self.on_phone_activity)
            for event_type in PHONE_ACTIVITY_EVENT_TYPES
        ]
        routes.append(
            ListenerRoute(
                EventType.HEARTBEAT_RECEIVED,
                "update-heartbeat-timestamp",
                self.on_heartbeat_received,
            )
        )
        return routes

    def on_phone_activity(self, event: Event) -> None:
        payload = MessagePhoneEventPayload.model_validate(event.payload_dict())
        self._service.store(
            HeartbeatStoreParams(owner=payload.owner, timestamp=event.occurred_at)
        )

    def on_heartbeat_received(self, event: Event) -> None:
        payload = HeartbeatReceivedPayload.model_validate(event.payload_dict())
        self._service.update_last_seen(
            HeartbeatLastSeenParams(owner=payload.owner, timestamp=payload.timestamp)
        )
